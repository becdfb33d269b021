from __future__ import annotations
import os
import json
import hashlib
import time
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = '.cache/blocktrail'


def cache_root() -> Path:
    return Path(os.getenv('BLOCKTRAIL_CACHE_DIR') or DEFAULT_CACHE_DIR)


def _hash_key(network: str, resource: str, params: Dict[str, Any]) -> str:
    h = hashlib.sha256()
    h.update(json.dumps([network, resource, params], sort_keys=True, default=str).encode('utf-8'))
    return h.hexdigest()


def cache_path(network: str, resource: str, params: Dict[str, Any]) -> Path:
    return cache_root() / network / f"{_hash_key(network, resource, params)}.json"


def load_cache(network: str, resource: str, params: Dict[str, Any], ttl_seconds: int) -> Optional[Any]:
    """Cached response for the lookup, or None when absent, stale or unreadable.

    ``ttl_seconds`` of 0 means entries never expire.
    """
    p = cache_path(network, resource, params)
    if not p.exists():
        return None
    if ttl_seconds > 0 and time.time() - p.stat().st_mtime > ttl_seconds:
        return None
    try:
        return json.loads(p.read_text(encoding='utf-8'))
    except (OSError, ValueError) as e:
        logger.debug("Ignoring unreadable cache entry %s: %s", p, e)
        return None


def save_cache(network: str, resource: str, params: Dict[str, Any], data: Any) -> Path:
    p = cache_path(network, resource, params)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding='utf-8')
    return p
