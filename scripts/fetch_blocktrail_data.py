#!/usr/bin/env python
"""CLI to fetch address, block and transaction data from the Blocktrail API.

Examples:
  python scripts/fetch_blocktrail_data.py --resource address --id 1NcXPMRaanz43b1kokpPuYDdk6GGDvxT2T --major-units --out data/address.json
  python scripts/fetch_blocktrail_data.py --resource address-transactions --id 1NcX... --limit 50 --sort-dir desc --out data/txs.json
  python scripts/fetch_blocktrail_data.py --resource block-latest --no-cache --out data/latest.json
  python scripts/fetch_blocktrail_data.py --resource transaction --id c326105f... --ttl 3600 --out data/tx.json

Configuration comes from the environment (or a local .env):
  BLOCKTRAIL_API_KEY (required), BLOCKTRAIL_NETWORK, BLOCKTRAIL_TESTNET,
  BLOCKTRAIL_API_VERSION, BLOCKTRAIL_SDK_API_ENDPOINT, BLOCKTRAIL_RPS,
  BLOCKTRAIL_CACHE_DIR
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from blocktrail.cache import load_cache, save_cache  # noqa: E402
from blocktrail.client import BlocktrailClient  # noqa: E402
from blocktrail.conversion import to_major_unit_string  # noqa: E402
from blocktrail.exceptions import ApiConfigError, ApiRequestError, ApiTransportError  # noqa: E402

logger = logging.getLogger('fetch_blocktrail_data')

RESOURCES = ['address', 'address-transactions', 'unspent-outputs', 'block', 'block-latest', 'transaction']
NEEDS_ID = {'address', 'address-transactions', 'unspent-outputs', 'block', 'transaction'}
PAGED = {'address-transactions', 'unspent-outputs'}
SATOSHI_FIELDS = {
    'balance', 'received', 'sent', 'value', 'amount', 'fee',
    'total_input_value', 'total_output_value', 'total_fee',
}


def load_env_file(env_path: Path) -> None:
    # existing non-empty variables win over the file
    if not env_path.exists():
        return
    for line in env_path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if not k:
            continue
        existing = os.environ.get(k)
        if existing is None or existing.strip() == '':
            os.environ[k] = v


def render_major_units(data: Any) -> Any:
    """Copy of ``data`` with known satoshi fields rendered as 8-decimal BTC strings."""
    if isinstance(data, dict):
        out = {}
        for k, v in data.items():
            if k in SATOSHI_FIELDS and isinstance(v, int) and not isinstance(v, bool):
                out[k] = to_major_unit_string(v)
            else:
                out[k] = render_major_units(v)
        return out
    if isinstance(data, list):
        return [render_major_units(v) for v in data]
    return data


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description='Fetch Blocktrail blockchain data')
    p.add_argument('--resource', required=True, choices=RESOURCES)
    p.add_argument('--id', help='Address, block hash/height or transaction hash')
    p.add_argument('--page', type=int, default=1)
    p.add_argument('--limit', type=int, default=20)
    p.add_argument('--sort-dir', default='asc', choices=['asc', 'desc'])
    p.add_argument('--out', required=True, help='Output JSON file path')
    p.add_argument('--ttl', type=int, default=0, help='Cache TTL seconds (0 = no expiry)')
    p.add_argument('--no-cache', action='store_true')
    p.add_argument('--major-units', action='store_true', help='Render satoshi amounts as BTC strings')
    p.add_argument('--verbose', action='store_true')
    return p.parse_args(argv)


def fetch(client: BlocktrailClient, resource: str, ident: Optional[str], page: int, limit: int, sort_dir: str) -> Any:
    if resource == 'address':
        return client.address(ident)  # type: ignore[arg-type]
    if resource == 'address-transactions':
        return client.address_transactions(ident, page=page, limit=limit, sort_dir=sort_dir)  # type: ignore[arg-type]
    if resource == 'unspent-outputs':
        return client.address_unspent_outputs(ident, page=page, limit=limit, sort_dir=sort_dir)  # type: ignore[arg-type]
    if resource == 'block':
        return client.block(ident)  # type: ignore[arg-type]
    if resource == 'block-latest':
        return client.block_latest()
    if resource == 'transaction':
        return client.transaction(ident)  # type: ignore[arg-type]
    raise SystemExit(f'Unsupported resource: {resource}')


def main(argv: Optional[List[str]] = None, client: Optional[BlocktrailClient] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='[%(levelname)s] %(message)s')
    load_env_file(Path('.env'))

    if args.resource in NEEDS_ID and not args.id:
        raise SystemExit(f'--id required for {args.resource}')
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        client = client or BlocktrailClient.from_env()
    except ApiConfigError as e:
        raise SystemExit(str(e))

    params: Dict[str, Any] = {'id': args.id}
    if args.resource in PAGED:
        params.update(page=args.page, limit=args.limit, sort_dir=args.sort_dir)
    # "latest" moves with every block
    use_cache = not args.no_cache and args.resource != 'block-latest'

    data = None
    if use_cache:
        data = load_cache(client.network, args.resource, params, ttl_seconds=args.ttl)
        if data is not None:
            logger.info('[cache-hit] %s %s', args.resource, args.id or '')
    if data is None:
        try:
            data = fetch(client, args.resource, args.id, args.page, args.limit, args.sort_dir)
        except ApiRequestError as e:
            raise SystemExit(f'{e.kind.value} (HTTP {e.http_status}): {e}')
        except (ApiTransportError, ValueError) as e:
            raise SystemExit(str(e))
        if use_cache:
            save_cache(client.network, args.resource, params, data)

    if args.major_units:
        data = render_major_units(data)
    out_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding='utf-8')
    logger.info('[done] Wrote %s', out_path)


if __name__ == '__main__':
    main()
