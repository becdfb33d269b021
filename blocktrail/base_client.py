from __future__ import annotations
import os
import logging
from typing import Any, Dict, Optional
from .classifier import classify
from .exceptions import ApiConfigError, ApiRequestError, Success

logger = logging.getLogger(__name__)


class BaseClient:
    """Dispatches requests through a transport and classifies failures."""

    def __init__(self, transport):
        self.transport = transport

    def _request(self, method: str, path: str, query: Dict[str, Any] | None = None, body: Any | None = None) -> Any:
        result = self.transport.send(method, path, query, body)
        outcome = classify(result.http_status, result.body)
        if isinstance(outcome, Success):
            return outcome.body
        logger.warning("%s %s failed: %s (HTTP %d)", method.upper(), path, outcome.kind.value, outcome.http_status)
        raise ApiRequestError(outcome)

    def _get(self, path: str, query: Dict[str, Any] | None = None) -> Any:
        return self._request('GET', path, query)

    def _post(self, path: str, query: Dict[str, Any] | None = None, body: Any | None = None) -> Any:
        return self._request('POST', path, query, body)

    @staticmethod
    def env(name: str, required: bool = True) -> Optional[str]:
        val = os.getenv(name)
        if required and (val is None or val.strip() == ''):
            raise ApiConfigError(f"Missing required environment variable: {name}")
        return val
