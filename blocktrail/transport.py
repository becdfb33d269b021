from __future__ import annotations
import os
import time
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
import requests
from . import __version__
from .exceptions import ApiTransportError, EMPTY_RESPONSE_MSG

logger = logging.getLogger(__name__)

AGENT = 'blocktrail-python-requests'


@dataclass(frozen=True)
class TransportResult:
    http_status: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.http_status < 300


class RequestsTransport:
    """HTTP transport over a requests Session: api key auth, throttling, network retries.

    HTTP error statuses are returned as results, never retried or raised here.
    """

    def __init__(self, base_url: str, api_key: str, timeout: int = 30, retries: int = 2, rate_limit_env: Optional[str] = 'BLOCKTRAIL_RPS'):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.retries = retries
        self.rate_limit_env = rate_limit_env
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': f"{AGENT}/{__version__}",
            'Accept': 'application/json',
        })
        self._last_request_ts: float = 0.0

    def _respect_rate_limit(self):
        if not self.rate_limit_env:
            return
        rps_value = os.getenv(self.rate_limit_env)
        if not rps_value:
            return
        try:
            rps = float(rps_value)
            if rps <= 0:
                return
        except ValueError:
            return
        min_interval = 1.0 / rps
        elapsed = time.time() - self._last_request_ts
        if elapsed < min_interval:
            time.sleep(min_interval - elapsed)
        self._last_request_ts = time.time()

    def url(self, path: str) -> str:
        return self.base_url + '/' + path.lstrip('/')

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        if not resp.content:
            return None
        ctype = resp.headers.get('Content-Type', '')
        if 'application/json' in ctype:
            try:
                return resp.json()
            except ValueError as e:
                if 200 <= resp.status_code < 300:
                    raise ApiTransportError('Failed to decode JSON response') from e
                # error bodies go to the classifier as raw text
                return resp.text
        return resp.text

    def send(self, method: str, path: str, query: Dict[str, Any] | None = None, body: Any | None = None) -> TransportResult:
        params = dict(query or {})
        params['api_key'] = self.api_key
        headers = {}
        data = None
        if body is not None:
            headers['Content-Type'] = 'application/json'
            data = json.dumps(body)
        url = self.url(path)
        attempt = 0
        while True:
            self._respect_rate_limit()
            try:
                resp = self.session.request(method.upper(), url, params=params, headers=headers, data=data, timeout=self.timeout)
            except requests.RequestException as e:
                if attempt < self.retries:
                    attempt += 1
                    logger.info("Network error on %s %s (attempt %d): %s", method.upper(), path, attempt, e)
                    time.sleep(2 ** attempt)
                    continue
                raise ApiTransportError(f"Network error: {e}") from e
            break

        decoded = self._decode(resp)
        result = TransportResult(resp.status_code, decoded)
        if result.ok and decoded is None:
            raise ApiTransportError(EMPTY_RESPONSE_MSG)
        logger.debug("%s %s -> %d", method.upper(), path, resp.status_code)
        return result
