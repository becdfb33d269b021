"""Offline stand-ins: a canned-response transport and fake API payloads."""
from __future__ import annotations
import random
import hashlib
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple
from .transport import TransportResult

_RANDOM = random.Random()


def seed_mock(seed: Optional[int] = None) -> None:
    if seed is not None:
        _RANDOM.seed(seed)


def _fake_hash(*parts: Any) -> str:
    return hashlib.sha256(':'.join(str(p) for p in parts).encode('utf-8')).hexdigest()


def _iso(ts: datetime) -> str:
    return ts.replace(microsecond=0).isoformat().replace('+00:00', '')


class MockTransport:
    """Serves queued ``TransportResult``s per (method, path) and records every call.

    Unregistered routes answer 404 ``Endpoint Not Found`` like the live API.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], List[TransportResult]] = {}
        self.calls: List[Dict[str, Any]] = []

    def add(self, method: str, path: str, http_status: int = 200, body: Any = None) -> 'MockTransport':
        self.routes.setdefault((method.upper(), path), []).append(TransportResult(http_status, body))
        return self

    def send(self, method: str, path: str, query: Dict[str, Any] | None = None, body: Any | None = None) -> TransportResult:
        self.calls.append({'method': method.upper(), 'path': path, 'query': query, 'body': body})
        queue = self.routes.get((method.upper(), path))
        if not queue:
            return TransportResult(404, {'msg': 'Endpoint Not Found', 'code': 0})
        # the last queued result keeps answering once the others are used up
        return queue.pop(0) if len(queue) > 1 else queue[0]


def generate_fake_transaction(block_height: Optional[int] = None, n_outputs: Optional[int] = None) -> Dict[str, Any]:
    height = block_height if block_height is not None else _RANDOM.randint(400000, 800000)
    outputs = []
    for i in range(n_outputs if n_outputs is not None else _RANDOM.randint(1, 3)):
        outputs.append({
            'index': i,
            'value': _RANDOM.randint(546, 5 * 10 ** 8),
            'address': f"1Fake{_fake_hash('addr', height, i)[:28]}",
        })
    total_out = sum(o['value'] for o in outputs)
    fee = _RANDOM.randint(1000, 50000)
    return {
        'hash': _fake_hash('tx', height, _RANDOM.random()),
        'block_height': height,
        'confirmations': _RANDOM.randint(1, 5000),
        'total_input_value': total_out + fee,
        'total_output_value': total_out,
        'total_fee': fee,
        'outputs': outputs,
    }


def generate_fake_block(height: Optional[int] = None, n_tx: int = 3) -> Dict[str, Any]:
    height = height if height is not None else _RANDOM.randint(400000, 800000)
    created = datetime.now(timezone.utc) - timedelta(minutes=10 * _RANDOM.randint(0, 1000))
    txs = [generate_fake_transaction(block_height=height) for _ in range(n_tx)]
    return {
        'hash': '00000000' + _fake_hash('block', height)[8:],
        'height': height,
        'block_time': _iso(created),
        'transactions': len(txs),
        'value': sum(t['total_output_value'] for t in txs),
        'is_orphan': False,
    }


def generate_fake_address(address: str = '1FakeAddress') -> Dict[str, Any]:
    received = _RANDOM.randint(0, 50 * 10 ** 8)
    sent = _RANDOM.randint(0, received)
    return {
        'address': address,
        'hash160': _fake_hash('hash160', address)[:40],
        'balance': received - sent,
        'received': received,
        'sent': sent,
        'transactions': _RANDOM.randint(1, 500),
    }
