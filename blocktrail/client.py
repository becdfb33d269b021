from __future__ import annotations
import os
from typing import Any, Dict, List, Optional
from .base_client import BaseClient
from .transport import RequestsTransport

DEFAULT_API_ENDPOINT = 'https://api.blocktrail.com'
SUPPORTED_NETWORKS = ('BTC', 'tBTC')
SORT_DIRECTIONS = ('asc', 'desc')


def _require(value: str, name: str) -> str:
    if not value:
        raise ValueError(f'{name} required')
    return value


def _page_query(page: int, limit: int, sort_dir: str) -> Dict[str, Any]:
    if page < 1:
        raise ValueError('page must be >= 1')
    if limit < 1:
        raise ValueError('limit must be >= 1')
    if sort_dir not in SORT_DIRECTIONS:
        raise ValueError(f"sort_dir must be one of {SORT_DIRECTIONS}")
    return {
        'page': page,
        'limit': limit,
        'sort_dir': sort_dir,
    }


class BlocktrailClient(BaseClient):
    """Blocktrail data API client (addresses, blocks, transactions).

    Amounts in responses are integers in satoshis; render them with
    ``blocktrail.conversion.to_major_unit_string``.
    """

    def __init__(self, api_key: str, network: str = 'BTC', testnet: bool = False, api_version: str = 'v1', api_endpoint: Optional[str] = None, timeout: int = 30, transport=None):
        if api_endpoint is None:
            if testnet:
                network = 't' + network
            if network not in SUPPORTED_NETWORKS:
                raise ValueError(f'network unsupported: {network}')
            api_endpoint = os.getenv('BLOCKTRAIL_SDK_API_ENDPOINT') or DEFAULT_API_ENDPOINT
            api_endpoint = f"{api_endpoint.rstrip('/')}/{api_version}/{network}"
        self.network = network
        self.api_endpoint = api_endpoint
        super().__init__(transport or RequestsTransport(api_endpoint, api_key, timeout=timeout))

    @classmethod
    def from_env(cls) -> 'BlocktrailClient':
        api_key = BaseClient.env('BLOCKTRAIL_API_KEY')
        network = os.getenv('BLOCKTRAIL_NETWORK', 'BTC')
        testnet = os.getenv('BLOCKTRAIL_TESTNET', '').strip().lower() in ('1', 'true', 'yes')
        api_version = os.getenv('BLOCKTRAIL_API_VERSION', 'v1')
        return cls(api_key, network=network, testnet=testnet, api_version=api_version)  # type: ignore[arg-type]

    # addresses

    def address(self, address: str) -> Dict[str, Any]:
        return self._get(f"address/{_require(address, 'address')}")

    def address_transactions(self, address: str, page: int = 1, limit: int = 20, sort_dir: str = 'asc') -> Dict[str, Any]:
        return self._get(f"address/{_require(address, 'address')}/transactions", _page_query(page, limit, sort_dir))

    def address_unconfirmed_transactions(self, address: str, page: int = 1, limit: int = 20, sort_dir: str = 'asc') -> Dict[str, Any]:
        return self._get(f"address/{_require(address, 'address')}/unconfirmed-transactions", _page_query(page, limit, sort_dir))

    def address_unspent_outputs(self, address: str, page: int = 1, limit: int = 20, sort_dir: str = 'asc') -> Dict[str, Any]:
        return self._get(f"address/{_require(address, 'address')}/unspent-outputs", _page_query(page, limit, sort_dir))

    def batch_address_unspent_outputs(self, addresses: List[str], page: int = 1, limit: int = 20, sort_dir: str = 'asc') -> Dict[str, Any]:
        if not addresses:
            raise ValueError('addresses list cannot be empty')
        return self._post('address/unspent-outputs', _page_query(page, limit, sort_dir), {'addresses': list(addresses)})

    def verify_address(self, address: str, signature: str) -> Dict[str, Any]:
        return self._post(f"address/{_require(address, 'address')}/verify", None, {'signature': _require(signature, 'signature')})

    # blocks

    def all_blocks(self, page: int = 1, limit: int = 20, sort_dir: str = 'asc') -> Dict[str, Any]:
        # a read endpoint: GET, not POST
        return self._get('all-blocks', _page_query(page, limit, sort_dir))

    def block_latest(self) -> Dict[str, Any]:
        return self._get('block/latest')

    def block(self, block: str | int) -> Dict[str, Any]:
        return self._get(f"block/{_require(str(block), 'block')}")

    def block_transactions(self, block: str | int, page: int = 1, limit: int = 20, sort_dir: str = 'asc') -> Dict[str, Any]:
        # a read endpoint: GET, not POST
        return self._get(f"block/{_require(str(block), 'block')}/transactions", _page_query(page, limit, sort_dir))

    # transactions

    def transaction(self, txhash: str) -> Dict[str, Any]:
        return self._get(f"transaction/{_require(txhash, 'txhash')}")

    def faucet_withdrawal(self, address: str, amount: int = 10000) -> Dict[str, Any]:
        """Request testnet coins; ``amount`` is in satoshis."""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValueError('amount must be a positive integer number of satoshis')
        # the server path really is spelled "withdrawl"
        return self._post('faucet/withdrawl', None, {
            'address': _require(address, 'address'),
            'amount': amount,
        })
