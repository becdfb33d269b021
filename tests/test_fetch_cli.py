import json
import os
import pytest
from blocktrail.client import BlocktrailClient
from blocktrail.mock_provider import MockTransport, generate_fake_address, seed_mock

ADDRESS = '1NcXPMRaanz43b1kokpPuYDdk6GGDvxT2T'


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('BLOCKTRAIL_CACHE_DIR', str(tmp_path / 'cache'))
    return tmp_path


def _client(transport):
    return BlocktrailClient('KEY', transport=transport)


def test_fetch_address_with_major_units(fetch_cli, workdir):
    transport = MockTransport().add('GET', f'address/{ADDRESS}', 200, {'address': ADDRESS, 'balance': 123456789, 'transactions': 4})
    fetch_cli.main(['--resource', 'address', '--id', ADDRESS, '--major-units', '--out', 'out/address.json'], client=_client(transport))
    data = json.loads((workdir / 'out/address.json').read_text(encoding='utf-8'))
    assert data == {'address': ADDRESS, 'balance': '1.23456789', 'transactions': 4}


def test_second_fetch_served_from_cache(fetch_cli, workdir):
    seed_mock(11)
    payload = generate_fake_address(ADDRESS)
    transport = MockTransport().add('GET', f'address/{ADDRESS}', 200, payload)
    argv = ['--resource', 'address', '--id', ADDRESS, '--out', 'a.json']
    fetch_cli.main(argv, client=_client(transport))
    fetch_cli.main(argv, client=_client(transport))
    assert len(transport.calls) == 1
    assert json.loads((workdir / 'a.json').read_text(encoding='utf-8')) == payload


def test_block_latest_is_never_cached(fetch_cli):
    transport = MockTransport().add('GET', 'block/latest', 200, {'height': 1})
    argv = ['--resource', 'block-latest', '--out', 'latest.json']
    fetch_cli.main(argv, client=_client(transport))
    fetch_cli.main(argv, client=_client(transport))
    assert len(transport.calls) == 2


def test_paged_resource_passes_paging(fetch_cli):
    transport = MockTransport().add('GET', f'address/{ADDRESS}/transactions', 200, {'data': [], 'total': 0})
    fetch_cli.main(['--resource', 'address-transactions', '--id', ADDRESS, '--page', '3', '--limit', '50',
                    '--sort-dir', 'desc', '--no-cache', '--out', 't.json'], client=_client(transport))
    assert transport.calls[0]['query'] == {'page': 3, 'limit': 50, 'sort_dir': 'desc'}


def test_api_error_exits_with_kind(fetch_cli):
    transport = MockTransport().add('GET', 'transaction/abc', 404, {'msg': 'no such tx'})
    with pytest.raises(SystemExit) as exc:
        fetch_cli.main(['--resource', 'transaction', '--id', 'abc', '--out', 'tx.json'], client=_client(transport))
    assert 'ObjectNotFound' in str(exc.value)


def test_id_required(fetch_cli):
    with pytest.raises(SystemExit, match='--id required'):
        fetch_cli.main(['--resource', 'block', '--out', 'b.json'], client=_client(MockTransport()))


def test_render_major_units_nested(fetch_cli):
    data = {'outputs': [{'value': 546, 'index': 0}], 'total_fee': 1000, 'confirmations': 3, 'value': '12'}
    assert fetch_cli.render_major_units(data) == {
        'outputs': [{'value': '0.00000546', 'index': 0}],
        'total_fee': '0.00001000',
        'confirmations': 3,
        'value': '12',
    }


def test_env_file_does_not_override(fetch_cli, workdir, monkeypatch):
    monkeypatch.setenv('BLOCKTRAIL_API_KEY', 'FROM_ENV')
    monkeypatch.setenv('BLOCKTRAIL_NETWORK', '')
    (workdir / '.env').write_text('# comment\nBLOCKTRAIL_API_KEY=from_file\nBLOCKTRAIL_NETWORK="BTC"\n', encoding='utf-8')
    fetch_cli.load_env_file(workdir / '.env')
    assert os.environ['BLOCKTRAIL_API_KEY'] == 'FROM_ENV'
    assert os.environ['BLOCKTRAIL_NETWORK'] == 'BTC'


@pytest.mark.parametrize('flag,value', [('--page', '0'), ('--limit', '0')])
def test_invalid_paging_exits_with_message(fetch_cli, flag, value):
    transport = MockTransport()
    with pytest.raises(SystemExit, match='must be >= 1'):
        fetch_cli.main(['--resource', 'address-transactions', '--id', ADDRESS, flag, value, '--out', 't.json'],
                       client=_client(transport))
    assert transport.calls == []
