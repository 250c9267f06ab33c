from starlette.testclient import TestClient

from gas_estimation.tests.fixtures.providers import (
    BASE_FEE,
    BASE_FEES,
    GAS_PRICE,
    FailingRPCProvider,
    FakeRPCProvider,
)


def test_get_gas_fee(gas_client):
    response = gas_client.get('v1/gas/fee')
    assert response.status_code == 200
    response_data = response.json()
    assert response_data['legacy'] is None
    assert response_data['eip1559'] == {
        'max_fee': BASE_FEE + GAS_PRICE,
        'max_priority_fee': GAS_PRICE - BASE_FEE,
    }
    assert 'x-request-id' in response.headers


def test_get_gas_fee_legacy(gas_client):
    response = gas_client.get('v1/gas/fee', params={'legacy': True})
    assert response.status_code == 200
    assert response.json()['legacy'] == GAS_PRICE


def test_get_gas_fee_invalid_buffer(gas_client):
    response = gas_client.get('v1/gas/fee', params={'buffer_percent': 5})
    assert response.status_code == 400
    assert response.json()['error_owner'] == 'user'
    assert 'between 0 and 1' in response.json()['reason']


def test_get_gas_fee_legacy_chain(app_factory):
    client = TestClient(app_factory(FakeRPCProvider(base_fee=None)))
    response = client.get('v1/gas/fee')
    assert response.status_code == 400
    assert response.json()['error'].startswith('Chain does not support EIP-1559')


def test_get_gas_fee_keeps_request_id(gas_client):
    response = gas_client.get('v1/gas/fee', headers={'x-request-id': 'abc'})
    assert response.headers['x-request-id'] == 'abc'


def test_get_gas_fee_tracker(app_factory):
    client = TestClient(app_factory(FakeRPCProvider(base_fee=BASE_FEES[-1])))
    response = client.get('v1/gas/tracker', params={'number_of_blocks': 4})
    assert response.status_code == 200
    response_data = response.json()
    assert response_data['number_of_blocks'] == 4
    assert response_data['eip1559']['slow']['max_priority_fee'] == 1500000000
    assert response_data['eip1559']['average']['max_priority_fee'] == 1625000000
    assert response_data['eip1559']['fast']['max_priority_fee'] == 3408518898


def test_get_gas_fee_tracker_custom_percentiles(gas_client):
    response = gas_client.get('v1/gas/tracker', params={'percentiles': [99, 1, 50]})
    assert response.status_code == 200
    assert response.json()['percentiles'] == [1, 50, 99]


def test_get_gas_fee_tracker_invalid_percentiles(gas_client):
    response = gas_client.get('v1/gas/tracker', params={'percentiles': [-1, 80, 1000]})
    assert response.status_code == 400
    assert 'between 1 and 99' in response.json()['reason']


def test_get_gas_fee_tracker_invalid_number_of_blocks(gas_client):
    response = gas_client.get('v1/gas/tracker', params={'number_of_blocks': 0})
    assert response.status_code == 422


def test_get_gas_fee_tracker_malformed_history(app_factory):
    client = TestClient(app_factory(FakeRPCProvider(fee_history={'oldestBlock': '0x1'})))
    response = client.get('v1/gas/tracker')
    assert response.status_code == 409
    assert response.json()['error_owner'] == 'provider'


def test_health_check(gas_client):
    response = gas_client.get('health_check')
    assert response.status_code == 200
    assert response.text == 'OK'


def test_get_gas_fee_tracker_nan_percentile(gas_client):
    response = gas_client.get('v1/gas/tracker', params={'percentiles': ['nan', 50, 60]})
    assert response.status_code == 400
    assert 'between 1 and 99' in response.json()['reason']


def test_get_gas_fee_tracker_node_error(app_factory):
    client = TestClient(app_factory(FailingRPCProvider()))
    response = client.get('v1/gas/tracker')
    assert response.status_code == 409
    assert response.json()['error_owner'] == 'provider'
