import pytest

from scripts.check_deployment import check_deployment
from utils.network_config import load_network_config

from conftest import NETWORK_DATA, write_network_file


def test_check_passes_when_parameters_match(fake_deployer, randao, staking, network_config):
    randao.values['RANDAO_PERIOD'] = 100

    check_deployment(fake_deployer, network_config)

    assert randao.transactions == []
    assert staking.transactions == []


def test_check_fails_on_drift_without_fixing_it(fake_deployer, randao, network_config):
    with pytest.raises(AssertionError):
        check_deployment(fake_deployer, network_config)

    assert randao.RANDAO_PERIOD() == 50
    assert randao.transactions == []


def test_check_fails_when_contract_is_not_deployed(fake_deployer, data_dir):
    write_network_file(data_dir, 'development', dict(NETWORK_DATA, contracts={'SunriseRandao': ''}))
    config = load_network_config('development', data_dir)

    with pytest.raises(AssertionError):
        check_deployment(fake_deployer, config)

    assert fake_deployer.calls == []
