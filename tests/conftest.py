import json

import pytest

from utils.deployer import DeployerService
from utils.errors import ContractNotFound
from utils.network_config import load_network_config


NETWORK_DATA = {
    'contracts': {
        'SunriseRandao': '0x0000000000000000000000000000000000000aaa',
        'RandaoStaking': '0x0000000000000000000000000000000000000bbb'
    },
    'roles': {
        'SunriseRandao': {
            'SIGNER_ROLE': ['config:randao.signer'],
            'MANAGER_ROLE': ['0x0000000000000000000000000000000000000ddd']
        }
    },
    'randao': {
        'period': 100,
        'rewardPerBlock': '0.1 ether',
        'tokenDuration': 2592000,
        'signer': '0x0000000000000000000000000000000000000ccc',
        'manager': '0x0000000000000000000000000000000000000ddd'
    },
    'susd': {'address': '0x0000000000000000000000000000000000000eee'},
    'sunc': {'address': '0x0000000000000000000000000000000000000fff'},
    'staking': {'minAmount': 1000}
}


class FakeTx:
    def __init__(self, txid):
        self.txid = txid
        self.confirmations = None

    def wait(self, required_confs):
        self.confirmations = required_confs


class FakeContract:
    """Getter/setter pairs backed by a dict, records every setter call."""

    def __init__(self, name, values, setters):
        self.name = name
        self.values = dict(values)
        self.setters = dict(setters)
        self.transactions = []
        self.receipts = []

    def __getattr__(self, item):
        if item in self.__dict__.get('values', {}):
            return lambda: self.values[item]
        if item in self.__dict__.get('setters', {}):
            return lambda value, tx_params: self._set(item, value, tx_params)
        raise AttributeError(item)

    def _set(self, setter, value, tx_params):
        self.values[self.setters[setter]] = value
        tx = FakeTx(f'0x{self.name.lower()}{len(self.transactions)}')
        self.transactions.append((setter, value, tx_params))
        self.receipts.append(tx)
        return tx


class FakeDeployer(DeployerService):

    def __init__(self, contracts):
        self.contracts = contracts
        self.tx_params = {'from': 'deployer'}
        self.calls = []

    def init(self):
        self.calls.append('init')

    def deploy_all(self, manifests):
        self.calls.append('deploy_all')
        return []

    def grant_roles(self):
        self.calls.append('grant_roles')
        return []

    def load_contract(self, name):
        self.calls.append(('load_contract', name))
        if name not in self.contracts:
            raise ContractNotFound(name)
        return self.contracts[name]

    def close(self):
        self.calls.append('close')


def write_network_file(data_dir, network, data):
    data_dir.mkdir(parents=True, exist_ok=True)
    filename = data_dir / f'{network}.json'
    with open(filename, 'w') as f:
        json.dump(data, f)
    return filename


@pytest.fixture(scope='function')
def data_dir(tmp_path):
    return tmp_path / 'network'


@pytest.fixture(scope='function')
def network_file(data_dir):
    return write_network_file(data_dir, 'development', NETWORK_DATA)


@pytest.fixture(scope='function')
def network_config(network_file, data_dir):
    return load_network_config('development', data_dir)


@pytest.fixture(scope='function')
def randao():
    return FakeContract(
        'randao',
        values={'RANDAO_PERIOD': 50, 'REWARD_PER_BLOCK': 10**17, 'TOKEN_DURATION': 2592000},
        setters={
            'setRandaoPeriod': 'RANDAO_PERIOD',
            'setRewardPerBlock': 'REWARD_PER_BLOCK',
            'setTokenDuration': 'TOKEN_DURATION'
        }
    )


@pytest.fixture(scope='function')
def staking():
    return FakeContract(
        'staking',
        values={'MIN_STAKE_AMOUNT': 1000},
        setters={'setMinStakeAmount': 'MIN_STAKE_AMOUNT'}
    )


@pytest.fixture(scope='function')
def fake_deployer(randao, staking):
    return FakeDeployer({'SunriseRandao': randao, 'RandaoStaking': staking})
