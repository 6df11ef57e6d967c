import os

from dotenv import load_dotenv

from utils.deployer import DeployManifest
from utils.network_config import ConfigPath, NetworkSettings
from utils.reconcile import ParameterBinding

load_dotenv()

NETWORK_DATA_DIR = 'network'
PROVIDER_URL_SUFFIX = '_PROVIDER_URL'


def build_networks(environ):
    networks = {
        'development': NetworkSettings(
            host=environ.get('DEVELOPMENT_RPC_HOST', '127.0.0.1'),
            port=int(environ.get('DEVELOPMENT_RPC_PORT', 9545)),
            network_id='*'
        )
    }

    # e.g. GOERLI_PROVIDER_URL adds the `goerli` network
    for key, value in environ.items():
        if key.endswith(PROVIDER_URL_SUFFIX) and value:
            name = key[:-len(PROVIDER_URL_SUFFIX)].lower().replace('_', '-')
            networks[name] = NetworkSettings(provider=value)

    return networks


NETWORKS = build_networks(os.environ)


DEPLOY_MANIFESTS = [
    DeployManifest(
        name='SunriseRandao',
        init_args=(
            ConfigPath.parse('config:randao.period'),
            ConfigPath.parse('config:randao.rewardPerBlock'),
            ConfigPath.parse('config:randao.tokenDuration'),
            ConfigPath.parse('config:susd.address'),
            ConfigPath.parse('config:randao.signer'),
            ConfigPath.parse('config:randao.manager')
        )
    ),
    DeployManifest(
        name='RandaoStaking',
        init_args=(
            ConfigPath.parse('config:sunc.address'),
            ConfigPath.parse('config:staking.minAmount')
        )
    )
]


PARAMETERS = [
    ParameterBinding(
        contract='SunriseRandao',
        getter='RANDAO_PERIOD',
        setter='setRandaoPeriod',
        config_path=ConfigPath.parse('config:randao.period')
    ),
    ParameterBinding(
        contract='SunriseRandao',
        getter='REWARD_PER_BLOCK',
        setter='setRewardPerBlock',
        config_path=ConfigPath.parse('config:randao.rewardPerBlock')
    ),
    ParameterBinding(
        contract='SunriseRandao',
        getter='TOKEN_DURATION',
        setter='setTokenDuration',
        config_path=ConfigPath.parse('config:randao.tokenDuration')
    ),
    ParameterBinding(
        contract='RandaoStaking',
        getter='MIN_STAKE_AMOUNT',
        setter='setMinStakeAmount',
        config_path=ConfigPath.parse('config:staking.minAmount')
    )
]
