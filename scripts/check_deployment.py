from brownie import network

from deploy_config import NETWORKS, NETWORK_DATA_DIR, PARAMETERS

from utils.deployer import BrownieDeployer
from utils.network_config import get_network_settings, load_network_config
from utils.reconcile import check


def check_deployment(deployer, config, parameters=PARAMETERS):
    for name in config.contracts:
        address = config.contract_address(name)
        assert address is not None, f'{name} is not deployed'
        print(f'{name}: {address}')

    drifted = check(deployer, config, parameters)
    assert not drifted, f'{len(drifted)} parameters differ from {config.filename}'

    print(f'[ok] Deployment matches {config.filename}')


def main(network_name=None):
    if network_name is None:
        network_name = network.show_active()

    settings = get_network_settings(network_name, NETWORKS)
    config = load_network_config(network_name, NETWORK_DATA_DIR)

    deployer = BrownieDeployer(config, settings)
    try:
        deployer.init()
        check_deployment(deployer, config)
    finally:
        deployer.close()
