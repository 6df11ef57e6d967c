import os

from brownie import network, accounts


DEV_NETWORKS = ('development', 'hardhat', 'ganache')


def get_is_live():
    return network.show_active() not in DEV_NETWORKS


def get_deployer_account(is_live):
    if not is_live:
        return accounts[0]

    if 'DEPLOYER' not in os.environ:
        raise EnvironmentError(
            'Please set DEPLOYER env variable to the deployer account name')

    return accounts.load(os.environ['DEPLOYER'])


def get_tx_params(deployer, is_live):
    tx_params = {'from': deployer}
    if is_live and os.environ.get('GAS_PRICE'):
        tx_params['gas_price'] = os.environ['GAS_PRICE']
    return tx_params
