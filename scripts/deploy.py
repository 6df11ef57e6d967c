import argparse
import sys

from brownie import network

from deploy_config import (
    NETWORKS,
    NETWORK_DATA_DIR,
    DEPLOY_MANIFESTS,
    PARAMETERS
)

from utils.deployer import BrownieDeployer
from utils.errors import DeploymentError
from utils.network_config import get_network_settings, load_network_config
from utils.reconcile import reconcile


def deploy(
    network_name,
    deployer_factory=BrownieDeployer,
    networks=NETWORKS,
    data_dir=NETWORK_DATA_DIR,
    manifests=DEPLOY_MANIFESTS,
    parameters=PARAMETERS
):
    settings = get_network_settings(network_name, networks)
    config = load_network_config(network_name, data_dir)

    print(f'Using network config {config.filename}')

    deployer = deployer_factory(config, settings)
    try:
        deployer.init()
        deployer.deploy_all(manifests)
        deployer.grant_roles()
        results = reconcile(deployer, config, parameters)
    finally:
        deployer.close()

    updated = [r for r in results if r.changed]
    if updated:
        print(f'[ok] Updated {len(updated)} of {len(results)} parameters')
    else:
        print(f'[ok] All {len(results)} parameters are up to date')

    return results


def main(network_name=None):
    if network_name is None:
        network_name = network.show_active()
    return deploy(network_name)


def cli(argv=None):
    parser = argparse.ArgumentParser(description='Deploy randao contracts and sync their parameters')
    parser.add_argument('network', help='network name, reads network/<name>.json')
    parser.add_argument('--data-dir', default=NETWORK_DATA_DIR, help='directory with network config files')
    args = parser.parse_args(argv)

    try:
        deploy(args.network, data_dir=args.data_dir)
    except DeploymentError as err:
        print(f'[error] {err}', file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    raise SystemExit(cli(sys.argv[1:]))
