from abc import ABC, abstractmethod
from dataclasses import dataclass

from brownie import network, project
from brownie._config import CONFIG
from brownie.exceptions import ContractNotFound as BrownieContractNotFound
from brownie.exceptions import VirtualMachineError

from utils.config import get_is_live, get_deployer_account, get_tx_params
from utils.errors import ContractNotFound, DeployError
from utils.network_config import write_contract_address


@dataclass(frozen=True)
class DeployManifest:
    name: str
    args: tuple = ()
    init_args: tuple = ()


class DeployerService(ABC):
    """What the deployment step needs from a contract deployer.

    Implementations must be safe to re-run against a network where some or
    all contracts are already deployed.
    """

    tx_params = None

    @abstractmethod
    def init(self):
        if self._project is not None:
            raise DeployError('Deployer is already initialized')

        try:
            if not network.is_connected():
                self._register_network()
                network.connect(self.config.network)
                self._connected_here = True
            self._project = self._load_project()
        except (ConnectionError, KeyError, ValueError) as err:
            raise DeployError(f'Unable to initialize deployer for {self.config.network}: {err}') from err

        is_live = get_is_live()
        deployer = get_deployer_account(is_live)
        self.tx_params = get_tx_params(deployer, is_live)

        host = self._active_host()
        print(f'Network: {network.show_active()} ({host})')
        if host != self.settings.uri:
            print(f'[WARN] Connected to {host}, network config has {self.settings.uri}')
        print(f'Deployer: {deployer}')

    def _register_network(self):
        # brownie's own entry (e.g. `development` launching ganache on 8545)
        # is replaced by the network table's provider
        entry = dict(CONFIG.networks.get(self.config.network, {}))
        entry.pop('cmd', None)
        entry.pop('cmd_settings', None)
        entry.update(id=self.config.network, host=self.settings.uri)
        entry.setdefault('name', self.config.network)
        if self.settings.network_id != '*':
            entry['chainid'] = self.settings.network_id
        CONFIG.networks[self.config.network] = entry

    def _active_host(self):
        if self._connected_here:
            return CONFIG.networks[self.config.network]['host']
        return CONFIG.active_network.get('host')

    def _load_project(self):
        loaded = project.get_loaded_projects()
        if loaded:
            return loaded[0]
        return project.load(self.project_path)

    def _container(self, name):
        try:
            return self._project[name]
        except KeyError:
            raise DeployError(f'No contract named {name} in the project') from None

    def deploy_all(self, manifests):
        self._ensure_initialized()

        deployed = []
        for manifest in manifests:
            if not self.config.has_contract(manifest.name):
                continue

            address = self.records.get(manifest.name)
            if address:
                print(f'[ok] {manifest.name} is already deployed at {address}')
                continue

            container = self._container(manifest.name)
            args = self.config.resolve_args(manifest.args)
            init_args = self.config.resolve_args(manifest.init_args)

            print(f'Deploying {manifest.name}')
            try:
                contract = container.deploy(*args, self.tx_params)
                if manifest.init_args:
                    print(f'Initializing {manifest.name}: {init_args}')
                    contract.initialize(*init_args, self.tx_params)
            except VirtualMachineError as err:
                raise DeployError(f'Deployment of {manifest.name} failed: {err}') from err

            self.records[manifest.name] = contract.address
            write_contract_address(self.config.filename, manifest.name, contract.address)
            print(f'[ok] {manifest.name} deployed at {contract.address}')
            deployed.append(manifest.name)

        return deployed

    def grant_roles(self):
        self._ensure_initialized()

        txids = []
        for grant in self.config.role_grants():
            if not self.config.has_contract(grant.contract):
                continue

            contract = self.load_contract(grant.contract)
            role = getattr(contract, grant.role)()
            account = self.config.resolve_value(grant.account)

            if contract.hasRole(role, account):
                print(f'[ok] {account} has {grant.role} on {grant.contract}')
                continue

            print(f'- Granting {grant.role} on {grant.contract} to {account}')
            try:
                tx = contract.grantRole(role, account, self.tx_params)
            except VirtualMachineError as err:
                raise DeployError(f'Granting {grant.role} to {account} failed: {err}') from err
            print(f' -> tx: {tx.txid}')
            txids.append(tx.txid)

        return txids

    def load_contract(self, name):
        self._ensure_initialized()

        address = self.records.get(name)
        if not address:
            raise ContractNotFound(name)

        try:
            return self._container(name).at(address)
        except BrownieContractNotFound as err:
            raise DeployError(f'{name} is recorded at {address} but has no code there') from err

    def close(self):
        if self._connected_here and network.is_connected():
            network.disconnect()
        self._connected_here = False

    def _ensure_initialized(self):
        if self._project is None:
            raise DeployError('Deployer is not initialized, call init() first')
