from dataclasses import dataclass

from brownie import Wei
from brownie.exceptions import VirtualMachineError

from utils.errors import TransactionRevert
from utils.network_config import ConfigPath


@dataclass(frozen=True)
class ParameterBinding:
    contract: str
    getter: str
    setter: str
    config_path: ConfigPath

    @property
    def label(self):
        return f'{self.contract}.{self.getter}'


@dataclass(frozen=True)
class ReconcileResult:
    binding: ParameterBinding
    current: object
    desired: object
    txid: str = None

    @property
    def changed(self):
        return self.txid is not None


def canonical(value):
    """Integer form of an on-chain or configured value.

    Accepts everything brownie's `Wei` does: ints, decimal and unit strings
    ("1 ether"), hex strings, addresses and bytes.
    """
    if isinstance(value, bool):
        return int(value)
    return int(Wei(value))


def _group_by_contract(bindings, config):
    groups = {}
    for binding in bindings:
        if config.has_contract(binding.contract):
            groups.setdefault(binding.contract, []).append(binding)
    return groups


def _resolve_desired(config, bindings):
    desired = []
    for binding in bindings:
        value = config.resolve(binding.config_path)
        print(f'{binding.config_path}: {value}')
        desired.append((binding, value))
    return desired


def reconcile_parameter(contract, binding, desired, tx_params):
    current = getattr(contract, binding.getter)()
    value = canonical(desired)

    if canonical(current) == value:
        print(f'[ok] {binding.label} is up to date: {current}')
        return ReconcileResult(binding, current, desired)

    print(f'- Updating {binding.label} {current} => {value}')
    try:
        tx = getattr(contract, binding.setter)(value, tx_params)
        tx.wait(1)
    except VirtualMachineError as err:
        raise TransactionRevert(binding.label, value, err) from err

    print(f' -> tx: {tx.txid}')
    return ReconcileResult(binding, current, desired, tx.txid)


def reconcile(deployer, config, bindings):
    """Brings every bound parameter of the deployed contracts to its configured value.

    Only contracts listed in the network config take part. A parameter that
    already matches costs one read call and no transaction.
    """
    results = []
    for name, contract_bindings in _group_by_contract(bindings, config).items():
        contract = deployer.load_contract(name)
        for binding, desired in _resolve_desired(config, contract_bindings):
            results.append(reconcile_parameter(contract, binding, desired, deployer.tx_params))
    return results


def check(deployer, config, bindings):
    drifted = []
    for name, contract_bindings in _group_by_contract(bindings, config).items():
        contract = deployer.load_contract(name)
        for binding, desired in _resolve_desired(config, contract_bindings):
            current = getattr(contract, binding.getter)()
            if canonical(current) != canonical(desired):
                print(f'[WARN] {binding.label} is {current}, expected {desired}')
                drifted.append(ReconcileResult(binding, current, desired))
            else:
                print(f'[ok] {binding.label} is {current}')
    return drifted
