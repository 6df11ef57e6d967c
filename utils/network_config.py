import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from utils.errors import ConfigNotFound, ConfigPathMissing


CONFIG_PREFIX = 'config:'


@dataclass(frozen=True)
class NetworkSettings:
    host: str = None
    port: int = None
    network_id: str = '*'
    provider: str = None

    @property
    def uri(self):
        if self.provider:
            return self.provider
        if self.host is None:
            return None
        if self.port is None:
            return f'http://{self.host}'
        return f'http://{self.host}:{self.port}'


@dataclass(frozen=True)
class ConfigPath:
    segments: tuple

    @classmethod
    def parse(cls, text):
        """Parses `config:section.key` (the prefix is optional) into a path."""
        if text.startswith(CONFIG_PREFIX):
            text = text[len(CONFIG_PREFIX):]
        segments = tuple(text.split('.'))
        if not all(segments):
            raise ValueError(f'invalid config path: {text!r}')
        return cls(segments)

    @classmethod
    def is_reference(cls, value):
        return isinstance(value, str) and value.startswith(CONFIG_PREFIX)

    def __str__(self):
        return CONFIG_PREFIX + '.'.join(self.segments)


@dataclass(frozen=True)
class RoleGrant:
    contract: str
    role: str
    account: object


def _freeze(value):
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class NetworkConfig:
    network: str
    filename: Path
    data: MappingProxyType

    @classmethod
    def from_dict(cls, network, filename, data):
        if not isinstance(data, dict) or not isinstance(data.get('contracts'), dict):
            raise ConfigNotFound(network, f'{filename} has no contracts section')
        return cls(network=network, filename=Path(filename), data=_freeze(data))

    @property
    def contracts(self):
        return self.data['contracts']

    def has_contract(self, name):
        return name in self.contracts

    def contract_address(self, name):
        return self.contracts.get(name) or None

    def resolve(self, path):
        if isinstance(path, str):
            path = ConfigPath.parse(path)

        value = self.data
        for segment in path.segments:
            if not isinstance(value, MappingProxyType) or value.get(segment) is None:
                raise ConfigPathMissing(path, self.network)
            value = value[segment]

        return value

    def resolve_value(self, value):
        if isinstance(value, ConfigPath):
            return self.resolve(value)
        return value

    def resolve_args(self, args):
        return [self.resolve_value(arg) for arg in args]

    def role_grants(self):
        grants = []
        for contract, roles in self.data.get('roles', {}).items():
            for role, accounts in roles.items():
                for account in accounts:
                    if ConfigPath.is_reference(account):
                        account = ConfigPath.parse(account)
                    grants.append(RoleGrant(contract=contract, role=role, account=account))
        return grants


def get_network_settings(network, networks):
    settings = networks.get(network)
    if settings is None or not settings.uri:
        raise ConfigNotFound(network, 'no provider')
    return settings


def network_data_filename(network, data_dir):
    return Path(data_dir) / f'{network}.json'


def load_network_config(network, data_dir):
    filename = network_data_filename(network, data_dir)
    if not filename.is_file():
        raise ConfigNotFound(network, f'{filename} does not exist')

    with open(filename) as f:
        data = json.load(f)

    return NetworkConfig.from_dict(network, filename, data)


def write_contract_address(filename, name, address):
    filename = Path(filename)
    with open(filename) as f:
        data = json.load(f)

    data['contracts'][name] = address

    # the document is replaced only once fully written
    fd, tmp_name = tempfile.mkstemp(dir=filename.parent, prefix=f'.{filename.name}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(data, f, indent=2)
            f.write('\n')
        os.replace(tmp_name, filename)
    except BaseException:
        os.unlink(tmp_name)
        raise
