class DeploymentError(Exception):
    pass


class ConfigNotFound(DeploymentError):
    def __init__(self, network, reason=None):
        self.network = network
        message = f'Unable to find config for network: {network}'
        if reason is not None:
            message = f'{message} ({reason})'
        super().__init__(message)


class ConfigPathMissing(DeploymentError, KeyError):
    def __init__(self, path, network=None):
        self.path = path
        self.network = network
        where = f'{network} network config' if network else 'network config'
        super().__init__(f'{path} is not set in the {where}')

    def __str__(self):
        # KeyError quotes its argument
        return self.args[0]


class DeployError(DeploymentError):
    pass


class ContractNotFound(DeployError):
    def __init__(self, name):
        self.name = name
        super().__init__(f'Contract {name} is not deployed on this network')


class TransactionRevert(DeploymentError):
    def __init__(self, label, value, reason):
        self.label = label
        self.value = value
        self.reason = reason
        super().__init__(f'Setting {label} to {value} reverted: {reason}')
