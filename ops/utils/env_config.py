import copy
from types import MappingProxyType

from mergedeep import merge
from web3 import Web3

from ops.utils import json_file
from ops.utils.constants import ZERO_ADDRESS
from ops.utils.errors import ConfigKeyMissingError, InvalidTargetError


def _freeze(value):
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


class EnvConfig:
    """
    Read-only view over the deployment address table (`config/env.json`).

    The table is keyed by chain under `current`, e.g.
    `{"current": {"mainnet": {"olympus": {"Kernel": "0x..."}}}}`, and values
    are looked up with dotted keys such as `olympus.Kernel`. A config is built
    once per run and passed explicitly to whatever needs it.
    """

    def __init__(self, table, chain=None):
        self._table = _freeze(table)
        self._chain = chain

    @classmethod
    def load(cls, filename, overrides=None):
        table = json_file.load(filename)
        if overrides:
            table = merge({}, table, json_file.load_optional(overrides))
        return cls(table)

    @classmethod
    def from_dict(cls, table):
        return cls(copy.deepcopy(table))

    @property
    def chain(self):
        return self._chain

    @property
    def chains(self):
        return tuple(self._table.get("current", {}).keys())

    def for_chain(self, chain):
        """
        Returns the same table scoped to `chain`.
        """
        if chain not in self._table.get("current", {}):
            raise ConfigKeyMissingError("current", chain)
        return EnvConfig(self._table, chain)

    def get(self, key, chain=None):
        chain = chain or self._chain
        if chain is None:
            raise ConfigKeyMissingError(key, "<no chain selected>")

        node = self._table.get("current", {}).get(chain)
        if node is None:
            raise ConfigKeyMissingError(key, chain)

        for part in key.split("."):
            if not hasattr(node, "get") or part not in node:
                raise ConfigKeyMissingError(key, chain)
            node = node[part]
        return node

    def get_optional(self, key, default=None, chain=None):
        try:
            return self.get(key, chain)
        except ConfigKeyMissingError:
            return default

    def get_address(self, key, allow_zero=False, chain=None):
        """
        Returns the checksummed address stored under `key`.

        A zero address is rejected with `InvalidTargetError`. With
        `allow_zero`, a zero address yields `None` instead so the caller can
        skip disused integrations explicitly.
        """
        value = self.get(key, chain)
        if not isinstance(value, str):
            raise InvalidTargetError(value, f"`{key}` is not an address")
        if value.lower() == ZERO_ADDRESS:
            if allow_zero:
                return None
            raise InvalidTargetError(value, f"`{key}` is the zero address")
        # address tables are not always checksummed consistently
        if not Web3.is_address(value.lower()):
            raise InvalidTargetError(value, f"`{key}` is not an address")
        return Web3.to_checksum_address(value.lower())

    def get_int(self, key, chain=None):
        value = self.get(key, chain)
        try:
            return int(value, 0) if isinstance(value, str) else int(value)
        except (TypeError, ValueError):
            raise ValueError(f"`{key}` is not an integer: {value!r}") from None
