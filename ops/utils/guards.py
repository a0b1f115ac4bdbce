from web3 import Web3

from ops.utils.calldata import to_bytes5, to_bytes32


class Guard:
    """
    A read-only precondition check. Calling the guard performs one fresh
    read and returns True when the target state already holds.
    """

    def __init__(self, check, description):
        self._check = check
        self.description = description

    def __call__(self):
        return self._check()

    def __repr__(self):
        return f"Guard({self.description})"


def _same_address(a, b):
    return Web3.to_checksum_address(a) == Web3.to_checksum_address(b)


def call_returns(reader, target, signature, args, returns, expected, description=None):
    def check():
        value = reader.call(target, signature, args, returns)
        if isinstance(expected, str) and Web3.is_address(expected) and isinstance(value, str):
            return _same_address(value, expected)
        return value == expected

    return Guard(check, description or f"{signature} on {target} already returns {expected!r}")


def has_role(reader, roles, role, account):
    # `role` is either a bytes32 or a plain role name such as "bridge_admin"
    role_bytes = to_bytes32(role) if isinstance(role, str) else bytes(role)
    return Guard(
        lambda: reader.call(roles, "hasRole(address,bytes32)", (account, role_bytes), ("bool",)),
        f"{account} already has role {role}",
    )


def policy_is_active(reader, policy):
    return Guard(
        lambda: reader.call(policy, "isActive()", (), ("bool",)),
        f"policy {policy} is already active",
    )


def module_installed(reader, kernel, keycode, module):
    def check():
        installed = reader.call(kernel, "getModuleForKeycode(bytes5)", (to_bytes5(keycode),), ("address",))
        return _same_address(installed, module)

    return Guard(check, f"module {keycode} is already installed at {module}")


def trusted_remote_set(reader, bridge, remote_id, remote):
    return Guard(
        lambda: reader.call(bridge, "isTrustedRemote(uint16,bytes)", (remote_id, remote), ("bool",)),
        f"remote {remote_id} is already trusted on {bridge}",
    )


def negate(guard, description):
    # for removals: the target state holds when the wrapped check does not
    def check():
        result = guard()
        if not isinstance(result, bool):
            raise TypeError(f"{guard!r} returned {type(result).__name__} instead of bool")
        return not result

    return Guard(check, description)


def remote_pool_set(reader, token_pool, chain_selector, remote_pool):
    return Guard(
        lambda: reader.call(token_pool, "isRemotePool(uint64,bytes)", (chain_selector, remote_pool), ("bool",)),
        f"remote pool for selector {chain_selector} is already set on {token_pool}",
    )
