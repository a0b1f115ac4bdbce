from enum import IntEnum

from ops.utils.batch_runner import BatchScript
from ops.utils.calldata import encode_call
from ops.utils.guards import module_installed, policy_is_active

EXECUTE_ACTION = "executeAction(uint8,address)"


# matches the Kernel's Actions enum
class Actions(IntEnum):
    INSTALL_MODULE = 0
    UPGRADE_MODULE = 1
    ACTIVATE_POLICY = 2
    DEACTIVATE_POLICY = 3
    CHANGE_EXECUTOR = 4
    MIGRATE_KERNEL = 5


def install_modules(script: BatchScript):
    """
    args: {"modules": [{"keycode": "MINTR", "address": "0x..."}]}
    An address is optional: by default the module is read from
    `olympus.modules.<keycode>`.
    """
    script.log.h2("Install modules")
    kernel = script.get_address("olympus.Kernel")

    for module in script.args.get("modules", []):
        keycode = module["keycode"]
        address = module.get("address") or script.get_address(f"olympus.modules.{keycode}")
        action = Actions.UPGRADE_MODULE if module.get("upgrade") else Actions.INSTALL_MODULE
        script.append_if_guard_fails(
            module_installed(script.reader, kernel, keycode, address),
            kernel,
            encode_call(EXECUTE_ACTION, int(action), address),
            description=f"{action.name.lower()} {keycode} at {address}",
        )


def activate_policies(script: BatchScript):
    """
    args: {"policies": ["RolesAdmin", "CrossChainBridge"]}
    """
    script.log.h2("Activate policies")
    kernel = script.get_address("olympus.Kernel")

    for name in script.args.get("policies", []):
        # disused policies are left at the zero address in the address table
        policy = script.get_address(f"olympus.policies.{name}", allow_zero=True)
        if policy is None:
            script.log.skip(f"Skipping {name}: not deployed on {script.chain}")
            continue
        script.append_if_guard_fails(
            policy_is_active(script.reader, policy),
            kernel,
            encode_call(EXECUTE_ACTION, int(Actions.ACTIVATE_POLICY), policy),
            description=f"activate {name}",
        )
