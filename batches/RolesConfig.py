from ops.utils.batch_runner import BatchScript
from ops.utils.calldata import encode_call, to_bytes32
from ops.utils.guards import has_role, negate


def grant_roles(script: BatchScript):
    """
    Grants roles through RolesAdmin.
    args: {"roles": [{"role": "bridge_admin", "to": "0x..."}]}
    """
    script.log.h2("Grant roles")
    roles = script.get_address("olympus.modules.ROLES")
    roles_admin = script.get_address("olympus.policies.RolesAdmin")

    for grant in script.args.get("roles", []):
        script.append_if_guard_fails(
            has_role(script.reader, roles, grant["role"], grant["to"]),
            roles_admin,
            encode_call("grantRole(bytes32,address)", to_bytes32(grant["role"]), grant["to"]),
            description=f"grantRole {grant['role']} to {grant['to']}",
        )


def revoke_roles(script: BatchScript):
    """
    args: {"roles": [{"role": "emergency_shutdown", "from": "0x..."}]}
    """
    script.log.h2("Revoke roles")
    roles = script.get_address("olympus.modules.ROLES")
    roles_admin = script.get_address("olympus.policies.RolesAdmin")

    for revoke in script.args.get("roles", []):
        script.append_if_guard_fails(
            negate(
                has_role(script.reader, roles, revoke["role"], revoke["from"]),
                f"{revoke['from']} does not have role {revoke['role']}",
            ),
            roles_admin,
            encode_call("revokeRole(bytes32,address)", to_bytes32(revoke["role"]), revoke["from"]),
            description=f"revokeRole {revoke['role']} from {revoke['from']}",
        )
