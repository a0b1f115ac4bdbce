from hexbytes import HexBytes

from config.Chains import CHAINS
from ops.utils.batch_runner import BatchScript
from ops.utils.calldata import encode_call
from ops.utils.chain_classifier import Category, chain_strategy
from ops.utils.guards import call_returns, remote_pool_set, trusted_remote_set


def _layer_zero_remote(script: BatchScript, remote_chain):
    # evm peers trust each other's CrossChainBridge through LayerZero
    bridge = script.get_address("olympus.policies.CrossChainBridge")
    remote_bridge = script.config.get_address("olympus.policies.CrossChainBridge", allow_zero=True, chain=remote_chain)
    if remote_bridge is None:
        script.log.skip(f"Skipping {remote_chain}: no bridge deployed")
        return

    remote_id = CHAINS[remote_chain]["lz_endpoint_id"]
    # trusted remote path: remote address ++ local address
    path = bytes(HexBytes(remote_bridge)) + bytes(HexBytes(bridge))
    script.append_if_guard_fails(
        trusted_remote_set(script.reader, bridge, remote_id, path),
        bridge,
        encode_call("setTrustedRemote(uint16,bytes)", remote_id, path),
        description=f"trust {remote_chain} bridge {remote_bridge}",
    )


def _ccip_remote(script: BatchScript, remote_chain):
    # svm peers are reached through the CCIP token pool, keyed by the remote program id
    token_pool = script.get_address("olympus.policies.CCIPTokenPool")
    program = script.config.get("olympus.bridge.program", chain=remote_chain)
    remote_pool = bytes(HexBytes(program))
    if len(remote_pool) != 32 or remote_pool == bytes(32):
        script.log.skip(f"Skipping {remote_chain}: no token pool program configured")
        return

    selector = CHAINS[remote_chain]["ccip_selector"]
    script.append_if_guard_fails(
        remote_pool_set(script.reader, token_pool, selector, remote_pool),
        token_pool,
        encode_call("addRemotePool(uint64,bytes)", selector, remote_pool),
        description=f"add {remote_chain} remote pool",
    )


REMOTE_STRATEGIES = {
    Category.CANONICAL: _layer_zero_remote,
    Category.PERIPHERAL: _layer_zero_remote,
    Category.SVM: _ccip_remote,
}


def set_trusted_remotes(script: BatchScript):
    """
    args: {"remotes": ["arbitrum-sepolia", "solana-devnet"]}
    """
    script.log.h2(f"Trusted remotes for {script.chain}")
    for remote_chain in script.args.get("remotes", []):
        if remote_chain == script.chain:
            continue
        configure = chain_strategy(script.category(remote_chain), REMOTE_STRATEGIES)
        configure(script, remote_chain)


def set_bridge_status(script: BatchScript):
    """
    args: {"active": true}
    """
    bridge = script.get_address("olympus.policies.CrossChainBridge")
    active = script.flag("active", default=True)
    script.append_if_guard_fails(
        call_returns(script.reader, bridge, "bridgeActive()", (), ("bool",), active),
        bridge,
        encode_call("setBridgeStatus(bool)", active),
        description=f"{'activate' if active else 'deactivate'} bridge",
    )
