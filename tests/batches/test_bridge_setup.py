import os

import pytest
from eth_abi.abi import decode

from config.Chains import CHAINS
from constants import BRIDGE, REMOTE_BRIDGE, SVM_PROGRAM, TOKEN_POOL
from ops.utils.batch_runner import BatchRunner
from ops.utils.calldata import selector
from ops.utils.errors import BatchArgumentError, GuardEvaluationError, UnknownChainError

BATCHES_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "batches")
PATH = bytes.fromhex(REMOTE_BRIDGE[2:]) + bytes.fromhex(BRIDGE[2:])
PROGRAM = bytes.fromhex(SVM_PROGRAM[2:])
DEVNET_SELECTOR = CHAINS["solana-devnet"]["ccip_selector"]


@pytest.fixture
def runner():
    return BatchRunner(BATCHES_DIR)


@pytest.fixture
def untrusted(fake_reader):
    fake_reader.set(BRIDGE, "isTrustedRemote(uint16,bytes)", (10231, PATH), False)
    fake_reader.set(TOKEN_POOL, "isRemotePool(uint64,bytes)", (DEVNET_SELECTOR, PROGRAM), False)
    return fake_reader


def test_each_category_gets_its_own_call(runner, createBatchArgs, recording_sink, untrusted):
    remotes = ["sepolia", "arbitrum-sepolia", "base-sepolia", "solana-devnet"]

    runner.run(createBatchArgs(_args={"remotes": remotes}), "BridgeSetup", "set_trusted_remotes",
               recording_sink, reader=untrusted)

    lz, ccip = recording_sink.submitted[0][0].operations

    assert lz.target == BRIDGE
    assert lz.payload[:4] == selector("setTrustedRemote(uint16,bytes)")
    assert decode(["uint16", "bytes"], lz.payload[4:]) == (10231, PATH)

    assert ccip.target == TOKEN_POOL
    assert ccip.payload[:4] == selector("addRemotePool(uint64,bytes)")
    assert decode(["uint64", "bytes"], ccip.payload[4:]) == (DEVNET_SELECTOR, PROGRAM)


def test_configured_remotes_are_skipped(runner, createBatchArgs, recording_sink, untrusted):
    untrusted.set(BRIDGE, "isTrustedRemote(uint16,bytes)", (10231, PATH), True)

    runner.run(createBatchArgs(_args={"remotes": ["arbitrum-sepolia", "solana-devnet"]}),
               "BridgeSetup", "set_trusted_remotes", recording_sink, reader=untrusted)

    (op,) = recording_sink.submitted[0][0].operations
    assert op.target == TOKEN_POOL


def test_unknown_remote(runner, createBatchArgs, recording_sink, untrusted):
    with pytest.raises(UnknownChainError):
        runner.run(createBatchArgs(_args={"remotes": ["arbitrum-sepolia", "fantom"]}),
                   "BridgeSetup", "set_trusted_remotes", recording_sink, reader=untrusted)

    assert recording_sink.submitted == []


def test_unreadable_remote(runner, createBatchArgs, recording_sink, untrusted):
    untrusted.fail(TOKEN_POOL, "isRemotePool(uint64,bytes)", (DEVNET_SELECTOR, PROGRAM))

    with pytest.raises(GuardEvaluationError):
        runner.run(createBatchArgs(_args={"remotes": ["arbitrum-sepolia", "solana-devnet"]}),
                   "BridgeSetup", "set_trusted_remotes", recording_sink, reader=untrusted)

    assert recording_sink.submitted == []


@pytest.mark.parametrize("active, current, expected", [(True, False, 1), (True, True, 0), (False, True, 1)])
def test_bridge_status(runner, createBatchArgs, recording_sink, fake_reader, active, current, expected):
    fake_reader.set(BRIDGE, "bridgeActive()", (), current)

    runner.run(createBatchArgs(_args={"active": active}, _allowEmpty=True), "BridgeSetup", "set_bridge_status",
               recording_sink, reader=fake_reader)

    operations = recording_sink.submitted[0][0].operations if recording_sink.submitted else ()
    assert len(operations) == expected
    if operations:
        assert decode(["bool"], operations[0].payload[4:]) == (active,)


@pytest.mark.parametrize("active", ["false", 0, None])
def test_bridge_status_needs_a_json_boolean(runner, createBatchArgs, recording_sink, fake_reader, active):
    fake_reader.set(BRIDGE, "bridgeActive()", (), True)

    with pytest.raises(BatchArgumentError):
        runner.run(createBatchArgs(_args={"active": active}), "BridgeSetup", "set_bridge_status",
                   recording_sink, reader=fake_reader)

    assert recording_sink.submitted == []
    assert fake_reader.reads == []
