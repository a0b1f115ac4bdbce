import json
import os

import pytest

from constants import ALICE, BRIDGE, ENV_TABLE, KERNEL, REMOTE_BRIDGE
from ops.utils.env_config import EnvConfig
from ops.utils.errors import ConfigKeyMissingError, InvalidTargetError


def test_get_dotted_key(sepolia_config):
    assert sepolia_config.get("olympus.Kernel") == KERNEL
    assert sepolia_config.get("olympus.policies.CrossChainBridge") == BRIDGE


def test_missing_key(sepolia_config):
    with pytest.raises(ConfigKeyMissingError) as exc_info:
        sepolia_config.get("olympus.policies.Heart")

    assert exc_info.value.key == "olympus.policies.Heart"
    assert exc_info.value.chain == "sepolia"
    assert "olympus.policies.Heart" in str(exc_info.value)


def test_key_below_a_leaf_is_missing(sepolia_config):
    with pytest.raises(ConfigKeyMissingError):
        sepolia_config.get("olympus.Kernel.address")


def test_same_key_per_chain(env_config):
    assert env_config.for_chain("sepolia").get("olympus.policies.CrossChainBridge") == BRIDGE
    assert env_config.for_chain("arbitrum-sepolia").get("olympus.policies.CrossChainBridge") == REMOTE_BRIDGE
    # or explicitly from a scoped view
    assert env_config.for_chain("sepolia").get("olympus.policies.CrossChainBridge", chain="arbitrum-sepolia") == REMOTE_BRIDGE


def test_unknown_chain(env_config):
    with pytest.raises(ConfigKeyMissingError):
        env_config.for_chain("mainnet")


def test_unscoped_lookup_fails(env_config):
    with pytest.raises(ConfigKeyMissingError):
        env_config.get("olympus.Kernel")


def test_get_address_checksums(env_config):
    table = {"current": {"sepolia": {"olympus": {"Kernel": ALICE.lower()}}}}
    config = EnvConfig.from_dict(table).for_chain("sepolia")

    assert config.get_address("olympus.Kernel") == ALICE


def test_zero_address(sepolia_config):
    with pytest.raises(InvalidTargetError):
        sepolia_config.get_address("olympus.policies.Legacy")

    assert sepolia_config.get_address("olympus.policies.Legacy", allow_zero=True) is None


def test_not_an_address(sepolia_config):
    with pytest.raises(InvalidTargetError):
        sepolia_config.get_address("olympus.policies")


def test_optional_and_int_values():
    table = {"current": {"sepolia": {"bridge": {"gasLimit": "0x30d40", "fee": 7}}}}
    config = EnvConfig.from_dict(table).for_chain("sepolia")

    assert config.get_int("bridge.gasLimit") == 200_000
    assert config.get_int("bridge.fee") == 7
    assert config.get_optional("bridge.missing", default=3) == 3


def test_config_is_immutable(sepolia_config):
    with pytest.raises(TypeError):
        sepolia_config.get("olympus")["Kernel"] = ALICE

    assert sepolia_config.get("olympus.Kernel") == KERNEL


def test_from_dict_does_not_alias_input():
    table = json.loads(json.dumps(ENV_TABLE))
    config = EnvConfig.from_dict(table).for_chain("sepolia")

    table["current"]["sepolia"]["olympus"]["Kernel"] = ALICE

    assert config.get("olympus.Kernel") == KERNEL


def test_load_with_overrides(tmp_path):
    base = tmp_path / "env.json"
    overrides = tmp_path / "env.local.json"
    base.write_text(json.dumps(ENV_TABLE))
    overrides.write_text(json.dumps({
        "current": {"sepolia": {"olympus": {"multisig": {"emergency": ALICE}}}}
    }))

    config = EnvConfig.load(str(base), overrides=str(overrides)).for_chain("sepolia")

    assert config.get_address("olympus.multisig.emergency") == ALICE
    # untouched keys survive the merge
    assert config.get("olympus.Kernel") == KERNEL


def test_load_with_missing_overrides_file(tmp_path):
    base = tmp_path / "env.json"
    base.write_text(json.dumps(ENV_TABLE))

    config = EnvConfig.load(str(base), overrides=str(tmp_path / "nope.json"))

    assert "sepolia" in config.chains


def test_repository_address_table_loads():
    filename = os.path.join(os.path.dirname(__file__), "..", "..", "config", "env.json")
    config = EnvConfig.load(filename)

    assert config.for_chain("sepolia").get_address("olympus.Kernel")
