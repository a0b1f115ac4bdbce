import os

import pytest

from ops.utils.state_reader import StateReader


FORKS = {
    "mainnet": {
        "rpc_url": f"https://eth-mainnet.g.alchemy.com/v2/{os.environ.get('WEB3_ALCHEMY_API_KEY')}",
        "chain_id": 1,
    },
    "sepolia": {
        "rpc_url": f"https://eth-sepolia.g.alchemy.com/v2/{os.environ.get('WEB3_ALCHEMY_API_KEY')}",
        "chain_id": 11155111,
    },
}


def pytest_configure(config):
    # Add fork marker
    config.addinivalue_line(
        "markers",
        "fork(name): mark test to run only against a live chain"
    )

    pytest.always = pytest.mark.fork("always")
    pytest.local = pytest.mark.fork("local")
    # Register shorthand markers
    for key in FORKS.keys():
        setattr(pytest, key, pytest.mark.fork(key))


def pytest_collection_modifyitems(config, items):
    fork = config.getoption("--fork")

    selected = []
    deselected = []

    for item in items:
        markers = [marker for marker in item.iter_markers(name="fork")]
        # Always run tests marked with "always"
        if any("always" in marker.args for marker in markers):
            selected.append(item)
            continue

        if fork == "local":
            # For local, select tests with no fork marker OR local marker
            if not markers or any("local" in marker.args for marker in markers):
                selected.append(item)
            else:
                deselected.append(item)
        else:
            # For live chains, only select tests marked for that chain
            if any(fork in marker.args for marker in markers):
                selected.append(item)
            else:
                deselected.append(item)

    items[:] = selected
    if deselected:
        config.hook.pytest_deselected(items=deselected)


def pytest_addoption(parser):
    parser.addoption(
        "--fork",
        action="store",
        default="local",
        choices=["local", "mainnet", "sepolia"],
        help="Specify the live chain to run read-only tests against"
    )
    parser.addoption(
        "--rpc",
        action="store",
        default=None,
        help="Override RPC URL for the selected chain"
    )


@pytest.fixture(scope="session")
def fork(pytestconfig):
    return pytestconfig.getoption("fork")


@pytest.fixture(scope="session")
def live_reader(fork, pytestconfig):
    if fork not in FORKS:
        pytest.skip("no live chain selected")
    rpc_url = pytestconfig.getoption("rpc") or FORKS[fork]["rpc_url"]
    return StateReader(rpc_url)
