"""pytest fixtures that deploy RCCStake once per test run."""

import asyncio
import os

import pytest

from .artifacts import load_artifact
from .constants import ARTIFACTS_DIR_ENV, DEFAULT_CONTRACT_NAME
from .deployer import deploy
from .exceptions import ConfirmationTimeoutError, NetworkError
from .fixtures import FixtureCache, load_fixture
from .network import resolve

DEFAULT_CONFIRMATION_TIMEOUT = 120.0


def pytest_addoption(parser):
    group = parser.getgroup("rcc", "RCCStake deployment")
    group.addoption(
        "--rcc-network",
        default="local",
        help="network profile used by the rcc_* fixtures (default: local)",
    )
    group.addoption(
        "--rcc-account-index",
        type=int,
        default=0,
        help="which of the profile's credentials deploys (default: 0)",
    )
    group.addoption(
        "--rcc-artifacts",
        default=os.environ.get(ARTIFACTS_DIR_ENV),
        help=f"compiled artifacts directory (default: ${ARTIFACTS_DIR_ENV} or ./artifacts)",
    )
    group.addoption(
        "--rcc-confirmation-timeout",
        type=float,
        default=DEFAULT_CONFIRMATION_TIMEOUT,
        help="seconds to wait for a deployment to confirm",
    )


@pytest.fixture(scope="session")
def rcc_fixture_cache():
    """Deployment cache shared by the whole run; emptied when the run ends."""
    cache = FixtureCache()
    yield cache
    cache.reset()


@pytest.fixture(scope="session")
def rcc_signer(pytestconfig):
    return resolve(
        pytestconfig.getoption("rcc_network"),
        account_index=pytestconfig.getoption("rcc_account_index"),
    )


@pytest.fixture(scope="session")
def rcc_stake_artifact(pytestconfig):
    return load_artifact(DEFAULT_CONTRACT_NAME, pytestconfig.getoption("rcc_artifacts"))


@pytest.fixture
def rcc_stake(pytestconfig, rcc_fixture_cache, rcc_signer, rcc_stake_artifact):
    """
    Confirmed RCCStake handle, deployed on first use and reused for the rest of the run.

    A timeout or network failure while deploying aborts the run. Other failures
    error every test using the fixture, without redeploying.
    """
    timeout = pytestconfig.getoption("rcc_confirmation_timeout")

    def deploy_rcc_stake():
        return asyncio.run(deploy(rcc_stake_artifact, rcc_signer, timeout=timeout))

    try:
        return load_fixture(deploy_rcc_stake, cache=rcc_fixture_cache, key="rcc_stake")
    except (ConfirmationTimeoutError, NetworkError) as e:
        pytest.exit(f"RCCStake deployment failed during fixture setup: {e}")
