"""
rcc-stake-deployer: deploy the RCCStake contract to a configured network and sanity-check it
"""

from importlib.metadata import PackageNotFoundError, version

from .addresses import compute_contract_address
from .artifacts import load_artifact, parse_artifact
from .config import load_network_profiles
from .deployer import deploy, submit_deployment, wait_for_confirmation
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    ConfirmationTimeoutError,
    ContractNotDeployedError,
    DeploymentError,
    NetworkError,
    RpcError,
    TransactionRejectedError,
)
from .fixtures import FixtureCache, load_fixture
from .network import resolve
from .types import (
    ContractArtifact,
    DeployedContractHandle,
    DeploymentState,
    NetworkProfile,
    SigningIdentity,
)
from .verification import Expectation, assert_initial_state, check_initial_state

try:
    __version__ = version("rcc-stake-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "resolve",
    "deploy",
    "submit_deployment",
    "wait_for_confirmation",
    "load_artifact",
    "parse_artifact",
    "load_network_profiles",
    "compute_contract_address",
    "check_initial_state",
    "assert_initial_state",
    "Expectation",
    "FixtureCache",
    "load_fixture",
    "NetworkProfile",
    "SigningIdentity",
    "ContractArtifact",
    "DeployedContractHandle",
    "DeploymentState",
    "DeploymentError",
    "ConfigurationError",
    "ArtifactNotFoundError",
    "NetworkError",
    "RpcError",
    "TransactionRejectedError",
    "ConfirmationTimeoutError",
    "ContractNotDeployedError",
]
