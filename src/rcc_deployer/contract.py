"""web3 contract objects built from compiled artifacts."""

from typing import TYPE_CHECKING, Any, Dict, Optional

from eth_utils import remove_0x_prefix
from web3.exceptions import Web3Exception

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .types import ContractArtifact


def constructor_abi(artifact: "ContractArtifact") -> Optional[Dict[str, Any]]:
    for item in artifact.abi:
        if item.get("type") == "constructor":
            return item
    return None


def contract_factory(artifact: "ContractArtifact", w3):
    """
    Contract class for deploying ``artifact`` through ``w3`` (sync or async).

    Raises:
        ConfigurationError: The artifact has no creation bytecode
    """
    if not remove_0x_prefix(artifact.bytecode or ""):
        raise ConfigurationError(
            f"Artifact for {artifact.contract_name} has no creation bytecode "
            "(abstract contract or interface?)"
        )
    return w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)


def build_constructor(artifact: "ContractArtifact", w3, *args: Any):
    """
    Constructor call with its arguments ABI-encoded against the artifact.

    Purely local: nothing is sent to the node.

    Raises:
        ConfigurationError: No bytecode, wrong argument count or unencodable arguments
    """
    factory = contract_factory(artifact, w3)

    constructor = constructor_abi(artifact)
    inputs = constructor.get("inputs", []) if constructor else []
    if len(args) != len(inputs):
        raise ConfigurationError(
            f"{artifact.contract_name} constructor takes {len(inputs)} argument(s), "
            f"got {len(args)}"
        )

    try:
        return factory.constructor(*args)
    except (Web3Exception, TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Cannot encode {artifact.contract_name} constructor arguments: {e}"
        ) from e
