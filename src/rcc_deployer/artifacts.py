"""Compiled artifact parsers for rcc-stake-deployer."""

import json
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import ArtifactNotFoundError, ConfigurationError
from .paths import get_artifact_path
from .types import ContractArtifact

# solc leaves __$<34 hex>$__ (or __LibName___ in old versions) where a library address goes
_LINK_PLACEHOLDER = re.compile(r"__\$[0-9a-fA-F]{34}\$__|__[A-Za-z0-9_:.]{36}__")


class ArtifactFormat(Enum):
    """
    Compiled artifact layouts.

    - HARDHAT: hh-sol-artifact-1, bytecode is a hex string
    - FOUNDRY: forge output, bytecode is {"object": "0x..."}
    """

    HARDHAT = "hardhat"
    FOUNDRY = "foundry"


def detect_artifact_format(data: Dict[str, Any]) -> Optional[ArtifactFormat]:
    """
    Detect which compiler toolchain produced an artifact.

    Args:
        data: Parsed artifact JSON

    Returns:
        ArtifactFormat.HARDHAT if bytecode is a plain string
        ArtifactFormat.FOUNDRY if bytecode is an object with "object"
        None if neither shape matches
    """
    bytecode = data.get("bytecode")
    if isinstance(bytecode, str):
        return ArtifactFormat.HARDHAT
    if isinstance(bytecode, dict) and "object" in bytecode:
        return ArtifactFormat.FOUNDRY
    return None


def _normalize_bytecode(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value if value.startswith("0x") else f"0x{value}"


def parse_artifact(file_path: Union[Path, str], contract_name: Optional[str] = None) -> ContractArtifact:
    """
    Parse a compiled contract artifact.

    Args:
        file_path: Path to artifact JSON file
        contract_name: Name to use when the artifact doesn't record one
                       (defaults to the file stem)

    Returns:
        ContractArtifact

    Raises:
        ArtifactNotFoundError: If the file doesn't exist
        ConfigurationError: If the file isn't a usable artifact (bad JSON, no ABI,
                            no bytecode, unlinked libraries)
    """
    file_path = Path(file_path)
    try:
        with open(file_path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ArtifactNotFoundError(f"Artifact not found at {file_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Artifact {file_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("abi"), list):
        raise ConfigurationError(f"Artifact {file_path} has no ABI")

    artifact_format = detect_artifact_format(data)
    match artifact_format:
        case ArtifactFormat.HARDHAT:
            bytecode = data["bytecode"]
            deployed = data.get("deployedBytecode")
            source_name = data.get("sourceName")
        case ArtifactFormat.FOUNDRY:
            bytecode = data["bytecode"]["object"]
            deployed = (data.get("deployedBytecode") or {}).get("object")
            source_name = None
            metadata = data.get("metadata")
            if isinstance(metadata, dict):
                target = metadata.get("settings", {}).get("compilationTarget", {})
                if target:
                    source_name = next(iter(target))
        case _:
            raise ConfigurationError(f"Artifact {file_path} has no bytecode")

    if _LINK_PLACEHOLDER.search(bytecode or ""):
        raise ConfigurationError(
            f"Artifact {file_path} references unlinked libraries; link them before deploying"
        )

    return ContractArtifact(
        contract_name=data.get("contractName") or contract_name or file_path.stem,
        abi=data["abi"],
        bytecode=_normalize_bytecode(bytecode),
        deployed_bytecode=_normalize_bytecode(deployed),
        source_name=source_name,
        artifact_format=artifact_format.value,
    )


def load_artifact(
    contract_name: str, artifacts_root: Optional[Union[Path, str]] = None
) -> ContractArtifact:
    """
    Look up and parse the artifact for a named contract.

    Args:
        contract_name: Contract name, e.g. "RCCStake"
        artifacts_root: Artifacts directory (defaults to ./artifacts or $RCC_ARTIFACTS_DIR)

    Raises:
        ArtifactNotFoundError: If no artifact exists for the contract
        ConfigurationError: If the artifact is unusable
    """
    return parse_artifact(get_artifact_path(contract_name, artifacts_root), contract_name)
