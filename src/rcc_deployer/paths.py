"""Path management utilities for rcc-stake-deployer."""

import os
from pathlib import Path
from typing import Optional, Union

from .constants import ARTIFACTS_DIR_ENV
from .exceptions import ArtifactNotFoundError


def get_default_artifacts_dir() -> Path:
    """
    Get default artifacts directory.

    Returns:
        $RCC_ARTIFACTS_DIR if set, otherwise ./artifacts
    """
    env_dir = os.environ.get(ARTIFACTS_DIR_ENV)
    if env_dir:
        return Path(env_dir).absolute()
    return Path.cwd() / "artifacts"


def get_artifact_path(
    contract_name: str, artifacts_root: Optional[Union[Path, str]] = None
) -> Path:
    """
    Locate the compiled artifact JSON for a contract.

    Tries the Hardhat layout first (contracts/<Name>.sol/<Name>.json), then any
    <Name>.json below the root (Foundry's out/<Name>.sol/<Name>.json included).
    Hardhat debug files (*.dbg.json) are ignored.

    Args:
        contract_name: Contract name, e.g. "RCCStake"
        artifacts_root: Artifacts directory (defaults to get_default_artifacts_dir())

    Returns:
        Path to the artifact file

    Raises:
        ArtifactNotFoundError: If the root or the artifact doesn't exist
    """
    if artifacts_root is None:
        artifacts_root = get_default_artifacts_dir()
    else:
        artifacts_root = Path(artifacts_root).absolute()

    if not artifacts_root.is_dir():
        raise ArtifactNotFoundError(
            f"Artifacts directory not found at {artifacts_root}. Compile the contracts first."
        )

    hardhat_path = artifacts_root / "contracts" / f"{contract_name}.sol" / f"{contract_name}.json"
    if hardhat_path.exists():
        return hardhat_path

    candidates = sorted(artifacts_root.rglob(f"{contract_name}.json"))
    if candidates:
        return candidates[0]

    raise ArtifactNotFoundError(
        f"No artifact for contract '{contract_name}' under {artifacts_root}"
    )
