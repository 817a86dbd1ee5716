"""Network profile configuration for rcc-stake-deployer."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .constants import ENV_PREFIX, NETWORK_PROFILES, SOLIDITY_SETTINGS
from .exceptions import ConfigurationError
from .types import NetworkProfile


def _env_name(profile_name: str, suffix: str) -> str:
    return f"{ENV_PREFIX}_{profile_name.upper().replace('-', '_')}_{suffix}"


def build_profile(name: str, data: Mapping[str, Any]) -> NetworkProfile:
    """
    Build a NetworkProfile from a raw configuration entry.

    Args:
        name: Profile name
        data: Mapping with "url", optional "accounts", "chain_id", "compiler"

    Raises:
        ConfigurationError: If the entry has no url or a malformed field
    """
    url = data.get("url")
    if not url:
        raise ConfigurationError(f"Network profile '{name}' has no url")

    accounts = data.get("accounts", [])
    if isinstance(accounts, str) or not isinstance(accounts, (list, tuple)):
        raise ConfigurationError(f"Network profile '{name}': accounts must be a list")

    chain_id = data.get("chain_id")
    if chain_id is not None and not isinstance(chain_id, int):
        raise ConfigurationError(f"Network profile '{name}': chain_id must be an integer")

    return NetworkProfile(
        name=name,
        url=url,
        accounts=list(accounts),
        chain_id=chain_id,
        compiler=data.get("compiler", SOLIDITY_SETTINGS),
    )


def load_network_profiles(
    config_path: Optional[Union[Path, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, NetworkProfile]:
    """
    Load network profiles.

    Built-in profiles come first, entries from ``config_path`` (a JSON object
    keyed by profile name) replace them by name, and finally environment
    variables override url and credentials per profile.

    Args:
        config_path: Optional JSON file with extra or replacement profiles
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Dictionary mapping profile name -> NetworkProfile

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, or malformed
    """
    if environ is None:
        environ = os.environ

    raw: Dict[str, Any] = {name: dict(entry) for name, entry in NETWORK_PROFILES.items()}

    if config_path is not None:
        path = Path(config_path)
        try:
            with open(path) as f:
                overrides = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Network config not found at {path}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Network config {path} is not valid JSON: {e}") from e

        if not isinstance(overrides, dict):
            raise ConfigurationError(f"Network config {path} must be a JSON object")
        raw.update(overrides)

    profiles: Dict[str, NetworkProfile] = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Network profile '{name}' must be an object")
        entry = dict(entry)

        url_override = environ.get(_env_name(name, "RPC_URL"))
        if url_override:
            entry["url"] = url_override

        keys_override = environ.get(_env_name(name, "PRIVATE_KEYS"))
        if keys_override:
            entry["accounts"] = [k.strip() for k in keys_override.split(",") if k.strip()]

        profiles[name] = build_profile(name, entry)

    return profiles
