"""Network resolver: turns a profile name into a signing identity."""

import logging
from typing import Mapping, Optional

from eth_account import Account

from .config import load_network_profiles
from .exceptions import ConfigurationError
from .node import connect, connect_async
from .types import NetworkProfile, SigningIdentity

logger = logging.getLogger(__name__)


def resolve(
    profile_name: str,
    account_index: int = 0,
    profiles: Optional[Mapping[str, NetworkProfile]] = None,
) -> SigningIdentity:
    """
    Resolve a signing identity for a named network profile.

    No connection is opened here; the returned identity's web3 connections
    make their first request only when used.

    Args:
        profile_name: Name of a configured profile, e.g. "local"
        account_index: Which of the profile's credentials signs
        profiles: Profile table (defaults to load_network_profiles())

    Returns:
        SigningIdentity bound to the profile's RPC endpoint

    Raises:
        ConfigurationError: Unknown profile, no credentials, index out of range
                            or malformed private key
    """
    if profiles is None:
        profiles = load_network_profiles()

    if profile_name not in profiles:
        known = ", ".join(sorted(profiles)) or "none"
        raise ConfigurationError(
            f"Unknown network profile '{profile_name}' (configured: {known})"
        )
    profile = profiles[profile_name]

    if not profile.accounts:
        raise ConfigurationError(f"Network profile '{profile_name}' has no credentials")

    if account_index < 0 or account_index >= len(profile.accounts):
        raise ConfigurationError(
            f"Account index {account_index} out of range for profile '{profile_name}' "
            f"({len(profile.accounts)} configured)"
        )

    try:
        account = Account.from_key(profile.accounts[account_index])
    except (ValueError, TypeError) as e:
        # Don't echo the key itself
        raise ConfigurationError(
            f"Malformed private key #{account_index} in profile '{profile_name}'"
        ) from e

    logger.debug("Resolved %s on %s (%s)", account.address, profile_name, profile.url)
    return SigningIdentity(
        profile=profile,
        account=account,
        w3=connect(profile.url),
        async_w3=connect_async(profile.url),
    )
