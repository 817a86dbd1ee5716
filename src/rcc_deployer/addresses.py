"""Contract address derivation."""

import rlp
from eth_utils import is_hex_address, keccak, to_canonical_address, to_checksum_address


def compute_contract_address(sender: str, nonce: int) -> str:
    """
    Address of a contract created with CREATE by ``sender`` at ``nonce``.

    keccak256(rlp([sender, nonce]))[12:], checksummed.
    """
    if not is_hex_address(sender):
        raise ValueError(f"Not a hex address: {sender!r}")
    if nonce < 0:
        raise ValueError(f"Nonce must be non-negative, got {nonce}")

    encoded = rlp.encode([to_canonical_address(sender), nonce])
    return to_checksum_address(keccak(encoded)[12:])
