"""Deployment orchestrator: submit a contract-creation transaction and wait for it."""

import asyncio
import logging
import weakref
from typing import Any, Dict, Optional

from eth_utils import to_checksum_address, to_hex
from web3.exceptions import ContractLogicError, TimeExhausted

from .constants import DEFAULT_POLL_INTERVAL
from .contract import build_constructor
from .exceptions import (
    ConfigurationError,
    ConfirmationTimeoutError,
    RpcError,
    TransactionRejectedError,
)
from .node import endpoint_of, node_errors, rpc_error_message
from .types import ContractArtifact, DeployedContractHandle, SigningIdentity

logger = logging.getLogger(__name__)

# event loop -> signing address -> lock
_identity_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[str, asyncio.Lock]]" = (
    weakref.WeakKeyDictionary()
)


def _identity_lock(address: str) -> asyncio.Lock:
    """Lock serializing deployments from one signing address on the running loop."""
    loop = asyncio.get_running_loop()
    locks = _identity_locks.setdefault(loop, {})
    return locks.setdefault(to_checksum_address(address), asyncio.Lock())


async def submit_deployment(
    artifact: ContractArtifact,
    identity: SigningIdentity,
    *constructor_args: Any,
    gas: Optional[int] = None,
) -> DeployedContractHandle:
    """
    Sign and send a contract-creation transaction. Never retried.

    Callers sharing a signing identity must not overlap calls to this function
    and the matching confirmation wait; deploy() takes care of that.

    Args:
        artifact: Compiled contract
        identity: Signing identity from network.resolve()
        constructor_args: Constructor arguments
        gas: Gas limit (estimated by the node when omitted)

    Returns:
        PENDING DeployedContractHandle

    Raises:
        ConfigurationError: Bad constructor arguments or chain id mismatch
        NetworkError: Transport failure, or the node failed to serve a read
        TransactionRejectedError: The node refused the transaction
    """
    w3 = identity.async_w3
    endpoint = endpoint_of(w3)
    address = identity.address

    # Fails on bad arguments before touching the network
    constructor = build_constructor(artifact, w3, *constructor_args)

    with node_errors("deployment pre-flight", endpoint):
        chain_id = await w3.eth.chain_id
    expected_chain_id = identity.profile.chain_id
    if expected_chain_id is not None and chain_id != expected_chain_id:
        raise ConfigurationError(
            f"Profile '{identity.network}' expects chain id {expected_chain_id}, "
            f"node at {identity.profile.url} reports {chain_id}"
        )

    with node_errors("deployment pre-flight", endpoint):
        nonce = await w3.eth.get_transaction_count(address, "pending")
        gas_price = await w3.eth.gas_price

    if gas is None:
        try:
            with node_errors("gas estimation", endpoint):
                gas = await constructor.estimate_gas({"from": address})
        except (ContractLogicError, RpcError) as e:
            raise TransactionRejectedError(rpc_error_message(e)) from e

    with node_errors("building the deployment transaction", endpoint):
        transaction = await constructor.build_transaction(
            {
                "from": address,
                "nonce": nonce,
                "gasPrice": gas_price,
                "gas": gas,
                "chainId": chain_id,
            }
        )
    signed = identity.account.sign_transaction(transaction)

    try:
        with node_errors("eth_sendRawTransaction", endpoint):
            tx_hash = to_hex(await w3.eth.send_raw_transaction(signed.raw_transaction))
    except RpcError as e:
        raise TransactionRejectedError(e.message) from e

    logger.info(
        "Submitted %s deployment from %s (nonce %d): %s",
        artifact.contract_name,
        address,
        nonce,
        tx_hash,
    )
    return DeployedContractHandle(
        contract_name=artifact.contract_name,
        abi=artifact.abi,
        transaction_hash=tx_hash,
        deployer=address,
        nonce=nonce,
        w3=identity.w3,
        async_w3=w3,
    )


async def wait_for_confirmation(
    handle: DeployedContractHandle,
    timeout: Optional[float] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> DeployedContractHandle:
    """
    Wait until the deployment is mined and code is present at the reported address.

    Suspends cooperatively between polls. There is no internal deadline; pass
    ``timeout`` to impose one.

    Args:
        handle: PENDING handle from submit_deployment()
        timeout: Seconds to wait; None waits indefinitely, <= 0 fails immediately
        poll_interval: Seconds between receipt polls

    Returns:
        The same handle, now CONFIRMED

    Raises:
        ConfirmationTimeoutError: Deadline expired; the outcome is unknown
        TransactionRejectedError: Reverted, or mined without contract code
        NetworkError: Transport failure, or the node answered a poll with an error
    """
    if handle.is_confirmed:
        return handle

    tx_hash = handle.transaction_hash
    if timeout is not None and timeout <= 0:
        raise ConfirmationTimeoutError(
            f"No time left to confirm {tx_hash}", transaction_hash=tx_hash
        )

    w3 = handle.async_w3
    endpoint = endpoint_of(w3)

    try:
        with node_errors(f"waiting for {tx_hash}", endpoint):
            receipt = await w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=timeout, poll_latency=poll_interval
            )
    except TimeExhausted as e:
        raise ConfirmationTimeoutError(
            f"{handle.contract_name} deployment {tx_hash} not confirmed "
            f"within {timeout}s; it may still be mined",
            transaction_hash=tx_hash,
        ) from e

    if receipt["status"] == 0:
        raise TransactionRejectedError(
            f"{handle.contract_name} deployment reverted in block {receipt['blockNumber']}",
            transaction_hash=tx_hash,
        )

    contract_address = receipt.get("contractAddress")
    if not contract_address:
        raise TransactionRejectedError(
            f"Receipt for {tx_hash} has no contract address", transaction_hash=tx_hash
        )

    with node_errors(f"eth_getCode at {contract_address}", endpoint):
        code = await w3.eth.get_code(contract_address)
    if not code:
        raise TransactionRejectedError(
            f"No contract code at {contract_address} after {tx_hash} was mined",
            transaction_hash=tx_hash,
        )

    handle.confirm(
        address=to_checksum_address(contract_address),
        block_number=receipt["blockNumber"],
        gas_used=receipt.get("gasUsed"),
    )
    logger.info(
        "%s deployed at %s (block %d)", handle.contract_name, handle.address, handle.block_number
    )
    return handle


async def deploy(
    artifact: ContractArtifact,
    identity: SigningIdentity,
    *constructor_args: Any,
    timeout: Optional[float] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    gas: Optional[int] = None,
) -> DeployedContractHandle:
    """
    Deploy a contract and wait for confirmation.

    Deployments sharing a signing identity run one at a time, in nonce order;
    the next one starts only after the previous one confirmed or failed.
    Nothing is retried: a second call deploys a second contract.

    A ConfirmationTimeoutError releases the identity while its transaction is
    still pending. The next deployment reads the "pending" nonce, so it queues
    behind that transaction rather than reusing its nonce.

    Args:
        artifact: Compiled contract
        identity: Signing identity from network.resolve()
        constructor_args: Constructor arguments
        timeout: Confirmation deadline in seconds (None = no deadline)
        poll_interval: Seconds between receipt polls
        gas: Gas limit (estimated when omitted)

    Returns:
        CONFIRMED DeployedContractHandle

    Raises:
        ConfigurationError, NetworkError, TransactionRejectedError,
        ConfirmationTimeoutError
    """
    async with _identity_lock(identity.address):
        handle = await submit_deployment(artifact, identity, *constructor_args, gas=gas)
        return await wait_for_confirmation(handle, timeout=timeout, poll_interval=poll_interval)
