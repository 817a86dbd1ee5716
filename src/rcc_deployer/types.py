"""Data types and dataclasses for rcc-stake-deployer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3
from web3.contract import Contract
from web3.contract.contract import ContractFunctions

from .exceptions import ContractNotDeployedError, DeploymentError
from .node import endpoint_of, node_errors


@dataclass
class NetworkProfile:
    """A named network: RPC endpoint plus the credentials allowed to sign on it."""

    name: str  # e.g. "local"
    url: str  # RPC endpoint
    accounts: List[str] = field(default_factory=list, repr=False)  # hex private keys, ordered
    chain_id: Optional[int] = None  # expected chain id, checked against the node when set
    compiler: Optional[Dict[str, Any]] = None  # only consumed by the external build step


@dataclass(frozen=True)
class SigningIdentity:
    """Authority to submit transactions for one account on one network."""

    profile: NetworkProfile
    account: LocalAccount = field(repr=False)
    w3: Web3 = field(repr=False)  # reads
    async_w3: AsyncWeb3 = field(repr=False)  # deployment submission and confirmation

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def network(self) -> str:
        return self.profile.name

    def sign_transaction(self, transaction: Dict[str, Any]) -> bytes:
        """Sign a transaction dict and return the raw encoded bytes."""
        return bytes(self.account.sign_transaction(transaction).raw_transaction)


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled bytecode and ABI for one contract, as produced by the build step."""

    contract_name: str
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation code
    deployed_bytecode: Optional[str] = None
    source_name: Optional[str] = None  # e.g. "contracts/RCCStake.sol"
    artifact_format: Optional[str] = None  # "hardhat" or "foundry"


class DeploymentState(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


@dataclass
class DeployedContractHandle:
    """
    Result of a deployment.

    Created PENDING right after the transaction is accepted by the node. The
    address is only known once the network reports the transaction mined and
    code present, at which point the handle becomes CONFIRMED and stops changing.
    """

    contract_name: str
    abi: List[Dict[str, Any]] = field(repr=False)
    transaction_hash: str
    deployer: str  # signing address
    nonce: int
    w3: Web3 = field(repr=False)
    async_w3: AsyncWeb3 = field(repr=False)

    state: DeploymentState = DeploymentState.PENDING
    address: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None

    @property
    def is_confirmed(self) -> bool:
        return self.state is DeploymentState.CONFIRMED

    def confirm(self, address: str, block_number: int, gas_used: Optional[int] = None) -> None:
        """Move the handle to CONFIRMED. Only allowed once."""
        if self.is_confirmed:
            raise DeploymentError(
                f"{self.contract_name} deployment {self.transaction_hash} is already confirmed"
            )
        self.address = address
        self.block_number = block_number
        self.gas_used = gas_used
        self.state = DeploymentState.CONFIRMED

    @property
    def contract(self) -> Contract:
        """web3 contract bound to the confirmed address."""
        if not self.is_confirmed or self.address is None:
            raise ContractNotDeployedError(
                f"{self.contract_name} deployment {self.transaction_hash} is not confirmed yet"
            )
        return self.w3.eth.contract(address=self.address, abi=self.abi)

    @property
    def functions(self) -> ContractFunctions:
        """Callable surface derived from the ABI, e.g. ``handle.functions.poolLength().call()``."""
        return self.contract.functions

    def call(self, function_name: str, *args: Any, block: Any = "latest") -> Any:
        """
        Read-only call of one ABI function.

        Raises:
            ContractNotDeployedError: The handle is still pending
            ContractLogicError: The call reverted
            RpcError: The node answered with an error
            NetworkError: Transport failure
        """
        function = self.functions[function_name]
        with node_errors(f"{function_name}()", endpoint_of(self.w3)):
            return function(*args).call(block_identifier=block)
