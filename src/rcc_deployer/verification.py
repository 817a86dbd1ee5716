"""Post-deployment sanity checks against a deployed contract's read-only surface."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .exceptions import ContractNotDeployedError, NetworkError
from .types import DeployedContractHandle

logger = logging.getLogger(__name__)

# RCCStake right after deployment: no pools registered yet
RCC_STAKE_INITIAL_STATE = {"poolLength": 0}


@dataclass(frozen=True)
class Expectation:
    """A zero-side-effect call and the value it should return."""

    function: str
    expected: Any
    args: Tuple[Any, ...] = ()

    @property
    def label(self) -> str:
        return f"{self.function}({', '.join(repr(a) for a in self.args)})"


@dataclass
class AssertionOutcome:
    expectation: Expectation
    actual: Any = None
    error: Optional[BaseException] = None

    @property
    def passed(self) -> bool:
        return self.error is None and self.actual == self.expectation.expected

    def describe(self) -> str:
        if self.error is not None:
            return (
                f"{self.expectation.label}: expected {self.expectation.expected!r}, "
                f"call failed: {self.error}"
            )
        return (
            f"{self.expectation.label}: expected {self.expectation.expected!r}, "
            f"got {self.actual!r}"
        )


@dataclass
class VerificationReport:
    address: Optional[str]
    outcomes: List[AssertionOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(o.passed for o in self.outcomes)

    @property
    def failures(self) -> List[AssertionOutcome]:
        return [o for o in self.outcomes if not o.passed]

    def raise_for_failures(self) -> None:
        """Raise one AssertionError listing every failed expectation."""
        failures = self.failures
        if failures:
            lines = "\n".join(f"  - {o.describe()}" for o in failures)
            raise AssertionError(
                f"{len(failures)} of {len(self.outcomes)} initial-state check(s) failed "
                f"for contract at {self.address}:\n{lines}"
            )


ExpectationsLike = Union[Mapping[str, Any], Iterable[Expectation]]


def _as_expectations(expectations: ExpectationsLike) -> List[Expectation]:
    if isinstance(expectations, Mapping):
        return [Expectation(name, value) for name, value in expectations.items()]
    return list(expectations)


def check_initial_state(
    handle: DeployedContractHandle, expectations: ExpectationsLike = RCC_STAKE_INITIAL_STATE
) -> VerificationReport:
    """
    Run every expectation against the deployed contract.

    Checks are independent: a mismatch, or a call that reverts or cannot be
    decoded, is recorded and the remaining checks still run. A node that can't
    be reached fails the whole check instead of being reported as a mismatch.

    Args:
        handle: CONFIRMED handle
        expectations: {function_name: expected} or Expectation objects

    Returns:
        VerificationReport with one outcome per expectation

    Raises:
        ContractNotDeployedError: The handle is still pending
        NetworkError: Transport failure, or the node answered a call with an error
    """
    if not handle.is_confirmed:
        raise ContractNotDeployedError(
            f"{handle.contract_name} deployment {handle.transaction_hash} is not confirmed yet"
        )
    report = VerificationReport(address=handle.address)

    for expectation in _as_expectations(expectations):
        try:
            actual = handle.call(expectation.function, *expectation.args)
        except NetworkError:
            raise
        except Exception as e:
            logger.warning("Check %s raised: %s", expectation.label, e)
            report.outcomes.append(AssertionOutcome(expectation, error=e))
            continue

        outcome = AssertionOutcome(expectation, actual=actual)
        if not outcome.passed:
            logger.warning("Check failed: %s", outcome.describe())
        report.outcomes.append(outcome)

    return report


def assert_initial_state(
    handle: DeployedContractHandle, expectations: ExpectationsLike = RCC_STAKE_INITIAL_STATE
) -> VerificationReport:
    """check_initial_state(), then raise AssertionError if anything failed."""
    report = check_initial_state(handle, expectations)
    report.raise_for_failures()
    return report
