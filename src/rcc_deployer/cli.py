"""Operator script: deploy a contract to a network profile and print its address."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .artifacts import load_artifact
from .config import load_network_profiles
from .constants import DEFAULT_CONTRACT_NAME, DEFAULT_POLL_INTERVAL
from .deployer import deploy
from .exceptions import ConfirmationTimeoutError, DeploymentError
from .network import resolve
from .verification import RCC_STAKE_INITIAL_STATE, check_initial_state

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rcc-deploy",
        description="Deploy a compiled contract to a configured network and print its address.",
    )
    parser.add_argument("--network", default="local", help="network profile name (default: local)")
    parser.add_argument(
        "--account-index", type=int, default=0, help="which configured credential signs (default: 0)"
    )
    parser.add_argument(
        "--contract", default=DEFAULT_CONTRACT_NAME, help=f"contract name (default: {DEFAULT_CONTRACT_NAME})"
    )
    parser.add_argument("--artifacts", default=None, help="compiled artifacts directory")
    parser.add_argument("--config", default=None, help="JSON file with extra network profiles")
    parser.add_argument(
        "--timeout", type=float, default=None, help="seconds to wait for confirmation (default: no limit)"
    )
    parser.add_argument(
        "--poll-interval", type=float, default=DEFAULT_POLL_INTERVAL, help="seconds between receipt polls"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="run the initial-state checks (poolLength() == 0) after deploying",
    )
    parser.add_argument("--log-level", default="INFO", help="logging level (default: INFO)")
    return parser


def run(args: argparse.Namespace) -> int:
    profiles = load_network_profiles(args.config)
    identity = resolve(args.network, account_index=args.account_index, profiles=profiles)
    artifact = load_artifact(args.contract, args.artifacts)

    logger.info("Deploying contracts with the account: %s", identity.address)

    handle = asyncio.run(
        deploy(artifact, identity, timeout=args.timeout, poll_interval=args.poll_interval)
    )
    print(f"{handle.contract_name} address: {handle.address}")

    if args.verify:
        report = check_initial_state(handle, RCC_STAKE_INITIAL_STATE)
        for outcome in report.failures:
            logger.error("Verification failed: %s", outcome.describe())
        if not report.passed:
            return 1
        logger.info("Verification passed (%d check(s))", len(report.outcomes))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.getLevelName(args.log_level.upper())
    if not isinstance(level, int):
        logging.basicConfig(stream=sys.stderr)
        logger.error("Unknown log level: %s", args.log_level)
        return 1
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        return run(args)
    except ConfirmationTimeoutError as e:
        logger.error("%s (check %s on-chain before redeploying)", e, e.transaction_hash)
        return 1
    except DeploymentError as e:
        logger.error("Deployment failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
