"""Shared pytest fixtures for rcc-stake-deployer tests."""

from pathlib import Path
from typing import Dict

import pytest
import responses

from fakenode import RPC_URL, FakeChain
from rcc_deployer.artifacts import load_artifact
from rcc_deployer.network import resolve
from rcc_deployer.types import NetworkProfile

pytest_plugins = ["pytester"]

# Hardhat's well-known development accounts #0 and #1
DEV_KEY_0 = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_KEY_1 = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Hardhat-style artifacts directory with RCCStake and Vault."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def stake_artifact(artifacts_dir: Path):
    return load_artifact("RCCStake", artifacts_dir)


@pytest.fixture
def vault_artifact(artifacts_dir: Path):
    return load_artifact("Vault", artifacts_dir)


@pytest.fixture
def profiles() -> Dict[str, NetworkProfile]:
    """Profile table with two dev credentials on "local" and none on "empty"."""
    return {
        "local": NetworkProfile(name="local", url=RPC_URL, accounts=[DEV_KEY_0, DEV_KEY_1]),
        "empty": NetworkProfile(name="empty", url=RPC_URL, accounts=[]),
    }


@pytest.fixture
def fake_chain():
    """FakeChain answering every request to RPC_URL for the duration of the test."""
    chain = FakeChain()
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        chain.install(rsps)
        yield chain


@pytest.fixture
def signer(profiles, fake_chain):
    return fake_chain.attach(resolve("local", profiles=profiles))


@pytest.fixture
def other_signer(profiles, fake_chain):
    return fake_chain.attach(resolve("local", account_index=1, profiles=profiles))


@pytest.fixture
def attach_identities(monkeypatch, fake_chain):
    """Route identities built by rcc_deployer.cli through the fake chain."""
    import rcc_deployer.cli

    def resolve_attached(*args, **kwargs):
        return fake_chain.attach(resolve(*args, **kwargs))

    monkeypatch.setattr(rcc_deployer.cli, "resolve", resolve_attached)
    return fake_chain


@pytest.fixture
def no_network():
    """Fails the test if any HTTP request is attempted; yields the mock for call counting."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps
