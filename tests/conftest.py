"""Pytest configuration and fixtures."""

import pytest

from beamdex.client import BeamDexClient
from beamdex.config import ClientConfig
from beamdex.gateway.mock import MockContractGateway
from beamdex.wallet import WalletContext
from tests.helpers import TEST_CONFIG, FakeAccount


@pytest.fixture
def config() -> ClientConfig:
    """Config with every manager address set."""
    return TEST_CONFIG


@pytest.fixture
def account() -> FakeAccount:
    """Signing account for the default test user."""
    return FakeAccount()


@pytest.fixture
def wallet(account: FakeAccount) -> WalletContext:
    """Wallet context with the test account connected."""
    return WalletContext(account)


@pytest.fixture
def gateway(wallet: WalletContext) -> MockContractGateway:
    """In-memory gateway bound to the connected wallet."""
    return MockContractGateway(wallet)


@pytest.fixture
def beamdex_client(
    gateway: MockContractGateway, wallet: WalletContext, config: ClientConfig
) -> BeamDexClient:
    """Client wired to the mock gateway."""
    return BeamDexClient(gateway, wallet, config)
