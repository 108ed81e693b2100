"""Tests for the wallet context and client configuration."""

from decimal import Decimal

import pytest

from beamdex.config import DEFAULT_CALL_BUDGETS, ClientConfig
from beamdex.errors import WalletNotConnectedError
from beamdex.wallet import WalletContext
from tests.helpers import OTHER_USER, USER, FakeAccount


class TestWalletContext:
    def test_disconnected(self):
        wallet = WalletContext()
        assert not wallet.is_connected
        assert wallet.address is None
        with pytest.raises(WalletNotConnectedError):
            wallet.require_account()
        with pytest.raises(WalletNotConnectedError):
            wallet.require_address()

    def test_connect_and_switch(self):
        wallet = WalletContext()
        wallet.connect(FakeAccount())
        assert wallet.require_address() == USER

        wallet.connect(FakeAccount(OTHER_USER))
        assert wallet.address == OTHER_USER

    def test_disconnect(self):
        wallet = WalletContext(FakeAccount())
        wallet.disconnect()
        assert not wallet.is_connected
        wallet.disconnect()
        assert wallet.account is None


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()
        assert config.network == "buildnet"
        assert config.poll_interval == 30.0
        assert config.call_budgets == DEFAULT_CALL_BUDGETS

    def test_from_env(self):
        config = ClientConfig.from_env(
            {
                "BEAMDEX_NETWORK": "mainnet",
                "BEAMDEX_RPC_URL": "http://localhost:33035",
                "BEAMDEX_LIMIT_ORDER_MANAGER": "AS1limit",
                "BEAMDEX_POLL_INTERVAL": "5",
                "BEAMDEX_LARGE_TRADE_FRACTION": "0.25",
                "BEAMDEX_OPERATION_TIMEOUT": "30",
            }
        )
        assert config.network == "mainnet"
        assert config.rpc_url == "http://localhost:33035"
        assert config.limit_order_manager == "AS1limit"
        assert config.factory_address == ""
        assert config.poll_interval == 5.0
        assert config.large_trade_fraction == 0.25
        assert config.operation_timeout == 30.0

    def test_from_empty_env(self):
        assert ClientConfig.from_env({}) == ClientConfig()

    def test_budget_for(self):
        config = ClientConfig()
        assert config.budget_for("createLimitOrder") == DEFAULT_CALL_BUDGETS["createLimitOrder"]
        assert config.budget_for("unknownFunction") == DEFAULT_CALL_BUDGETS["swap"]

    def test_quote_config(self):
        quote_config = ClientConfig(large_trade_fraction=0.2).quote_config()
        assert quote_config.large_trade_fraction == Decimal("0.2")
