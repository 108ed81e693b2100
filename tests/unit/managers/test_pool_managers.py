"""Tests for the token, factory and pool adapters."""

import asyncio
from decimal import Decimal

import pytest

from beamdex.codec import schemas
from beamdex.codec.schemas import encode_value
from beamdex.constants import (
    FULL_RANGE_TICK_LOWER,
    FULL_RANGE_TICK_UPPER,
    MAX_SQRT_RATIO,
    MIN_SQRT_RATIO,
    Q96,
    UINT128_MAX,
    UINT256_MAX,
)
from beamdex.errors import ChainRejectionError, ValidationError, WalletNotConnectedError
from beamdex.managers import TokenManager, default_price_limit
from beamdex.quoting.result import QuoteUnavailable
from beamdex.wallet import WalletContext
from tests.helpers import (
    FACTORY,
    LIMIT_MANAGER,
    MAS,
    OTHER_USER,
    POOL,
    USDC,
    USER,
    WMAS,
    FakeAccount,
    make_pool,
)


def metadata_bytes(token0=USDC, token1=WMAS, fee=3000, tick_spacing=60) -> bytes:
    return schemas.POOL_METADATA.encode(
        token0=token0,
        token1=token1,
        fee=fee,
        tick_spacing=tick_spacing,
        factory=FACTORY,
        max_liquidity_per_tick="11505743598341114571880798222544994",
    )


def state_bytes(sqrt_price_x96=Q96, tick=0, liquidity=1_000_000) -> bytes:
    return schemas.POOL_STATE.encode(
        sqrt_price_x96=sqrt_price_x96,
        tick=tick,
        liquidity=liquidity,
        fee_growth_global0=0,
        fee_growth_global1=0,
    )


class TestTokenManager:
    """Token reads, native coin handling and approvals."""

    def test_symbol_and_decimals(self, gateway, beamdex_client):
        gateway.set_read("symbol", b"USDC", address=USDC)
        gateway.set_read("decimals", encode_value("u8", 6), address=USDC)

        assert asyncio.run(beamdex_client.tokens.symbol(USDC)) == "USDC"
        assert asyncio.run(beamdex_client.tokens.decimals(USDC)) == 6

    def test_native_metadata_is_local(self, gateway, beamdex_client):
        assert asyncio.run(beamdex_client.tokens.symbol(MAS)) == "MAS"
        assert asyncio.run(beamdex_client.tokens.decimals(MAS)) == 9
        assert gateway.calls == []

    def test_balance_of(self, gateway, beamdex_client):
        gateway.set_read("balanceOf", encode_value("u256", 1234))

        assert asyncio.run(beamdex_client.tokens.balance_of(USDC)) == 1234
        assert schemas.BALANCE_OF.decode(gateway.calls[0].args) == {"account": USER}

    def test_native_balance_from_wallet(self, gateway):
        wallet = WalletContext(FakeAccount(balance=5 * 10**9))
        tokens = TokenManager(gateway, wallet)

        assert asyncio.run(tokens.balance_of(MAS)) == 5 * 10**9

    def test_native_balance_of_other_account_rejected(self, beamdex_client):
        with pytest.raises(ValidationError):
            asyncio.run(beamdex_client.tokens.balance_of(MAS, OTHER_USER))

    def test_balance_requires_wallet_without_account(self, gateway):
        tokens = TokenManager(gateway, WalletContext())

        with pytest.raises(WalletNotConnectedError):
            asyncio.run(tokens.balance_of(USDC))

    def test_native_allowance_is_unlimited(self, beamdex_client):
        assert asyncio.run(beamdex_client.tokens.allowance(MAS, LIMIT_MANAGER)) == UINT256_MAX

    def test_ensure_allowance(self, gateway, beamdex_client):
        gateway.set_read("allowance", encode_value("u256", 40))

        approved = asyncio.run(beamdex_client.tokens.ensure_allowance(USDC, LIMIT_MANAGER, 100))

        assert approved is True
        approval = gateway.calls_to("increaseAllowance")[0]
        assert approval.address == USDC
        assert schemas.INCREASE_ALLOWANCE.decode(approval.args)["amount"] == 60

    def test_ensure_allowance_sufficient(self, gateway, beamdex_client):
        gateway.set_read("allowance", encode_value("u256", 100))

        assert asyncio.run(beamdex_client.tokens.ensure_allowance(USDC, LIMIT_MANAGER, 100)) is False
        assert gateway.calls_to("increaseAllowance") == []

    def test_increase_allowance_rejects_zero(self, beamdex_client):
        with pytest.raises(ValidationError):
            asyncio.run(beamdex_client.tokens.increase_allowance(USDC, LIMIT_MANAGER, 0))

    def test_increase_allowance_native_is_noop(self, gateway, beamdex_client):
        assert asyncio.run(beamdex_client.tokens.increase_allowance(MAS, LIMIT_MANAGER, 10)) is None
        assert gateway.calls == []


class TestFactoryManager:
    def test_create_pool_sorts_tokens(self, gateway, beamdex_client):
        asyncio.run(beamdex_client.factory.create_pool(WMAS, USDC, 3000))

        call = gateway.calls_to("createPool")[0]
        assert call.address == FACTORY
        assert schemas.CREATE_POOL.decode(call.args) == {
            "token_a": USDC,
            "token_b": WMAS,
            "fee": 3000,
        }

    def test_create_pool_unknown_fee(self, gateway, beamdex_client):
        with pytest.raises(ValidationError):
            asyncio.run(beamdex_client.factory.create_pool(USDC, WMAS, 100))
        assert gateway.calls == []

    def test_create_pool_same_token(self, gateway, beamdex_client):
        with pytest.raises(ValidationError):
            asyncio.run(beamdex_client.factory.create_pool(USDC, USDC, 3000))

    def test_create_pool_rejected(self, gateway, beamdex_client):
        gateway.fail_call("createPool", "POOL_ALREADY_EXISTS")

        with pytest.raises(ChainRejectionError) as exc_info:
            asyncio.run(beamdex_client.factory.create_pool(USDC, WMAS, 3000))
        assert exc_info.value.reason == "POOL_ALREADY_EXISTS"

    def test_get_pool_address(self, gateway, beamdex_client):
        gateway.set_read("getPool", encode_value("string", POOL))

        assert asyncio.run(beamdex_client.factory.get_pool_address(USDC, WMAS, 3000)) == POOL

    def test_missing_pool(self, gateway, beamdex_client):
        gateway.set_read("getPool", encode_value("string", ""))

        assert asyncio.run(beamdex_client.factory.get_pool_address(USDC, WMAS, 500)) is None

    def test_pool_exists(self, gateway, beamdex_client):
        gateway.set_read("isPoolExist", encode_value("bool", True))

        assert asyncio.run(beamdex_client.factory.pool_exists(USDC, WMAS, 3000)) is True

    def test_get_pools(self, gateway, beamdex_client):
        gateway.set_read("getPools", f"{POOL},{FACTORY},".encode())

        assert asyncio.run(beamdex_client.factory.get_pools()) == [POOL, FACTORY]


class TestPoolReads:
    def test_get_pool(self, gateway, beamdex_client):
        gateway.set_read("getPoolMetadata", metadata_bytes(), address=POOL)
        gateway.set_read("getState", state_bytes(sqrt_price_x96=2 * Q96, tick=13863), address=POOL)

        pool = asyncio.run(beamdex_client.pools.get_pool(POOL))

        assert pool.address == POOL
        assert (pool.token0, pool.token1, pool.fee, pool.tick_spacing) == (USDC, WMAS, 3000, 60)
        assert pool.current_price == Decimal(4)
        assert pool.tick == 13863

    def test_get_position(self, gateway, beamdex_client):
        gateway.set_read(
            "getPosition",
            schemas.POSITION.encode(liquidity=0, tokens_owed0=5, tokens_owed1=0),
        )

        position = asyncio.run(beamdex_client.pools.get_position(POOL, -120, 120))

        assert position.owner == USER
        assert position.is_empty
        assert position.has_uncollected
        assert schemas.GET_POSITION.decode(gateway.calls[0].args) == {
            "owner": USER,
            "tick_lower": -120,
            "tick_upper": 120,
        }

    def test_quote_swap(self, gateway, beamdex_client):
        gateway.set_read("getPoolMetadata", metadata_bytes())
        gateway.set_read("getState", state_bytes())

        result = asyncio.run(beamdex_client.pools.quote_swap(POOL, USDC, 1000))

        assert result.is_available
        assert result.quote.zero_for_one is True
        assert result.quote.amount_out == Decimal("997")

    def test_quote_uninitialized_pool(self, gateway, beamdex_client):
        gateway.set_read("getPoolMetadata", metadata_bytes())
        gateway.set_read("getState", state_bytes(sqrt_price_x96=0))

        result = asyncio.run(beamdex_client.pools.quote_swap(POOL, USDC, 1000))

        assert result.reason is QuoteUnavailable.POOL_NOT_INITIALIZED


class TestPoolCalls:
    """mint / burn / collect / swap argument building."""

    def test_mint(self, gateway, beamdex_client):
        asyncio.run(beamdex_client.pools.mint(make_pool(), -120, 120, 5000))

        call = gateway.calls_to("mint")[0]
        assert call.address == POOL
        assert schemas.MINT.decode(call.args) == {
            "recipient": USER,
            "tick_lower": -120,
            "tick_upper": 120,
            "amount": 5000,
        }

    def test_mint_misaligned(self, gateway, beamdex_client):
        with pytest.raises(ValidationError):
            asyncio.run(beamdex_client.pools.mint(make_pool(), -100, 120, 5000))
        assert gateway.calls == []

    def test_mint_full_range_on_coarse_spacing(self, gateway, beamdex_client):
        """887220 is not a multiple of 200, but the full range is accepted as is."""
        pool = make_pool(fee=10000, tick_spacing=200)

        asyncio.run(
            beamdex_client.pools.mint(pool, FULL_RANGE_TICK_LOWER, FULL_RANGE_TICK_UPPER, 1)
        )

        decoded = schemas.MINT.decode(gateway.calls_to("mint")[0].args)
        assert (decoded["tick_lower"], decoded["tick_upper"]) == (-887220, 887220)

    def test_mint_zero_liquidity(self, beamdex_client):
        with pytest.raises(ValidationError):
            asyncio.run(beamdex_client.pools.mint(make_pool(), -120, 120, 0))

    def test_burn(self, gateway, beamdex_client):
        asyncio.run(beamdex_client.pools.burn(make_pool(), -120, 120, 5000))

        decoded = schemas.BURN.decode(gateway.calls_to("burn")[0].args)
        assert decoded == {"tick_lower": -120, "tick_upper": 120, "amount": 5000}

    def test_collect_defaults_to_everything(self, gateway, beamdex_client):
        asyncio.run(beamdex_client.pools.collect(make_pool(), -120, 120))

        decoded = schemas.COLLECT.decode(gateway.calls_to("collect")[0].args)
        assert decoded["amount0_requested"] == UINT128_MAX
        assert decoded["amount1_requested"] == UINT128_MAX
        assert decoded["recipient"] == USER

    def test_swap_token0(self, gateway, beamdex_client):
        gateway.set_read("allowance", encode_value("u256", 0))

        asyncio.run(beamdex_client.pools.swap(make_pool(), USDC, 1000))

        assert [c.function for c in gateway.calls] == ["allowance", "increaseAllowance", "swap"]
        approval = gateway.calls_to("increaseAllowance")[0]
        assert schemas.INCREASE_ALLOWANCE.decode(approval.args) == {"spender": POOL, "amount": 1000}
        decoded = schemas.SWAP.decode(gateway.calls_to("swap")[0].args)
        assert decoded == {
            "recipient": USER,
            "zero_for_one": True,
            "amount_specified": 1000,
            "sqrt_price_limit_x96": MIN_SQRT_RATIO + 1,
        }

    def test_swap_token1_price_limit(self, gateway, beamdex_client):
        gateway.set_read("allowance", encode_value("u256", 10**6))

        asyncio.run(beamdex_client.pools.swap(make_pool(), WMAS, 1000))

        decoded = schemas.SWAP.decode(gateway.calls_to("swap")[0].args)
        assert decoded["zero_for_one"] is False
        assert decoded["sqrt_price_limit_x96"] == MAX_SQRT_RATIO - 1

    def test_swap_foreign_token(self, beamdex_client):
        with pytest.raises(ValidationError):
            asyncio.run(beamdex_client.pools.swap(make_pool(), MAS, 1000))

    def test_swap_zero_amount(self, beamdex_client):
        with pytest.raises(ValidationError):
            asyncio.run(beamdex_client.pools.swap(make_pool(), USDC, 0))

    def test_default_price_limit(self):
        assert default_price_limit(True) == MIN_SQRT_RATIO + 1
        assert default_price_limit(False) == MAX_SQRT_RATIO - 1
