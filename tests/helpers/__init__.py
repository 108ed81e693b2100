"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Placeholder token, contract and account addresses
- factories: Order, pool and wallet factory functions
"""

from tests.helpers.constants import (
    FACTORY,
    GRID_MANAGER,
    LIMIT_MANAGER,
    MAS,
    OTHER_USER,
    POOL,
    RECURRING_MANAGER,
    USDC,
    USER,
    WETH,
    WMAS,
)
from tests.helpers.factories import (
    TEST_CONFIG,
    FakeAccount,
    encode_grid_level,
    encode_grid_order,
    encode_grid_orders,
    encode_limit_order,
    encode_limit_orders,
    encode_recurring_order,
    encode_recurring_orders,
    make_grid_order,
    make_limit_order,
    make_pool,
    make_recurring_order,
)

__all__ = [
    # Constants
    "USDC",
    "WMAS",
    "WETH",
    "MAS",
    "FACTORY",
    "LIMIT_MANAGER",
    "RECURRING_MANAGER",
    "GRID_MANAGER",
    "POOL",
    "USER",
    "OTHER_USER",
    # Factories
    "TEST_CONFIG",
    "FakeAccount",
    "make_limit_order",
    "make_recurring_order",
    "make_grid_order",
    "make_pool",
    "encode_limit_order",
    "encode_recurring_order",
    "encode_grid_order",
    "encode_grid_level",
    "encode_limit_orders",
    "encode_recurring_orders",
    "encode_grid_orders",
]
