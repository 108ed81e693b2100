"""Per-contract adapters that sequence gateway calls."""

from beamdex.managers.base import ContractManager, created_id
from beamdex.managers.escrow import OrderManager
from beamdex.managers.factory import FactoryManager
from beamdex.managers.grid_orders import GridOrderManager
from beamdex.managers.limit_orders import LimitOrderManager
from beamdex.managers.pool import PoolManager, default_price_limit
from beamdex.managers.recurring_orders import RecurringOrderManager
from beamdex.managers.token import TokenManager

__all__ = [
    "ContractManager",
    "FactoryManager",
    "GridOrderManager",
    "LimitOrderManager",
    "OrderManager",
    "PoolManager",
    "RecurringOrderManager",
    "TokenManager",
    "created_id",
    "default_price_limit",
]
