"""Grid order manager adapter."""

from __future__ import annotations

import structlog

from beamdex.codec import schemas
from beamdex.managers.base import created_id
from beamdex.managers.escrow import OrderManager
from beamdex.orders.grid import GridLevel, GridOrder, GridStats
from beamdex.orders.validation import GridOrderRequest

logger = structlog.get_logger()

CREATED_EVENT = "GridOrder:Created:"


class GridOrderManager(OrderManager):
    contract_name = "grid order manager"
    address_setting = "grid_order_manager"

    async def create_grid_order(self, request: GridOrderRequest) -> int:
        """Create a grid and return its id.

        The contract escrows amount_per_level for every level up front.
        """
        owner = self.wallet.require_address()
        args = schemas.CREATE_GRID_ORDER.encode(
            token_in=request.token_in,
            token_out=request.token_out,
            grid_levels=request.grid_levels,
            lower_price=request.lower_price_x96,
            upper_price=request.upper_price_x96,
            amount_per_level=request.amount_per_level,
        )
        extra_coins = await self._prepare_deposit(request.token_in, request.total_amount)
        handle = await self._execute("createGridOrder", args, extra_coins=extra_coins)
        grid_id = created_id(handle, CREATED_EVENT)
        logger.info(
            "grid_order_created",
            grid_id=grid_id,
            owner=owner,
            grid_levels=request.grid_levels,
            lower_price=str(request.lower_price),
            upper_price=str(request.upper_price),
            operation_id=handle.id,
        )
        return grid_id

    async def cancel_grid_order(self, grid_id: int) -> str:
        self.wallet.require_account()
        handle = await self._execute(
            "cancelGridOrder", schemas.CANCEL_GRID_ORDER.encode(grid_id=grid_id)
        )
        logger.info("grid_order_cancelled", grid_id=grid_id, operation_id=handle.id)
        return handle.id

    async def get_grid_order(self, grid_id: int) -> GridOrder:
        result = await self._read("getGridOrder", schemas.GET_GRID_ORDER.encode(grid_id=grid_id))
        return GridOrder(**schemas.GRID_ORDER.decode(result))

    async def get_grid_level(self, grid_id: int, level_index: int) -> GridLevel:
        args = schemas.GET_GRID_LEVEL.encode(grid_id=grid_id, level_index=level_index)
        return GridLevel(**schemas.GRID_LEVEL.decode(await self._read("getGridLevel", args)))

    async def get_all_grid_levels(self, grid_id: int, grid_levels: int | None = None) -> list[GridLevel]:
        """Every level of a grid, read one at a time in index order."""
        if grid_levels is None:
            grid_levels = (await self.get_grid_order(grid_id)).grid_levels
        return [await self.get_grid_level(grid_id, index) for index in range(grid_levels)]

    async def get_grid_with_levels(self, grid_id: int) -> GridOrder:
        grid = await self.get_grid_order(grid_id)
        levels = await self.get_all_grid_levels(grid_id, grid.grid_levels)
        return grid.with_levels(levels)

    async def get_user_grids(self, user: str | None = None, limit: int = 100) -> list[GridOrder]:
        args = schemas.GET_USER_GRIDS.encode(user=self._owner(user), limit=limit)
        records = await self._read_records("getUserGrids", args, schemas.GRID_ORDER)
        return [GridOrder(**record) for record in records]

    async def get_active_grids_count(self) -> int:
        return await self._read_value("getActiveGridsCount", "u64")

    async def get_bot_execution_count(self) -> int:
        return await self._read_value("getBotExecutionCount", "u64")

    async def get_grid_stats(self) -> GridStats:
        return GridStats(
            total_grids=await self._read_value("getGridCount", "u256"),
            active_grids=await self.get_active_grids_count(),
            cancelled_grids=await self._read_value("getCancelledGridsCount", "u64"),
            bot_executions=await self.get_bot_execution_count(),
        )


__all__ = ["GridOrderManager"]
