"""Pool factory adapter."""

from __future__ import annotations

import structlog

from beamdex.codec import schemas
from beamdex.codec.schemas import decode_raw_string, decode_value
from beamdex.errors import ValidationError
from beamdex.managers.base import ContractManager
from beamdex.models.types import is_valid_address, normalize_address
from beamdex.pools.pool import sort_tokens, tick_spacing_for_fee

logger = structlog.get_logger()


def _check_pair(token_a: str, token_b: str) -> None:
    for token in (token_a, token_b):
        if not is_valid_address(normalize_address(token)):
            raise ValidationError(f"Invalid token address: {token}")
    if normalize_address(token_a) == normalize_address(token_b):
        raise ValidationError("Tokens must be different")


class FactoryManager(ContractManager):
    contract_name = "pool factory"
    address_setting = "factory_address"

    async def pool_exists(self, token_a: str, token_b: str, fee: int) -> bool:
        args = schemas.IS_POOL_EXIST.encode(token_a=token_a, token_b=token_b, fee=fee)
        return decode_value("bool", await self._read("isPoolExist", args))

    async def get_pool_address(self, token_a: str, token_b: str, fee: int) -> str | None:
        """Pool address for a pair and fee tier, None if there is no pool."""
        args = schemas.GET_POOL.encode(token_a=token_a, token_b=token_b, fee=fee)
        address = decode_value("string", await self._read("getPool", args))
        return address or None

    async def get_pools(self) -> list[str]:
        """All pool addresses (comma-separated UTF-8 on-chain)."""
        raw = decode_raw_string(await self._read("getPools"))
        return [address for address in raw.split(",") if address]

    async def create_pool(self, token_a: str, token_b: str, fee: int) -> str:
        """Create a pool for an enumerated fee tier. Returns the operation id.

        Raises:
            ValidationError: If the tokens are invalid or identical, or the fee is not a tier
        """
        _check_pair(token_a, token_b)
        tick_spacing = tick_spacing_for_fee(fee)
        token0, token1 = sort_tokens(token_a, token_b)
        handle = await self._execute(
            "createPool", schemas.CREATE_POOL.encode(token_a=token0, token_b=token1, fee=fee)
        )
        logger.info(
            "pool_created",
            token0=token0,
            token1=token1,
            fee=fee,
            tick_spacing=tick_spacing,
            operation_id=handle.id,
        )
        return handle.id


__all__ = ["FactoryManager"]
