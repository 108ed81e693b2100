"""Recurring (DCA) order model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from beamdex.constants import SECONDS_PER_PERIOD
from beamdex.orders.types import RecurringOrderStatus


@dataclass(frozen=True)
class RecurringOrder:
    """A recurring order as stored by the recurring order manager.

    The bot executes ``amount_per_execution`` every ``interval_periods``
    chain periods until ``total_executions`` swaps have run.
    """

    order_id: int
    owner: str
    token_in: str
    token_out: str
    amount_per_execution: int
    interval_periods: int
    total_executions: int
    executed_count: int
    last_execution_period: int
    active: bool
    cancelled: bool

    @property
    def is_complete(self) -> bool:
        return self.executed_count >= self.total_executions

    def status(self) -> RecurringOrderStatus:
        """Derive the order status.

        An order that is inactive but not complete was deactivated by its
        owner, so it reports CANCELLED.
        """
        if self.cancelled:
            return RecurringOrderStatus.CANCELLED
        if self.is_complete:
            return RecurringOrderStatus.COMPLETE
        if self.active:
            return RecurringOrderStatus.ACTIVE
        return RecurringOrderStatus.CANCELLED

    @property
    def remaining_executions(self) -> int:
        return max(self.total_executions - self.executed_count, 0)

    @property
    def progress_pct(self) -> float:
        if self.total_executions <= 0:
            return 0.0
        return min(self.executed_count, self.total_executions) / self.total_executions * 100

    @property
    def total_amount(self) -> int:
        """Total input committed over every execution."""
        return self.amount_per_execution * self.total_executions

    @property
    def remaining_amount(self) -> int:
        return self.amount_per_execution * self.remaining_executions

    @property
    def next_execution_period(self) -> int | None:
        """Period of the next scheduled execution, None once the order is done."""
        if self.status() is not RecurringOrderStatus.ACTIVE:
            return None
        return self.last_execution_period + self.interval_periods

    def estimated_completion(
        self,
        now: datetime | None = None,
        seconds_per_period: int = SECONDS_PER_PERIOD,
    ) -> datetime | None:
        """Rough wall-clock time of the final execution.

        Assumes every remaining execution runs on schedule.
        """
        if self.next_execution_period is None:
            return None
        current = now or datetime.now(timezone.utc)
        periods = self.interval_periods * self.remaining_executions
        return current + timedelta(seconds=periods * seconds_per_period)

    def next_execution_at(
        self,
        current_period: int,
        now: datetime | None = None,
        seconds_per_period: int = SECONDS_PER_PERIOD,
    ) -> datetime | None:
        """Wall-clock time of the next execution given the current chain period."""
        next_period = self.next_execution_period
        if next_period is None:
            return None
        remaining = max(0, next_period - current_period)
        current = now or datetime.now(timezone.utc)
        return current + timedelta(seconds=remaining * seconds_per_period)


@dataclass(frozen=True)
class OrderProgress:
    """Progress summary returned by getOrderProgress, plus derived schedule fields."""

    executed_count: int
    total_executions: int
    is_active: bool
    is_complete: bool
    next_execution_period: int | None = None
    estimated_completion: datetime | None = None

    @property
    def progress_pct(self) -> float:
        if self.total_executions <= 0:
            return 0.0
        return self.executed_count / self.total_executions * 100


__all__ = ["RecurringOrder", "OrderProgress"]
