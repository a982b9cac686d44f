"""
Collaborator protocols for the period overview engine.
Defines the contracts that journal sources, statistic stores, calendars,
balance oracles and currency directories must satisfy.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Protocol, runtime_checkable

from period_overview.models import PeriodStatistic
from period_overview.schemas import (
    AccountRef,
    CurrencyInfo,
    ModelEntity,
    Period,
    TransactionRecord,
    TransactionType,
)


@dataclass(frozen=True)
class JournalQuery:
    """Type-scoped global journal query used by the no-model and transaction-type paths."""

    start: date
    end: date
    types: tuple[TransactionType, ...] = field(default_factory=tuple)
    without_budget: bool = False
    without_category: bool = False


@runtime_checkable
class JournalSource(Protocol):
    """Supplies already-extracted transaction records."""

    def period_transactions(self, entity: ModelEntity, start: date, end: date) -> Sequence[TransactionRecord]:
        """All transactions touching `entity` between `start` and `end` (inclusive)."""
        ...

    def extracted_journals(self, query: JournalQuery) -> Sequence[TransactionRecord]:
        """Journals matching a global, type-scoped query."""
        ...


@runtime_checkable
class StatisticStore(Protocol):
    """Persistence of precomputed per-period statistics."""

    def all_in_range(self, scope: str, start: date, end: date) -> Sequence[PeriodStatistic]:
        """Rows of `scope` whose period lies inside [start, end]."""
        ...

    def save(
        self,
        scope: str,
        currency_id: int,
        start: date,
        end: date,
        statistic_type: str,
        count: int,
        amount: Decimal,
    ) -> None:
        """Insert or overwrite the row for (scope, currency, start, end, statistic_type)."""
        ...


@runtime_checkable
class CalendarPartitioner(Protocol):
    """Breaks a date range into labelled buckets."""

    def block_periods(self, start: date, end: date, granularity: str) -> list[Period]:
        """Chronological, non-overlapping periods covering at least [start, end]."""
        ...


@runtime_checkable
class BalanceOracle(Protocol):
    """Authoritative running balances for accounts."""

    def final_balance_in_range(
        self, account: AccountRef, start: date, end: date
    ) -> dict[date, dict[str, Decimal]]:
        """Per date, the closing balance keyed by currency code or a special key."""
        ...


@runtime_checkable
class CurrencyDirectory(Protocol):
    """Currency metadata lookup."""

    def by_id(self, currency_id: int) -> CurrencyInfo:
        """Raises CurrencyNotFoundError when unknown."""
        ...

    def by_code(self, code: str) -> CurrencyInfo:
        """Raises CurrencyNotFoundError when unknown."""
        ...
