"""Collaborators and request-scoped working state of one overview call."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from period_overview.config import settings
from period_overview.interfaces import (
    BalanceOracle,
    CalendarPartitioner,
    CurrencyDirectory,
    JournalSource,
    StatisticStore,
)
from period_overview.models import PeriodStatistic
from period_overview.schemas import CurrencyInfo, ModelEntity, TransactionRecord


@dataclass
class OverviewDependencies:
    """External collaborators the engine talks to."""

    journals: JournalSource
    statistics: StatisticStore
    partitioner: CalendarPartitioner
    currencies: CurrencyDirectory
    balances: BalanceOracle | None = None


@dataclass
class OverviewContext:
    """
    Working set of a single orchestration call.

    Holds the bulk-fetched statistics snapshot and the transactions loaded for
    each period, so helpers never re-query within one call. Never reused across
    calls.
    """

    deps: OverviewDependencies
    primary: CurrencyInfo
    convert_to_primary: bool = False
    statistics: Sequence[PeriodStatistic] = field(default_factory=list)
    _transactions: dict[tuple[date, date], list[TransactionRecord]] = field(default_factory=dict, repr=False)

    @classmethod
    def create(
        cls,
        deps: OverviewDependencies,
        *,
        convert_to_primary: bool | None = None,
    ) -> OverviewContext:
        """Build a context using the configured primary currency and conversion preference."""
        return cls(
            deps=deps,
            primary=deps.currencies.by_code(settings.primary_currency),
            convert_to_primary=settings.convert_to_primary if convert_to_primary is None else convert_to_primary,
        )

    def transactions_for(self, entity: ModelEntity, start: date, end: date) -> list[TransactionRecord]:
        """Load the entity's transactions for a period once per call."""
        key = (start, end)
        if key not in self._transactions:
            self._transactions[key] = list(self.deps.journals.period_transactions(entity, start, end))
        return self._transactions[key]
