"""Period overview output schemas."""

from datetime import date
from decimal import Decimal

from pydantic import Field

from period_overview.schemas.base import FrozenModel
from period_overview.schemas.bucket import CurrencyBucket
from period_overview.schemas.currency import CurrencyInfo


class PeriodMetrics(FrozenModel):
    """Spend velocity and inflow ratios for one currency in one period."""

    currency: CurrencyInfo
    burn_rate: Decimal
    net_burn: Decimal
    savings_rate: Decimal
    expense_ratio: Decimal
    days_in_period: int
    total_inflows: Decimal
    total_outflows: Decimal


class MetricsBucket(FrozenModel):
    """Per-currency metrics plus the number of currencies reported."""

    entries: dict[int, PeriodMetrics] = Field(default_factory=dict)
    count: int = 0


class PeriodEntry(FrozenModel):
    """
    Money movement of one entity in one period.

    Accounts, categories and tags fill `transferred_in`/`transferred_away`;
    no-model entries fill `transferred` instead.
    """

    title: str
    route: str
    start: date
    end: date
    total_transactions: int
    spent: CurrencyBucket
    earned: CurrencyBucket
    transferred_in: CurrencyBucket | None = None
    transferred_away: CurrencyBucket | None = None
    transferred: CurrencyBucket | None = None
    period_balance: CurrencyBucket = Field(default_factory=CurrencyBucket)
    opening_balance: CurrencyBucket = Field(default_factory=CurrencyBucket)
    net_change: CurrencyBucket = Field(default_factory=CurrencyBucket)
    period_metrics: MetricsBucket = Field(default_factory=MetricsBucket)


class PeriodOverview(FrozenModel):
    """Chronological period entries plus, for accounts, the range balance series."""

    periods: list[PeriodEntry]
    balance: dict[date, dict[str, Decimal]] | None = None
