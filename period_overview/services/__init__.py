"""Services package."""

from period_overview.services.calendar import CalendarPartitioner, period_label
from period_overview.services.context import OverviewContext, OverviewDependencies
from period_overview.services.currency import InMemoryCurrencyDirectory, group_by_currency
from period_overview.services.filters import filter_by_date, filter_by_type
from period_overview.services.overview import get_period_overview, get_transaction_period_overview
from period_overview.services.periods import (
    PeriodBuckets,
    assemble_period,
    balance_to_bucket,
    build_route,
    calculate_net_change,
    calculate_opening_balance,
    calculate_period_balance,
    calculate_period_metrics,
    merge_bucket,
)
from period_overview.services.statistic_store import SqlStatisticStore
from period_overview.services.statistics import get_bucket, get_no_model_buckets

__all__ = [
    "CalendarPartitioner",
    "InMemoryCurrencyDirectory",
    "OverviewContext",
    "OverviewDependencies",
    "PeriodBuckets",
    "SqlStatisticStore",
    "assemble_period",
    "balance_to_bucket",
    "build_route",
    "calculate_net_change",
    "calculate_opening_balance",
    "calculate_period_balance",
    "calculate_period_metrics",
    "filter_by_date",
    "filter_by_type",
    "get_bucket",
    "get_no_model_buckets",
    "get_period_overview",
    "get_transaction_period_overview",
    "group_by_currency",
    "merge_bucket",
    "period_label",
]
