"""SQLAlchemy models package."""

from period_overview.models.period_statistic import PeriodStatistic

__all__ = [
    "PeriodStatistic",
]
