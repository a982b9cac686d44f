"""Pydantic schemas and value objects."""

from period_overview.schemas.bucket import (
    NO_MODEL_BUCKET_TYPES,
    BucketType,
    CurrencyBucket,
    CurrencyTotal,
)
from period_overview.schemas.currency import CurrencyInfo
from period_overview.schemas.entity import (
    AccountRef,
    CategoryRef,
    Entity,
    ModelEntity,
    NoModel,
    NoModelRef,
    Period,
    TagRef,
)
from period_overview.schemas.overview import MetricsBucket, PeriodEntry, PeriodMetrics, PeriodOverview
from period_overview.schemas.transaction import TransactionRecord, TransactionType

__all__ = [
    "AccountRef",
    "BucketType",
    "CategoryRef",
    "CurrencyBucket",
    "CurrencyInfo",
    "CurrencyTotal",
    "Entity",
    "MetricsBucket",
    "ModelEntity",
    "NO_MODEL_BUCKET_TYPES",
    "NoModel",
    "NoModelRef",
    "Period",
    "PeriodEntry",
    "PeriodMetrics",
    "PeriodOverview",
    "TagRef",
    "TransactionRecord",
    "TransactionType",
]
