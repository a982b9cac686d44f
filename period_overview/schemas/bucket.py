"""Currency-keyed monetary aggregates."""

from collections.abc import Iterator
from decimal import Decimal
from enum import Enum

from pydantic import Field

from period_overview.schemas.base import ZERO, FrozenModel, MonetaryAmount
from period_overview.schemas.currency import CurrencyInfo


class BucketType(str, Enum):
    """Semantic buckets a period's transactions are sorted into."""

    SPENT = "spent"
    EARNED = "earned"
    TRANSFERRED_IN = "transferred_in"
    TRANSFERRED_AWAY = "transferred_away"
    TRANSFERRED = "transferred"


NO_MODEL_BUCKET_TYPES = (BucketType.SPENT, BucketType.EARNED, BucketType.TRANSFERRED)


class CurrencyTotal(FrozenModel):
    """Amount and transaction count for a single currency."""

    currency: CurrencyInfo
    amount: MonetaryAmount
    count: int = 0


class CurrencyBucket(FrozenModel):
    """Per-currency totals plus an aggregate count."""

    entries: dict[int, CurrencyTotal] = Field(default_factory=dict)
    count: int = 0

    def totals(self) -> Iterator[CurrencyTotal]:
        return iter(self.entries.values())

    def amount_for(self, currency_id: int) -> Decimal:
        entry = self.entries.get(currency_id)
        return entry.amount if entry else ZERO

    @property
    def is_empty(self) -> bool:
        return not self.entries
