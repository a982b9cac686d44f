"""Precomputed per-period statistics (read-through cache rows)."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from period_overview.database import Base
from period_overview.models.base import TimestampMixin, UUIDMixin


class PeriodStatistic(Base, UUIDMixin, TimestampMixin):
    """
    One currency's total for one (scope, period, type) key.

    `scope` is "<kind>:<id>" for accounts, categories and tags, or a
    `no_<model>` prefix for transactions without a budget/category. Prefixed
    rows carry their type as `no_<model>_<type>`.

    Amounts are kept as decimal strings so no precision is lost in any backend.
    """

    __tablename__ = "period_statistics"
    __table_args__ = (
        UniqueConstraint(
            "scope",
            "transaction_currency_id",
            "start",
            "end",
            "type",
            name="uq_period_statistic_key",
        ),
    )

    scope: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    transaction_currency_id: Mapped[int] = mapped_column(Integer, nullable=False)
    start: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(255), nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    amount: Mapped[str] = mapped_column(Text, nullable=False, default="0")

    @property
    def decimal_amount(self) -> Decimal:
        return Decimal(self.amount)

    def __repr__(self) -> str:
        return (
            f"<PeriodStatistic {self.scope} {self.type} {self.start}..{self.end} "
            f"currency={self.transaction_currency_id} amount={self.amount}>"
        )
