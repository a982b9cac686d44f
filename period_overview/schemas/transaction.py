"""Transaction records supplied by the journal source."""

from datetime import date
from enum import Enum

from period_overview.schemas.base import FrozenModel, MonetaryAmount
from period_overview.schemas.currency import CurrencyInfo


class TransactionType(str, Enum):
    """Journal transaction types."""

    WITHDRAWAL = "withdrawal"
    DEPOSIT = "deposit"
    TRANSFER = "transfer"


class TransactionRecord(FrozenModel):
    """
    An already-extracted journal line for one entity.

    `amount` is signed and expressed in `currency`. `foreign_amount` is set when
    the journal also carries a foreign currency; `pc_amount` is the amount
    converted to the user's primary currency.
    """

    entry_date: date
    amount: MonetaryAmount
    type: TransactionType
    currency: CurrencyInfo
    foreign_currency: CurrencyInfo | None = None
    foreign_amount: MonetaryAmount | None = None
    pc_amount: MonetaryAmount | None = None
    description: str | None = None
