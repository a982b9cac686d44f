"""Currency aggregation and lookup."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from period_overview.logger import get_logger
from period_overview.schemas import CurrencyBucket, CurrencyInfo, CurrencyTotal, TransactionRecord
from period_overview.schemas.base import ZERO
from period_overview.services.money import exact_arithmetic
from period_overview.utils.exceptions import raise_currency_not_found

logger = get_logger(__name__)


class InMemoryCurrencyDirectory:
    """Currency directory backed by a fixed list of currencies."""

    def __init__(self, currencies: Iterable[CurrencyInfo]) -> None:
        self._by_id: dict[int, CurrencyInfo] = {}
        self._by_code: dict[str, CurrencyInfo] = {}
        for currency in currencies:
            self._by_id[currency.id] = currency
            self._by_code[currency.code.upper()] = currency

    def by_id(self, currency_id: int) -> CurrencyInfo:
        try:
            return self._by_id[int(currency_id)]
        except KeyError as exc:
            raise_currency_not_found(currency_id, cause=exc)

    def by_code(self, code: str) -> CurrencyInfo:
        try:
            return self._by_code[code.strip().upper()]
        except KeyError as exc:
            raise_currency_not_found(code, cause=exc)


def _effective_currency(
    record: TransactionRecord,
    primary: CurrencyInfo,
    convert_to_primary: bool,
) -> tuple[CurrencyInfo, Decimal]:
    currency = record.currency
    if not convert_to_primary or currency.id == primary.id:
        return currency, record.amount

    foreign = record.foreign_currency
    if foreign is not None and foreign.id == primary.id:
        return foreign, record.foreign_amount if record.foreign_amount is not None else ZERO

    return primary, record.pc_amount if record.pc_amount is not None else ZERO


def group_by_currency(
    records: Sequence[TransactionRecord],
    *,
    primary: CurrencyInfo,
    convert_to_primary: bool = False,
) -> CurrencyBucket:
    """Sum transaction amounts per (effective) currency.

    With `convert_to_primary` set, records outside the primary currency are
    counted in it: the foreign amount is used when the foreign currency is the
    primary one, the pre-converted `pc_amount` otherwise. Entries are ordered by
    currency id.
    """
    if not records:
        return CurrencyBucket(count=0)

    currencies: dict[int, CurrencyInfo] = {}
    amounts: dict[int, Decimal] = {}
    counts: dict[int, int] = {}

    with exact_arithmetic():
        for record in records:
            currency, amount = _effective_currency(record, primary, convert_to_primary)
            if currency.id not in currencies:
                currencies[currency.id] = currency
                amounts[currency.id] = ZERO
                counts[currency.id] = 0
            amounts[currency.id] += amount
            counts[currency.id] += 1

    logger.debug("Grouped journals by currency", journals=len(records), currencies=len(currencies))

    return CurrencyBucket(
        entries={
            currency_id: CurrencyTotal(
                currency=currency,
                amount=amounts[currency_id],
                count=counts[currency_id],
            )
            for currency_id, currency in sorted(currencies.items())
        },
        count=len(records),
    )
