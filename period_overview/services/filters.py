"""Selection of transactions into semantic buckets."""

from collections.abc import Iterable
from datetime import date

from period_overview.schemas import BucketType, TransactionRecord, TransactionType
from period_overview.services.money import magnitude, negate_positive
from period_overview.utils.exceptions import raise_configuration_error


def _in_range(record: TransactionRecord, start: date, end: date) -> bool:
    return start <= record.entry_date <= end


def as_spent(record: TransactionRecord) -> TransactionRecord:
    """Copy of a withdrawal with its amount forced non-positive."""
    if record.amount > 0:
        return record.model_copy(update={"amount": negate_positive(record.amount)})
    return record


def as_earned(record: TransactionRecord) -> TransactionRecord:
    """Copy of a deposit with its amount forced non-negative."""
    if record.amount < 0:
        return record.model_copy(update={"amount": magnitude(record.amount)})
    return record


def filter_by_date(records: Iterable[TransactionRecord], start: date, end: date) -> list[TransactionRecord]:
    """Records dated within [start, end], both bounds inclusive."""
    return [record for record in records if _in_range(record, start, end)]


def filter_by_type(
    transactions: Iterable[TransactionRecord],
    bucket_type: BucketType | str,
    start: date,
    end: date,
) -> list[TransactionRecord]:
    """Select the transactions of one bucket within [start, end].

    Spent withdrawals are returned non-positive and earned deposits
    non-negative; transfers are split on the sign of their amount.
    """
    try:
        bucket_type = BucketType(bucket_type)
    except ValueError as exc:
        raise_configuration_error(f"Cannot deal with period type {bucket_type!r}", cause=exc)

    in_range = filter_by_date(transactions, start, end)

    if bucket_type == BucketType.SPENT:
        return [as_spent(record) for record in in_range if record.type == TransactionType.WITHDRAWAL]
    if bucket_type == BucketType.EARNED:
        return [as_earned(record) for record in in_range if record.type == TransactionType.DEPOSIT]
    if bucket_type == BucketType.TRANSFERRED_IN:
        return [record for record in in_range if record.type == TransactionType.TRANSFER and record.amount > 0]
    if bucket_type == BucketType.TRANSFERRED_AWAY:
        return [record for record in in_range if record.type == TransactionType.TRANSFER and record.amount < 0]
    raise_configuration_error(f"Cannot deal with period type {bucket_type.value!r}")
