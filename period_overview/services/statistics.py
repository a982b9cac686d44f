"""Read-through cache of per-period statistics.

Buckets are looked up in the statistics snapshot fetched once per overview
call. A miss recomputes the bucket from transactions and stores one row per
currency, or a zero placeholder row in the primary currency when the bucket is
empty, so the next call finds a hit instead of recomputing again.
"""

from collections.abc import Iterable, Sequence
from datetime import date

from period_overview.interfaces import JournalQuery
from period_overview.logger import get_logger
from period_overview.models import PeriodStatistic
from period_overview.schemas import (
    NO_MODEL_BUCKET_TYPES,
    AccountRef,
    BucketType,
    CategoryRef,
    CurrencyBucket,
    CurrencyTotal,
    Entity,
    ModelEntity,
    NoModel,
    NoModelRef,
    TagRef,
    TransactionRecord,
    TransactionType,
)
from period_overview.schemas.base import ZERO
from period_overview.services.context import OverviewContext
from period_overview.services.currency import group_by_currency
from period_overview.services.filters import as_earned, as_spent, filter_by_type
from period_overview.utils.exceptions import raise_configuration_error

logger = get_logger(__name__)


def entity_scope(entity: Entity) -> str:
    """Key under which an entity's statistics are stored."""
    match entity:
        case AccountRef(id=entity_id):
            return f"account:{entity_id}"
        case CategoryRef(id=entity_id):
            return f"category:{entity_id}"
        case TagRef(id=entity_id):
            return f"tag:{entity_id}"
        case NoModelRef():
            return entity.prefix
        case _:
            raise_configuration_error(f"Cannot deal with model of type {type(entity).__name__!r}")


def load_statistics(ctx: OverviewContext, entity: Entity, start: date, end: date) -> None:
    """Bulk-fetch the entity's stored statistics for the whole range into the context."""
    ctx.statistics = list(ctx.deps.statistics.all_in_range(entity_scope(entity), start, end))
    logger.debug(
        "Collected period statistics",
        scope=entity_scope(entity),
        start=start.isoformat(),
        end=end.isoformat(),
        statistics=len(ctx.statistics),
    )


def filter_statistics(
    statistics: Iterable[PeriodStatistic], start: date, end: date, statistic_type: str
) -> list[PeriodStatistic]:
    return [row for row in statistics if row.start == start and row.end == end and row.type == statistic_type]


def filter_prefixed_statistics(
    statistics: Iterable[PeriodStatistic], start: date, end: date, prefix: str
) -> list[PeriodStatistic]:
    return [row for row in statistics if row.start == start and row.end == end and row.type.startswith(prefix)]


def bucket_from_statistics(ctx: OverviewContext, rows: Sequence[PeriodStatistic]) -> CurrencyBucket:
    """Rebuild a bucket from stored rows, one row per currency.

    Placeholder rows (count 0) only mark the key as computed and add no entry.
    """
    entries: dict[int, CurrencyTotal] = {}
    count = 0
    for row in sorted(rows, key=lambda row: row.transaction_currency_id):
        if row.count == 0:
            continue
        currency = ctx.deps.currencies.by_id(row.transaction_currency_id)
        entries[currency.id] = CurrencyTotal(currency=currency, amount=row.decimal_amount, count=row.count)
        count += row.count
    return CurrencyBucket(entries=entries, count=count)


def save_grouped(
    ctx: OverviewContext,
    scope: str,
    start: date,
    end: date,
    statistic_type: str,
    bucket: CurrencyBucket,
) -> None:
    """Persist a bucket as statistic rows."""
    logger.debug(
        "Saving grouped statistics",
        scope=scope,
        type=statistic_type,
        start=start.isoformat(),
        end=end.isoformat(),
        currencies=len(bucket.entries),
    )
    for total in bucket.totals():
        ctx.deps.statistics.save(scope, total.currency.id, start, end, statistic_type, total.count, total.amount)
    if bucket.is_empty:
        ctx.deps.statistics.save(scope, ctx.primary.id, start, end, statistic_type, 0, ZERO)


def get_bucket(
    ctx: OverviewContext,
    entity: ModelEntity,
    start: date,
    end: date,
    bucket_type: BucketType | str,
) -> CurrencyBucket:
    """One bucket of an account, category or tag for one period."""
    try:
        bucket_type = BucketType(bucket_type)
    except ValueError as exc:
        raise_configuration_error(f"Cannot deal with period type {bucket_type!r}", cause=exc)
    if bucket_type == BucketType.TRANSFERRED:
        raise_configuration_error(f"Cannot deal with period type {bucket_type.value!r}")

    rows = filter_statistics(ctx.statistics, start, end, bucket_type.value)
    if rows:
        return bucket_from_statistics(ctx, rows)

    logger.debug(
        "No statistics for period, regenerating",
        scope=entity_scope(entity),
        type=bucket_type.value,
        start=start.isoformat(),
        end=end.isoformat(),
    )
    transactions = ctx.transactions_for(entity, start, end)
    bucket = group_by_currency(
        filter_by_type(transactions, bucket_type, start, end),
        primary=ctx.primary,
        convert_to_primary=ctx.convert_to_primary,
    )
    save_grouped(ctx, entity_scope(entity), start, end, bucket_type.value, bucket)
    return bucket


def _no_model_journals(
    ctx: OverviewContext, model: NoModel, start: date, end: date
) -> dict[BucketType, list[TransactionRecord]]:
    journals = ctx.deps.journals

    match model:
        case NoModel.BUDGET:
            spent = journals.extracted_journals(
                JournalQuery(start=start, end=end, types=(TransactionType.WITHDRAWAL,), without_budget=True)
            )
            earned: Sequence[TransactionRecord] = []
            transferred: Sequence[TransactionRecord] = []
        case NoModel.CATEGORY:
            earned = journals.extracted_journals(
                JournalQuery(start=start, end=end, types=(TransactionType.DEPOSIT,), without_category=True)
            )
            spent = journals.extracted_journals(
                JournalQuery(start=start, end=end, types=(TransactionType.WITHDRAWAL,), without_category=True)
            )
            transferred = journals.extracted_journals(
                JournalQuery(start=start, end=end, types=(TransactionType.TRANSFER,), without_category=True)
            )
        case _:
            raise_configuration_error(f"Cannot deal with model of type {model!r}")

    return {
        BucketType.SPENT: [as_spent(record) for record in spent],
        BucketType.EARNED: [as_earned(record) for record in earned],
        BucketType.TRANSFERRED: list(transferred),
    }


def get_no_model_buckets(
    ctx: OverviewContext, no_model: NoModelRef | NoModel | str, start: date, end: date
) -> dict[BucketType, CurrencyBucket]:
    """The spent, earned and transferred buckets of transactions without a budget or category."""
    if isinstance(no_model, NoModelRef):
        model = no_model.model
    else:
        try:
            model = NoModel(no_model)
        except ValueError as exc:
            raise_configuration_error(f"Cannot deal with model of type {no_model!r}", cause=exc)

    prefix = NoModelRef(model).prefix
    rows = filter_prefixed_statistics(ctx.statistics, start, end, prefix)
    if rows:
        by_type: dict[str, list[PeriodStatistic]] = {}
        for row in rows:
            by_type.setdefault(row.type.removeprefix(f"{prefix}_"), []).append(row)
        unknown = set(by_type) - {bucket_type.value for bucket_type in NO_MODEL_BUCKET_TYPES}
        if unknown:
            raise_configuration_error(f"Cannot deal with period type {sorted(unknown)[0]!r}")
        return {
            bucket_type: bucket_from_statistics(ctx, by_type.get(bucket_type.value, []))
            for bucket_type in NO_MODEL_BUCKET_TYPES
        }

    logger.debug(
        "No statistics for period, regenerating",
        scope=prefix,
        start=start.isoformat(),
        end=end.isoformat(),
    )
    buckets: dict[BucketType, CurrencyBucket] = {}
    for bucket_type, records in _no_model_journals(ctx, model, start, end).items():
        bucket = group_by_currency(records, primary=ctx.primary, convert_to_primary=ctx.convert_to_primary)
        save_grouped(ctx, prefix, start, end, f"{prefix}_{bucket_type.value}", bucket)
        buckets[bucket_type] = bucket
    return buckets
