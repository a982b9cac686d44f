"""Period overviews of ledger entities and of transaction types."""

from collections.abc import Sequence
from datetime import date

from period_overview.config import settings
from period_overview.interfaces import JournalQuery
from period_overview.logger import get_logger, log_timing
from period_overview.schemas import (
    AccountRef,
    CurrencyBucket,
    Entity,
    Period,
    PeriodEntry,
    PeriodOverview,
    TransactionType,
)
from period_overview.services.context import OverviewContext, OverviewDependencies
from period_overview.services.currency import group_by_currency
from period_overview.services.filters import filter_by_date
from period_overview.services.periods import assemble_period, build_route
from period_overview.services.statistics import entity_scope, load_statistics
from period_overview.utils.exceptions import raise_configuration_error

logger = get_logger(__name__)

TRANSACTION_OVERVIEW_TYPES: dict[str, TransactionType] = {
    "withdrawal": TransactionType.WITHDRAWAL,
    "expenses": TransactionType.WITHDRAWAL,
    "deposit": TransactionType.DEPOSIT,
    "revenue": TransactionType.DEPOSIT,
    "transfer": TransactionType.TRANSFER,
    "transfers": TransactionType.TRANSFER,
}


def _ordered(start: date, end: date) -> tuple[date, date]:
    return (end, start) if end < start else (start, end)


def _range_from_periods(periods: Sequence[Period], start: date, end: date) -> tuple[date, date]:
    """Widen [start, end] to the outermost period boundaries."""
    for period in periods:
        if period.start < start:
            logger.debug("Widening overview start", was=start.isoformat(), now=period.start.isoformat())
            start = period.start
        if period.end > end:
            logger.debug("Widening overview end", was=end.isoformat(), now=period.end.isoformat())
            end = period.end
    return start, end


def get_period_overview(
    deps: OverviewDependencies,
    entity: Entity,
    start: date,
    end: date,
    *,
    convert_to_primary: bool | None = None,
) -> PeriodOverview:
    """
    Money movement of `entity` per period between `start` and `end`.

    Stored statistics for the whole (widened) range are read once; periods
    without statistics are computed from transactions and stored. Account
    overviews also carry the balance series of the range.
    """
    start, end = _ordered(start, end)
    periods = deps.partitioner.block_periods(start, end, settings.view_range)
    start, end = _range_from_periods(periods, start, end)

    ctx = OverviewContext.create(deps, convert_to_primary=convert_to_primary)
    with log_timing(
        "period_overview",
        logger=logger,
        scope=entity_scope(entity),
        start=start.isoformat(),
        end=end.isoformat(),
    ) as timing:
        load_statistics(ctx, entity, start, end)
        entries = [assemble_period(ctx, entity, period) for period in periods]
        timing["periods"] = len(entries)

    match entity:
        case AccountRef():
            if deps.balances is None:
                raise_configuration_error("Account overviews need a balance oracle")
            balance = deps.balances.final_balance_in_range(entity, start, end)
        case _:
            balance = None

    return PeriodOverview(periods=entries, balance=balance)


def get_transaction_period_overview(
    deps: OverviewDependencies,
    transaction_type: str,
    start: date,
    end: date,
    *,
    convert_to_primary: bool | None = None,
) -> PeriodOverview:
    """
    Journals of one transaction type grouped per period.

    Only the first `transaction_overview_detail_limit` periods are filled in;
    later periods are listed with empty buckets. Nothing is stored.
    """
    journal_type = TRANSACTION_OVERVIEW_TYPES.get(transaction_type)
    if journal_type is None:
        raise_configuration_error(f"Cannot deal with transaction type {transaction_type!r}")

    start, end = _ordered(start, end)
    periods = deps.partitioner.block_periods(start, end, settings.view_range)
    ctx = OverviewContext.create(deps, convert_to_primary=convert_to_primary)

    with log_timing(
        "transaction_period_overview",
        logger=logger,
        transaction_type=transaction_type,
        start=start.isoformat(),
        end=end.isoformat(),
    ) as timing:
        journals = deps.journals.extracted_journals(JournalQuery(start=start, end=end, types=(journal_type,)))
        timing["journals"] = len(journals)

        entries: list[PeriodEntry] = []
        for index, period in enumerate(periods):
            in_period = []
            if index < settings.transaction_overview_detail_limit:
                in_period = filter_by_date(journals, period.start, period.end)
            grouped = group_by_currency(in_period, primary=ctx.primary, convert_to_primary=ctx.convert_to_primary)
            empty = CurrencyBucket()
            entries.append(
                PeriodEntry(
                    title=period.label,
                    route=build_route(transaction_type, period.start, period.end),
                    start=period.start,
                    end=period.end,
                    total_transactions=len(in_period),
                    spent=grouped if journal_type == TransactionType.WITHDRAWAL else empty,
                    earned=grouped if journal_type == TransactionType.DEPOSIT else empty,
                    transferred=grouped if journal_type == TransactionType.TRANSFER else empty,
                )
            )
        timing["periods"] = len(entries)

    return PeriodOverview(periods=entries)
