"""Per-period assembly of buckets and derived balances.

The derivations are pure functions over `PeriodBuckets`. Account entries take
their closing balance from the balance oracle; every other entity derives it
from the four transaction buckets.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from period_overview.config import settings
from period_overview.constants.error_ids import ErrorIds
from period_overview.logger import get_logger, log_exception
from period_overview.schemas import (
    AccountRef,
    BucketType,
    CategoryRef,
    CurrencyBucket,
    CurrencyInfo,
    CurrencyTotal,
    Entity,
    MetricsBucket,
    ModelEntity,
    NoModel,
    NoModelRef,
    Period,
    PeriodEntry,
    PeriodMetrics,
    TagRef,
    TransactionType,
)
from period_overview.schemas.base import ZERO
from period_overview.services.context import OverviewContext
from period_overview.services.money import RATE_PLACES, divide, exact_arithmetic, magnitude
from period_overview.services.statistics import get_bucket, get_no_model_buckets
from period_overview.utils.exceptions import CurrencyNotFoundError, raise_configuration_error

logger = get_logger(__name__)


@dataclass(frozen=True)
class PeriodBuckets:
    """The four transaction buckets the derivations work on.

    No-model periods map `transferred` onto `transferred_away` and leave
    `transferred_in` empty.
    """

    spent: CurrencyBucket
    earned: CurrencyBucket
    transferred_in: CurrencyBucket
    transferred_away: CurrencyBucket

    @property
    def total_count(self) -> int:
        return self.spent.count + self.earned.count + self.transferred_in.count + self.transferred_away.count

    def currencies(self) -> dict[int, CurrencyInfo]:
        """Currencies seen in any bucket, in earned, spent, in, away order."""
        seen: dict[int, CurrencyInfo] = {}
        for bucket in (self.earned, self.spent, self.transferred_in, self.transferred_away):
            for total in bucket.totals():
                seen[total.currency.id] = total.currency
        return seen

    def net_change_for(self, currency_id: int) -> Decimal:
        """Earned and transferred in count positive, spent as stored, transferred away negative."""
        with exact_arithmetic():
            return (
                magnitude(self.earned.amount_for(currency_id))
                + self.spent.amount_for(currency_id)
                + magnitude(self.transferred_in.amount_for(currency_id))
                - magnitude(self.transferred_away.amount_for(currency_id))
            )


def merge_bucket(into: CurrencyBucket, source: CurrencyBucket, sign: int = 1) -> CurrencyBucket:
    """Add `sign * amount` of every currency in `source` to `into`.

    Per-currency counts are summed; the aggregate count of `into` is kept as is.
    """
    entries = dict(into.entries)
    with exact_arithmetic():
        for currency_id, total in source.entries.items():
            current = entries.get(currency_id)
            if current is None:
                current = CurrencyTotal(currency=total.currency, amount=ZERO, count=0)
            entries[currency_id] = CurrencyTotal(
                currency=current.currency,
                amount=current.amount + total.amount * sign,
                count=current.count + total.count,
            )
    return CurrencyBucket(entries=entries, count=into.count)


def calculate_period_balance(buckets: PeriodBuckets) -> CurrencyBucket:
    """earned + transferred_in - spent - transferred_away, per currency.

    Currencies netting to exactly zero are dropped; the aggregate count is the
    sum of the surviving entries' counts.
    """
    balance = CurrencyBucket()
    balance = merge_bucket(balance, buckets.earned, 1)
    balance = merge_bucket(balance, buckets.transferred_in, 1)
    balance = merge_bucket(balance, buckets.spent, -1)
    balance = merge_bucket(balance, buckets.transferred_away, -1)

    entries = {currency_id: total for currency_id, total in balance.entries.items() if total.amount != 0}
    return CurrencyBucket(entries=entries, count=sum(total.count for total in entries.values()))


def calculate_net_change(buckets: PeriodBuckets) -> CurrencyBucket:
    entries: dict[int, CurrencyTotal] = {}
    for currency_id, currency in buckets.currencies().items():
        net = buckets.net_change_for(currency_id)
        if net != 0:
            entries[currency_id] = CurrencyTotal(currency=currency, amount=net, count=1)
    return CurrencyBucket(entries=entries, count=len(entries))


def calculate_opening_balance(buckets: PeriodBuckets, period_balance: CurrencyBucket) -> CurrencyBucket:
    """Closing balance minus the period's net change, per currency of the closing balance."""
    entries: dict[int, CurrencyTotal] = {}
    with exact_arithmetic():
        for currency_id, closing in period_balance.entries.items():
            entries[currency_id] = CurrencyTotal(
                currency=closing.currency,
                amount=closing.amount - buckets.net_change_for(currency_id),
                count=1,
            )
    return CurrencyBucket(entries=entries, count=len(entries))


def calculate_period_metrics(buckets: PeriodBuckets, start: date, end: date) -> MetricsBucket:
    days = (end - start).days + 1
    entries: dict[int, PeriodMetrics] = {}

    for currency_id, currency in buckets.currencies().items():
        with exact_arithmetic():
            spent = buckets.spent.amount_for(currency_id)
            transferred_away = buckets.transferred_away.amount_for(currency_id)
            spent_out = ZERO - spent
            away_out = ZERO - transferred_away
            inflows = buckets.earned.amount_for(currency_id) + buckets.transferred_in.amount_for(currency_id)
            outflows = spent_out + away_out
            net_cash_out = outflows - inflows

        if not (inflows > 0 or outflows > 0):
            continue

        has_inflows = inflows > 0
        entries[currency_id] = PeriodMetrics(
            currency=currency,
            burn_rate=divide(spent_out, days, currency.decimal_places),
            net_burn=divide(net_cash_out, days, currency.decimal_places),
            savings_rate=divide(away_out, inflows, RATE_PLACES) if has_inflows else ZERO,
            expense_ratio=divide(spent_out, inflows, RATE_PLACES) if has_inflows else ZERO,
            days_in_period=days,
            total_inflows=inflows,
            total_outflows=outflows,
        )

    return MetricsBucket(entries=entries, count=len(entries))


def balance_to_bucket(ctx: OverviewContext, account: AccountRef, end: date) -> CurrencyBucket:
    """The account's closing balance at `end`, one entry per real currency."""
    oracle = ctx.deps.balances
    if oracle is None:
        raise_configuration_error("Account overviews need a balance oracle")

    special_keys = set(settings.special_balance_keys)
    entries: dict[int, CurrencyTotal] = {}
    for balances in oracle.final_balance_in_range(account, end, end).values():
        for code, amount in balances.items():
            if code in special_keys:
                continue
            try:
                currency = ctx.deps.currencies.by_code(code)
            except CurrencyNotFoundError as exc:
                log_exception(
                    logger,
                    exc,
                    "Could not find currency for balance entry",
                    level="warning",
                    include_traceback=False,
                    error_id=ErrorIds.OVERVIEW_CURRENCY_NOT_FOUND,
                    account_id=account.id,
                    code=code,
                )
                continue
            entries[currency.id] = CurrencyTotal(currency=currency, amount=Decimal(str(amount)), count=1)
    return CurrencyBucket(entries=entries, count=len(entries))


def build_route(target: Entity | TransactionType | str, start: date, end: date) -> str:
    """Path of the page listing `target`'s transactions between `start` and `end`."""
    dates = f"{start.isoformat()}/{end.isoformat()}"
    match target:
        case AccountRef(id=entity_id):
            return f"/accounts/show/{entity_id}/{dates}"
        case CategoryRef(id=entity_id):
            return f"/categories/show/{entity_id}/{dates}"
        case TagRef(id=entity_id):
            return f"/tags/show/{entity_id}/{dates}"
        case NoModelRef(model=NoModel.BUDGET):
            return f"/budgets/no-budget/{dates}"
        case NoModelRef(model=NoModel.CATEGORY):
            return f"/categories/no-category/{dates}"
        case TransactionType():
            return f"/transactions/{target.value}/{dates}"
        case str():
            return f"/transactions/{target}/{dates}"
        case _:
            raise_configuration_error(f"Cannot deal with model of type {type(target).__name__!r}")


def _model_buckets(ctx: OverviewContext, entity: ModelEntity, period: Period) -> PeriodBuckets:
    return PeriodBuckets(
        spent=get_bucket(ctx, entity, period.start, period.end, BucketType.SPENT),
        earned=get_bucket(ctx, entity, period.start, period.end, BucketType.EARNED),
        transferred_in=get_bucket(ctx, entity, period.start, period.end, BucketType.TRANSFERRED_IN),
        transferred_away=get_bucket(ctx, entity, period.start, period.end, BucketType.TRANSFERRED_AWAY),
    )


def _entry(
    entity: Entity,
    period: Period,
    buckets: PeriodBuckets,
    period_balance: CurrencyBucket,
    **fields: CurrencyBucket | None,
) -> PeriodEntry:
    return PeriodEntry(
        title=period.label,
        route=build_route(entity, period.start, period.end),
        start=period.start,
        end=period.end,
        total_transactions=buckets.total_count,
        spent=buckets.spent,
        earned=buckets.earned,
        period_balance=period_balance,
        opening_balance=calculate_opening_balance(buckets, period_balance),
        net_change=calculate_net_change(buckets),
        period_metrics=calculate_period_metrics(buckets, period.start, period.end),
        **fields,
    )


def assemble_period(ctx: OverviewContext, entity: Entity, period: Period) -> PeriodEntry:
    """Buckets and derived figures of one entity in one period."""
    match entity:
        case AccountRef():
            buckets = _model_buckets(ctx, entity, period)
            period_balance = balance_to_bucket(ctx, entity, period.end)
        case CategoryRef() | TagRef():
            buckets = _model_buckets(ctx, entity, period)
            period_balance = calculate_period_balance(buckets)
        case NoModelRef():
            grouped = get_no_model_buckets(ctx, entity, period.start, period.end)
            buckets = PeriodBuckets(
                spent=grouped[BucketType.SPENT],
                earned=grouped[BucketType.EARNED],
                transferred_in=CurrencyBucket(),
                transferred_away=grouped[BucketType.TRANSFERRED],
            )
            return _entry(
                entity,
                period,
                buckets,
                calculate_period_balance(buckets),
                transferred=grouped[BucketType.TRANSFERRED],
            )
        case _:
            raise_configuration_error(f"Cannot deal with model of type {type(entity).__name__!r}")

    return _entry(
        entity,
        period,
        buckets,
        period_balance,
        transferred_in=buckets.transferred_in,
        transferred_away=buckets.transferred_away,
    )
