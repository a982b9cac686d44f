"""SQLAlchemy-backed statistic store."""

from datetime import UTC, date, datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from period_overview.constants.error_ids import ErrorIds
from period_overview.logger import get_logger
from period_overview.models import PeriodStatistic

logger = get_logger(__name__)

_KEY_COLUMNS = ("scope", "transaction_currency_id", "start", "end", "type")


def _dialect_insert(dialect_name: str):
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert

        return insert
    if dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert

        return insert
    return None


class SqlStatisticStore:
    """Reads and upserts `PeriodStatistic` rows through a session.

    Writes are keyed upserts: saving the same key twice leaves one row holding
    the last value, so concurrent recomputations of one key are harmless.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def all_in_range(self, scope: str, start: date, end: date) -> list[PeriodStatistic]:
        """Get every statistic of `scope` whose period lies inside [start, end]."""
        stmt = (
            select(PeriodStatistic)
            .where(PeriodStatistic.scope == scope)
            .where(PeriodStatistic.start >= start)
            .where(PeriodStatistic.end <= end)
            .order_by(PeriodStatistic.start, PeriodStatistic.type, PeriodStatistic.transaction_currency_id)
        )
        try:
            result = self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to read period statistics",
                error_id=ErrorIds.OVERVIEW_STATISTIC_READ_FAILED,
                scope=scope,
                start=start.isoformat(),
                end=end.isoformat(),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise
        return list(result.scalars().all())

    def save(
        self,
        scope: str,
        currency_id: int,
        start: date,
        end: date,
        statistic_type: str,
        count: int,
        amount: Decimal,
    ) -> None:
        """Insert or overwrite the statistic for (scope, currency, start, end, statistic_type)."""
        values = {
            "scope": scope,
            "transaction_currency_id": currency_id,
            "start": start,
            "end": end,
            "type": statistic_type,
            "count": count,
            "amount": str(amount),
        }
        try:
            insert = _dialect_insert(self._session.get_bind().dialect.name)
            if insert is None:
                self._save_portable(values)
            else:
                table = PeriodStatistic.__table__
                stmt = insert(PeriodStatistic).values(**values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[table.c[name] for name in _KEY_COLUMNS],
                    set_={
                        "count": stmt.excluded["count"],
                        "amount": stmt.excluded["amount"],
                        "updated_at": datetime.now(UTC),
                    },
                )
                self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to save period statistic",
                error_id=ErrorIds.OVERVIEW_STATISTIC_SAVE_FAILED,
                scope=scope,
                type=statistic_type,
                currency_id=currency_id,
                start=start.isoformat(),
                end=end.isoformat(),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise

    def _find(self, values: dict[str, object]) -> PeriodStatistic | None:
        stmt = select(PeriodStatistic)
        for name in _KEY_COLUMNS:
            stmt = stmt.where(getattr(PeriodStatistic, name) == values[name])
        return self._session.execute(stmt).scalar_one_or_none()

    def _save_portable(self, values: dict[str, object]) -> None:
        existing = self._find(values)
        if existing is None:
            try:
                with self._session.begin_nested():
                    self._session.add(PeriodStatistic(**values))
                return
            except IntegrityError:
                # Another writer inserted the key since the lookup
                existing = self._find(values)
                if existing is None:
                    raise
                logger.debug(
                    "Period statistic written concurrently, overwriting",
                    scope=values["scope"],
                    type=values["type"],
                )
        existing.count = values["count"]
        existing.amount = values["amount"]
        self._session.flush()
