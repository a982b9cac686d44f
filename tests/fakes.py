"""In-memory collaborators for engine tests."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from period_overview.interfaces import JournalQuery
from period_overview.schemas import AccountRef, ModelEntity, TransactionRecord


@dataclass(frozen=True)
class Journal:
    """A journal as seen by global queries, with its budget/category links."""

    record: TransactionRecord
    has_budget: bool = True
    has_category: bool = True


class FakeJournalSource:
    """Serves transactions per entity and journals for global queries, recording every call."""

    def __init__(self) -> None:
        self.transactions: dict[ModelEntity, list[TransactionRecord]] = defaultdict(list)
        self.journals: list[Journal] = []
        self.period_calls: list[tuple[ModelEntity, date, date]] = []
        self.queries: list[JournalQuery] = []

    def add(self, entity: ModelEntity, *records: TransactionRecord) -> None:
        self.transactions[entity].extend(records)

    def add_journal(self, record: TransactionRecord, *, has_budget: bool = True, has_category: bool = True) -> None:
        self.journals.append(Journal(record, has_budget=has_budget, has_category=has_category))

    def period_transactions(self, entity: ModelEntity, start: date, end: date) -> list[TransactionRecord]:
        self.period_calls.append((entity, start, end))
        return [record for record in self.transactions[entity] if start <= record.entry_date <= end]

    def extracted_journals(self, query: JournalQuery) -> list[TransactionRecord]:
        self.queries.append(query)
        return [
            journal.record
            for journal in self.journals
            if query.start <= journal.record.entry_date <= query.end
            and (not query.types or journal.record.type in query.types)
            and not (query.without_budget and journal.has_budget)
            and not (query.without_category and journal.has_category)
        ]


class FakeBalanceOracle:
    """Closing balances per account and date."""

    def __init__(self) -> None:
        self.balances: dict[AccountRef, dict[date, dict[str, Decimal]]] = defaultdict(dict)

    def set(self, account: AccountRef, on: date, **amounts: str) -> None:
        self.balances[account][on] = {code: Decimal(amount) for code, amount in amounts.items()}

    def final_balance_in_range(self, account: AccountRef, start: date, end: date) -> dict[date, dict[str, Decimal]]:
        return {
            day: dict(amounts)
            for day, amounts in sorted(self.balances[account].items())
            if start <= day <= end
        }
