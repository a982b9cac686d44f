"""Ledger entities an overview can be requested for.

An entity is one of four variants; engine code resolves them with exhaustive
`match` statements and treats anything else as a configuration error.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class NoModel(str, Enum):
    """Models whose absence forms a "no-model" bucket."""

    BUDGET = "budget"
    CATEGORY = "category"


@dataclass(frozen=True)
class AccountRef:
    id: int
    name: str = ""


@dataclass(frozen=True)
class CategoryRef:
    id: int
    name: str = ""


@dataclass(frozen=True)
class TagRef:
    id: int
    name: str = ""


@dataclass(frozen=True)
class NoModelRef:
    """Transactions lacking a budget or a category."""

    model: NoModel

    @property
    def prefix(self) -> str:
        return f"no_{self.model.value}"


Entity = AccountRef | CategoryRef | TagRef | NoModelRef
ModelEntity = AccountRef | CategoryRef | TagRef


@dataclass(frozen=True)
class Period:
    """A labelled, inclusive date range produced by the calendar partitioner."""

    label: str
    start: date
    end: date
