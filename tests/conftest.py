"""Test fixtures and configuration."""

import logging
import sys

import pytest
import structlog
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from period_overview.config import settings
from period_overview.database import init_db
from period_overview.schemas import CurrencyInfo
from period_overview.services import CalendarPartitioner, InMemoryCurrencyDirectory, SqlStatisticStore
from period_overview.services.context import OverviewContext, OverviewDependencies
from tests.fakes import FakeBalanceOracle, FakeJournalSource


# --- Structlog Configuration for Tests ---
@pytest.fixture(autouse=True, scope="session")
def configure_structlog_for_tests():
    """Configure structlog for proper capsys capture in tests."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(),
        foreign_pre_chain=processors[:-1],
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    yield

    structlog.reset_defaults()


# --- Settings ---
@pytest.fixture(autouse=True)
def overview_settings(monkeypatch):
    """Pin the settings every overview test relies on."""
    monkeypatch.setattr(settings, "primary_currency", "EUR")
    monkeypatch.setattr(settings, "convert_to_primary", False)
    monkeypatch.setattr(settings, "view_range", "1M")
    monkeypatch.setattr(settings, "transaction_overview_detail_limit", 10)
    return settings


# --- Currencies ---
@pytest.fixture
def eur() -> CurrencyInfo:
    return CurrencyInfo(id=1, code="EUR", name="Euro", symbol="€", decimal_places=2)


@pytest.fixture
def usd() -> CurrencyInfo:
    return CurrencyInfo(id=2, code="USD", name="US Dollar", symbol="$", decimal_places=2)


@pytest.fixture
def jpy() -> CurrencyInfo:
    return CurrencyInfo(id=3, code="JPY", name="Japanese yen", symbol="¥", decimal_places=0)


@pytest.fixture
def currencies(eur, usd, jpy) -> InMemoryCurrencyDirectory:
    return InMemoryCurrencyDirectory([eur, usd, jpy])


# --- Database ---
@pytest.fixture
def engine():
    """In-memory SQLite engine with the statistic tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    maker = sessionmaker(engine, class_=Session, expire_on_commit=False)
    with maker() as session:
        yield session


@pytest.fixture
def store(db) -> SqlStatisticStore:
    return SqlStatisticStore(db)


# --- Collaborators ---
@pytest.fixture
def journals() -> FakeJournalSource:
    return FakeJournalSource()


@pytest.fixture
def balances() -> FakeBalanceOracle:
    return FakeBalanceOracle()


@pytest.fixture
def deps(journals, store, currencies, balances) -> OverviewDependencies:
    return OverviewDependencies(
        journals=journals,
        statistics=store,
        partitioner=CalendarPartitioner(),
        currencies=currencies,
        balances=balances,
    )


@pytest.fixture
def ctx(deps, eur) -> OverviewContext:
    return OverviewContext(deps=deps, primary=eur)
