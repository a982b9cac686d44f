"""Tests for session management and table creation."""

from datetime import date

import pytest
from sqlalchemy import inspect, select
from sqlalchemy.orm import Session, sessionmaker

from period_overview.database import get_session, init_db
from period_overview.models import PeriodStatistic


def test_init_db_creates_statistic_table(engine) -> None:
    init_db(engine)
    assert "period_statistics" in inspect(engine).get_table_names()


def test_get_session_commits_on_success(engine) -> None:
    maker = sessionmaker(engine, class_=Session, expire_on_commit=False)

    with get_session(maker) as session:
        session.add(
            PeriodStatistic(
                scope="tag:1",
                transaction_currency_id=1,
                start=date(2024, 1, 1),
                end=date(2024, 1, 31),
                type="spent",
                count=1,
                amount="-1.00",
            )
        )

    with maker() as session:
        row = session.execute(select(PeriodStatistic)).scalar_one()
        assert row.scope == "tag:1"
        assert row.id is not None
        assert row.created_at is not None


def test_get_session_rolls_back_on_error(engine) -> None:
    maker = sessionmaker(engine, class_=Session, expire_on_commit=False)

    with pytest.raises(RuntimeError), get_session(maker) as session:
        session.add(
            PeriodStatistic(
                scope="tag:2",
                transaction_currency_id=1,
                start=date(2024, 1, 1),
                end=date(2024, 1, 31),
                type="spent",
                count=1,
                amount="-1.00",
            )
        )
        session.flush()
        raise RuntimeError("abort")

    with maker() as session:
        assert session.execute(select(PeriodStatistic)).scalars().all() == []
