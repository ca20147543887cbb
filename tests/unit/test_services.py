"""Application services over the in-memory store."""

from datetime import UTC, datetime

import pytest

from app.application.services import (
    AnalyticsService,
    CategoryService,
    P2PService,
    TransactionService,
)
from app.domain.enums import P2PDirection, P2PStatus, TransactionType
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.infrastructure.persistence.memory_store import DocumentStore


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def categories(store) -> CategoryService:
    return CategoryService(store.categories, store.transactions)


@pytest.fixture
def transactions(store) -> TransactionService:
    return TransactionService(store.transactions, store.categories)


@pytest.fixture
def analytics(store) -> AnalyticsService:
    return AnalyticsService(store.transactions, store.categories)


def _at(day: int) -> datetime:
    return datetime(2024, 6, day, 9, 0, tzinfo=UTC)


async def test_transaction_type_must_match_category(categories, transactions) -> None:
    salary = await categories.create_category("u1", "Salary", TransactionType.INCOME)
    with pytest.raises(ValidationException) as exc_info:
        await transactions.create_transaction("u1", TransactionType.EXPENSE, 5, salary.id)
    assert exc_info.value.details == {"field": "category_id"}


async def test_category_of_another_user_is_rejected(categories, transactions) -> None:
    food = await categories.create_category("u1", "Food", TransactionType.EXPENSE)
    with pytest.raises(ValidationException):
        await transactions.create_transaction("u2", TransactionType.EXPENSE, 5, food.id)


async def test_bulk_delete_skips_unknown_ids(categories, transactions) -> None:
    food = await categories.create_category("u1", "Food", TransactionType.EXPENSE)
    kept = await transactions.create_transaction("u1", TransactionType.EXPENSE, 1, food.id)
    gone = await transactions.create_transaction("u1", TransactionType.EXPENSE, 2, food.id)
    assert await transactions.bulk_delete("u1", [gone.id, "missing"]) == 1
    assert (await transactions.get_transaction("u1", kept.id)).id == kept.id
    with pytest.raises(ResourceNotFoundException):
        await transactions.get_transaction("u1", gone.id)


async def test_bulk_delete_limits(transactions) -> None:
    with pytest.raises(ValidationException):
        await transactions.bulk_delete("u1", [])
    with pytest.raises(ValidationException):
        await transactions.bulk_delete("u1", [str(i) for i in range(101)])


async def test_by_category_percentages_and_order(categories, transactions, analytics) -> None:
    food = await categories.create_category("u1", "Food", TransactionType.EXPENSE)
    rent = await categories.create_category("u1", "Rent", TransactionType.EXPENSE)
    await transactions.create_transaction("u1", TransactionType.EXPENSE, 25, food.id, _at(1))
    await transactions.create_transaction("u1", TransactionType.EXPENSE, 75, rent.id, _at(2))
    result = await analytics.by_category("u1")
    assert [(c.category_name, c.total, c.percentage) for c in result] == [
        ("Rent", 75.0, 75.0),
        ("Food", 25.0, 25.0),
    ]
    top = await analytics.top_categories("u1", limit=1)
    assert [c.category_name for c in top] == ["Rent"]


async def test_date_range_must_be_ordered(analytics) -> None:
    with pytest.raises(ValidationException):
        await analytics.summary("u1", start=_at(5), end=_at(1))


async def test_category_usage_includes_unused(categories, transactions, analytics) -> None:
    food = await categories.create_category("u1", "Food", TransactionType.EXPENSE)
    await categories.create_category("u1", "Travel", TransactionType.EXPENSE)
    await transactions.create_transaction("u1", TransactionType.EXPENSE, 3, food.id)
    usage = {c.name: c.transaction_count for c in await analytics.categories("u1")}
    assert usage == {"Food": 1, "Travel": 0}


async def test_p2p_summary_counts_pending_only(store) -> None:
    service = P2PService(store.p2p)
    lent = await service.create_record("u1", "Sam", P2PDirection.LENT, 50)
    await service.create_record("u1", "Sam", P2PDirection.BORROWED, 20)
    await service.create_record("u1", "Kim", P2PDirection.LENT, 10)
    closed = await service.create_record("u1", "Lee", P2PDirection.LENT, 99)
    await service.update_status("u1", closed.id, P2PStatus.SETTLED)

    summary = await service.summary("u1")
    assert summary.total_lent == 60
    assert summary.total_borrowed == 20
    assert summary.net_balance == 40
    assert summary.pending_count == 3
    assert summary.settled_count == 1
    assert summary.by_counterparty == {"Kim": 10, "Sam": 30}

    cancelled = await service.update_status("u1", lent.id, P2PStatus.CANCELLED)
    assert cancelled.settled_at is None


async def test_p2p_unknown_record(store) -> None:
    with pytest.raises(ResourceNotFoundException):
        await P2PService(store.p2p).update_status("u1", "nope", P2PStatus.SETTLED)
