"""Tests for domain entities (validation, P2P transitions) and enums."""

from datetime import UTC, datetime

import pytest

from app.domain.entities import (
    CategoryEntity,
    P2PTransactionEntity,
    TransactionEntity,
    UserEntity,
)
from app.domain.enums import P2PDirection, P2PStatus, TransactionType
from app.domain.exceptions import InvalidStatusTransitionException, ValidationException

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class TestEnums:
    def test_transaction_type_values(self) -> None:
        assert TransactionType.values() == ["income", "expense"]

    def test_p2p_status_values(self) -> None:
        assert set(P2PStatus.values()) == {"pending", "settled", "cancelled"}


def _transaction(**overrides) -> TransactionEntity:
    values = dict(
        id="t1",
        user_id="u1",
        type=TransactionType.EXPENSE,
        amount=10.0,
        category_id="c1",
        date=NOW,
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return TransactionEntity(**values)


class TestTransactionEntity:
    def test_signed_amount(self) -> None:
        assert _transaction().signed_amount == -10.0
        assert _transaction(type=TransactionType.INCOME).signed_amount == 10.0

    @pytest.mark.parametrize("amount", [0, -1, 1_000_000_001])
    def test_amount_out_of_range(self, amount: float) -> None:
        with pytest.raises(ValidationException) as exc_info:
            _transaction(amount=amount)
        assert exc_info.value.details == {"field": "amount"}

    def test_description_too_long(self) -> None:
        with pytest.raises(ValidationException):
            _transaction(description="x" * 201)


class TestCategoryEntity:
    def test_rejects_bad_color(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            CategoryEntity(
                id="c1", user_id="u1", name="Food", type=TransactionType.EXPENSE,
                created_at=NOW, color="red",
            )
        assert exc_info.value.details["field"] == "color"

    def test_rejects_blank_name(self) -> None:
        with pytest.raises(ValidationException):
            CategoryEntity(
                id="c1", user_id="u1", name="  ", type=TransactionType.EXPENSE, created_at=NOW
            )


class TestUserEntity:
    def test_user_without_password_hash_cannot_use_password(self) -> None:
        user = UserEntity(id="u1", email="a@b.co", name="Ann", created_at=NOW)
        assert not user.can_use_password_login()

    def test_currency_must_be_three_letters(self) -> None:
        with pytest.raises(ValidationException):
            UserEntity(id="u1", email="a@b.co", name="Ann", created_at=NOW, currency="EURO")


class TestP2PTransitions:
    def _record(self, status: P2PStatus) -> P2PTransactionEntity:
        return P2PTransactionEntity(
            id="p1", user_id="u1", counterparty="Sam", direction=P2PDirection.LENT,
            amount=5.0, date=NOW, created_at=NOW, status=status,
        )

    @pytest.mark.parametrize("target", [P2PStatus.SETTLED, P2PStatus.CANCELLED])
    def test_pending_can_close(self, target: P2PStatus) -> None:
        self._record(P2PStatus.PENDING).check_transition(target)

    @pytest.mark.parametrize("current", [P2PStatus.SETTLED, P2PStatus.CANCELLED])
    def test_closed_records_are_final(self, current: P2PStatus) -> None:
        with pytest.raises(InvalidStatusTransitionException):
            self._record(current).check_transition(P2PStatus.PENDING)
