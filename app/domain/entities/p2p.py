"""Peer-to-peer debt entity (money lent to or borrowed from a person)."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import P2PDirection, P2PStatus
from app.domain.exceptions import InvalidStatusTransitionException, ValidationException

_ALLOWED_TRANSITIONS: dict[P2PStatus, frozenset[P2PStatus]] = {
    P2PStatus.PENDING: frozenset({P2PStatus.SETTLED, P2PStatus.CANCELLED}),
    P2PStatus.SETTLED: frozenset(),
    P2PStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class P2PTransactionEntity:
    """A debt between the user and a named counterparty."""

    id: str
    user_id: str
    counterparty: str
    direction: P2PDirection
    amount: float
    date: datetime
    created_at: datetime
    status: P2PStatus = P2PStatus.PENDING
    description: str = ""
    settled_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.user_id:
            raise ValidationException("P2P record must belong to a user", field="user_id")
        if not self.counterparty.strip():
            raise ValidationException("Counterparty is required", field="counterparty")
        if self.amount <= 0:
            raise ValidationException("Amount must be greater than 0", field="amount")

    def check_transition(self, new_status: P2PStatus) -> None:
        """Raise InvalidStatusTransitionException unless new_status is reachable."""
        if new_status not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransitionException(self.status.value, new_status.value)
