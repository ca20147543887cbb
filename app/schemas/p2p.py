"""Peer-to-peer debt API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import P2PDirection, P2PStatus


class P2PCreateRequest(BaseModel):
    counterparty: str = Field(..., min_length=1, max_length=100)
    direction: P2PDirection
    amount: float = Field(..., gt=0)
    date: datetime | None = None
    description: str = Field(default="", max_length=200)


class P2PStatusUpdateRequest(BaseModel):
    """Pending records may move to settled or cancelled."""

    status: P2PStatus


class P2PResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    counterparty: str
    direction: P2PDirection
    amount: float
    description: str
    status: P2PStatus
    date: datetime
    created_at: datetime
    settled_at: datetime | None = None


class P2PSummaryResponse(BaseModel):
    """Outstanding totals; net_balance > 0 means others owe the user."""

    model_config = ConfigDict(from_attributes=True)

    total_lent: float
    total_borrowed: float
    net_balance: float
    pending_count: int
    settled_count: int
    by_counterparty: dict[str, float] = Field(default_factory=dict)
