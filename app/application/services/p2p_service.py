"""Peer-to-peer debt service: money lent to and borrowed from people."""

from __future__ import annotations

import dataclasses
from collections import defaultdict
from datetime import datetime
from typing import TYPE_CHECKING

from app.application.dtos.analytics import P2PSummary
from app.domain.entities import P2PTransactionEntity
from app.domain.enums import P2PDirection, P2PStatus
from app.domain.exceptions import ResourceNotFoundException
from app.shared.utils import clean_text, ensure_utc, generate_id, utc_now

if TYPE_CHECKING:
    from app.application.interfaces import IP2PRepository


class P2PService:
    def __init__(self, p2p_repo: IP2PRepository) -> None:
        self._p2p_repo = p2p_repo

    async def list_records(
        self,
        user_id: str,
        status: P2PStatus | None = None,
        limit: int | None = None,
    ) -> list[P2PTransactionEntity]:
        records = await self._p2p_repo.list_by_user(user_id, status)
        return records[:limit] if limit else records

    async def create_record(
        self,
        user_id: str,
        counterparty: str,
        direction: P2PDirection,
        amount: float,
        date: datetime | None = None,
        description: str = "",
    ) -> P2PTransactionEntity:
        now = utc_now()
        record = P2PTransactionEntity(
            id=generate_id(),
            user_id=user_id,
            counterparty=clean_text(counterparty),
            direction=direction,
            amount=round(amount, 2),
            date=ensure_utc(date) or now,
            created_at=now,
            description=clean_text(description),
        )
        return await self._p2p_repo.save(record)

    async def update_status(
        self, user_id: str, p2p_id: str, status: P2PStatus
    ) -> P2PTransactionEntity:
        """Settle or cancel a pending record."""
        record = await self._p2p_repo.get(user_id, p2p_id)
        if record is None:
            raise ResourceNotFoundException("p2p transaction", p2p_id)
        record.check_transition(status)
        settled_at = utc_now() if status == P2PStatus.SETTLED else None
        return await self._p2p_repo.save(
            dataclasses.replace(record, status=status, settled_at=settled_at)
        )

    async def summary(self, user_id: str) -> P2PSummary:
        """Totals over pending records; net_balance > 0 means others owe the user."""
        records = await self._p2p_repo.list_by_user(user_id)
        lent = borrowed = 0.0
        pending = settled = 0
        by_counterparty: dict[str, float] = defaultdict(float)
        for r in records:
            if r.status == P2PStatus.SETTLED:
                settled += 1
                continue
            if r.status != P2PStatus.PENDING:
                continue
            pending += 1
            if r.direction == P2PDirection.LENT:
                lent += r.amount
                by_counterparty[r.counterparty] += r.amount
            else:
                borrowed += r.amount
                by_counterparty[r.counterparty] -= r.amount
        return P2PSummary(
            total_lent=round(lent, 2),
            total_borrowed=round(borrowed, 2),
            net_balance=round(lent - borrowed, 2),
            pending_count=pending,
            settled_count=settled,
            by_counterparty={k: round(v, 2) for k, v in sorted(by_counterparty.items())},
        )
