"""Transaction API: income/expense records and peer-to-peer debts.

Literal sub-paths (``/bulk``, ``/p2p``, ``/categories``) are declared before
``/{transaction_id}`` so they are not captured as transaction ids.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    CurrentUser,
    get_category_service,
    get_p2p_service,
    get_transaction_service,
)
from app.application.dtos.transaction import TransactionFilter
from app.application.services import CategoryService, P2PService, TransactionService
from app.core.limiter import limit_writes
from app.domain.enums import P2PStatus, TransactionType
from app.schemas.category import CategoryResponse
from app.schemas.p2p import (
    P2PCreateRequest,
    P2PResponse,
    P2PStatusUpdateRequest,
    P2PSummaryResponse,
)
from app.schemas.transaction import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionResponse,
)
from app.shared.utils import end_of_day, start_of_day

router = APIRouter()

TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
P2PServiceDep = Annotated[P2PService, Depends(get_p2p_service)]


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    current_user: CurrentUser,
    transaction_service: TransactionServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    type: TransactionType | None = None,
    category_id: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
):
    """List transactions newest first, filtered and paginated."""
    filters = TransactionFilter(
        type=type,
        category_id=category_id,
        start=start_of_day(start_date) if start_date else None,
        end=end_of_day(end_date) if end_date else None,
        search=search,
    )
    result = await transaction_service.list_transactions(
        current_user.id, filters, page=page, limit=limit
    )
    return TransactionListResponse.from_page(result)


@router.post("", response_model=TransactionResponse, status_code=201)
@limit_writes
async def create_transaction(
    request: Request,
    body: TransactionCreateRequest,
    current_user: CurrentUser,
    transaction_service: TransactionServiceDep,
):
    item = await transaction_service.create_transaction(
        current_user.id,
        type=body.type,
        amount=body.amount,
        category_id=body.category_id,
        date=body.date,
        description=body.description,
    )
    return TransactionResponse.from_item(item)


@router.delete("/bulk", response_model=BulkDeleteResponse)
@limit_writes
async def bulk_delete_transactions(
    request: Request,
    body: BulkDeleteRequest,
    current_user: CurrentUser,
    transaction_service: TransactionServiceDep,
):
    """Delete several transactions at once; ids of other users' records are ignored."""
    deleted = await transaction_service.bulk_delete(current_user.id, body.ids)
    return BulkDeleteResponse(deleted=deleted)


@router.get("/p2p", response_model=list[P2PResponse])
async def list_p2p(
    current_user: CurrentUser,
    p2p_service: P2PServiceDep,
    status: P2PStatus | None = None,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
):
    records = await p2p_service.list_records(current_user.id, status=status, limit=limit)
    return [P2PResponse.model_validate(r) for r in records]


@router.post("/p2p", response_model=P2PResponse, status_code=201)
@limit_writes
async def create_p2p(
    request: Request,
    body: P2PCreateRequest,
    current_user: CurrentUser,
    p2p_service: P2PServiceDep,
):
    record = await p2p_service.create_record(
        current_user.id,
        counterparty=body.counterparty,
        direction=body.direction,
        amount=body.amount,
        date=body.date,
        description=body.description,
    )
    return P2PResponse.model_validate(record)


@router.get("/p2p/summary", response_model=P2PSummaryResponse)
async def p2p_summary(current_user: CurrentUser, p2p_service: P2PServiceDep):
    summary = await p2p_service.summary(current_user.id)
    return P2PSummaryResponse.model_validate(summary)


@router.patch("/p2p/{p2p_id}/status", response_model=P2PResponse)
@limit_writes
async def update_p2p_status(
    request: Request,
    p2p_id: str,
    body: P2PStatusUpdateRequest,
    current_user: CurrentUser,
    p2p_service: P2PServiceDep,
):
    """Settle or cancel a pending debt. 409 if it is already settled or cancelled."""
    record = await p2p_service.update_status(current_user.id, p2p_id, body.status)
    return P2PResponse.model_validate(record)


@router.get("/categories", response_model=list[CategoryResponse])
async def list_transaction_categories(
    current_user: CurrentUser,
    category_service: CategoryServiceDep,
    type: Annotated[TransactionType | None, Query()] = None,
):
    """Same as GET /categories; shares its cache entries."""
    categories = await category_service.list_categories(current_user.id, type)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    current_user: CurrentUser,
    transaction_service: TransactionServiceDep,
):
    item = await transaction_service.get_transaction(current_user.id, transaction_id)
    return TransactionResponse.from_item(item)


@router.put("/{transaction_id}", response_model=TransactionResponse)
@limit_writes
async def update_transaction(
    request: Request,
    transaction_id: str,
    body: TransactionCreateRequest,
    current_user: CurrentUser,
    transaction_service: TransactionServiceDep,
):
    item = await transaction_service.update_transaction(
        current_user.id,
        transaction_id,
        type=body.type,
        amount=body.amount,
        category_id=body.category_id,
        date=body.date,
        description=body.description,
    )
    return TransactionResponse.from_item(item)


@router.delete("/{transaction_id}", status_code=204)
@limit_writes
async def delete_transaction(
    request: Request,
    transaction_id: str,
    current_user: CurrentUser,
    transaction_service: TransactionServiceDep,
):
    await transaction_service.delete_transaction(current_user.id, transaction_id)
