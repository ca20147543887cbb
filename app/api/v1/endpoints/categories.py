"""Category API: list, create, update, delete the user's categories."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import CurrentUser, get_category_service
from app.application.services import CategoryService
from app.core.limiter import limit_writes
from app.domain.enums import TransactionType
from app.schemas.category import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
)

router = APIRouter()

CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    current_user: CurrentUser,
    category_service: CategoryServiceDep,
    type: Annotated[TransactionType | None, Query()] = None,
):
    """List categories, optionally only income or expense."""
    categories = await category_service.list_categories(current_user.id, type)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post("", response_model=CategoryResponse, status_code=201)
@limit_writes
async def create_category(
    request: Request,
    body: CategoryCreateRequest,
    current_user: CurrentUser,
    category_service: CategoryServiceDep,
):
    category = await category_service.create_category(
        current_user.id, body.name, body.type, color=body.color, icon=body.icon
    )
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse)
@limit_writes
async def update_category(
    request: Request,
    category_id: str,
    body: CategoryUpdateRequest,
    current_user: CurrentUser,
    category_service: CategoryServiceDep,
):
    category = await category_service.update_category(
        current_user.id, category_id, name=body.name, color=body.color, icon=body.icon
    )
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=204)
@limit_writes
async def delete_category(
    request: Request,
    category_id: str,
    current_user: CurrentUser,
    category_service: CategoryServiceDep,
):
    """Delete a category. 409 if transactions still use it."""
    await category_service.delete_category(current_user.id, category_id)
