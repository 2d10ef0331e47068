"""Category management API endpoints."""
from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import get_current_user, require_editor
from ..database import get_db
from ..schemas.category import CategoryResponse, CategoryListUpdate, CategoryDeleted
from ..services.categories import CATEGORIES_KEY, category_service
from ..utils.http import json_body
from ..utils.locks import write_locks

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """List categories in display order; "Home" is always first."""
    return await category_service.load(db)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=201,
    dependencies=[Depends(require_editor)],
)
async def create_category(payload: Any = Depends(json_body), db: AsyncSession = Depends(get_db)):
    """Append a new category."""
    async with write_locks.hold(CATEGORIES_KEY):
        return await category_service.create(db, payload)


@router.put("", response_model=CategoryListUpdate, dependencies=[Depends(require_editor)])
async def replace_categories(payload: Any = Depends(json_body), db: AsyncSession = Depends(get_db)):
    """Replace the whole ordered list (used for reordering)."""
    async with write_locks.hold(CATEGORIES_KEY):
        categories = await category_service.replace_all(db, payload)
    return CategoryListUpdate(categories=categories)


@router.get("/{name}", response_model=CategoryResponse)
async def get_category(name: str, db: AsyncSession = Depends(get_db)):
    """Get a category by name."""
    return await category_service.get(db, name)


# PUT and PATCH are the same partial update
@router.api_route(
    "/{name}",
    methods=["PUT", "PATCH"],
    response_model=CategoryResponse,
    dependencies=[Depends(require_editor)],
)
async def update_category(name: str, payload: Any = Depends(json_body), db: AsyncSession = Depends(get_db)):
    """Update name, description or visibility of a category."""
    async with write_locks.hold(CATEGORIES_KEY):
        return await category_service.update(db, name, payload)


@router.delete("/{name}", response_model=CategoryDeleted, dependencies=[Depends(require_editor)])
async def delete_category(name: str, db: AsyncSession = Depends(get_db)):
    """Delete a category. "Home" cannot be deleted."""
    async with write_locks.hold(CATEGORIES_KEY):
        deleted = await category_service.delete(db, name)
    return CategoryDeleted(
        message=f"Category '{name}' deleted successfully",
        deleted=deleted,
    )
