"""Category collection policy.

Categories live as one ordered JSON array in site data. The "Home" category is
the built-in default: it always exists, always comes first, and can be neither
renamed nor deleted.
"""
import json
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import BadRequest, Conflict, NotFound
from ..models import SiteData
from ..schemas.category import CategoryCreate, CategoryEntry, CategoryUpdate
from ..utils.db_utils import retry_on_lock
from .merger import MergeRules, merge

logger = logging.getLogger(__name__)

CATEGORIES_KEY = "categories"
HOME = "Home"


def default_home() -> Dict[str, Any]:
    return {"name": HOME, "description": "Monitors for Home Page", "isHidden": False}


def _home_is_protected(record) -> tuple:
    return ("name",) if record.get("name") == HOME else ()


CATEGORY_RULES = MergeRules(
    model=CategoryUpdate,
    protected=_home_is_protected,
    protected_message="Cannot rename the 'Home' category",
)
CREATE_RULES = replace(CATEGORY_RULES, model=CategoryCreate)
ENTRY_RULES = replace(CATEGORY_RULES, model=CategoryEntry)

# Shape every stored category is normalized onto
_BLANK = {"name": "", "description": "", "isHidden": False}


class CategoryService:
    """Reads and writes the category collection."""

    async def load(self, db: AsyncSession) -> List[Dict[str, Any]]:
        """Return the stored categories, or the lone default when none are stored."""
        result = await db.execute(select(SiteData).where(SiteData.key == CATEGORIES_KEY))
        row = result.scalar_one_or_none()
        if row is None:
            return [default_home()]

        categories = json.loads(row.value)
        if not categories:
            return [default_home()]
        return categories

    async def save(self, db: AsyncSession, categories: List[Dict[str, Any]]) -> None:
        value = json.dumps(categories)
        result = await db.execute(select(SiteData).where(SiteData.key == CATEGORIES_KEY))
        row = result.scalar_one_or_none()
        if row:
            row.value = value
        else:
            db.add(SiteData(key=CATEGORIES_KEY, value=value))
        await retry_on_lock(db.commit)

    @staticmethod
    def _index_of(categories: List[Dict[str, Any]], name: str) -> Optional[int]:
        for index, category in enumerate(categories):
            if category.get("name") == name:
                return index
        return None

    async def get(self, db: AsyncSession, name: str) -> Dict[str, Any]:
        categories = await self.load(db)
        index = self._index_of(categories, name)
        if index is None:
            raise NotFound(f"Category '{name}' not found")
        return categories[index]

    async def create(self, db: AsyncSession, payload: Any) -> Dict[str, Any]:
        """Append a new category; the default "Home" cannot be created twice."""
        category = merge(_BLANK, payload, CREATE_RULES)
        if category["name"] == HOME:
            raise BadRequest(
                "Cannot create a category named 'Home' - it already exists as the default category"
            )

        categories = await self.load(db)
        if self._index_of(categories, category["name"]) is not None:
            raise Conflict(f"Category '{category['name']}' already exists")

        categories.append(category)
        await self.save(db, categories)
        logger.info(f"Created category '{category['name']}'")
        return category

    def normalize_replacement(self, payload: Any) -> List[Dict[str, Any]]:
        """Validate a full replacement list without touching the store."""
        if not isinstance(payload, list):
            raise BadRequest("Request body must be an array of categories")

        categories = [merge(_BLANK, entry, ENTRY_RULES) for entry in payload]

        if not categories or categories[0]["name"] != HOME:
            raise BadRequest("First category must be 'Home'")

        names = [category["name"] for category in categories]
        if len(set(names)) != len(names):
            raise BadRequest("Category names must be unique")
        return categories

    async def replace_all(self, db: AsyncSession, payload: Any) -> List[Dict[str, Any]]:
        categories = self.normalize_replacement(payload)
        await self.save(db, categories)
        logger.info(f"Replaced category list ({len(categories)} categories)")
        return categories

    async def update(self, db: AsyncSession, name: str, payload: Any) -> Dict[str, Any]:
        """Merge ``payload`` onto the named category, keeping its position."""
        categories = await self.load(db)
        index = self._index_of(categories, name)
        if index is None:
            raise NotFound(f"Category '{name}' not found")

        updated = merge(categories[index], payload, CATEGORY_RULES)
        if updated["name"] != name and self._index_of(categories, updated["name"]) is not None:
            raise Conflict(f"Category '{updated['name']}' already exists")

        categories[index] = updated
        await self.save(db, categories)
        return updated

    async def delete(self, db: AsyncSession, name: str) -> Dict[str, Any]:
        if name == HOME:
            raise BadRequest("Cannot delete the 'Home' category")

        categories = await self.load(db)
        index = self._index_of(categories, name)
        if index is None:
            raise NotFound(f"Category '{name}' not found")

        deleted = categories.pop(index)
        await self.save(db, categories)
        logger.info(f"Deleted category '{name}'")
        return deleted


category_service = CategoryService()
