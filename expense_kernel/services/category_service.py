"""CategoryService -- validated category management."""

from __future__ import annotations

from expense_kernel.domain.entities import Category
from expense_kernel.domain.validators import DEFAULT_COLOR, validate_category
from expense_kernel.domain.violations import Violation
from expense_kernel.logging_config import get_logger
from expense_kernel.repositories.base import CategoryDraft, CategoryRepository
from expense_kernel.services.base import BaseService

logger = get_logger("services.category")


class CategoryService(BaseService):
    """
    Create, update, delete and list expense categories.

    An omitted color falls back to ``default_color`` (``#3b82f6`` unless
    configured otherwise); an omitted description is stored as "".
    """

    def __init__(
        self,
        categories: CategoryRepository,
        *,
        default_color: str = DEFAULT_COLOR,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.categories = categories
        self.default_color = default_color

    def _draft(
        self, name: str, description: str | None, color: str | None
    ) -> CategoryDraft:
        return CategoryDraft(
            name=name.strip(),
            description=description or "",
            color=color or self.default_color,
        )

    def validate_category(
        self,
        name: str | None,
        description: str | None = None,
        color: str | None = None,
    ) -> list[Violation]:
        return validate_category(name, description, color, self.limits)

    async def list_categories(self) -> list[Category]:
        with self._repository_call("category.fetch"):
            return await self.categories.get_all()

    async def get_category(self, category_id: str) -> Category | None:
        with self._repository_call("category.fetch", category_id):
            return await self.categories.get_by_id(category_id)

    async def create_category(
        self,
        name: str,
        description: str | None = None,
        color: str | None = None,
    ) -> Category:
        self._raise_if_invalid(self.validate_category(name, description, color))
        with self._repository_call("category.create"):
            category = await self.categories.create(
                self._draft(name, description, color)
            )
        logger.info(
            "category_created",
            extra={"category_id": category.id, "category_name": category.name},
        )
        return category

    async def update_category(
        self,
        category_id: str,
        name: str,
        description: str | None = None,
        color: str | None = None,
    ) -> Category:
        self._raise_if_invalid(self.validate_category(name, description, color))
        with self._repository_call("category.update", category_id):
            category = await self.categories.update(
                category_id, self._draft(name, description, color)
            )
        logger.info("category_updated", extra={"category_id": category_id})
        return category

    async def delete_category(self, category_id: str) -> None:
        with self._repository_call("category.delete", category_id):
            await self.categories.delete(category_id)
        logger.info("category_deleted", extra={"category_id": category_id})
