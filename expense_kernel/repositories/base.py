"""
Repository contracts -- the persistence collaborator boundary.

The backend is reached through these async protocols only.  Payloads for
create and update are frozen drafts; results are domain entities.

Contract:
    - ``get_by_id`` returns ``None`` when no record has the id.
    - ``update``/``delete`` of an unknown id raise ``RecordNotFoundError``.
    - Any other backend failure surfaces as ``RepositoryError``.
    - List operations return entities in creation order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol, runtime_checkable

from expense_kernel.domain.entities import Category, Expense, User
from expense_kernel.domain.expense_status import ExpenseStatus


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UserDraft:
    name: str
    email: str


@dataclass(frozen=True)
class CategoryDraft:
    name: str
    description: str = ""
    color: str = "#3b82f6"


@dataclass(frozen=True)
class ExpenseDraft:
    user_id: str
    category_id: str
    amount: Decimal
    title: str
    date: date
    description: str = ""
    currency: str = "JPY"


@dataclass(frozen=True)
class ExpenseChanges:
    """Editable expense fields; owner, currency and status are excluded."""
    category_id: str
    amount: Decimal
    title: str
    date: date
    description: str = ""


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class UserRepository(Protocol):
    async def get_all(self) -> list[User]: ...

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def create(self, draft: UserDraft) -> User: ...

    async def update(self, user_id: str, draft: UserDraft) -> User: ...

    async def delete(self, user_id: str) -> None: ...


@runtime_checkable
class CategoryRepository(Protocol):
    async def get_all(self) -> list[Category]: ...

    async def get_by_id(self, category_id: str) -> Category | None: ...

    async def create(self, draft: CategoryDraft) -> Category: ...

    async def update(self, category_id: str, draft: CategoryDraft) -> Category: ...

    async def delete(self, category_id: str) -> None: ...


@runtime_checkable
class ExpenseRepository(Protocol):
    async def get_all(self) -> list[Expense]: ...

    async def get_by_id(self, expense_id: str) -> Expense | None: ...

    async def get_by_user_id(self, user_id: str) -> list[Expense]: ...

    async def get_by_user_and_status(
        self, user_id: str, status: ExpenseStatus
    ) -> list[Expense]: ...

    async def get_by_category_id(self, category_id: str) -> list[Expense]: ...

    async def get_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> list[Expense]: ...

    async def create(self, draft: ExpenseDraft) -> Expense: ...

    async def update(self, expense_id: str, changes: ExpenseChanges) -> Expense: ...

    async def update_status(self, expense_id: str, status: ExpenseStatus) -> Expense: ...

    async def delete(self, expense_id: str) -> None: ...
