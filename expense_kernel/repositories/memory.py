"""In-memory repositories for tests and local wiring."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from uuid import uuid4

from expense_kernel.domain.clock import Clock, SystemClock
from expense_kernel.domain.entities import Category, Expense, User
from expense_kernel.domain.expense_status import ExpenseStatus
from expense_kernel.domain.validators import DEFAULT_LIMITS, ValidationLimits
from expense_kernel.exceptions import RecordNotFoundError
from expense_kernel.logging_config import get_logger
from expense_kernel.repositories.base import (
    CategoryDraft,
    ExpenseChanges,
    ExpenseDraft,
    UserDraft,
)

logger = get_logger("repositories.memory")


def _day(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


class _InMemoryStore:
    """Dict-backed store; insertion order is creation order.

    Entities are built with ``limits``, which must match the limits the
    services validate with.
    """

    entity_name = "record"

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        limits: ValidationLimits = DEFAULT_LIMITS,
    ):
        self._clock = clock or SystemClock()
        self._limits = limits
        self._records: dict = {}

    def _new_id(self) -> str:
        return str(uuid4())

    def _require(self, operation: str, record_id: str):
        record = self._records.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.entity_name}.{operation}", record_id)
        return record

    async def get_all(self) -> list:
        return list(self._records.values())

    async def get_by_id(self, record_id: str):
        return self._records.get(record_id)

    async def delete(self, record_id: str) -> None:
        self._require("delete", record_id)
        del self._records[record_id]
        logger.debug(
            "record_deleted",
            extra={"entity": self.entity_name, "record_id": record_id},
        )

    def __len__(self) -> int:
        return len(self._records)


class InMemoryUserRepository(_InMemoryStore):
    entity_name = "user"

    async def create(self, draft: UserDraft) -> User:
        now = self._clock.now()
        user = User(
            id=self._new_id(),
            name=draft.name,
            email=draft.email,
            created_at=now,
            updated_at=now,
            limits=self._limits,
        )
        self._records[user.id] = user
        return user

    async def update(self, user_id: str, draft: UserDraft) -> User:
        current = self._require("update", user_id)
        user = current.with_profile(draft.name, draft.email, self._clock.now())
        self._records[user_id] = user
        return user


class InMemoryCategoryRepository(_InMemoryStore):
    entity_name = "category"

    async def create(self, draft: CategoryDraft) -> Category:
        now = self._clock.now()
        category = Category(
            id=self._new_id(),
            name=draft.name,
            description=draft.description,
            color=draft.color,
            created_at=now,
            updated_at=now,
            limits=self._limits,
        )
        self._records[category.id] = category
        return category

    async def update(self, category_id: str, draft: CategoryDraft) -> Category:
        current = self._require("update", category_id)
        category = current.with_details(
            draft.name, draft.description, draft.color, self._clock.now()
        )
        self._records[category_id] = category
        return category


class InMemoryExpenseRepository(_InMemoryStore):
    entity_name = "expense"

    async def get_by_user_id(self, user_id: str) -> list[Expense]:
        return [e for e in self._records.values() if e.user_id == user_id]

    async def get_by_user_and_status(
        self, user_id: str, status: ExpenseStatus
    ) -> list[Expense]:
        return [
            e
            for e in self._records.values()
            if e.user_id == user_id and e.status is ExpenseStatus(status)
        ]

    async def get_by_category_id(self, category_id: str) -> list[Expense]:
        return [e for e in self._records.values() if e.category_id == category_id]

    async def get_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> list[Expense]:
        """Expenses of ``user_id`` dated within [start, end], inclusive."""
        return [
            e
            for e in self._records.values()
            if e.user_id == user_id and start <= _day(e.date) <= end
        ]

    async def create(self, draft: ExpenseDraft) -> Expense:
        now = self._clock.now()
        expense = Expense(
            id=self._new_id(),
            user_id=draft.user_id,
            category_id=draft.category_id,
            amount=draft.amount,
            title=draft.title,
            date=draft.date,
            description=draft.description,
            currency=draft.currency,
            status=ExpenseStatus.PENDING,
            created_at=now,
            updated_at=now,
            limits=self._limits,
        )
        self._records[expense.id] = expense
        return expense

    async def update(self, expense_id: str, changes: ExpenseChanges) -> Expense:
        current = self._require("update", expense_id)
        expense = replace(
            current,
            category_id=changes.category_id,
            amount=changes.amount,
            title=changes.title,
            date=changes.date,
            description=changes.description,
            updated_at=self._clock.now(),
            limits=self._limits,
        )
        self._records[expense_id] = expense
        return expense

    async def update_status(self, expense_id: str, status: ExpenseStatus) -> Expense:
        current = self._require("update_status", expense_id)
        expense = current.with_status(ExpenseStatus(status), self._clock.now())
        self._records[expense_id] = expense
        return expense
