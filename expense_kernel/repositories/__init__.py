"""Repository protocols, draft payloads and in-memory implementations."""

from expense_kernel.repositories.base import (
    CategoryDraft,
    CategoryRepository,
    ExpenseChanges,
    ExpenseDraft,
    ExpenseRepository,
    UserDraft,
    UserRepository,
)
from expense_kernel.repositories.memory import (
    InMemoryCategoryRepository,
    InMemoryExpenseRepository,
    InMemoryUserRepository,
)

__all__ = [
    "UserDraft",
    "CategoryDraft",
    "ExpenseDraft",
    "ExpenseChanges",
    "UserRepository",
    "CategoryRepository",
    "ExpenseRepository",
    "InMemoryUserRepository",
    "InMemoryCategoryRepository",
    "InMemoryExpenseRepository",
]
