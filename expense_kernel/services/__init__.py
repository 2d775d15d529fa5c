"""Async application services."""

from expense_kernel.services.base import BaseService
from expense_kernel.services.category_service import CategoryService
from expense_kernel.services.expense_service import ExpenseService
from expense_kernel.services.user_service import UserService

__all__ = [
    "BaseService",
    "UserService",
    "CategoryService",
    "ExpenseService",
]
