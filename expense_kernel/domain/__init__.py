"""
Pure domain layer: entities, validators, the expense state machine.

Nothing here performs I/O; the current time comes from an injected
``Clock``.
"""

from expense_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from expense_kernel.domain.entities import Category, Expense, User
from expense_kernel.domain.expense_status import (
    EXPENSE_WORKFLOW,
    ExpenseStatus,
    allowed_actions,
    approve,
    can_transition,
    reject,
)
from expense_kernel.domain.validators import DEFAULT_COLOR, ValidationLimits
from expense_kernel.domain.violations import ValidationResult, Violation, ViolationCode
from expense_kernel.domain.workflow import Transition, Workflow

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "User",
    "Category",
    "Expense",
    "ExpenseStatus",
    "EXPENSE_WORKFLOW",
    "approve",
    "reject",
    "allowed_actions",
    "can_transition",
    "DEFAULT_COLOR",
    "ValidationLimits",
    "Violation",
    "ViolationCode",
    "ValidationResult",
    "Transition",
    "Workflow",
]
