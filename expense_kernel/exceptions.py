"""
Typed exception hierarchy for the expense kernel.

Every exception carries a ``code`` class attribute (machine-readable,
API-safe) and stores its context as attributes, so callers catch by type
and read structured data instead of parsing message strings.

    ExpenseKernelError (base)
    |
    +-- ValidationError
    |
    +-- NotFoundError
    |   +-- UserNotFoundError
    |   +-- CategoryNotFoundError
    |   +-- ExpenseNotFoundError
    |
    +-- TransitionError
    |   +-- InvalidTransitionError
    |   +-- ExpenseNotEditableError
    |
    +-- TransportError
    |   +-- RepositoryError
    |       +-- RecordNotFoundError
    |
    +-- ServiceError

Code                    | When Raised
------------------------|----------------------------------------------
VALIDATION_FAILED       | One or more field rules violated
USER_NOT_FOUND          | Referenced user does not exist
CATEGORY_NOT_FOUND      | Referenced category does not exist
EXPENSE_NOT_FOUND       | Expense to transition does not exist
INVALID_TRANSITION      | approve/reject outside the pending state
EXPENSE_NOT_EDITABLE    | Details edited after approval or rejection
REPOSITORY_ERROR        | Opaque failure from the persistence backend
RECORD_NOT_FOUND        | Backend update/delete of an unknown id
SERVICE_ERROR           | Transport failure translated for the user

Handling policy:

* ``ValidationError`` and ``TransitionError`` reach the caller unchanged;
  their messages are meant for the user.
* ``TransportError`` is logged by the service layer and replaced by a
  ``ServiceError`` carrying a generic localized message. The underlying
  exception is chained as ``__cause__``.
* Nothing is retried automatically.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from expense_kernel.domain.violations import Violation


class ExpenseKernelError(Exception):
    """
    Base exception for all expense kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "EXPENSE_KERNEL_ERROR"


# Validation


class ValidationError(ExpenseKernelError):
    """
    One or more validation rules were violated.

    The message is the violation messages joined with ", ", rendered in
    ``locale``. ``violations`` keeps the typed codes for callers that
    localize or map fields themselves.
    """

    code: str = "VALIDATION_FAILED"

    def __init__(self, violations: Sequence[Violation], locale: str = "en"):
        self.violations = tuple(violations)
        self.locale = locale
        super().__init__(", ".join(self.messages))

    @property
    def messages(self) -> list[str]:
        return [v.render(self.locale) for v in self.violations]

    @property
    def violation_codes(self) -> list[str]:
        return [v.code.value for v in self.violations]


# Lookup


class NotFoundError(ExpenseKernelError):
    """Base exception for a referenced entity that does not exist."""

    code: str = "NOT_FOUND"


class UserNotFoundError(NotFoundError):
    """User with given ID was not found."""

    code: str = "USER_NOT_FOUND"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class CategoryNotFoundError(NotFoundError):
    """Category with given ID was not found."""

    code: str = "CATEGORY_NOT_FOUND"

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Category not found: {category_id}")


class ExpenseNotFoundError(NotFoundError):
    """Expense with given ID was not found."""

    code: str = "EXPENSE_NOT_FOUND"

    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"Expense not found: {expense_id}")


# Status transitions


class TransitionError(ExpenseKernelError):
    """Base exception for status-change failures."""

    code: str = "TRANSITION_ERROR"


class InvalidTransitionError(TransitionError):
    """
    The requested action is not allowed from the expense's current status.

    Only pending expenses can be approved or rejected; approved and
    rejected are terminal.
    """

    code: str = "INVALID_TRANSITION"

    def __init__(self, expense_id: str, from_status: str, action: str):
        self.expense_id = expense_id
        self.from_status = from_status
        self.action = action
        super().__init__(
            f"Cannot {action} expense {expense_id}: status is {from_status}"
        )


class ExpenseNotEditableError(TransitionError):
    """Expense details can only change while the expense is pending."""

    code: str = "EXPENSE_NOT_EDITABLE"

    def __init__(self, expense_id: str, status: str):
        self.expense_id = expense_id
        self.status = status
        super().__init__(
            f"Expense {expense_id} cannot be edited: status is {status}"
        )


# Transport


class TransportError(ExpenseKernelError):
    """Base exception for opaque failures from the persistence backend."""

    code: str = "TRANSPORT_ERROR"


class RepositoryError(TransportError):
    """A repository call failed."""

    code: str = "REPOSITORY_ERROR"

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"Repository operation failed: {operation}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class RecordNotFoundError(RepositoryError):
    """The backend has no record with the given id."""

    code: str = "RECORD_NOT_FOUND"

    def __init__(self, operation: str, record_id: str):
        self.record_id = record_id
        super().__init__(operation, f"no record with id {record_id}")


# Service boundary


class ServiceError(ExpenseKernelError):
    """
    A transport failure translated into a generic, localized message.

    ``operation`` is the catalog key of the failed operation
    (e.g. ``"expense.create"``); ``str(error)`` is the user-facing text.
    """

    code: str = "SERVICE_ERROR"

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(message)
