"""
ExpenseService -- expense records and their approval workflow.

Responsibility:
    Validates expense input, delegates persistence to an
    ``ExpenseRepository`` and drives status changes through the
    expense state machine.

Architecture position:
    Kernel > Services -- imperative shell over the pure domain layer.

Invariants:
    - Nothing reaches the repository unless every field rule passes.
    - Status changes happen only through ``approve``/``reject`` of the
      state machine, then ``update_status``.
    - Details of a non-pending expense are never updated.

Failure modes:
    - ``ValidationError`` -- field rules violated (all violations listed).
    - ``ExpenseNotFoundError`` -- approve/reject/update of a missing id.
    - ``UserNotFoundError`` / ``CategoryNotFoundError`` -- create with a
      dangling reference, when the service is wired with those
      repositories.
    - ``InvalidTransitionError`` / ``ExpenseNotEditableError`` -- from
      the state machine.
    - ``ServiceError`` -- repository failure, logged and translated.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from expense_kernel.domain.entities import Expense
from expense_kernel.domain.expense_status import (
    APPROVE,
    REJECT,
    ExpenseStatus,
    apply_action,
    parse_status,
)
from expense_kernel.domain.validators import (
    to_amount,
    validate_amount,
    validate_description,
    validate_expense,
    validate_expense_update,
    validate_title,
)
from expense_kernel.domain.violations import Violation, ViolationCode
from expense_kernel.exceptions import (
    CategoryNotFoundError,
    ExpenseNotEditableError,
    ExpenseNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from expense_kernel.logging_config import get_logger
from expense_kernel.repositories.base import (
    CategoryRepository,
    ExpenseChanges,
    ExpenseDraft,
    ExpenseRepository,
    UserRepository,
)
from expense_kernel.services.base import BaseService

logger = get_logger("services.expense")


class ExpenseService(BaseService):
    """
    Expense use cases.

    ``users`` and ``categories`` are optional; when given, creation
    checks that the referenced user and category exist.
    """

    def __init__(
        self,
        expenses: ExpenseRepository,
        *,
        users: UserRepository | None = None,
        categories: CategoryRepository | None = None,
        default_currency: str = "JPY",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.expenses = expenses
        self.users = users
        self.categories = categories
        self.default_currency = default_currency

    # -- Validation ----------------------------------------------------------

    def validate_expense(
        self,
        user_id: str | None,
        category_id: str | None,
        amount: Any,
        title: str | None,
        date: date | datetime | None,
        description: str | None = None,
        currency: str | None = None,
    ) -> list[Violation]:
        return validate_expense(
            user_id=user_id,
            category_id=category_id,
            amount=amount,
            title=title,
            date=date,
            description=description,
            currency=currency or self.default_currency,
            clock=self.clock,
            limits=self.limits,
        )

    def validate_expense_update(
        self,
        category_id: str | None,
        amount: Any,
        title: str | None,
        date: date | datetime | None,
        description: str | None = None,
    ) -> list[Violation]:
        return validate_expense_update(
            category_id=category_id,
            amount=amount,
            title=title,
            date=date,
            description=description,
            clock=self.clock,
            limits=self.limits,
        )

    def validate_amount(self, amount: Any) -> list[Violation]:
        return validate_amount(amount, self.limits)

    def validate_title(self, title: str | None) -> list[Violation]:
        return validate_title(title, self.limits)

    def validate_description(self, description: str | None) -> list[Violation]:
        return validate_description(description, self.limits)

    # -- Queries -------------------------------------------------------------

    async def list_expenses(self) -> list[Expense]:
        with self._repository_call("expense.fetch"):
            return await self.expenses.get_all()

    async def list_by_user(self, user_id: str) -> list[Expense]:
        with self._repository_call("expense.fetch"):
            return await self.expenses.get_by_user_id(user_id)

    async def list_by_user_and_status(
        self, user_id: str, status: str | ExpenseStatus
    ) -> list[Expense]:
        try:
            parsed = parse_status(status)
        except ValueError:
            raise ValidationError(
                [Violation(ViolationCode.STATUS_INVALID, "status")], self.locale
            ) from None
        with self._repository_call("expense.fetch"):
            return await self.expenses.get_by_user_and_status(user_id, parsed)

    async def list_by_category(self, category_id: str) -> list[Expense]:
        with self._repository_call("expense.fetch"):
            return await self.expenses.get_by_category_id(category_id)

    async def list_by_date_range(
        self, user_id: str, start: date, end: date
    ) -> list[Expense]:
        """Expenses of ``user_id`` dated in [start, end]; empty if start > end."""
        if start > end:
            return []
        with self._repository_call("expense.fetch"):
            return await self.expenses.get_by_date_range(user_id, start, end)

    async def get_expense(self, expense_id: str) -> Expense | None:
        with self._repository_call("expense.fetch", expense_id):
            return await self.expenses.get_by_id(expense_id)

    # -- Commands ------------------------------------------------------------

    async def create_expense(
        self,
        user_id: str,
        category_id: str,
        amount: Any,
        title: str,
        date: date | datetime,
        description: str | None = None,
        currency: str | None = None,
    ) -> Expense:
        currency = (currency or "").strip() or self.default_currency
        self._raise_if_invalid(
            self.validate_expense(
                user_id, category_id, amount, title, date, description, currency
            )
        )
        with self._repository_call("expense.create"):
            await self._check_references(user_id, category_id)
            expense = await self.expenses.create(
                ExpenseDraft(
                    user_id=user_id,
                    category_id=category_id,
                    amount=to_amount(amount),
                    title=title.strip(),
                    date=date,
                    description=description or "",
                    currency=currency.upper(),
                )
            )
        logger.info(
            "expense_created",
            extra={
                "expense_id": expense.id,
                "user_id": user_id,
                "amount": str(expense.amount),
                "currency": expense.currency,
            },
        )
        return expense

    async def update_expense(
        self,
        expense_id: str,
        category_id: str,
        amount: Any,
        title: str,
        date: date | datetime,
        description: str | None = None,
    ) -> Expense:
        self._raise_if_invalid(
            self.validate_expense_update(category_id, amount, title, date, description)
        )
        with self._repository_call("expense.update", expense_id):
            current = await self.expenses.get_by_id(expense_id)
            if current is None:
                raise ExpenseNotFoundError(expense_id)
            if not current.can_edit:
                raise ExpenseNotEditableError(expense_id, current.status.value)
            if self.categories is not None and category_id != current.category_id:
                if await self.categories.get_by_id(category_id) is None:
                    raise CategoryNotFoundError(category_id)
            expense = await self.expenses.update(
                expense_id,
                ExpenseChanges(
                    category_id=category_id,
                    amount=to_amount(amount),
                    title=title.strip(),
                    date=date,
                    description=description or "",
                ),
            )
        logger.info("expense_updated", extra={"expense_id": expense_id})
        return expense

    async def delete_expense(self, expense_id: str) -> None:
        with self._repository_call("expense.delete", expense_id):
            await self.expenses.delete(expense_id)
        logger.info("expense_deleted", extra={"expense_id": expense_id})

    async def approve_expense(self, expense_id: str) -> Expense:
        return await self._change_status(expense_id, APPROVE, "expense.approve")

    async def reject_expense(self, expense_id: str) -> Expense:
        return await self._change_status(expense_id, REJECT, "expense.reject")

    # -- Internals -----------------------------------------------------------

    async def _check_references(self, user_id: str, category_id: str) -> None:
        if self.users is not None and await self.users.get_by_id(user_id) is None:
            raise UserNotFoundError(user_id)
        if (
            self.categories is not None
            and await self.categories.get_by_id(category_id) is None
        ):
            raise CategoryNotFoundError(category_id)

    async def _change_status(
        self, expense_id: str, action: str, operation: str
    ) -> Expense:
        with self._repository_call(operation, expense_id):
            current = await self.expenses.get_by_id(expense_id)
            if current is None:
                raise ExpenseNotFoundError(expense_id)
            target = apply_action(current, action, self.clock.now())
            expense = await self.expenses.update_status(expense_id, target.status)
        logger.info(
            "expense_status_changed",
            extra={
                "expense_id": expense_id,
                "action": action,
                "from_status": current.status.value,
                "to_status": expense.status.value,
            },
        )
        return expense
