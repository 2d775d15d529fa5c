"""
Expense status state machine.

Responsibility:
    Declares the expense lifecycle as a ``Workflow`` and applies its
    transitions to ``Expense`` entities.

        pending --approve--> approved
        pending --reject---> rejected

Invariants:
    - ``pending`` is the initial state and the only editable state.
    - ``approved`` and ``rejected`` are terminal; no action leaves them.
    - A refused transition raises ``InvalidTransitionError`` and the
      expense passed in is left unchanged (entities are immutable).

Failure modes:
    - ``InvalidTransitionError`` when ``approve``/``reject`` is applied
      outside ``pending``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from expense_kernel.domain.workflow import Transition, Workflow
from expense_kernel.exceptions import InvalidTransitionError

if TYPE_CHECKING:
    from expense_kernel.domain.entities import Expense


class ExpenseStatus(str, Enum):
    """Closed set of expense statuses."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


APPROVE = "approve"
REJECT = "reject"

EXPENSE_WORKFLOW = Workflow(
    name="expense",
    description="Expense approval lifecycle",
    initial_state=ExpenseStatus.PENDING.value,
    states=tuple(s.value for s in ExpenseStatus),
    transitions=(
        Transition(
            ExpenseStatus.PENDING.value, ExpenseStatus.APPROVED.value, action=APPROVE
        ),
        Transition(
            ExpenseStatus.PENDING.value, ExpenseStatus.REJECTED.value, action=REJECT
        ),
    ),
    terminal_states=(ExpenseStatus.APPROVED.value, ExpenseStatus.REJECTED.value),
)

EDITABLE_STATUSES: frozenset[ExpenseStatus] = frozenset({ExpenseStatus.PENDING})


def parse_status(value: str | ExpenseStatus) -> ExpenseStatus:
    """Return the ``ExpenseStatus`` for ``value``.

    Raises:
        ValueError: If ``value`` is not a known status.
    """
    return ExpenseStatus(value)


def allowed_actions(status: ExpenseStatus | str) -> tuple[str, ...]:
    return EXPENSE_WORKFLOW.actions_from(ExpenseStatus(status).value)


def can_transition(status: ExpenseStatus | str, action: str) -> bool:
    return EXPENSE_WORKFLOW.find_transition(ExpenseStatus(status).value, action) is not None


def is_editable(status: ExpenseStatus | str) -> bool:
    return ExpenseStatus(status) in EDITABLE_STATUSES


def next_status(expense: Expense, action: str) -> ExpenseStatus:
    """Resolve the status ``action`` leads to from the expense's status."""
    transition = EXPENSE_WORKFLOW.find_transition(expense.status.value, action)
    if transition is None:
        raise InvalidTransitionError(expense.id, expense.status.value, action)
    return ExpenseStatus(transition.to_state)


def apply_action(
    expense: Expense, action: str, at: datetime | None = None
) -> Expense:
    """Return a copy of ``expense`` moved along ``action``."""
    return expense.with_status(next_status(expense, action), updated_at=at)


def approve(expense: Expense, at: datetime | None = None) -> Expense:
    return apply_action(expense, APPROVE, at)


def reject(expense: Expense, at: datetime | None = None) -> Expense:
    return apply_action(expense, REJECT, at)
