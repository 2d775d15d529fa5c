"""
Expense status machine tests.

pending --approve--> approved
pending --reject---> rejected
approved, rejected: terminal
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from expense_kernel.domain.entities import Expense
from expense_kernel.domain.expense_status import (
    APPROVE,
    EXPENSE_WORKFLOW,
    REJECT,
    ExpenseStatus,
    allowed_actions,
    approve,
    can_transition,
    is_editable,
    parse_status,
    reject,
)
from expense_kernel.exceptions import InvalidTransitionError, TransitionError


def expense_in(status: ExpenseStatus) -> Expense:
    return Expense(
        id="e-1",
        user_id="u-1",
        category_id="c-1",
        amount=Decimal("500"),
        title="Taxi",
        date=date(2024, 6, 1),
        status=status,
    )


class TestWorkflowDeclaration:
    """The lifecycle is declared as a Workflow value object."""

    def test_states(self):
        assert EXPENSE_WORKFLOW.states == ("pending", "approved", "rejected")
        assert EXPENSE_WORKFLOW.initial_state == "pending"
        assert set(EXPENSE_WORKFLOW.terminal_states) == {"approved", "rejected"}

    def test_terminal_states_have_no_outgoing_transitions(self):
        for state in EXPENSE_WORKFLOW.terminal_states:
            assert EXPENSE_WORKFLOW.transitions_from(state) == ()

    def test_every_state_reachable(self):
        reachable = {EXPENSE_WORKFLOW.initial_state}
        reachable |= {t.to_state for t in EXPENSE_WORKFLOW.transitions}
        assert reachable == set(EXPENSE_WORKFLOW.states)


class TestTransitions:

    def test_approve_from_pending(self):
        pending = expense_in(ExpenseStatus.PENDING)
        approved = approve(pending)
        assert approved.status is ExpenseStatus.APPROVED
        assert pending.status is ExpenseStatus.PENDING
        assert approved == pending

    def test_reject_from_pending(self):
        assert reject(expense_in(ExpenseStatus.PENDING)).status is ExpenseStatus.REJECTED

    def test_transition_stamps_time(self):
        at = datetime(2024, 6, 2, tzinfo=timezone.utc)
        assert approve(expense_in(ExpenseStatus.PENDING), at).updated_at == at

    @pytest.mark.parametrize("status", [ExpenseStatus.APPROVED, ExpenseStatus.REJECTED])
    @pytest.mark.parametrize("action", [approve, reject])
    def test_no_transition_out_of_terminal_states(self, status, action):
        expense = expense_in(status)
        with pytest.raises(TransitionError):
            action(expense)
        assert expense.status is status

    def test_approving_rejected_expense_reports_context(self):
        expense = expense_in(ExpenseStatus.REJECTED)
        with pytest.raises(InvalidTransitionError) as exc_info:
            approve(expense)
        error = exc_info.value
        assert error.code == "INVALID_TRANSITION"
        assert (error.expense_id, error.from_status, error.action) == (
            "e-1",
            "rejected",
            "approve",
        )
        assert expense.status is ExpenseStatus.REJECTED


class TestHelpers:

    def test_allowed_actions(self):
        assert allowed_actions(ExpenseStatus.PENDING) == (APPROVE, REJECT)
        assert allowed_actions("approved") == ()
        assert allowed_actions("rejected") == ()

    @pytest.mark.parametrize(
        "status,action,expected",
        [
            ("pending", APPROVE, True),
            ("pending", REJECT, True),
            ("pending", "submit", False),
            ("approved", REJECT, False),
            ("rejected", APPROVE, False),
        ],
    )
    def test_can_transition(self, status, action, expected):
        assert can_transition(status, action) is expected

    def test_only_pending_is_editable(self):
        assert is_editable(ExpenseStatus.PENDING)
        assert not is_editable(ExpenseStatus.APPROVED)
        assert not is_editable(ExpenseStatus.REJECTED)

    def test_parse_status(self):
        assert parse_status("approved") is ExpenseStatus.APPROVED
        with pytest.raises(ValueError):
            parse_status("draft")
