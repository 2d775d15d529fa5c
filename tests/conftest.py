"""
Pytest fixtures for the expense kernel test suite.

Provides:
- A deterministic clock fixed at 2024-06-15 09:00 UTC
- In-memory repositories and services wired to that clock
- Structured log capture
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO

import pytest

from expense_kernel.domain.clock import DeterministicClock
from expense_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from expense_kernel.repositories import (
    InMemoryCategoryRepository,
    InMemoryExpenseRepository,
    InMemoryUserRepository,
)
from expense_kernel.services import CategoryService, ExpenseService, UserService

FIXED_NOW = datetime(2024, 6, 15, 9, 0, 0, tzinfo=timezone.utc)
TODAY = FIXED_NOW.date()


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture expense_kernel logs as parsed JSON dicts.

    Usage::

        async def test_something(captured_logs, expense_service):
            await expense_service.approve_expense(...)
            logs = captured_logs()
            assert any(r["message"] == "expense_status_changed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("expense_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(FIXED_NOW)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def expense_fields(today) -> dict:
    """A complete, valid set of new-expense fields."""
    return {
        "user_id": "user-1",
        "category_id": "cat-1",
        "amount": Decimal("1500"),
        "title": "Team lunch",
        "date": today,
        "description": "Lunch with the project team",
        "currency": "JPY",
    }


# =============================================================================
# Repository and service fixtures
# =============================================================================


@pytest.fixture
def user_repo(clock) -> InMemoryUserRepository:
    return InMemoryUserRepository(clock)


@pytest.fixture
def category_repo(clock) -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository(clock)


@pytest.fixture
def expense_repo(clock) -> InMemoryExpenseRepository:
    return InMemoryExpenseRepository(clock)


@pytest.fixture
def user_service(user_repo, clock) -> UserService:
    return UserService(user_repo, clock=clock)


@pytest.fixture
def category_service(category_repo, clock) -> CategoryService:
    return CategoryService(category_repo, clock=clock)


@pytest.fixture
def expense_service(expense_repo, clock) -> ExpenseService:
    return ExpenseService(expense_repo, clock=clock)


@pytest.fixture
def linked_expense_service(expense_repo, user_repo, category_repo, clock) -> ExpenseService:
    """ExpenseService that checks user and category references on create."""
    return ExpenseService(
        expense_repo, users=user_repo, categories=category_repo, clock=clock
    )
