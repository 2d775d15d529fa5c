"""
Domain entities: User, Category, Expense.

Responsibility:
    Immutable, self-validating records.  Direct construction runs the
    structural rules and raises ``ValidationError`` listing every
    violation; ``build()`` returns a ``ValidationResult`` instead of
    raising.  Updates return new instances.

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.

Invariants:
    - Equality and hashing are by ``id`` only.
    - No instance exists with an invalid field.
    - ``Expense.amount`` is a two-decimal ``Decimal``; ``currency`` is
      upper-case; ``status`` is an ``ExpenseStatus``.
    - The "not in the future" date rule applies when a new expense is
      built, not when an existing one is reconstructed.
    - Expense details change only while the expense is pending.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date as date_type
from datetime import datetime
from decimal import Decimal
from typing import Any

from expense_kernel.domain.clock import Clock, SystemClock
from expense_kernel.domain.expense_status import ExpenseStatus, is_editable
from expense_kernel.domain.messages import status_label
from expense_kernel.domain.validators import (
    DEFAULT_COLOR,
    DEFAULT_LIMITS,
    ValidationLimits,
    to_amount,
    validate_amount,
    validate_category,
    validate_currency,
    validate_date,
    validate_description,
    validate_id,
    validate_title,
    validate_user,
)
from expense_kernel.domain.violations import ValidationResult, Violation, ViolationCode
from expense_kernel.exceptions import ExpenseNotEditableError, ValidationError

_ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW"})


def _is_status(value: Any) -> bool:
    try:
        ExpenseStatus(value)
    except ValueError:
        return False
    return True


class _Entity:
    """Identity semantics shared by all entities."""

    id: str

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class User(_Entity):
    id: str
    name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    limits: ValidationLimits = field(default=DEFAULT_LIMITS, repr=False, compare=False)

    def __post_init__(self) -> None:
        violations = validate_id(self.id) + validate_user(
            self.name, self.email, self.limits
        )
        if violations:
            raise ValidationError(violations)

    @classmethod
    def build(
        cls,
        id: str,
        name: str | None,
        email: str | None,
        *,
        created_at: datetime | None = None,
        limits: ValidationLimits = DEFAULT_LIMITS,
    ) -> ValidationResult[User]:
        """Normalize and validate; name is trimmed, email trimmed and lower-cased."""
        try:
            return ValidationResult.success(
                cls(
                    id=id,
                    name=(name or "").strip(),
                    email=(email or "").strip().lower(),
                    created_at=created_at,
                    updated_at=created_at,
                    limits=limits,
                )
            )
        except ValidationError as exc:
            return ValidationResult.failure(exc.violations)

    def with_profile(
        self, name: str, email: str, updated_at: datetime | None = None
    ) -> User:
        return replace(
            self,
            name=name.strip(),
            email=email.strip().lower(),
            updated_at=updated_at or self.updated_at,
        )

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def display_info(self) -> str:
        return f"{self.name} ({self.email})"


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Category(_Entity):
    id: str
    name: str
    description: str = ""
    color: str = DEFAULT_COLOR
    created_at: datetime | None = None
    updated_at: datetime | None = None
    limits: ValidationLimits = field(default=DEFAULT_LIMITS, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.description is None:
            object.__setattr__(self, "description", "")
        if not self.color:
            object.__setattr__(self, "color", DEFAULT_COLOR)
        violations = validate_id(self.id) + validate_category(
            self.name, self.description, self.color, self.limits
        )
        if violations:
            raise ValidationError(violations)

    @classmethod
    def build(
        cls,
        id: str,
        name: str | None,
        description: str | None = None,
        color: str | None = None,
        *,
        created_at: datetime | None = None,
        limits: ValidationLimits = DEFAULT_LIMITS,
    ) -> ValidationResult[Category]:
        try:
            return ValidationResult.success(
                cls(
                    id=id,
                    name=(name or "").strip(),
                    description=description or "",
                    color=color or DEFAULT_COLOR,
                    created_at=created_at,
                    updated_at=created_at,
                    limits=limits,
                )
            )
        except ValidationError as exc:
            return ValidationResult.failure(exc.violations)

    def with_details(
        self,
        name: str,
        description: str | None = None,
        color: str | None = None,
        updated_at: datetime | None = None,
    ) -> Category:
        return replace(
            self,
            name=name.strip(),
            description=description or "",
            color=color or DEFAULT_COLOR,
            updated_at=updated_at or self.updated_at,
        )

    @property
    def display_info(self) -> str:
        if self.description:
            return f"{self.name} - {self.description}"
        return self.name


# ---------------------------------------------------------------------------
# Expense
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Expense(_Entity):
    """
    A single expense record.

    Construct directly to reconstruct a stored expense; use ``build`` for
    a new one so the date is also checked against the clock.
    """

    id: str
    user_id: str
    category_id: str
    amount: Decimal
    title: str
    date: date_type
    description: str = ""
    currency: str = "JPY"
    status: ExpenseStatus = ExpenseStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None
    limits: ValidationLimits = field(default=DEFAULT_LIMITS, repr=False, compare=False)

    def __post_init__(self) -> None:
        violations = self._structural_violations()
        if violations:
            raise ValidationError(violations)
        object.__setattr__(self, "amount", to_amount(self.amount))
        object.__setattr__(self, "currency", self.currency.strip().upper())
        object.__setattr__(self, "status", ExpenseStatus(self.status))
        if self.description is None:
            object.__setattr__(self, "description", "")

    def _structural_violations(self) -> list[Violation]:
        violations = (
            validate_id(self.id)
            + validate_id(self.user_id, ViolationCode.USER_ID_REQUIRED, "user_id")
            + validate_id(
                self.category_id, ViolationCode.CATEGORY_ID_REQUIRED, "category_id"
            )
            + validate_amount(self.amount, self.limits)
            + validate_currency(self.currency)
            + validate_title(self.title, self.limits)
            + validate_description(self.description, self.limits)
        )
        if self.date is None:
            violations.append(Violation(ViolationCode.DATE_REQUIRED, "date"))
        if not _is_status(self.status):
            violations.append(Violation(ViolationCode.STATUS_INVALID, "status"))
        return violations

    @classmethod
    def build(
        cls,
        id: str,
        user_id: str | None,
        category_id: str | None,
        amount: Any,
        title: str | None,
        date: date_type | None,
        description: str | None = None,
        currency: str | None = "JPY",
        *,
        clock: Clock | None = None,
        limits: ValidationLimits = DEFAULT_LIMITS,
    ) -> ValidationResult[Expense]:
        """Validate and construct a new, pending expense.

        Violations from the structural rules and the future-date rule are
        reported together.
        """
        clock = clock or SystemClock()
        date_violations = validate_date(date, clock) if date is not None else []
        try:
            expense = cls(
                id=id,
                user_id=user_id,
                category_id=category_id,
                amount=amount,
                title=(title or "").strip(),
                date=date,
                description=description or "",
                currency=currency or "",
                status=ExpenseStatus.PENDING,
                created_at=clock.now(),
                updated_at=clock.now(),
                limits=limits,
            )
        except ValidationError as exc:
            return ValidationResult.failure(list(exc.violations) + date_violations)
        if date_violations:
            return ValidationResult.failure(date_violations)
        return ValidationResult.success(expense)

    # -- Status ------------------------------------------------------------

    @property
    def is_pending(self) -> bool:
        return self.status is ExpenseStatus.PENDING

    @property
    def is_approved(self) -> bool:
        return self.status is ExpenseStatus.APPROVED

    @property
    def is_rejected(self) -> bool:
        return self.status is ExpenseStatus.REJECTED

    @property
    def can_edit(self) -> bool:
        return is_editable(self.status)

    def with_status(
        self, status: ExpenseStatus, updated_at: datetime | None = None
    ) -> Expense:
        """Copy with a new status.  Transition rules live in ``expense_status``."""
        return replace(self, status=status, updated_at=updated_at or self.updated_at)

    def with_details(
        self,
        *,
        category_id: str,
        amount: Any,
        title: str,
        date: date_type,
        description: str | None = None,
        clock: Clock | None = None,
    ) -> Expense:
        """
        Copy with edited details.

        Raises:
            ExpenseNotEditableError: If the expense is no longer pending.
            ValidationError: If any new value breaks a rule, including a
                date after the clock's current time.
        """
        if not self.can_edit:
            raise ExpenseNotEditableError(self.id, self.status.value)
        clock = clock or SystemClock()
        date_violations = validate_date(date, clock) if date is not None else []
        try:
            updated = replace(
                self,
                category_id=category_id,
                amount=amount,
                title=(title or "").strip(),
                date=date,
                description=description or "",
                updated_at=clock.now(),
            )
        except ValidationError as exc:
            raise ValidationError(list(exc.violations) + date_violations) from None
        if date_violations:
            raise ValidationError(date_violations)
        return updated

    # -- Display -----------------------------------------------------------

    def status_display(self, locale: str = "en") -> str:
        return status_label(self.status.value, locale)

    @property
    def formatted_amount(self) -> str:
        if self.currency == "JPY":
            return f"¥{self.amount:,.0f}"
        if self.currency in _ZERO_DECIMAL_CURRENCIES:
            return f"{self.amount:,.0f} {self.currency}"
        return f"{self.amount:,.2f} {self.currency}"

    @property
    def formatted_date(self) -> str:
        return self.date.strftime("%Y/%m/%d")

    @property
    def display_info(self) -> str:
        return f"{self.title} - {self.formatted_amount} ({self.formatted_date})"
