"""
Typed validation violations and the fallible-construction result type.

A ``Violation`` is data: a closed ``ViolationCode``, the field it applies
to, and the limit involved (for length and range rules).  Messages are
rendered on demand through the locale catalog in
``expense_kernel.domain.messages``, so the same violation reads
"Title is required" or 「タイトルは必須です」 depending on the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from expense_kernel.exceptions import ValidationError

T = TypeVar("T")


class ViolationCode(str, Enum):
    """Closed set of validation rule identifiers."""

    # Users
    USER_NAME_REQUIRED = "USER_NAME_REQUIRED"
    USER_NAME_TOO_LONG = "USER_NAME_TOO_LONG"
    EMAIL_REQUIRED = "EMAIL_REQUIRED"
    EMAIL_INVALID = "EMAIL_INVALID"

    # Categories
    CATEGORY_NAME_REQUIRED = "CATEGORY_NAME_REQUIRED"
    CATEGORY_NAME_TOO_LONG = "CATEGORY_NAME_TOO_LONG"
    CATEGORY_DESCRIPTION_TOO_LONG = "CATEGORY_DESCRIPTION_TOO_LONG"
    COLOR_INVALID = "COLOR_INVALID"

    # Identifiers
    ID_REQUIRED = "ID_REQUIRED"
    USER_ID_REQUIRED = "USER_ID_REQUIRED"
    CATEGORY_ID_REQUIRED = "CATEGORY_ID_REQUIRED"

    # Expenses
    AMOUNT_REQUIRED = "AMOUNT_REQUIRED"
    AMOUNT_INVALID = "AMOUNT_INVALID"
    AMOUNT_NOT_POSITIVE = "AMOUNT_NOT_POSITIVE"
    AMOUNT_EXCEEDS_LIMIT = "AMOUNT_EXCEEDS_LIMIT"
    CURRENCY_REQUIRED = "CURRENCY_REQUIRED"
    TITLE_REQUIRED = "TITLE_REQUIRED"
    TITLE_TOO_LONG = "TITLE_TOO_LONG"
    DESCRIPTION_TOO_LONG = "DESCRIPTION_TOO_LONG"
    DATE_REQUIRED = "DATE_REQUIRED"
    DATE_IN_FUTURE = "DATE_IN_FUTURE"
    STATUS_INVALID = "STATUS_INVALID"


@dataclass(frozen=True)
class Violation:
    """A single failed validation rule."""

    code: ViolationCode
    field: str
    limit: int | Decimal | None = None

    def render(self, locale: str = "en") -> str:
        from expense_kernel.domain.messages import render_violation

        return render_violation(self, locale)

    @property
    def message(self) -> str:
        return self.render("en")

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """
    Outcome of a fallible construction: either a value or violations.

    Exactly one side is populated.  ``unwrap()`` returns the value or
    raises ``ValidationError`` with the collected violations.
    """

    value: T | None = None
    violations: tuple[Violation, ...] = ()

    @classmethod
    def success(cls, value: T) -> ValidationResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, violations: list[Violation] | tuple[Violation, ...]) -> ValidationResult[T]:
        if not violations:
            raise ValueError("failure requires at least one violation")
        return cls(violations=tuple(violations))

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def messages(self) -> list[str]:
        return [v.message for v in self.violations]

    def unwrap(self, locale: str = "en") -> T:
        if self.violations:
            raise ValidationError(self.violations, locale)
        return self.value  # type: ignore[return-value]


def messages_of(violations: list[Violation], locale: str = "en") -> list[str]:
    """Render a violation list as human-readable messages, in order."""
    return [v.render(locale) for v in violations]
