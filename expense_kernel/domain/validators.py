"""
Field validators -- pure rules that accumulate violations.

Responsibility:
    Check user, category and expense fields against their rules and
    return every failed rule as an ordered ``list[Violation]``.  An empty
    list means the input is valid.  Validators never raise for invalid
    input and never stop at the first failure.

Architecture position:
    Kernel > Domain -- pure functions.  The only time source is the
    ``Clock`` passed in for the "date not in the future" rule.

Invariants:
    - A missing (empty or whitespace-only) name, title or email yields
      only its "required" violation; length and format rules are not
      evaluated for that field.
    - Name and title lengths are measured after trimming; description
      lengths are measured on the raw value.
    - Amounts are coerced to ``Decimal`` and rounded half-up to two
      decimal places before the range rules run.  A zero amount is
      reported as missing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from expense_kernel.domain.clock import Clock, SystemClock
from expense_kernel.domain.violations import Violation, ViolationCode

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
DEFAULT_COLOR = "#3b82f6"

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class ValidationLimits:
    """Numeric bounds applied by the validators.

    Defaults are the production limits; configuration may override them.
    """
    user_name_max: int = 100
    category_name_max: int = 50
    category_description_max: int = 200
    title_max: int = 100
    description_max: int = 500
    amount_max: Decimal = Decimal("10000000")

    def __post_init__(self) -> None:
        for name in (
            "user_name_max",
            "category_name_max",
            "category_description_max",
            "title_max",
            "description_max",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")
        if self.amount_max <= 0:
            raise ValueError("amount_max must be positive")


DEFAULT_LIMITS = ValidationLimits()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def to_amount(value: Any) -> Decimal:
    """
    Coerce ``value`` to a two-decimal ``Decimal``, rounding half-up.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        ValueError: If ``value`` is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not an amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Not an amount: {value!r}")
    try:
        return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits to quantize; only the range rules apply from here.
        return amount


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_future_date(value: date | datetime, clock: Clock) -> bool:
    """True if ``value`` lies strictly after the clock's current time."""
    if isinstance(value, datetime):
        return _as_utc(value) > clock.now()
    return value > clock.today()


def _check_text(
    value: str | None,
    field: str,
    required: ViolationCode,
    too_long: ViolationCode,
    max_length: int,
) -> list[Violation]:
    if _is_blank(value):
        return [Violation(required, field)]
    if len(value.strip()) > max_length:
        return [Violation(too_long, field, max_length)]
    return []


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def validate_id(
    value: str | None,
    code: ViolationCode = ViolationCode.ID_REQUIRED,
    field: str = "id",
) -> list[Violation]:
    if _is_blank(value):
        return [Violation(code, field)]
    return []


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def validate_user_name(
    name: str | None, limits: ValidationLimits = DEFAULT_LIMITS
) -> list[Violation]:
    return _check_text(
        name,
        "name",
        ViolationCode.USER_NAME_REQUIRED,
        ViolationCode.USER_NAME_TOO_LONG,
        limits.user_name_max,
    )


def validate_email(email: str | None) -> list[Violation]:
    if _is_blank(email):
        return [Violation(ViolationCode.EMAIL_REQUIRED, "email")]
    if not EMAIL_PATTERN.match(email.strip()):
        return [Violation(ViolationCode.EMAIL_INVALID, "email")]
    return []


def validate_user(
    name: str | None,
    email: str | None,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> list[Violation]:
    return validate_user_name(name, limits) + validate_email(email)


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def validate_category_name(
    name: str | None, limits: ValidationLimits = DEFAULT_LIMITS
) -> list[Violation]:
    return _check_text(
        name,
        "name",
        ViolationCode.CATEGORY_NAME_REQUIRED,
        ViolationCode.CATEGORY_NAME_TOO_LONG,
        limits.category_name_max,
    )


def validate_category_description(
    description: str | None, limits: ValidationLimits = DEFAULT_LIMITS
) -> list[Violation]:
    if description and len(description) > limits.category_description_max:
        return [
            Violation(
                ViolationCode.CATEGORY_DESCRIPTION_TOO_LONG,
                "description",
                limits.category_description_max,
            )
        ]
    return []


def validate_category_color(color: str | None) -> list[Violation]:
    """An omitted color is valid; the default is applied on construction."""
    if color and not COLOR_PATTERN.match(color):
        return [Violation(ViolationCode.COLOR_INVALID, "color")]
    return []


def validate_category(
    name: str | None,
    description: str | None = None,
    color: str | None = None,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> list[Violation]:
    return (
        validate_category_name(name, limits)
        + validate_category_description(description, limits)
        + validate_category_color(color)
    )


# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------


def validate_amount(
    amount: Any, limits: ValidationLimits = DEFAULT_LIMITS
) -> list[Violation]:
    """
    Check an expense amount.

    ``None``, blank strings and values that round to zero are reported as
    missing; negative values as not positive; values above
    ``limits.amount_max`` as exceeding the limit.
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return [Violation(ViolationCode.AMOUNT_REQUIRED, "amount")]
    try:
        value = to_amount(amount)
    except ValueError:
        return [Violation(ViolationCode.AMOUNT_INVALID, "amount")]

    if value == 0:
        return [Violation(ViolationCode.AMOUNT_REQUIRED, "amount")]
    if value < 0:
        return [Violation(ViolationCode.AMOUNT_NOT_POSITIVE, "amount")]
    if value > limits.amount_max:
        return [
            Violation(
                ViolationCode.AMOUNT_EXCEEDS_LIMIT, "amount", limits.amount_max
            )
        ]
    return []


def validate_currency(currency: str | None) -> list[Violation]:
    if _is_blank(currency):
        return [Violation(ViolationCode.CURRENCY_REQUIRED, "currency")]
    return []


def validate_title(
    title: str | None, limits: ValidationLimits = DEFAULT_LIMITS
) -> list[Violation]:
    return _check_text(
        title,
        "title",
        ViolationCode.TITLE_REQUIRED,
        ViolationCode.TITLE_TOO_LONG,
        limits.title_max,
    )


def validate_description(
    description: str | None, limits: ValidationLimits = DEFAULT_LIMITS
) -> list[Violation]:
    if description and len(description) > limits.description_max:
        return [
            Violation(
                ViolationCode.DESCRIPTION_TOO_LONG,
                "description",
                limits.description_max,
            )
        ]
    return []


def validate_date(
    value: date | datetime | None, clock: Clock | None = None
) -> list[Violation]:
    if value is None:
        return [Violation(ViolationCode.DATE_REQUIRED, "date")]
    if is_future_date(value, clock or SystemClock()):
        return [Violation(ViolationCode.DATE_IN_FUTURE, "date")]
    return []


def validate_expense(
    *,
    user_id: str | None,
    category_id: str | None,
    amount: Any,
    title: str | None,
    date: date | datetime | None,
    description: str | None = None,
    currency: str | None = "JPY",
    clock: Clock | None = None,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> list[Violation]:
    """Validate every field of a new expense; violations in field order."""
    return (
        validate_id(user_id, ViolationCode.USER_ID_REQUIRED, "user_id")
        + validate_id(category_id, ViolationCode.CATEGORY_ID_REQUIRED, "category_id")
        + validate_amount(amount, limits)
        + validate_currency(currency)
        + validate_title(title, limits)
        + validate_description(description, limits)
        + validate_date(date, clock)
    )


def validate_expense_update(
    *,
    category_id: str | None,
    amount: Any,
    title: str | None,
    date: date | datetime | None,
    description: str | None = None,
    clock: Clock | None = None,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> list[Violation]:
    """Validate the editable fields of an existing expense.

    The owner and currency are fixed at creation and are not re-checked.
    """
    return (
        validate_id(category_id, ViolationCode.CATEGORY_ID_REQUIRED, "category_id")
        + validate_amount(amount, limits)
        + validate_title(title, limits)
        + validate_description(description, limits)
        + validate_date(date, clock)
    )
