"""
Configuration schema (``expense_config.schema``).

Frozen dataclasses describing a parsed configuration file.  Parsing lives
in ``expense_config.loader``; conversion to kernel inputs lives in
``expense_config.bridges``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal

_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")
_LOCALES = ("en", "ja")
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class LimitsDef:
    """Validation bounds as written in configuration."""
    user_name_max: int = 100
    category_name_max: int = 50
    category_description_max: int = 200
    title_max: int = 100
    description_max: int = 500
    amount_max: Decimal = Decimal("10000000")


@dataclass(frozen=True)
class ExpenseSettings:
    """Top-level configuration for the expense kernel.

    Guarantees: ``default_color`` is ``#RRGGBB``; ``locale`` is a shipped
    message locale; ``log_level`` is a standard level name.
    """
    limits: LimitsDef = field(default_factory=LimitsDef)
    default_color: str = "#3b82f6"
    default_currency: str = "JPY"
    locale: str = "en"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not _COLOR.match(self.default_color):
            raise ValueError(f"default_color must be #RRGGBB, got {self.default_color!r}")
        if not self.default_currency.strip():
            raise ValueError("default_currency must not be empty")
        if self.locale not in _LOCALES:
            raise ValueError(f"locale must be one of {_LOCALES}, got {self.locale!r}")
        if self.log_level.upper() not in _LEVELS:
            raise ValueError(f"log_level must be one of {_LEVELS}, got {self.log_level!r}")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())
