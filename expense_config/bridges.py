"""
Config -> Kernel Bridges.

Functions that convert ``ExpenseSettings`` into kernel inputs.  They live
here because the kernel never imports ``expense_config``.

Usage:
    from expense_config import get_active_config
    from expense_config.bridges import build_memory_repositories, build_services

    settings = get_active_config()
    repositories = build_memory_repositories(settings)
    services = build_services(
        settings,
        users=repositories.users,
        categories=repositories.categories,
        expenses=repositories.expenses,
    )
"""

from __future__ import annotations

from dataclasses import dataclass

from expense_config.schema import ExpenseSettings
from expense_kernel.domain.clock import Clock
from expense_kernel.domain.validators import ValidationLimits
from expense_kernel.logging_config import configure_logging
from expense_kernel.repositories.base import (
    CategoryRepository,
    ExpenseRepository,
    UserRepository,
)
from expense_kernel.repositories.memory import (
    InMemoryCategoryRepository,
    InMemoryExpenseRepository,
    InMemoryUserRepository,
)
from expense_kernel.services import CategoryService, ExpenseService, UserService


def build_validation_limits(settings: ExpenseSettings) -> ValidationLimits:
    limits = settings.limits
    return ValidationLimits(
        user_name_max=limits.user_name_max,
        category_name_max=limits.category_name_max,
        category_description_max=limits.category_description_max,
        title_max=limits.title_max,
        description_max=limits.description_max,
        amount_max=limits.amount_max,
    )


@dataclass(frozen=True)
class RepositorySet:
    users: InMemoryUserRepository
    categories: InMemoryCategoryRepository
    expenses: InMemoryExpenseRepository


def build_memory_repositories(
    settings: ExpenseSettings, *, clock: Clock | None = None
) -> RepositorySet:
    """In-memory repositories that build entities with the configured limits.

    Any repository handed to ``build_services`` must use the same limits,
    or records the services accept are refused when stored.
    """
    limits = build_validation_limits(settings)
    return RepositorySet(
        users=InMemoryUserRepository(clock, limits=limits),
        categories=InMemoryCategoryRepository(clock, limits=limits),
        expenses=InMemoryExpenseRepository(clock, limits=limits),
    )


@dataclass(frozen=True)
class ServiceSet:
    users: UserService
    categories: CategoryService
    expenses: ExpenseService


def build_services(
    settings: ExpenseSettings,
    *,
    users: UserRepository,
    categories: CategoryRepository,
    expenses: ExpenseRepository,
    clock: Clock | None = None,
) -> ServiceSet:
    """Wire the three services with configured limits, locale and defaults.

    The expense service is given the user and category repositories so
    creation checks its references.
    """
    common = {
        "clock": clock,
        "limits": build_validation_limits(settings),
        "locale": settings.locale,
    }
    return ServiceSet(
        users=UserService(users, **common),
        categories=CategoryService(
            categories, default_color=settings.default_color, **common
        ),
        expenses=ExpenseService(
            expenses,
            users=users,
            categories=categories,
            default_currency=settings.default_currency,
            **common,
        ),
    )


def configure_logging_from(settings: ExpenseSettings, **kwargs) -> None:
    """Apply the configured log level to ``configure_logging``."""
    configure_logging(level=settings.log_level_number, **kwargs)
