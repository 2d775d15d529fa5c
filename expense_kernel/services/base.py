"""
BaseService -- shared plumbing for the application services.

Responsibility:
    Holds the collaborators every service needs (clock, validation
    limits, message locale) and the single place where repository
    failures are translated for the caller.

Architecture position:
    Kernel > Services -- imperative shell.  Services validate with the
    pure domain layer and delegate persistence to repository protocols.

Failure modes:
    - ``ValidationError`` / ``TransitionError`` / ``NotFoundError``
      propagate unchanged and are not logged as errors.
    - ``TransportError`` from a repository is logged with its traceback
      and replaced by ``ServiceError`` carrying a generic localized
      message; the underlying exception is chained as ``__cause__``.
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Iterator
from contextlib import contextmanager

from expense_kernel.domain.clock import Clock, SystemClock
from expense_kernel.domain.messages import operation_failed_message
from expense_kernel.domain.validators import DEFAULT_LIMITS, ValidationLimits
from expense_kernel.domain.violations import Violation
from expense_kernel.exceptions import ServiceError, TransportError, ValidationError
from expense_kernel.logging_config import LogContext, get_logger

logger = get_logger("services")


class BaseService(ABC):
    """
    Abstract base class for the application services.

    Contract:
        Receives its clock, limits and locale from the caller.

    Non-goals:
        - Does NOT retry failed repository calls.
        - Does NOT coordinate atomicity across several service calls.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        limits: ValidationLimits = DEFAULT_LIMITS,
        locale: str = "en",
    ):
        self.clock = clock or SystemClock()
        self.limits = limits
        self.locale = locale

    def _raise_if_invalid(self, violations: list[Violation]) -> None:
        if violations:
            raise ValidationError(violations, self.locale)

    @contextmanager
    def _repository_call(
        self, operation: str, entity_id: str | None = None
    ) -> Iterator[None]:
        """Run a repository interaction, translating transport failures."""
        with LogContext.bind(operation=operation, entity_id=entity_id):
            try:
                yield
            except TransportError as exc:
                logger.error(
                    "repository_call_failed",
                    extra={"failed_operation": operation},
                    exc_info=True,
                )
                raise ServiceError(
                    operation, operation_failed_message(operation, self.locale)
                ) from exc
