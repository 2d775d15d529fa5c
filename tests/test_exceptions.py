"""Exception hierarchy and message catalog tests."""

import pytest

from expense_kernel.domain.messages import operation_failed_message, status_label
from expense_kernel.domain.violations import ValidationResult, Violation, ViolationCode
from expense_kernel.exceptions import (
    CategoryNotFoundError,
    ExpenseKernelError,
    ExpenseNotEditableError,
    ExpenseNotFoundError,
    InvalidTransitionError,
    NotFoundError,
    RecordNotFoundError,
    RepositoryError,
    ServiceError,
    TransitionError,
    TransportError,
    UserNotFoundError,
    ValidationError,
)


class TestHierarchy:

    @pytest.mark.parametrize(
        "error,parent",
        [
            (UserNotFoundError("u"), NotFoundError),
            (CategoryNotFoundError("c"), NotFoundError),
            (ExpenseNotFoundError("e"), NotFoundError),
            (InvalidTransitionError("e", "approved", "reject"), TransitionError),
            (ExpenseNotEditableError("e", "approved"), TransitionError),
            (RecordNotFoundError("expense.update", "e"), TransportError),
            (RepositoryError("expense.create"), TransportError),
            (ServiceError("expense.create", "Failed"), ExpenseKernelError),
            (ValidationError([]), ExpenseKernelError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, ExpenseKernelError)

    def test_codes_are_distinct(self):
        classes = [
            ValidationError,
            UserNotFoundError,
            CategoryNotFoundError,
            ExpenseNotFoundError,
            InvalidTransitionError,
            ExpenseNotEditableError,
            RepositoryError,
            RecordNotFoundError,
            ServiceError,
        ]
        codes = [cls.code for cls in classes]
        assert len(set(codes)) == len(codes)


class TestValidationError:

    def test_message_is_joined_violations(self):
        error = ValidationError(
            [
                Violation(ViolationCode.TITLE_REQUIRED, "title"),
                Violation(ViolationCode.DATE_REQUIRED, "date"),
            ]
        )
        assert str(error) == "Title is required, Date is required"
        assert error.violation_codes == ["TITLE_REQUIRED", "DATE_REQUIRED"]

    def test_locale(self):
        error = ValidationError([Violation(ViolationCode.TITLE_REQUIRED, "title")], "ja")
        assert str(error) == "タイトルは必須です"


class TestCatalog:

    def test_every_code_has_both_locales(self):
        for code in ViolationCode:
            violation = Violation(code, "field", 10)
            assert violation.render("en")
            assert violation.render("ja")

    def test_unknown_locale_falls_back_to_english(self):
        violation = Violation(ViolationCode.EMAIL_REQUIRED, "email")
        assert violation.render("fr") == "Email is required"
        assert operation_failed_message("expense.fetch", "fr") == "Failed to fetch expenses"

    def test_status_labels(self):
        assert status_label("pending", "ja") == "承認待ち"
        assert status_label("unknown") == "unknown"


class TestValidationResult:

    def test_failure_requires_violations(self):
        with pytest.raises(ValueError):
            ValidationResult.failure([])

    def test_success_unwraps(self):
        assert ValidationResult.success(5).unwrap() == 5
