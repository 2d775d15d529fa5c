"""Entity construction, identity and update tests."""

from dataclasses import FrozenInstanceError
from datetime import date, timedelta
from decimal import Decimal

import pytest

from expense_kernel.domain.entities import Category, Expense, User
from expense_kernel.domain.expense_status import ExpenseStatus
from expense_kernel.domain.validators import DEFAULT_COLOR
from expense_kernel.domain.violations import ViolationCode
from expense_kernel.exceptions import ExpenseNotEditableError, ValidationError


def make_expense(**overrides) -> Expense:
    fields = {
        "id": "e-1",
        "user_id": "u-1",
        "category_id": "c-1",
        "amount": Decimal("1500"),
        "title": "Team lunch",
        "date": date(2024, 6, 10),
    }
    fields.update(overrides)
    return Expense(**fields)


class TestUser:

    def test_construct_valid_user(self):
        user = User(id="u-1", name="Hanako", email="hanako@example.com")
        assert user.display_info == "Hanako (hanako@example.com)"
        assert user.display_name == "Hanako"

    def test_invalid_user_raises_with_all_violations(self):
        with pytest.raises(ValidationError) as exc_info:
            User(id="", name="", email="nope")
        assert exc_info.value.violation_codes == [
            "ID_REQUIRED",
            "USER_NAME_REQUIRED",
            "EMAIL_INVALID",
        ]
        assert str(exc_info.value) == (
            "ID is required, Name is required, Please enter a valid email address"
        )

    def test_build_normalizes(self):
        result = User.build("u-1", "  Hanako  ", "  Hanako@Example.COM ")
        assert result.ok
        user = result.unwrap()
        assert user.name == "Hanako"
        assert user.email == "hanako@example.com"

    def test_build_failure_returns_violations(self):
        result = User.build("u-1", "", "")
        assert not result.ok
        assert result.value is None
        assert result.messages == ["Name is required", "Email is required"]
        with pytest.raises(ValidationError):
            result.unwrap()

    def test_equality_by_id(self):
        a = User(id="u-1", name="A", email="a@example.com")
        b = User(id="u-1", name="B", email="b@example.com")
        c = User(id="u-2", name="A", email="a@example.com")
        assert a == b
        assert a != c
        assert len({a, b, c}) == 2

    def test_immutable(self):
        user = User(id="u-1", name="A", email="a@example.com")
        with pytest.raises(FrozenInstanceError):
            user.name = "B"

    def test_with_profile_returns_new_instance(self, clock):
        user = User(id="u-1", name="A", email="a@example.com")
        updated = user.with_profile(" B ", "B@Example.com", clock.now())
        assert updated is not user
        assert (updated.name, updated.email) == ("B", "b@example.com")
        assert updated.updated_at == clock.now()
        assert user.name == "A"

    def test_with_profile_validates(self):
        user = User(id="u-1", name="A", email="a@example.com")
        with pytest.raises(ValidationError):
            user.with_profile("A", "not-an-email")


class TestCategory:

    def test_color_defaults(self):
        category = Category(id="c-1", name="Food")
        assert category.color == DEFAULT_COLOR == "#3b82f6"
        assert category.description == ""

    def test_build_defaults_omitted_color(self):
        category = Category.build("c-1", "Food", None, None).unwrap()
        assert category.color == "#3b82f6"

    def test_invalid_color_rejected(self):
        result = Category.build("c-1", "Food", color="#12345")
        assert [v.code for v in result.violations] == [ViolationCode.COLOR_INVALID]

    def test_display_info(self):
        assert Category(id="c-1", name="Food").display_info == "Food"
        assert (
            Category(id="c-1", name="Food", description="Meals").display_info
            == "Food - Meals"
        )

    def test_with_details(self):
        category = Category(id="c-1", name="Food", color="#000000")
        updated = category.with_details("Travel", "Trains", None)
        assert updated.name == "Travel"
        assert updated.color == DEFAULT_COLOR
        assert updated == category


class TestExpense:

    def test_amount_normalized(self):
        expense = make_expense(amount="1234.565", currency="usd")
        assert expense.amount == Decimal("1234.57")
        assert expense.currency == "USD"
        assert expense.status is ExpenseStatus.PENDING

    def test_status_coerced_from_string(self):
        assert make_expense(status="approved").status is ExpenseStatus.APPROVED

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            make_expense(status="draft")
        assert exc_info.value.violation_codes == ["STATUS_INVALID"]

    def test_structural_violations_accumulate(self):
        with pytest.raises(ValidationError) as exc_info:
            make_expense(user_id="", amount=10_000_001, title="")
        assert exc_info.value.violation_codes == [
            "USER_ID_REQUIRED",
            "AMOUNT_EXCEEDS_LIMIT",
            "TITLE_REQUIRED",
        ]

    def test_reconstruction_allows_any_date(self):
        make_expense(date=date(2999, 1, 1))

    def test_build_rejects_future_date(self, clock):
        result = Expense.build(
            "e-1", "u-1", "c-1", 100, "Taxi", clock.today() + timedelta(days=1),
            clock=clock,
        )
        assert [v.code for v in result.violations] == [ViolationCode.DATE_IN_FUTURE]

    def test_build_reports_date_with_other_violations(self, clock):
        result = Expense.build(
            "e-1", "u-1", "c-1", 0, "", clock.today() + timedelta(days=1),
            clock=clock,
        )
        assert [v.code for v in result.violations] == [
            ViolationCode.AMOUNT_REQUIRED,
            ViolationCode.TITLE_REQUIRED,
            ViolationCode.DATE_IN_FUTURE,
        ]

    def test_build_success_stamps_clock(self, clock):
        expense = Expense.build(
            "e-1", "u-1", "c-1", "980", " Coffee ", clock.today(), clock=clock
        ).unwrap()
        assert expense.title == "Coffee"
        assert expense.created_at == clock.now()
        assert expense.is_pending

    def test_build_with_amount_over_limit(self, clock):
        result = Expense.build(
            "e-1", "u-1", "c-1", 10_000_001, "Server", clock.today(), clock=clock
        )
        assert result.messages == ["Amount must be 10,000,000 or less"]

    def test_status_flags(self):
        expense = make_expense(status=ExpenseStatus.REJECTED)
        assert expense.is_rejected
        assert not expense.is_pending
        assert not expense.is_approved
        assert not expense.can_edit

    def test_with_details_on_pending(self, clock):
        expense = make_expense()
        updated = expense.with_details(
            category_id="c-2",
            amount=2000,
            title="Dinner",
            date=date(2024, 6, 11),
            clock=clock,
        )
        assert updated.amount == Decimal("2000.00")
        assert updated.category_id == "c-2"
        assert updated.updated_at == clock.now()
        assert expense.title == "Team lunch"

    @pytest.mark.parametrize("status", [ExpenseStatus.APPROVED, ExpenseStatus.REJECTED])
    def test_with_details_refused_after_decision(self, status, clock):
        expense = make_expense(status=status)
        with pytest.raises(ExpenseNotEditableError) as exc_info:
            expense.with_details(
                category_id="c-1", amount=1, title="x", date=date(2024, 6, 1),
                clock=clock,
            )
        assert exc_info.value.status == status.value

    def test_with_details_rejects_future_date(self, clock):
        with pytest.raises(ValidationError) as exc_info:
            make_expense().with_details(
                category_id="c-1",
                amount=1,
                title="x",
                date=clock.today() + timedelta(days=3),
                clock=clock,
            )
        assert exc_info.value.violation_codes == ["DATE_IN_FUTURE"]


class TestExpenseDisplay:

    def test_yen_formatting(self):
        expense = make_expense(amount=Decimal("1500"))
        assert expense.formatted_amount == "¥1,500"
        assert expense.formatted_date == "2024/06/10"
        assert expense.display_info == "Team lunch - ¥1,500 (2024/06/10)"

    def test_other_currency_formatting(self):
        expense = make_expense(amount=Decimal("1234.5"), currency="USD")
        assert expense.formatted_amount == "1,234.50 USD"

    @pytest.mark.parametrize(
        "status,en,ja",
        [
            (ExpenseStatus.PENDING, "Pending", "承認待ち"),
            (ExpenseStatus.APPROVED, "Approved", "承認済み"),
            (ExpenseStatus.REJECTED, "Rejected", "却下済み"),
        ],
    )
    def test_status_display(self, status, en, ja):
        expense = make_expense(status=status)
        assert expense.status_display() == en
        assert expense.status_display("ja") == ja
