"""
Locale catalogs for violation and operation-failure messages.

Two locales ship: ``en`` (default) and ``ja``.  Unknown locales fall back
to ``en``.  Templates may reference ``{limit}``.
"""

from __future__ import annotations

from decimal import Decimal

from expense_kernel.domain.violations import Violation

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = ("en", "ja")

_VIOLATION_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "USER_NAME_REQUIRED": "Name is required",
        "USER_NAME_TOO_LONG": "Name must be {limit} characters or fewer",
        "EMAIL_REQUIRED": "Email is required",
        "EMAIL_INVALID": "Please enter a valid email address",
        "CATEGORY_NAME_REQUIRED": "Category name is required",
        "CATEGORY_NAME_TOO_LONG": "Category name must be {limit} characters or fewer",
        "CATEGORY_DESCRIPTION_TOO_LONG": "Description must be {limit} characters or fewer",
        "COLOR_INVALID": "Color must be a valid hex color code (#RRGGBB)",
        "ID_REQUIRED": "ID is required",
        "USER_ID_REQUIRED": "User ID is required",
        "CATEGORY_ID_REQUIRED": "Category is required",
        "AMOUNT_REQUIRED": "Amount is required",
        "AMOUNT_INVALID": "Amount must be a number",
        "AMOUNT_NOT_POSITIVE": "Amount must be greater than 0",
        "AMOUNT_EXCEEDS_LIMIT": "Amount must be {limit} or less",
        "CURRENCY_REQUIRED": "Currency is required",
        "TITLE_REQUIRED": "Title is required",
        "TITLE_TOO_LONG": "Title must be {limit} characters or fewer",
        "DESCRIPTION_TOO_LONG": "Description must be {limit} characters or fewer",
        "DATE_REQUIRED": "Date is required",
        "DATE_IN_FUTURE": "Date cannot be in the future",
        "STATUS_INVALID": "Invalid expense status",
    },
    "ja": {
        "USER_NAME_REQUIRED": "名前は必須です",
        "USER_NAME_TOO_LONG": "名前は{limit}文字以内で入力してください",
        "EMAIL_REQUIRED": "メールアドレスは必須です",
        "EMAIL_INVALID": "有効なメールアドレスを入力してください",
        "CATEGORY_NAME_REQUIRED": "カテゴリ名は必須です",
        "CATEGORY_NAME_TOO_LONG": "カテゴリ名は{limit}文字以内で入力してください",
        "CATEGORY_DESCRIPTION_TOO_LONG": "説明は{limit}文字以内で入力してください",
        "COLOR_INVALID": "色は有効な16進数カラーコード（#RRGGBB）である必要があります",
        "ID_REQUIRED": "IDは必須です",
        "USER_ID_REQUIRED": "ユーザーIDは必須です",
        "CATEGORY_ID_REQUIRED": "カテゴリは必須です",
        "AMOUNT_REQUIRED": "金額は必須です",
        "AMOUNT_INVALID": "金額は数値で入力してください",
        "AMOUNT_NOT_POSITIVE": "金額は0より大きい値を入力してください",
        "AMOUNT_EXCEEDS_LIMIT": "金額は{limit}以下で入力してください",
        "CURRENCY_REQUIRED": "通貨は必須です",
        "TITLE_REQUIRED": "タイトルは必須です",
        "TITLE_TOO_LONG": "タイトルは{limit}文字以内で入力してください",
        "DESCRIPTION_TOO_LONG": "説明は{limit}文字以内で入力してください",
        "DATE_REQUIRED": "日付は必須です",
        "DATE_IN_FUTURE": "未来の日付は入力できません",
        "STATUS_INVALID": "無効な経費ステータスです",
    },
}

# Generic failure messages used when a repository call fails.
_OPERATION_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "user.fetch": "Failed to fetch users",
        "user.create": "Failed to create user",
        "user.update": "Failed to update user",
        "user.delete": "Failed to delete user",
        "category.fetch": "Failed to fetch categories",
        "category.create": "Failed to create category",
        "category.update": "Failed to update category",
        "category.delete": "Failed to delete category",
        "expense.fetch": "Failed to fetch expenses",
        "expense.create": "Failed to create expense",
        "expense.update": "Failed to update expense",
        "expense.delete": "Failed to delete expense",
        "expense.approve": "Failed to approve expense",
        "expense.reject": "Failed to reject expense",
    },
    "ja": {
        "user.fetch": "ユーザーの取得に失敗しました",
        "user.create": "ユーザーの作成に失敗しました",
        "user.update": "ユーザーの更新に失敗しました",
        "user.delete": "ユーザーの削除に失敗しました",
        "category.fetch": "カテゴリの取得に失敗しました",
        "category.create": "カテゴリの作成に失敗しました",
        "category.update": "カテゴリの更新に失敗しました",
        "category.delete": "カテゴリの削除に失敗しました",
        "expense.fetch": "経費の取得に失敗しました",
        "expense.create": "経費の作成に失敗しました",
        "expense.update": "経費の更新に失敗しました",
        "expense.delete": "経費の削除に失敗しました",
        "expense.approve": "経費の承認に失敗しました",
        "expense.reject": "経費の却下に失敗しました",
    },
}

_STATUS_LABELS: dict[str, dict[str, str]] = {
    "en": {"pending": "Pending", "approved": "Approved", "rejected": "Rejected"},
    "ja": {"pending": "承認待ち", "approved": "承認済み", "rejected": "却下済み"},
}


def _catalog(table: dict[str, dict[str, str]], locale: str) -> dict[str, str]:
    return table.get(locale, table[DEFAULT_LOCALE])


def _format_limit(limit: int | Decimal | None) -> str:
    if limit is None:
        return ""
    if isinstance(limit, Decimal) and limit == limit.to_integral_value():
        limit = int(limit)
    if isinstance(limit, int):
        return f"{limit:,}"
    return str(limit)


def render_violation(violation: Violation, locale: str = DEFAULT_LOCALE) -> str:
    template = _catalog(_VIOLATION_MESSAGES, locale)[violation.code.value]
    return template.format(limit=_format_limit(violation.limit))


def operation_failed_message(operation: str, locale: str = DEFAULT_LOCALE) -> str:
    """Generic failure message for ``operation`` (e.g. ``"expense.create"``)."""
    return _catalog(_OPERATION_MESSAGES, locale)[operation]


def status_label(status: str, locale: str = DEFAULT_LOCALE) -> str:
    return _catalog(_STATUS_LABELS, locale).get(status, status)
