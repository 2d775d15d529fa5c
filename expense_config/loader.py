"""
Configuration Loader (``expense_config.loader``).

Responsibility
--------------
Loads YAML files and parses them into the frozen dataclasses of
``expense_config.schema``.  Runtime callers go through
``expense_config.get_active_config()`` instead of calling this directly.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or values of the wrong type  -> ``ValueError``.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from expense_config.schema import ExpenseSettings, LimitsDef

_LIMIT_INT_KEYS = (
    "user_name_max",
    "category_name_max",
    "category_description_max",
    "title_max",
    "description_max",
)
_SETTINGS_KEYS = ("limits", "default_color", "default_currency", "locale", "log_level")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay ``override`` on ``base``; neither is modified."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def _reject_unknown(data: dict[str, Any], allowed: tuple[str, ...], where: str) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValueError(f"Unknown {where} keys: {', '.join(unknown)}")


def _positive_int(data: dict[str, Any], key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"limits.{key} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"limits.{key} must be at least 1, got {value}")
    return value


def parse_limits(data: dict[str, Any]) -> LimitsDef:
    _reject_unknown(data, _LIMIT_INT_KEYS + ("amount_max",), "limits")
    kwargs: dict[str, Any] = {
        key: _positive_int(data, key) for key in _LIMIT_INT_KEYS if key in data
    }
    if "amount_max" in data:
        try:
            amount_max = Decimal(str(data["amount_max"]))
        except InvalidOperation as exc:
            raise ValueError(
                f"limits.amount_max must be a number, got {data['amount_max']!r}"
            ) from exc
        if not amount_max.is_finite() or amount_max <= 0:
            raise ValueError(f"limits.amount_max must be positive, got {amount_max}")
        kwargs["amount_max"] = amount_max
    return LimitsDef(**kwargs)


def parse_settings(data: dict[str, Any]) -> ExpenseSettings:
    _reject_unknown(data, _SETTINGS_KEYS, "settings")
    limits = data.get("limits") or {}
    if not isinstance(limits, dict):
        raise ValueError("limits must be a mapping")
    kwargs: dict[str, Any] = {
        key: str(data[key]) for key in _SETTINGS_KEYS[1:] if key in data
    }
    return ExpenseSettings(limits=parse_limits(limits), **kwargs)
