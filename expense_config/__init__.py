"""
expense_config -- single public entrypoint for configuration.

Responsibility:
    ``get_active_config()`` is the only way runtime code obtains
    settings.  The packaged ``defaults.yaml`` is always loaded first; an
    optional file overlays it key by key.

Architecture position:
    Configuration sits above ``expense_kernel``.  The kernel MUST NEVER
    import from ``expense_config``; ``expense_config.bridges`` translates
    settings into kernel inputs.

Failure modes:
    - ``FileNotFoundError`` -- the requested override file is missing.
    - ``ValueError`` -- unknown keys or invalid values.
"""

from __future__ import annotations

import logging
from pathlib import Path

from expense_config.loader import load_yaml_file, merge_dicts, parse_settings
from expense_config.schema import ExpenseSettings, LimitsDef

_logger = logging.getLogger("expense_kernel.config")

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(config_path: Path | str | None = None) -> ExpenseSettings:
    """Load the defaults, overlay ``config_path`` if given, and validate."""
    data = load_yaml_file(DEFAULTS_PATH)
    if config_path is not None:
        data = merge_dicts(data, load_yaml_file(Path(config_path)))
    settings = parse_settings(data)
    _logger.info(
        "config_loaded",
        extra={
            "config_source": str(config_path) if config_path else "defaults",
            "locale": settings.locale,
            "default_currency": settings.default_currency,
        },
    )
    return settings


__all__ = [
    "get_active_config",
    "ExpenseSettings",
    "LimitsDef",
    "DEFAULTS_PATH",
]
