"""Run defaults and their environment overrides.

The entry point always runs with fixed constants; MONOLITH_* variables can
replace any of them.  Self-contained, no external dependencies.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class RunDefaults:
    """Constants used by `monolith run` when no option overrides them."""

    seed: int = 42
    flag: bool = True
    name: str = "alpha"
    items: list[int] = field(default_factory=lambda: [1, 2, 3])


def parse_items(text: str) -> list[int]:
    """Parse a comma-separated list of ints: '1, 2,3' -> [1, 2, 3]."""
    return [int(part) for part in text.split(",") if part.strip()]


def _parse_flag(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be one of {', '.join(_TRUE_VALUES + _FALSE_VALUES)}, got {raw!r}")


def load_defaults(environ: Optional[Mapping[str, str]] = None) -> RunDefaults:
    """Build RunDefaults, applying MONOLITH_* overrides.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.

    Raises:
        ValueError: if a variable is set but cannot be parsed.
    """
    env = os.environ if environ is None else environ
    base = RunDefaults()

    seed = base.seed
    if env.get("MONOLITH_SEED"):
        try:
            seed = int(env["MONOLITH_SEED"])
        except ValueError:
            raise ValueError(f"MONOLITH_SEED must be an integer, got {env['MONOLITH_SEED']!r}")

    flag = base.flag
    if env.get("MONOLITH_FLAG"):
        flag = _parse_flag("MONOLITH_FLAG", env["MONOLITH_FLAG"])

    items = base.items
    if env.get("MONOLITH_ITEMS"):
        try:
            items = parse_items(env["MONOLITH_ITEMS"])
        except ValueError:
            raise ValueError(f"MONOLITH_ITEMS must be comma-separated integers, got {env['MONOLITH_ITEMS']!r}")

    return RunDefaults(
        seed=seed,
        flag=flag,
        name=env.get("MONOLITH_NAME", base.name),
        items=items,
    )
