"""
validation.py
-------------
Argument checks shared by the theme, guide and annotation functions.

Every check raises immediately with a message that names the offending
argument, so errors surface at the call site rather than at draw time.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Any, Iterable

import pandas as pd
from packaging.version import Version

# tick labels are populated before the first draw from this release on
MIN_MATPLOTLIB = "3.6"


def check_columns(data: pd.DataFrame, columns: Iterable[str | None], caller: str) -> None:
    """Raise if any of *columns* is absent from *data*.

    ``None`` entries are ignored so optional column arguments can be passed
    straight through.

    Raises
    ------
    ValueError
        Listing every missing column, not just the first.
    """
    wanted = [c for c in columns if c is not None]
    missing = [c for c in wanted if c not in data.columns]
    if missing:
        raise ValueError(
            f"{caller}: column(s) not found in data: {', '.join(map(repr, missing))}. "
            f"Available columns: {', '.join(map(str, data.columns))}."
        )


def check_choice(name: str, value: Any, choices: Iterable[Any]) -> None:
    choices = list(choices)
    if value not in choices:
        raise ValueError(
            f"`{name}` must be one of {', '.join(map(repr, choices))}; got {value!r}."
        )


def check_positive(name: str, value: Any, allow_zero: bool = False) -> float:
    """Return *value* as a float after checking it is a finite positive number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"`{name}` must be numeric; got {type(value).__name__}.")
    value = float(value)
    if value != value or value in (float("inf"), float("-inf")):
        raise ValueError(f"`{name}` must be finite; got {value}.")
    if value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ValueError(f"`{name}` must be {bound}; got {value}.")
    return value


def require_version(package: str, minimum: str) -> None:
    """Raise ImportError unless *package* is installed at *minimum* or newer."""
    try:
        installed = version(package)
    except PackageNotFoundError:
        raise ImportError(f"{package} >= {minimum} needed for this function.") from None
    if Version(installed) < Version(minimum):
        raise ImportError(
            f"{package} >= {minimum} needed for this function (found {installed})."
        )
