"""
scales.py
---------
Discrete palette functions and matplotlib property cycles built from the
palette tables in :mod:`prismplot.styles.colors`.

A palette function maps a number of levels ``n`` to that many entries, in
the manner of ``scales::manual_pal``.  The ``scale_*`` helpers wrap the same
entries in :class:`cycler.Cycler` objects, which can be passed to
``Axes.set_prop_cycle`` or the ``axes.prop_cycle`` rcParam.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any

from cycler import Cycler, cycler

from .colors import get_colors

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Palette functions
# ---------------------------------------------------------------------------

class DiscretePalette:
    """Callable returning the first ``n`` entries of a fixed palette."""

    def __init__(self, values: list[Any], name: str, kind: str) -> None:
        self.values = list(values)
        self.name = name
        self.kind = kind

    @property
    def max_n(self) -> int:
        return len(self.values)

    def __call__(self, n: int) -> list[Any]:
        if isinstance(n, bool) or not isinstance(n, int):
            raise ValueError(f"`n` must be an integer; got {type(n).__name__}.")
        if n < 0:
            raise ValueError(f"`n` must be >= 0; got {n}.")
        if n > self.max_n:
            warnings.warn(
                f"This palette can handle a maximum of {self.max_n} values. "
                f"You have supplied {n}.",
                UserWarning,
                stacklevel=2,
            )
            return self.values + [None] * (n - self.max_n)
        return self.values[:n]

    def __repr__(self) -> str:
        return f"DiscretePalette({self.kind}={self.name!r}, max_n={self.max_n})"


def prism_colour_pal(palette: str = "colors") -> DiscretePalette:
    """Palette function for line and point colours."""
    return DiscretePalette(get_colors(palette, "colour"), palette, "colour")


def prism_fill_pal(palette: str = "colors") -> DiscretePalette:
    """Palette function for fills (marker faces, bars, boxes)."""
    return DiscretePalette(get_colors(palette, "fill"), palette, "fill")


def prism_shape_pal(palette: str = "default") -> DiscretePalette:
    """Palette function returning :class:`~prismplot.styles.colors.ShapeSpec` entries."""
    return DiscretePalette(get_colors(palette, "shape"), palette, "shape")


prism_color_pal = prism_colour_pal


# ---------------------------------------------------------------------------
# Property cycles
# ---------------------------------------------------------------------------

def scale_colour_prism(palette: str = "colors") -> Cycler:
    pal = prism_colour_pal(palette)
    return cycler(color=pal(pal.max_n))


def scale_fill_prism(palette: str = "colors") -> Cycler:
    # markerfacecolor is the only fill key Line2D accepts in a cycle
    pal = prism_fill_pal(palette)
    return cycler(markerfacecolor=pal(pal.max_n))


def scale_shape_prism(palette: str = "default") -> Cycler:
    pal = prism_shape_pal(palette)
    shapes = pal(pal.max_n)
    return cycler(marker=[s.marker for s in shapes]) + cycler(fillstyle=[s.fillstyle for s in shapes])


scale_color_prism = scale_colour_prism


def prism_cycler(
    colour: str | None = None,
    fill: str | None = None,
    shape: str | None = None,
    n: int | None = None,
) -> Cycler:
    """Combine colour, fill and shape palettes into one property cycle.

    Palettes of different lengths are truncated to the shortest one, or to
    ``n`` when given.

    Parameters
    ----------
    colour, fill, shape : str or None
        Palette names; ``None`` leaves that property out of the cycle.
    n : int or None
        Cycle length.  Must not exceed the shortest selected palette.

    Returns
    -------
    cycler.Cycler

    Examples
    --------
    >>> ax.set_prop_cycle(prism_cycler(colour="floral", shape="filled"))
    """
    parts = []
    if colour is not None:
        parts.append(("color", prism_colour_pal(colour)))
    if fill is not None:
        parts.append(("markerfacecolor", prism_fill_pal(fill)))
    if shape is not None:
        parts.append(("shape", prism_shape_pal(shape)))
    if not parts:
        raise ValueError("prism_cycler: give at least one of `colour`, `fill` or `shape`.")

    shortest = min(pal.max_n for _, pal in parts)
    if n is None:
        n = shortest
    elif n > shortest:
        raise ValueError(f"prism_cycler: `n` = {n} exceeds the shortest palette ({shortest} values).")
    logger.debug("prism_cycler: %s truncated to %d entries", [p.name for _, p in parts], n)

    combined = None
    for key, pal in parts:
        values = pal(n)
        if key == "shape":
            piece = cycler(marker=[s.marker for s in values]) + cycler(fillstyle=[s.fillstyle for s in values])
        else:
            piece = cycler(**{key: values})
        combined = piece if combined is None else combined + piece
    return combined
