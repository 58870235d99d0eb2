"""
axis_utils.py
-------------
Prism-style axis guides for matplotlib Axes.

Provides offset axes (axis line only as long as the outermost ticks), minor
tick guides, bracket axes for categorical data, and tick annotations on any
side of the panel.

Offset axes follow later changes to the view limits.  Brackets and tick
annotations read tick positions when they are called, so call those after
the data, limits and tick locators of the Axes are final.
"""

from __future__ import annotations

import logging
import weakref

import numpy as np
import matplotlib as mpl
from matplotlib.lines import Line2D
from matplotlib.markers import TICKDOWN, TICKLEFT, TICKRIGHT, TICKUP
from matplotlib.ticker import AutoMinorLocator, FixedLocator, LogLocator, NullLocator

from .validation import check_choice, check_positive

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
AXIS_POSITIONS = {"x": ("bottom", "top"), "y": ("left", "right")}

SIDES = {"t": "top", "r": "right", "b": "bottom", "l": "left"}

# position -> (marker pointing away from the panel, marker pointing into it)
BRACKET_TIPS = {
    "bottom": (TICKDOWN, TICKUP),
    "top": (TICKUP, TICKDOWN),
    "left": (TICKLEFT, TICKRIGHT),
    "right": (TICKRIGHT, TICKLEFT),
}

DEFAULT_BRACKET_WIDTH = 0.8

# Axes -> {(axis, position): callback id} of offset guides that track the limits
_LIMIT_CALLBACKS = weakref.WeakKeyDictionary()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _resolve_axis(ax, axis: str, position: str | None):
    check_choice("axis", axis, AXIS_POSITIONS)
    if position is None:
        position = AXIS_POSITIONS[axis][0]
    check_choice("position", position, AXIS_POSITIONS[axis])
    axis_obj = ax.xaxis if axis == "x" else ax.yaxis
    return axis_obj, position


def _view_limits(ax, axis: str) -> tuple[float, float]:
    lo, hi = ax.get_xlim() if axis == "x" else ax.get_ylim()
    return min(lo, hi), max(lo, hi)


def ticks_in_view(ax, axis: str = "x", which: str = "major") -> np.ndarray:
    """Sorted tick locations of *axis* that fall inside the current view."""
    check_choice("which", which, ("major", "minor", "both"))
    lo, hi = _view_limits(ax, axis)
    axis_obj = ax.xaxis if axis == "x" else ax.yaxis
    locs = []
    if which in ("major", "both"):
        locs.extend(axis_obj.get_majorticklocs())
    if which in ("minor", "both"):
        locs.extend(axis_obj.get_minorticklocs())
    locs = np.asarray(locs, dtype=float)
    tol = (hi - lo) * 1e-10
    return np.unique(locs[(locs >= lo - tol) & (locs <= hi + tol)])


def _bound_spine(ax, axis: str, position: str, ticks: np.ndarray):
    spine = ax.spines[position]
    if ticks.size == 0:
        logger.debug("No %s ticks in view; hiding the %s spine", axis, position)
        spine.set_visible(False)
        return spine
    spine.set_visible(True)
    spine.set_bounds(ticks[0], ticks[-1])
    return spine


def _offset_spine(ax, axis: str, position: str, which: str):
    """Bound the spine now and again whenever the view limits of *axis* change.

    Autoscaling at draw time sets the limits through ``set_xbound`` /
    ``set_ybound``, which also fires the callback.
    """
    def rebound(changed_ax):
        _bound_spine(changed_ax, axis, position, ticks_in_view(changed_ax, axis, which))

    cids = _LIMIT_CALLBACKS.setdefault(ax, {})
    if (axis, position) in cids:
        ax.callbacks.disconnect(cids[(axis, position)])
    cids[(axis, position)] = ax.callbacks.connect(f"{axis}lim_changed", rebound)
    return _bound_spine(ax, axis, position, ticks_in_view(ax, axis, which))


def _minor_locator(axis_obj, n: int):
    if axis_obj.get_scale() == "log":
        return LogLocator(subs=np.arange(2, 10))
    if isinstance(n, bool) or not isinstance(n, int) or n < 2:
        raise ValueError(f"`n` must be an integer >= 2; got {n!r}.")
    return AutoMinorLocator(n)


# ---------------------------------------------------------------------------
# Guides
# ---------------------------------------------------------------------------

def guide_prism_offset(ax, axis: str = "y", position: str | None = None):
    """Draw the axis line only between the outermost major ticks.

    Control the length of the axis through the tick locations, e.g.
    ``ax.set_yticks([0, 10, 20])``.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
    axis : str
        ``"x"`` or ``"y"``.
    position : str or None
        Spine to bound: ``"bottom"``/``"top"`` for x, ``"left"``/``"right"``
        for y.  Defaults to bottom or left.

    Returns
    -------
    matplotlib.spines.Spine
        The bounded spine.  It is hidden when no tick lies in view, and its
        bounds are recomputed whenever the view limits change.
    """
    _, position = _resolve_axis(ax, axis, position)
    return _offset_spine(ax, axis, position, "major")


def guide_prism_minor(
    ax,
    axis: str = "y",
    minor_breaks=None,
    n: int = 2,
    minor_length: float | None = None,
):
    """Add minor ticks to *axis*.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
    axis : str
        ``"x"`` or ``"y"``.
    minor_breaks : sequence of float or None
        Explicit minor tick positions.  When None, each major interval is
        split into *n* parts (log axes get ticks at 2..9 of each decade).
    n : int
        Number of subdivisions per major interval; at least 2.
    minor_length : float or None
        Minor tick length in points.  Defaults to the ``*tick.minor.size``
        rcParam.

    Returns
    -------
    matplotlib.ticker.Locator
        The minor locator now installed on the axis.
    """
    axis_obj, _ = _resolve_axis(ax, axis, None)

    if minor_breaks is not None:
        locator = FixedLocator(np.asarray(minor_breaks, dtype=float))
    else:
        locator = _minor_locator(axis_obj, n)
    axis_obj.set_minor_locator(locator)

    if minor_length is not None:
        ax.tick_params(axis=axis, which="minor", length=check_positive("minor_length", minor_length))
    return locator


def guide_prism_offset_minor(
    ax,
    axis: str = "y",
    position: str | None = None,
    minor_breaks=None,
    n: int = 2,
    minor_length: float | None = None,
):
    """Minor ticks plus an offset axis line spanning the outermost major or minor tick."""
    _, position = _resolve_axis(ax, axis, position)
    guide_prism_minor(ax, axis, minor_breaks=minor_breaks, n=n, minor_length=minor_length)
    return _offset_spine(ax, axis, position, "both")


def guide_prism_bracket(
    ax,
    axis: str = "x",
    width: float | None = None,
    outside: bool = True,
    position: str | None = None,
    tick_length: float | None = None,
) -> list[Line2D]:
    """Replace the axis line with a bracket under each major tick.

    Meant for categorical axes: each category label sits under its own
    bracket, whose tips point away from the panel (``outside=True``) or
    into it.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
    axis : str
        ``"x"`` or ``"y"``.
    width : float or None
        Bracket width in data units.  Defaults to 0.8 times the smallest
        spacing between ticks (0.8 when there is a single tick).
    outside : bool
        Direction of the bracket tips.
    position : str or None
        Side of the panel, as in :func:`guide_prism_offset`.
    tick_length : float or None
        Length of the tips in points; defaults to the major tick length rcParam.

    Returns
    -------
    list of matplotlib.lines.Line2D
        One artist per bracket.
    """
    axis_obj, position = _resolve_axis(ax, axis, position)
    ticks = ticks_in_view(ax, axis, "major")

    if width is None:
        spacing = np.diff(ticks).min() if ticks.size > 1 else 1.0
        width = DEFAULT_BRACKET_WIDTH * spacing
    else:
        width = check_positive("width", width)
    if tick_length is None:
        tick_length = mpl.rcParams[f"{axis}tick.major.size"]
    else:
        tick_length = check_positive("tick_length", tick_length, allow_zero=True)

    spine = ax.spines[position]
    colour = spine.get_edgecolor()
    linewidth = spine.get_linewidth()
    cids = _LIMIT_CALLBACKS.get(ax, {})
    if (axis, position) in cids:
        ax.callbacks.disconnect(cids.pop((axis, position)))
    spine.set_visible(False)

    pad = mpl.rcParams[f"{axis}tick.major.pad"] + (tick_length if outside else 0.0)
    ax.tick_params(axis=axis, which="both", length=0, pad=pad)

    transform = ax.get_xaxis_transform() if axis == "x" else ax.get_yaxis_transform()
    anchor = 0.0 if position in ("bottom", "left") else 1.0
    tip = BRACKET_TIPS[position][0 if outside else 1]

    brackets = []
    for loc in ticks:
        ends = [loc - width / 2, loc + width / 2]
        xs, ys = (ends, [anchor, anchor]) if axis == "x" else ([anchor, anchor], ends)
        line = Line2D(
            xs, ys,
            transform=transform,
            color=colour,
            linewidth=linewidth,
            marker=tip,
            markersize=tick_length,
            markeredgewidth=linewidth,
            clip_on=False,
            zorder=3,
        )
        ax.add_artist(line)
        brackets.append(line)
    logger.debug("Drew %d %s brackets of width %.3g", len(brackets), axis, width)
    return brackets


def _annotation_locs(ax, axis: str, kind: str) -> np.ndarray:
    axis_obj = ax.xaxis if axis == "x" else ax.yaxis
    if kind == "major" or not isinstance(axis_obj.get_minor_locator(), NullLocator):
        return ticks_in_view(ax, axis, kind)
    # the axis has no minor ticks of its own; place them without installing a locator
    locator = _minor_locator(axis_obj, 2)
    locator.set_axis(axis_obj)
    lo, hi = _view_limits(ax, axis)
    locs = np.asarray(locator(), dtype=float)
    major = ticks_in_view(ax, axis, "major")
    locs = locs[(locs >= lo) & (locs <= hi)]
    locs = locs[~np.isclose(locs[:, None], major[None, :]).any(axis=1)]
    return np.unique(locs)


def annotation_ticks(
    ax,
    sides: str = "b",
    which: str = "both",
    outside: bool = False,
    tick_length: float | None = None,
    minor_length: float | None = None,
    colour=None,
    linewidth: float | None = None,
) -> list[Line2D]:
    """Draw extra tick marks on any side of the panel, inside it by default.

    The marks are separate artists placed at the current tick locations, so
    the axis's own ticks keep their direction and length.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
    sides : str
        Any combination of ``"t"``, ``"r"``, ``"b"`` and ``"l"``.
    which : str
        ``"major"``, ``"minor"`` or ``"both"``.  Where the axis has no minor
        ticks, each major interval is halved.
    outside : bool
        Point the ticks away from the panel instead of into it.
    tick_length, minor_length : float or None
        Lengths in points; default to the ``*tick.major.size`` and
        ``*tick.minor.size`` rcParams.
    colour : colour or None
        Defaults to the ``*tick.color`` rcParam.
    linewidth : float or None
        Defaults to the ``*tick.major.width`` / ``*tick.minor.width`` rcParams.

    Returns
    -------
    list of matplotlib.lines.Line2D
        One artist per side and tick kind.
    """
    if not isinstance(sides, str) or not sides or set(sides) - set(SIDES):
        raise ValueError(f"`sides` must be a combination of 't', 'r', 'b' and 'l'; got {sides!r}.")
    check_choice("which", which, ("both", "major", "minor"))
    if tick_length is not None:
        tick_length = check_positive("tick_length", tick_length)
    if minor_length is not None:
        minor_length = check_positive("minor_length", minor_length)
    if linewidth is not None:
        linewidth = check_positive("linewidth", linewidth)

    kinds = ("major", "minor") if which == "both" else (which,)
    artists = []
    for letter in dict.fromkeys(sides):
        position = SIDES[letter]
        axis = "x" if letter in "tb" else "y"
        transform = ax.get_xaxis_transform() if axis == "x" else ax.get_yaxis_transform()
        anchor = 0.0 if position in ("bottom", "left") else 1.0
        marker = BRACKET_TIPS[position][0 if outside else 1]

        for kind in kinds:
            locs = _annotation_locs(ax, axis, kind)
            if locs.size == 0:
                continue
            length = tick_length if kind == "major" else minor_length
            if length is None:
                length = mpl.rcParams[f"{axis}tick.{kind}.size"]
            width = linewidth if linewidth is not None else mpl.rcParams[f"{axis}tick.{kind}.width"]
            fixed = np.full(locs.size, anchor)
            xs, ys = (locs, fixed) if axis == "x" else (fixed, locs)
            line = Line2D(
                xs, ys,
                transform=transform,
                linestyle="none",
                marker=marker,
                markersize=length,
                markeredgewidth=width,
                color=colour if colour is not None else mpl.rcParams[f"{axis}tick.color"],
                clip_on=False,
                zorder=3,
            )
            ax.add_artist(line)
            artists.append(line)
    logger.debug("Drew %d annotation tick sets on sides %r", len(artists), sides)
    return artists
