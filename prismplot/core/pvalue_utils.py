"""
pvalue_utils.py
---------------
Significance brackets and p-value labels for existing matplotlib Axes.

:func:`add_pvalue` takes a table with one row per comparison (as returned by
:func:`prismplot.core.stats_utils.pairwise_ttests`) and draws, for each row,
a bracket between the two compared groups with its label above it.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

import numpy as np
import pandas as pd
import matplotlib as mpl
from matplotlib.lines import Line2D
from matplotlib.text import Annotation

from .validation import MIN_MATPLOTLIB, check_columns, check_positive, require_version

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
LABEL_COLUMNS = ("label", "p.adj.signif", "p.adj", "p")

# {column} placeholders; column names may contain dots
_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")

# extra room above the highest label, as a fraction of the value range
LABEL_HEADROOM = 0.05


class PValueLayer(NamedTuple):
    """Artists added by :func:`add_pvalue`."""
    brackets: list[Line2D]
    labels: list[Annotation]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _format_value(value) -> str:
    if isinstance(value, (float, np.floating)):
        return "" if np.isnan(value) else f"{value:.3g}"
    return str(value)


def _label_texts(data: pd.DataFrame, label: str | None) -> list[str]:
    if label is None:
        label = next((c for c in LABEL_COLUMNS if c in data.columns), None)
        if label is None:
            raise ValueError(
                "add_pvalue: no label column found; pass `label` or add one of "
                f"{', '.join(map(repr, LABEL_COLUMNS))} to the data."
            )
    if label in data.columns:
        return [_format_value(v) for v in data[label]]

    fields = _PLACEHOLDER.findall(label)
    if not fields:
        raise ValueError(
            f"add_pvalue: `label` {label!r} is neither a column of the data "
            "nor a template with {column} placeholders."
        )
    check_columns(data, fields, "add_pvalue")
    return [
        _PLACEHOLDER.sub(lambda m, row=row: _format_value(row[m.group(1)]), label)
        for _, row in data.iterrows()
    ]


def _group_positions(ax, axis: str, values) -> np.ndarray:
    """Map group names or numbers to data coordinates along *axis*.

    Names are looked up among the tick labels, which covers both
    matplotlib's categorical axes and plots that put numeric ticks under
    text labels.
    """
    axis_obj = ax.xaxis if axis == "x" else ax.yaxis
    coord = 0 if axis == "x" else 1
    tick_labels = {
        t.get_text(): t.get_position()[coord]
        for t in axis_obj.get_ticklabels()
        if t.get_text()
    }

    positions = []
    for value in values:
        if isinstance(value, (int, float, np.number)) and not isinstance(value, (bool, np.bool_)):
            positions.append(float(value))
            continue
        name = str(value)
        if name in tick_labels:
            positions.append(float(tick_labels[name]))
            continue
        raise ValueError(f"add_pvalue: group {name!r} is not on the {axis} axis.")
    return np.asarray(positions, dtype=float)


def _tip_lengths(tip_length, n: int) -> np.ndarray:
    tips = np.atleast_1d(np.asarray(tip_length, dtype=float))
    if tips.size == 1:
        tips = np.repeat(tips, 2 * n)
    elif tips.size == 2:
        tips = np.tile(tips, n)
    elif tips.size != 2 * n:
        raise ValueError(
            f"`tip_length` must have 1, 2 or {2 * n} values (two per bracket); got {tips.size}."
        )
    if not np.all(np.isfinite(tips)) or (tips < 0).any():
        raise ValueError("`tip_length` values must be finite and >= 0.")
    return tips.reshape(n, 2)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def add_pvalue(
    ax,
    data,
    label: str | None = None,
    xmin: str = "group1",
    xmax: str | None = "group2",
    x: str | None = None,
    y_position: str = "y.position",
    label_size: float = 9,
    colour=None,
    fontweight=None,
    tip_length=0.03,
    bracket_size: float = 1.0,
    bracket_colour=None,
    bracket_shorten: float = 0.0,
    bracket_nudge_y: float = 0.0,
    step_increase: float = 0.0,
    step_group_by: str | None = None,
    remove_bracket: bool = False,
    coord_flip: bool = False,
    label_pad: float = 2.0,
) -> PValueLayer:
    """Add significance brackets and p-value labels to *ax*.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Axes holding the plot; groups must already be on the group axis.
    data : pd.DataFrame
        One row per comparison.
    label : str or None
        Column with the label text, or a template such as
        ``"p = {p.adj}"``.  When None, the first of ``label``,
        ``p.adj.signif``, ``p.adj`` and ``p`` found in *data* is used.
    xmin, xmax : str
        Columns with the two groups of each comparison, as category names
        or numeric positions (for dodged groups).  With *xmax* None only the
        labels are drawn, at the *xmin* group.
    x : str or None
        Column of label positions.  When given no brackets are drawn.
    y_position : str
        Column with the height of each bracket, in data units.
    label_size : float
        Font size of the labels in points.
    colour : colour or str or None
        Label colour, or the name of a column of per-row colours.
        Defaults to the ``text.color`` rcParam.
    fontweight : optional
        Label font weight.
    tip_length : float or sequence of float
        Length of the bracket tips as a fraction of the value axis range:
        one value, a (left, right) pair, or two values per row.
    bracket_size : float
        Bracket line width in points.
    bracket_colour : colour or None
        Defaults to the label colour.
    bracket_shorten : float
        Total amount, in group axis units, trimmed from each bracket
        (half from each end).
    bracket_nudge_y : float
        Shift added to every bracket height.
    step_increase : float
        Each successive bracket is raised by this fraction of the value
        axis range.
    step_group_by : str or None
        Column whose groups each restart the stepping.
    remove_bracket : bool
        Draw only the labels, centred between *xmin* and *xmax* (or at
        *xmin* when *xmax* is absent).
    coord_flip : bool
        The groups are on the y axis (horizontal plot).  Brackets are drawn
        vertically and the labels rotated by -90 degrees.
    label_pad : float
        Gap between bracket and label in points.

    Returns
    -------
    PValueLayer
        The bracket lines and label annotations that were added.

    Raises
    ------
    ValueError
        If a column is missing, a group is not on the axis, or an
        argument is out of range.
    """
    require_version("matplotlib", MIN_MATPLOTLIB)
    data = pd.DataFrame(data).reset_index(drop=True)
    n = len(data)

    colour_column = colour if isinstance(colour, str) and colour in data.columns else None
    required = [y_position, step_group_by, colour_column]
    if x is not None:
        required.append(x)
    else:
        required.append(xmin)
        if not remove_bracket and xmax is not None:
            required.append(xmax)
    check_columns(data, required, "add_pvalue")

    label_size = check_positive("label_size", label_size)
    bracket_size = check_positive("bracket_size", bracket_size)
    bracket_shorten = check_positive("bracket_shorten", bracket_shorten, allow_zero=True)
    step_increase = check_positive("step_increase", step_increase, allow_zero=True)
    label_pad = check_positive("label_pad", label_pad, allow_zero=True)
    if isinstance(bracket_nudge_y, bool) or not isinstance(bracket_nudge_y, (int, float)):
        raise ValueError("`bracket_nudge_y` must be numeric.")

    if n == 0:
        logger.debug("add_pvalue: empty table, nothing to draw")
        return PValueLayer([], [])

    texts = _label_texts(data, label)
    group_axis, value_axis = ("y", "x") if coord_flip else ("x", "y")

    heights = pd.to_numeric(data[y_position], errors="coerce").to_numpy(dtype=float)
    if not np.all(np.isfinite(heights)):
        raise ValueError(f"add_pvalue: column {y_position!r} must hold finite numbers.")
    lo, hi = ax.get_xlim() if value_axis == "x" else ax.get_ylim()
    span = abs(hi - lo) or 1.0

    if step_group_by is not None:
        steps = data.groupby(step_group_by, sort=False).cumcount().to_numpy()
    else:
        steps = np.arange(n)
    heights = heights + bracket_nudge_y + steps * step_increase * span

    if x is not None:
        left = right = _group_positions(ax, group_axis, data[x])
        draw_brackets = False
    else:
        left = _group_positions(ax, group_axis, data[xmin])
        if xmax is not None and xmax in data.columns:
            right = _group_positions(ax, group_axis, data[xmax])
        else:
            right = left
        direction = np.sign(right - left)
        left = left + direction * bracket_shorten / 2
        right = right - direction * bracket_shorten / 2
        draw_brackets = not remove_bracket and xmax is not None
    centres = (left + right) / 2

    if colour_column is not None:
        colours = list(data[colour_column])
    else:
        colours = [colour if colour is not None else mpl.rcParams["text.color"]] * n
    line_colours = colours if bracket_colour is None else [bracket_colour] * n
    tips = _tip_lengths(tip_length, n) * span

    brackets = []
    if draw_brackets:
        for i in range(n):
            groups = [left[i], left[i], right[i], right[i]]
            values = [heights[i] - tips[i, 0], heights[i], heights[i], heights[i] - tips[i, 1]]
            xs, ys = (values, groups) if coord_flip else (groups, values)
            line = Line2D(xs, ys, color=line_colours[i], linewidth=bracket_size, solid_capstyle="butt")
            ax.add_line(line)
            brackets.append(line)

    labels = []
    for i in range(n):
        if coord_flip:
            placement = dict(
                xy=(heights[i], centres[i]), xytext=(label_pad, 0),
                ha="left", va="center", rotation=-90,
            )
        else:
            placement = dict(xy=(centres[i], heights[i]), xytext=(0, label_pad), ha="center", va="bottom")
        labels.append(ax.annotate(
            texts[i],
            textcoords="offset points",
            fontsize=label_size,
            color=colours[i],
            fontweight=fontweight,
            annotation_clip=False,
            **placement,
        ))

    # keep the labels inside the autoscaled range
    top = heights + LABEL_HEADROOM * span
    points = np.column_stack([top, centres] if coord_flip else [centres, top])
    ax.update_datalim(points)
    ax.autoscale_view(scalex=coord_flip, scaley=not coord_flip)

    logger.debug("add_pvalue: %d labels, %d brackets", len(labels), len(brackets))
    return PValueLayer(brackets, labels)
