"""
themes.py
---------
GraphPad Prism-like theme presets for matplotlib.

:func:`theme_prism` validates its arguments and returns a :class:`PrismTheme`.
The theme carries everything that fits in ``rcParams`` (fonts, spine and tick
styling, backgrounds, colour cycle) plus the per-axes details that do not
(tick label rotation, the panel border), which :meth:`PrismTheme.style_axes`
applies to an existing ``Axes``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import matplotlib as mpl
import matplotlib.pyplot as plt

from ..core.axis_utils import guide_prism_minor
from ..core.validation import MIN_MATPLOTLIB, check_choice, check_positive, require_version
from .colors import ThemeColours, get_colors
from .scales import prism_colour_pal, prism_fill_pal, prism_shape_pal, scale_colour_prism

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
FONTFACES = {
    # fontface -> (font.weight, font.style)
    "plain": ("normal", "normal"),
    "bold": ("bold", "normal"),
    "italic": ("normal", "italic"),
    "bold.italic": ("bold", "italic"),
}

# axis_text_angle -> (horizontal alignment, vertical alignment) of x tick labels
TEXT_ANGLES = {
    0: ("center", "top"),
    45: ("right", "top"),
    90: ("right", "center"),
    270: ("left", "center"),
}


# ---------------------------------------------------------------------------
# Theme object
# ---------------------------------------------------------------------------

@dataclass
class PrismTheme:
    """
    A resolved Prism theme.

    Instances are normally built by :func:`theme_prism`, which checks the
    arguments.  Sizes are in points.
    """

    palette: str
    colours: ThemeColours
    base_size: float = 14.0
    base_family: str = "sans-serif"
    base_fontface: str = "bold"
    base_line_size: float = 1.0
    base_rect_size: float = 1.0
    axis_text_angle: int = 0
    border: bool = False

    @property
    def major_tick_length(self) -> float:
        return self.base_size / 2.5

    @property
    def minor_tick_length(self) -> float:
        return self.base_size / 5

    def rc_params(self) -> dict[str, Any]:
        """Return the theme as an rcParams mapping."""
        c = self.colours
        weight, style = FONTFACES[self.base_fontface]
        text_size = self.base_size * 0.95
        rc: dict[str, Any] = {
            "font.family": [self.base_family],
            "font.size": self.base_size,
            "font.weight": weight,
            "font.style": style,
            "text.color": c.axis_text,
            "figure.facecolor": c.page,
            "savefig.facecolor": c.page,
            "axes.facecolor": c.panel,
            "axes.edgecolor": c.axis,
            "axes.linewidth": self.base_line_size,
            "axes.grid": False,
            "axes.spines.top": self.border,
            "axes.spines.right": self.border,
            "axes.labelsize": self.base_size,
            "axes.labelweight": weight,
            "axes.labelcolor": c.axis_title,
            "axes.titlesize": self.base_size * 1.2,
            "axes.titleweight": weight,
            "axes.titlecolor": c.title,
            "axes.prop_cycle": scale_colour_prism(self.palette),
            "patch.linewidth": self.base_rect_size,
            "legend.frameon": False,
            "legend.fontsize": text_size,
            "legend.title_fontsize": self.base_size,
            "legend.labelcolor": c.axis_text,
        }
        for ax in ("xtick", "ytick"):
            rc.update({
                f"{ax}.color": c.axis,
                f"{ax}.labelcolor": c.axis_text,
                f"{ax}.labelsize": text_size,
                f"{ax}.direction": "out",
                f"{ax}.major.size": self.major_tick_length,
                f"{ax}.minor.size": self.minor_tick_length,
                f"{ax}.major.width": self.base_line_size,
                f"{ax}.minor.width": self.base_line_size,
                f"{ax}.major.pad": self.base_size / 3.5,
                f"{ax}.minor.pad": self.base_size / 3.5,
            })
        return rc

    def apply(self) -> None:
        """Apply the theme to matplotlib's global rcParams."""
        mpl.rcParams.update(self.rc_params())
        logger.debug("Applied prism theme %r", self.palette)

    def context(self):
        """Context manager applying the theme temporarily."""
        return plt.rc_context(self.rc_params())

    def style_axes(self, ax) -> Any:
        """Apply the theme to an existing Axes.

        Covers settings rcParams cannot express (tick label rotation and the
        panel border) and re-applies colours and sizes, so axes created
        before the theme was active are styled as well.
        """
        c = self.colours
        weight, _ = FONTFACES[self.base_fontface]

        ax.set_facecolor(c.panel)
        ax.figure.set_facecolor(c.page)
        for side, spine in ax.spines.items():
            spine.set_color(c.axis)
            spine.set_linewidth(self.base_line_size)
            if side in ("top", "right"):
                spine.set_visible(self.border)

        for which, length in (("major", self.major_tick_length), ("minor", self.minor_tick_length)):
            ax.tick_params(
                axis="both", which=which, direction="out", length=length,
                width=self.base_line_size, color=c.axis, labelcolor=c.axis_text,
            )

        ax.xaxis.label.set_color(c.axis_title)
        ax.yaxis.label.set_color(c.axis_title)
        ax.xaxis.label.set_fontweight(weight)
        ax.yaxis.label.set_fontweight(weight)
        ax.title.set_color(c.title)

        ha, va = TEXT_ANGLES[self.axis_text_angle]
        ax.tick_params(axis="x", labelrotation=self.axis_text_angle)
        for label in ax.get_xticklabels():
            label.set_horizontalalignment(ha)
            label.set_verticalalignment(va)
            label.set_rotation_mode("anchor" if self.axis_text_angle else "default")
        return ax


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def theme_prism(
    palette: str = "black_and_white",
    base_size: float = 14,
    base_family: str = "sans-serif",
    base_fontface: str = "bold",
    base_line_size: float | None = None,
    base_rect_size: float | None = None,
    axis_text_angle: int = 0,
    border: bool = False,
) -> PrismTheme:
    """Build a Prism-style theme.

    Parameters
    ----------
    palette : str
        Theme palette name; sets the colours of axes, text and backgrounds
        and the default colour cycle.  See ``list_palettes("theme")``.
    base_size : float
        Base font size in points; tick lengths and paddings scale with it.
    base_family : str
        Font family.
    base_fontface : str
        One of ``"plain"``, ``"bold"``, ``"italic"`` or ``"bold.italic"``.
    base_line_size, base_rect_size : float or None
        Line widths of axis lines/ticks and of rectangles (bars, boxes).
        Both default to ``base_size / 14``.
    axis_text_angle : int
        Rotation of the x axis tick labels: 0, 45, 90 or 270.
    border : bool
        Draw all four spines rather than only the left and bottom ones.

    Returns
    -------
    PrismTheme

    Raises
    ------
    ValueError
        On an unknown palette or an out-of-range argument.
    ImportError
        If the installed matplotlib is too old.
    """
    require_version("matplotlib", MIN_MATPLOTLIB)

    colours = get_colors(palette, "theme")
    base_size = check_positive("base_size", base_size)
    if not isinstance(base_family, str) or not base_family:
        raise ValueError("`base_family` must be a non-empty string.")
    check_choice("base_fontface", base_fontface, FONTFACES)
    check_choice("axis_text_angle", axis_text_angle, TEXT_ANGLES)
    if not isinstance(border, bool):
        raise ValueError(f"`border` must be True or False; got {border!r}.")

    line = base_size / 14 if base_line_size is None else check_positive("base_line_size", base_line_size)
    rect = base_size / 14 if base_rect_size is None else check_positive("base_rect_size", base_rect_size)

    return PrismTheme(
        palette=palette,
        colours=colours,
        base_size=base_size,
        base_family=base_family,
        base_fontface=base_fontface,
        base_line_size=line,
        base_rect_size=rect,
        axis_text_angle=int(axis_text_angle),
        border=border,
    )


def preview_theme(palette: str = "black_and_white", n_groups: int = 3, seed: int = 42):
    """Draw a small dot plot in the given theme and palettes.

    Each group gets its own colour, fill and shape so all three palettes are
    visible.  Returns the matplotlib Figure.
    """
    theme = theme_prism(palette=palette)
    pals = (prism_colour_pal(palette), prism_fill_pal(palette), prism_shape_pal("default"))
    limit = min(pal.max_n for pal in pals)
    if isinstance(n_groups, bool) or not isinstance(n_groups, int) or not 1 <= n_groups <= limit:
        raise ValueError(
            f"`n_groups` must be an integer between 1 and {limit} for palette {palette!r}; got {n_groups!r}."
        )
    colours, fills, shapes = (pal(n_groups) for pal in pals)
    rng = np.random.default_rng(seed)

    with theme.context():
        fig, ax = plt.subplots(figsize=(4.5, 4.0))
        for i in range(n_groups):
            y = rng.normal(10.0 + 6.0 * i, 2.5, size=10)
            x = i + rng.uniform(-0.15, 0.15, size=y.size)
            shape = shapes[i]
            ax.plot(
                x, y, linestyle="none", marker=shape.marker, fillstyle=shape.fillstyle,
                color=colours[i], markerfacecolor=fills[i], markersize=8,
            )
            ax.hlines(y.mean(), i - 0.25, i + 0.25, color=colours[i], linewidth=theme.base_line_size * 1.5)

        ax.set_xticks(range(n_groups))
        ax.set_xticklabels([f"Group {i + 1}" for i in range(n_groups)])
        ax.set_xlim(-0.6, n_groups - 0.4)
        ax.set_xlabel("Group")
        ax.set_ylabel("Response")
        ax.set_title(palette)
        guide_prism_minor(ax, axis="y")
        theme.style_axes(ax)
        fig.tight_layout()
    return fig
