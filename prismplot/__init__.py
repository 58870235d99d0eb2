"""
prismplot
---------
GraphPad Prism-style themes, palettes, axis guides and significance
annotations for matplotlib.

Sub-packages
------------
core
    Axis guides, p-value brackets, p-value table helpers and input checks.
styles
    Colour, fill, shape and theme palettes, palette functions and themes.
"""

from . import core, styles
from .core import (
    add_pvalue,
    annotation_ticks,
    guide_prism_bracket,
    guide_prism_minor,
    guide_prism_offset,
    guide_prism_offset_minor,
    pairwise_ttests,
)
from .styles import (
    list_palettes,
    preview_theme,
    prism_colour_pal,
    prism_color_pal,
    prism_cycler,
    prism_fill_pal,
    prism_shape_pal,
    scale_colour_prism,
    scale_color_prism,
    scale_fill_prism,
    scale_shape_prism,
    theme_prism,
)

__version__ = "0.1.0"

__all__ = [
    "core",
    "styles",
    "add_pvalue",
    "annotation_ticks",
    "guide_prism_bracket",
    "guide_prism_minor",
    "guide_prism_offset",
    "guide_prism_offset_minor",
    "pairwise_ttests",
    "list_palettes",
    "preview_theme",
    "prism_colour_pal",
    "prism_color_pal",
    "prism_cycler",
    "prism_fill_pal",
    "prism_shape_pal",
    "scale_colour_prism",
    "scale_color_prism",
    "scale_fill_prism",
    "scale_shape_prism",
    "theme_prism",
]
