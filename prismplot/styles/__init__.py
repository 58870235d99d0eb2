"""
prismplot.styles
----------------
Palettes and themes.

Modules
-------
colors
    Palette tables (COLOUR_PALETTES, FILL_PALETTES, SHAPE_PALETTES,
    THEME_COLOURS) and the :func:`get_colors` / :func:`list_palettes` lookups.
scales
    Palette functions (:func:`prism_colour_pal` and friends) and property
    cycles (:func:`scale_colour_prism` and friends).
themes
    :func:`theme_prism` and :func:`preview_theme`.
"""

from .colors import (
    COLOUR_PALETTES,
    FILL_PALETTES,
    SHAPE_PALETTES,
    THEME_COLOURS,
    ShapeSpec,
    ThemeColours,
    get_colors,
    list_palettes,
)
from .scales import (
    DiscretePalette,
    prism_colour_pal,
    prism_color_pal,
    prism_cycler,
    prism_fill_pal,
    prism_shape_pal,
    scale_colour_prism,
    scale_color_prism,
    scale_fill_prism,
    scale_shape_prism,
)
from .themes import PrismTheme, preview_theme, theme_prism

__all__ = [
    "COLOUR_PALETTES",
    "FILL_PALETTES",
    "SHAPE_PALETTES",
    "THEME_COLOURS",
    "ShapeSpec",
    "ThemeColours",
    "get_colors",
    "list_palettes",
    "DiscretePalette",
    "prism_colour_pal",
    "prism_color_pal",
    "prism_cycler",
    "prism_fill_pal",
    "prism_shape_pal",
    "scale_colour_prism",
    "scale_color_prism",
    "scale_fill_prism",
    "scale_shape_prism",
    "PrismTheme",
    "preview_theme",
    "theme_prism",
]
