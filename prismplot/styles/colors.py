# Colour, fill, shape and theme tables for the Prism-style presets

from __future__ import annotations

from typing import NamedTuple

import numpy as np
import matplotlib as mpl
from matplotlib.colors import to_hex, to_rgb


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

class ShapeSpec(NamedTuple):
    """A point shape: a matplotlib marker and its fillstyle."""
    marker: str
    fillstyle: str


class ThemeColours(NamedTuple):
    """Element colours for one theme."""
    axis: str          # axis lines and tick marks
    axis_text: str     # tick labels
    axis_title: str    # axis labels
    title: str         # plot title
    panel: str         # plotting area background
    page: str          # figure background


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _sample_colormap(name: str, n: int) -> list[str]:
    cmap = mpl.colormaps[name]
    return [to_hex(c) for c in cmap(np.linspace(0.0, 0.9, n))]


def _lighten(colour: str, amount: float = 0.45) -> str:
    """Blend *colour* towards white by *amount* (0 keeps it, 1 gives white)."""
    rgb = np.asarray(to_rgb(colour))
    return to_hex(rgb + (1.0 - rgb) * amount)


def _luminance(colour: str) -> float:
    r, g, b = to_rgb(colour)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


# ---------------------------------------------------------------------------
# Colour palettes
# ---------------------------------------------------------------------------

COLOUR_PALETTES: dict[str, list[str]] = {
    "colors": [
        "#000000",  # black
        "#D60000",  # red
        "#0000E6",  # blue
        "#008C00",  # green
        "#8C00A8",  # purple
        "#E68A00",  # orange
        "#00A3A3",  # teal
        "#A35200",  # brown
        "#E600E6",  # magenta
    ],
    "black_and_white": ["#000000"] * 6,
    "shades_of_gray": ["#000000", "#3B3B3B", "#636363", "#8A8A8A", "#B0B0B0", "#D4D4D4"],
    "autumn_leaves": ["#5F2C12", "#B33A15", "#E56B1F", "#F2A93B", "#7A8B2E", "#4D3B1F"],
    "beer_and_ales": ["#3D1E0F", "#7A3B12", "#B5651D", "#D99A3C", "#EBC46B", "#F6E3A1"],
    "blueprint": ["#0B2545", "#13315C", "#134074", "#3E7CB1", "#81A4CD", "#DBE4EE"],
    "candy_bright": ["#FF3D7F", "#FF9E00", "#FFE600", "#3FDC5A", "#18B2F2", "#9B4DFF"],
    "candy_soft": ["#F7A1C4", "#FFC98B", "#FFF29A", "#A8E6A1", "#9AD8F4", "#C9A7F5"],
    "colorblind_safe": [
        "#000000",  # black
        "#E69F00",  # orange
        "#56B4E9",  # sky blue
        "#009E73",  # bluish green
        "#F0E442",  # yellow
        "#0072B2",  # blue
        "#D55E00",  # vermillion
        "#CC79A7",  # reddish purple
    ],
    "diazo": ["#2A1A5E", "#4F2A8A", "#8446A8", "#C060A1", "#F08A7E", "#FCC17A"],
    "earth_tones": ["#5B3A29", "#8C6D46", "#A3A380", "#6B7F4A", "#3F5E5A", "#C9A66B"],
    "evergreen": ["#0F3D2E", "#1F5C42", "#2E7D53", "#4E9F6B", "#8CC084", "#C9E3AC"],
    "flames": ["#5C0A0A", "#A4161A", "#E5383B", "#F77F00", "#FCBF49", "#FFE8A3"],
    "floral": ["#7B2D5B", "#C84C8B", "#F28AB2", "#F6C35B", "#8DB255", "#4F7CAC"],
    "greenwash": ["#0B3D20", "#176B38", "#2A9D5A", "#5DBB63", "#9BD770", "#D9F0A3"],
    "muted_rainbow": ["#B5525C", "#C98B52", "#C4B35C", "#6E9E6B", "#5A86A8", "#7E6BA3"],
    "neon": ["#FF00A6", "#00F0FF", "#B6FF00", "#FFE600", "#FF6A00", "#A200FF"],
    "ocean": ["#03045E", "#0077B6", "#00B4D8", "#48CAE4", "#90E0EF", "#CAF0F8"],
    "office": ["#4472C4", "#ED7D31", "#A5A5A5", "#FFC000", "#5B9BD5", "#70AD47"],
    "pastels": ["#F4A6A6", "#F7C8A0", "#F3E5A0", "#B5E3B0", "#A7C7E7", "#C8B6E2"],
    "pearl": ["#E8E1D9", "#D6CFC7", "#BFB6AE", "#A39A92", "#857C74", "#665E57"],
    "prism_dark": ["#FFFFFF", "#FF6B6B", "#4DABF7", "#69DB7C", "#FFD43B", "#DA77F2"],
    "prism_light": ["#1C1C1C", "#C92A2A", "#1864AB", "#2B8A3E", "#E67700", "#862E9C"],
    "purple_passion": ["#2D0A4E", "#4E1A7A", "#7B2CBF", "#9D4EDD", "#C77DFF", "#E0AAFF"],
    "quiet": ["#5C6B73", "#9DB4C0", "#C2DFE3", "#E0FBFC", "#8D8D92", "#3E4A50"],
    "spring": ["#2E7D32", "#9CCC65", "#FFEE58", "#F48FB1", "#CE93D8", "#81D4FA"],
    "starry": ["#FDF6B2", "#FFD166", "#8ECAE6", "#219EBC", "#C8B6FF", "#FFFFFF"],
    "summer": ["#FF595E", "#FFCA3A", "#8AC926", "#1982C4", "#6A4C93", "#FF924C"],
    "sunny_garden": ["#F9C80E", "#F86624", "#EA3546", "#662E9B", "#43BCCD", "#6A994E"],
    "the_blues": ["#08306B", "#08519C", "#2171B5", "#4292C6", "#6BAED6", "#9ECAE1"],
    "warm_pastels": ["#E8A09A", "#F3C19D", "#F8DDA4", "#D8B4A0", "#C9A0DC", "#F2B5D4"],
    "winter_bright": ["#0D47A1", "#1E88E5", "#00ACC1", "#26C6DA", "#7E57C2", "#EC407A"],
    "winter_soft": ["#3C5A80", "#6C8EAD", "#98B6CF", "#C3D6E6", "#A3A9C9", "#7C7FA6"],
    "wool_muffler": ["#8C1C13", "#BF4342", "#E7D7C1", "#A78A7F", "#735751", "#2F4858"],
    # perceptually uniform palettes sampled from the matplotlib colormaps
    "viridis": _sample_colormap("viridis", 6),
    "magma": _sample_colormap("magma", 6),
    "inferno": _sample_colormap("inferno", 6),
    "plasma": _sample_colormap("plasma", 6),
    "cividis": _sample_colormap("cividis", 6),
}


# ---------------------------------------------------------------------------
# Fill palettes
# ---------------------------------------------------------------------------

# Palettes whose fills are not simply the lightened outline colours
_EXPLICIT_FILLS: dict[str, list[str]] = {
    "colors": COLOUR_PALETTES["colors"],
    "black_and_white": ["#FFFFFF", "#000000", "#808080", "#D9D9D9", "#404040", "#BFBFBF"],
    "shades_of_gray": ["#FFFFFF", "#D4D4D4", "#B0B0B0", "#8A8A8A", "#636363", "#3B3B3B"],
    "colorblind_safe": COLOUR_PALETTES["colorblind_safe"],
    "neon": COLOUR_PALETTES["neon"],
    "prism_dark": ["#3A3A3A", "#FF8787", "#74C0FC", "#8CE99A", "#FFE066", "#E599F7"],
}

FILL_PALETTES: dict[str, list[str]] = {
    name: list(_EXPLICIT_FILLS.get(name, [_lighten(c) for c in colours]))
    for name, colours in COLOUR_PALETTES.items()
}


# ---------------------------------------------------------------------------
# Shape palettes
# ---------------------------------------------------------------------------

_FILLED = [
    ShapeSpec("o", "full"),  # circle
    ShapeSpec("s", "full"),  # square
    ShapeSpec("^", "full"),  # triangle up
    ShapeSpec("v", "full"),  # triangle down
    ShapeSpec("D", "full"),  # diamond
]
_OPEN = [ShapeSpec(s.marker, "none") for s in _FILLED[:4]]

SHAPE_PALETTES: dict[str, list[ShapeSpec]] = {
    "default": _FILLED + _OPEN,
    "filled": _FILLED + [
        ShapeSpec("p", "full"),  # pentagon
        ShapeSpec("h", "full"),  # hexagon
        ShapeSpec("<", "full"),
        ShapeSpec(">", "full"),
        ShapeSpec("8", "full"),  # octagon
    ],
    "complete": _FILLED + _OPEN + [
        ShapeSpec("x", "full"),
        ShapeSpec("+", "full"),
        ShapeSpec("*", "full"),
        ShapeSpec("1", "full"),  # tri down
        ShapeSpec("d", "none"),  # thin diamond
    ],
}


# ---------------------------------------------------------------------------
# Theme colours
# ---------------------------------------------------------------------------

# Dark-background themes; all others are derived from their colour palette
_EXPLICIT_THEMES: dict[str, ThemeColours] = {
    "black_and_white": ThemeColours("#000000", "#000000", "#000000", "#000000", "#FFFFFF", "#FFFFFF"),
    "prism_dark": ThemeColours("#FFFFFF", "#FFFFFF", "#FFFFFF", "#FFFFFF", "#3A3A3A", "#2B2B2B"),
    "starry": ThemeColours("#FDF6B2", "#FFFFFF", "#FDF6B2", "#FFD166", "#0B132B", "#0B132B"),
    "neon": ThemeColours("#FFFFFF", "#00F0FF", "#FF00A6", "#B6FF00", "#111111", "#000000"),
    "flames": ThemeColours("#FCBF49", "#FFE8A3", "#FCBF49", "#F77F00", "#1A0A0A", "#120606"),
    "ocean": ThemeColours("#CAF0F8", "#FFFFFF", "#CAF0F8", "#90E0EF", "#03045E", "#020338"),
    "magma": ThemeColours("#FCFDBF", "#FCFDBF", "#FE9F6D", "#FE9F6D", "#000004", "#000004"),
    "inferno": ThemeColours("#FCFFA4", "#FCFFA4", "#F98E09", "#F98E09", "#000004", "#000004"),
}


def _derive_theme(colours: list[str]) -> ThemeColours:
    # darkest palette colour for lines and text, white backgrounds
    ink = min(colours, key=_luminance)
    return ThemeColours(ink, ink, ink, ink, "#FFFFFF", "#FFFFFF")


THEME_COLOURS: dict[str, ThemeColours] = {
    name: _EXPLICIT_THEMES.get(name, _derive_theme(colours))
    for name, colours in COLOUR_PALETTES.items()
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

_TABLES = {
    "colour": COLOUR_PALETTES,
    "fill": FILL_PALETTES,
    "shape": SHAPE_PALETTES,
    "theme": THEME_COLOURS,
}


def list_palettes(kind="colour"):
    """
    Names of the available palettes of one kind.

    Parameters
    ----------
    kind : str
        'colour' (or 'color'), 'fill', 'shape' or 'theme'

    Returns
    -------
    list of str
        Sorted palette names
    """
    if kind == "color":
        kind = "colour"
    if kind not in _TABLES:
        raise ValueError(f"Unknown palette kind {kind!r}; choose from {', '.join(_TABLES)}.")
    return sorted(_TABLES[kind])


def get_colors(palette="colors", kind="colour"):
    """
    Get the entries of a named palette.

    Parameters
    ----------
    palette : str
        Palette name, see :func:`list_palettes`
    kind : str
        'colour' (or 'color'), 'fill', 'shape' or 'theme'

    Returns
    -------
    list or ThemeColours
        A copy of the palette entries, or the theme's element colours

    Raises
    ------
    ValueError
        If the palette does not exist
    """
    names = list_palettes(kind)
    table = _TABLES["colour" if kind == "color" else kind]
    if palette not in table:
        raise ValueError(
            f"The {kind} palette {palette!r} does not exist. "
            f"Available palettes: {', '.join(names)}."
        )
    entry = table[palette]
    return entry if isinstance(entry, ThemeColours) else list(entry)
