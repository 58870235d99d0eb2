"""
prismplot.core
--------------
Drawing helpers that operate on matplotlib Axes.

Modules
-------
axis_utils
    Offset, minor-tick and bracket axis guides and tick annotations.
pvalue_utils
    Significance brackets and p-value labels (:func:`add_pvalue`).
stats_utils
    Pairwise t-tests producing p-value tables, and p-value formatting.
validation
    Argument, column and package-version checks.
"""

from .axis_utils import (
    annotation_ticks,
    guide_prism_bracket,
    guide_prism_minor,
    guide_prism_offset,
    guide_prism_offset_minor,
    ticks_in_view,
)
from .pvalue_utils import PValueLayer, add_pvalue
from .stats_utils import format_p_value, pairwise_ttests, significance_stars

__all__ = [
    "annotation_ticks",
    "guide_prism_bracket",
    "guide_prism_minor",
    "guide_prism_offset",
    "guide_prism_offset_minor",
    "ticks_in_view",
    "PValueLayer",
    "add_pvalue",
    "format_p_value",
    "pairwise_ttests",
    "significance_stars",
]
