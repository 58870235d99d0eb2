"""
stats_utils.py
--------------
Helpers that produce and format the p-value tables drawn by
:func:`prismplot.core.pvalue_utils.add_pvalue`.

:func:`pairwise_ttests` returns one row per comparison with the columns
``group1``, ``group2``, ``p``, ``p.adj``, ``p.adj.signif`` and
``y.position``, which are the defaults ``add_pvalue`` looks for.
"""

from __future__ import annotations

import logging
from itertools import combinations

import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.stats.multitest import multipletests

from .validation import check_choice, check_columns, check_positive

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
SIGNIF_CUTPOINTS = (1e-4, 1e-3, 1e-2, 5e-2)
SIGNIF_SYMBOLS = ("****", "***", "**", "*", "ns")

P_ADJUST_METHODS = {
    "holm": "holm",
    "fdr": "fdr_bh",
    "bonferroni": "bonferroni",
    "none": None,
}


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def significance_stars(p, cutpoints=SIGNIF_CUTPOINTS, symbols=SIGNIF_SYMBOLS):
    """Map p-values to significance symbols.

    A p-value gets the symbol of the first cutpoint it is less than or equal
    to, and the last symbol (``"ns"``) when it exceeds them all.  NaN maps
    to an empty string.

    Parameters
    ----------
    p : float or array-like
    cutpoints : sequence of float
        Increasing thresholds.
    symbols : sequence of str
        One more symbol than there are cutpoints.

    Returns
    -------
    str or list[str]
        Matches the shape of *p* (scalar in, scalar out).
    """
    cutpoints = list(cutpoints)
    if len(symbols) != len(cutpoints) + 1:
        raise ValueError("`symbols` must have exactly one more entry than `cutpoints`.")
    if any(b <= a for a, b in zip(cutpoints, cutpoints[1:])):
        raise ValueError("`cutpoints` must be strictly increasing.")

    def _one(value):
        if value is None or not np.isfinite(value):
            return ""
        for cut, symbol in zip(cutpoints, symbols):
            if value <= cut:
                return symbol
        return symbols[-1]

    if np.ndim(p) == 0:
        return _one(p)
    return [_one(v) for v in np.asarray(p, dtype=float)]


def format_p_value(p, digits: int = 3, accuracy: float = 1e-4, prefix: str = "P"):
    """Format a p-value for display, e.g. ``"P = 0.012"`` or ``"P < 0.0001"``."""
    accuracy = check_positive("accuracy", accuracy)
    if p is None or not np.isfinite(p):
        return ""
    lead = f"{prefix} " if prefix else ""
    if p < accuracy:
        return f"{lead}< {accuracy:g}"
    return f"{lead}= {p:.{digits}g}"


# ---------------------------------------------------------------------------
# Pairwise tests
# ---------------------------------------------------------------------------

def _comparisons(levels, comparisons, ref_group):
    if comparisons is not None:
        pairs = [tuple(c) for c in comparisons]
        unknown = sorted({g for pair in pairs for g in pair} - set(levels))
        if unknown:
            raise ValueError(f"pairwise_ttests: unknown group(s) in comparisons: {unknown}.")
        if any(len(pair) != 2 for pair in pairs):
            raise ValueError("pairwise_ttests: every comparison must name exactly two groups.")
        return pairs
    if ref_group is not None:
        if ref_group not in levels:
            raise ValueError(f"pairwise_ttests: `ref_group` {ref_group!r} is not a group in the data.")
        return [(ref_group, g) for g in levels if g != ref_group]
    return list(combinations(levels, 2))


def pairwise_ttests(
    data: pd.DataFrame,
    value: str,
    group: str,
    comparisons=None,
    ref_group=None,
    equal_var: bool = False,
    p_adjust: str = "holm",
    step_increase: float = 0.12,
) -> pd.DataFrame:
    """
    Run independent t-tests (Welch by default) between groups of *data*.

    Parameters
    ----------
    data : pd.DataFrame
        Long-format data.
    value, group : str
        Column holding the measurements and column holding the group labels.
    comparisons : sequence of pairs or None
        Pairs of groups to compare.  Defaults to all pairs, in the order the
        groups first appear (categorical columns use their category order).
    ref_group : optional
        Compare every other group against this one.  Ignored when
        *comparisons* is given.
    equal_var : bool
        Student's t-test instead of Welch's.
    p_adjust : str
        'holm', 'fdr' (Benjamini-Hochberg), 'bonferroni' or 'none'.
    step_increase : float
        Gap between stacked brackets, as a fraction of the data range.

    Returns
    -------
    pd.DataFrame
        Columns ``group1, group2, n1, n2, statistic, p, p.adj,
        p.adj.signif, y.position``.
    """
    check_columns(data, [value, group], "pairwise_ttests")
    check_choice("p_adjust", p_adjust, P_ADJUST_METHODS)
    step_increase = check_positive("step_increase", step_increase, allow_zero=True)

    values = pd.to_numeric(data[value], errors="coerce")
    if isinstance(data[group].dtype, pd.CategoricalDtype):
        levels = [g for g in data[group].cat.categories if (data[group] == g).any()]
    else:
        levels = list(pd.unique(data[group].dropna()))
    pairs = _comparisons(levels, comparisons, ref_group)
    logger.info("Running %d t-tests on %r grouped by %r", len(pairs), value, group)

    rows = []
    for g1, g2 in pairs:
        a = values[data[group] == g1].dropna()
        b = values[data[group] == g2].dropna()
        if (len(a) < 2) or (len(b) < 2):
            logger.warning("Skipping %r vs %r: fewer than 2 observations in a group", g1, g2)
            continue
        t = stats.ttest_ind(a.values, b.values, equal_var=equal_var)
        rows.append({
            "group1": g1,
            "group2": g2,
            "n1": len(a),
            "n2": len(b),
            "statistic": float(t.statistic),
            "p": float(t.pvalue),
        })

    columns = ["group1", "group2", "n1", "n2", "statistic", "p", "p.adj", "p.adj.signif", "y.position"]
    if not rows:
        return pd.DataFrame(columns=columns)
    results = pd.DataFrame(rows)

    method = P_ADJUST_METHODS[p_adjust]
    pvals = results["p"].to_numpy()
    finite = np.isfinite(pvals)
    adjusted = pvals.copy()
    if method is not None and finite.any():
        _, adjusted[finite], _, _ = multipletests(pvals[finite], method=method)
    results["p.adj"] = adjusted
    results["p.adj.signif"] = significance_stars(results["p.adj"].to_numpy())

    # stack brackets above the highest observation
    finite_values = values.dropna()
    top = float(finite_values.max())
    span = float(finite_values.max() - finite_values.min()) or abs(top) or 1.0
    results["y.position"] = top + span * step_increase * (1 + np.arange(len(results)))

    n_sig = int((results["p.adj"] < 0.05).sum())
    logger.info("Correction: %s | significant comparisons: %d / %d", p_adjust, n_sig, len(results))
    return results[columns]
