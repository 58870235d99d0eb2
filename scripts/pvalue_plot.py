"""
Pairwise comparison plot with Prism-style significance brackets.

Operates on a long-format CSV with one measurement per row.
Performs:
  1. Data loading
  2. Pairwise t-tests between the groups (Welch by default)
  3. Multiple testing correction (Holm, FDR or Bonferroni)
  4. Box plot with points, bracket x axis, offset minor y axis and p-values

Outputs (when --save-results):
  results/<results-subdir>/pairwise_ttests.csv
  results/<results-subdir>/pvalue_plot.png
"""

import argparse
import logging
import time
from datetime import datetime
from pathlib import Path

import matplotlib
import numpy as np
import pandas as pd

from prismplot import (
    add_pvalue,
    guide_prism_bracket,
    guide_prism_offset_minor,
    pairwise_ttests,
    prism_colour_pal,
    prism_fill_pal,
    theme_prism,
)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
JITTER = 0.12
BOX_WIDTH = 0.6


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(save_results: bool, log_subdir: str, script_name: str) -> logging.Logger:
    """
    Configure logging:
      - save_results=False → StreamHandler (terminal) only
      - save_results=True  → FileHandler (file) only, no terminal output
    Log path: logs/<log_subdir>/<script_name>_YYYYMMDD_HHMMSS.log
    """
    logger = logging.getLogger(script_name)
    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s  %(levelname)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    if save_results:
        log_dir = Path("logs") / log_subdir
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = log_dir / f"{script_name}_{timestamp}.log"
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler()

    handler.setLevel(logging.INFO)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    # library modules log under the prismplot namespace
    logging.getLogger("prismplot").addHandler(handler)
    logging.getLogger("prismplot").setLevel(logging.INFO)
    return logger


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------

def load_data(data_path: Path, value_col: str, group_col: str, logger: logging.Logger) -> pd.DataFrame:
    """Load the CSV and keep the value and group columns."""
    logger.info("Loading data from %s", data_path)
    data = pd.read_csv(data_path)
    logger.info("Data shape: %s", data.shape)

    missing = [c for c in (value_col, group_col) if c not in data.columns]
    if missing:
        raise ValueError(f"Column(s) {missing} not found in {data_path}.")

    data = data[[group_col, value_col]].dropna()
    data[group_col] = data[group_col].astype(str)
    logger.info("Groups: %s", ", ".join(pd.unique(data[group_col])))
    return data


def pvalue_plot(
    data: pd.DataFrame,
    stats_table: pd.DataFrame,
    value_col: str,
    group_col: str,
    palette: str,
    save_results: bool,
    results_dir: Path,
    logger: logging.Logger,
) -> None:
    """
    Box plot with jittered points and significance brackets.
      - save_results=True  → save to results_dir/pvalue_plot.png (no plt.show())
      - save_results=False → plt.show() only (no saving)
    """
    import matplotlib.pyplot as plt

    theme = theme_prism(palette=palette)
    groups = list(pd.unique(data[group_col]))
    n = len(groups)
    colours = prism_colour_pal(palette)(n)
    fills = prism_fill_pal(palette)(n)
    rng = np.random.default_rng(0)

    logger.info("Building plot for %d groups...", n)

    with theme.context():
        fig, ax = plt.subplots(figsize=(1.4 * n + 2, 5))
        samples = [data.loc[data[group_col] == g, value_col].to_numpy() for g in groups]
        boxes = ax.boxplot(samples, positions=range(n), widths=BOX_WIDTH, patch_artist=True, showfliers=False)
        for patch, fill, colour in zip(boxes["boxes"], fills, colours):
            patch.set_facecolor(fill)
            patch.set_edgecolor(colour)
        for i, (values, colour) in enumerate(zip(samples, colours)):
            xs = i + rng.uniform(-JITTER, JITTER, size=values.size)
            ax.plot(xs, values, linestyle="none", marker="o", markersize=5, color=colour, zorder=3)

        ax.set_xticks(range(n))
        ax.set_xticklabels(groups)
        ax.set_xlim(-0.6, n - 0.4)
        ax.set_xlabel(group_col)
        ax.set_ylabel(value_col)

        add_pvalue(ax, stats_table, label="p.adj.signif", tip_length=0.02)
        theme.style_axes(ax)
        guide_prism_offset_minor(ax, axis="y")
        guide_prism_bracket(ax, axis="x", width=BOX_WIDTH)
        fig.tight_layout()

    if save_results:
        out = results_dir / "pvalue_plot.png"
        fig.savefig(out, dpi=300, bbox_inches="tight")
        logger.info("Saved plot to: %s", out)
        plt.close(fig)
    else:
        plt.show()


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    start = time.time()

    parser = argparse.ArgumentParser(
        description="Run pairwise t-tests on a CSV and plot groups with significance brackets."
    )
    parser.add_argument(
        "--data-path",
        type=Path,
        required=True,
        help="Path to a long-format CSV with one measurement per row.",
    )
    parser.add_argument(
        "--value-col",
        type=str,
        default="value",
        help="Column with the measurements (default: value).",
    )
    parser.add_argument(
        "--group-col",
        type=str,
        default="group",
        help="Column with the group labels (default: group).",
    )
    parser.add_argument(
        "--correction-method",
        type=str,
        choices=["holm", "fdr", "bonferroni", "none"],
        default="holm",
        help="Multiple testing correction method (default: holm).",
    )
    parser.add_argument(
        "--ref-group",
        type=str,
        default=None,
        help="Compare every group against this one instead of all pairs.",
    )
    parser.add_argument(
        "--palette",
        type=str,
        default="colors",
        help="Theme and colour palette (default: colors).",
    )
    parser.add_argument(
        "--results-subdir",
        type=str,
        default="pvalue_plot",
        help="Subdirectory under results/ for output files (default: pvalue_plot).",
    )
    parser.add_argument(
        "--save-results",
        action="store_true",
        help="Save outputs to disk and log to file; otherwise log to terminal and show plot interactively.",
    )
    parser.add_argument(
        "--log-subdir",
        type=str,
        default="pvalue_plot",
        help="Subdirectory under logs/ for log files (default: pvalue_plot).",
    )
    args = parser.parse_args()

    if args.save_results:
        matplotlib.use("Agg")

    logger = setup_logging(args.save_results, args.log_subdir, "pvalue_plot")

    logger.info("Starting pvalue_plot.py")
    logger.info(
        "Args: data_path=%s  value_col=%s  group_col=%s  correction=%s  palette=%s  save_results=%s",
        args.data_path, args.value_col, args.group_col,
        args.correction_method, args.palette, args.save_results,
    )

    # Step 1: Load
    data = load_data(args.data_path, args.value_col, args.group_col, logger)

    # Step 2+3: Pairwise tests with correction
    stats_table = pairwise_ttests(
        data, args.value_col, args.group_col,
        ref_group=args.ref_group, p_adjust=args.correction_method,
    )
    logger.info("Comparisons:\n%s", stats_table.to_string(index=False))

    # Step 4: Plot
    results_dir = Path("results") / args.results_subdir
    results_dir.mkdir(parents=True, exist_ok=True)

    pvalue_plot(
        data, stats_table, args.value_col, args.group_col, args.palette,
        args.save_results, results_dir, logger,
    )

    if args.save_results:
        table_out = results_dir / "pairwise_ttests.csv"
        stats_table.to_csv(table_out, index=False)
        logger.info("Saved comparisons to: %s", table_out)

    logger.info("Finished in %.2f s", time.time() - start)


if __name__ == "__main__":
    main()
