"""
Render preview figures of the Prism theme palettes.

Outputs (when --save-results):
  results/<results-subdir>/preview_<palette>.png
"""

import argparse
import logging
import time
from datetime import datetime
from pathlib import Path

import matplotlib

from prismplot import list_palettes, preview_theme


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(save_results: bool, log_subdir: str, script_name: str) -> logging.Logger:
    """
    Configure logging:
      - save_results=False → StreamHandler (terminal) only
      - save_results=True  → FileHandler (file) only, no terminal output
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
        handler: logging.Handler = logging.FileHandler(log_dir / f"{script_name}_{timestamp}.log")
    else:
        handler = logging.StreamHandler()

    handler.setLevel(logging.INFO)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    start = time.time()

    parser = argparse.ArgumentParser(description="Preview Prism theme palettes.")
    parser.add_argument(
        "--palette",
        type=str,
        nargs="+",
        default=["black_and_white"],
        help="One or more theme palettes to preview (default: black_and_white).",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Preview every available theme palette.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the available palettes and exit.",
    )
    parser.add_argument(
        "--results-subdir",
        type=str,
        default="themes",
        help="Subdirectory under results/ for output files (default: themes).",
    )
    parser.add_argument(
        "--save-results",
        action="store_true",
        help="Save previews to disk and log to file; otherwise show them interactively.",
    )
    parser.add_argument(
        "--log-subdir",
        type=str,
        default="themes",
        help="Subdirectory under logs/ for log files (default: themes).",
    )
    args = parser.parse_args()

    if args.list:
        for kind in ("theme", "colour", "fill", "shape"):
            print(f"{kind}: {', '.join(list_palettes(kind))}")
        return

    if args.save_results:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    logger = setup_logging(args.save_results, args.log_subdir, "preview_theme")
    palettes = list_palettes("theme") if args.all else args.palette
    logger.info("Previewing %d palette(s)", len(palettes))

    results_dir = Path("results") / args.results_subdir
    if args.save_results:
        results_dir.mkdir(parents=True, exist_ok=True)

    for palette in palettes:
        fig = preview_theme(palette)
        if args.save_results:
            out = results_dir / f"preview_{palette}.png"
            fig.savefig(out, dpi=150, bbox_inches="tight")
            plt.close(fig)
            logger.info("Saved %s", out)

    if not args.save_results:
        plt.show()

    logger.info("Finished in %.2f s", time.time() - start)


if __name__ == "__main__":
    main()
