"""
Render a spellbook PDF from JSON record files.
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from spellbook.ingest import load_records
from spellbook.pdf.builder import build_pdf
from spellbook.pdf.pdf_settings import LayoutConfig, load_config


def _parse_args() -> argparse.Namespace:
    """Return CLI arguments for the build script."""

    parser = argparse.ArgumentParser(
        description="Build a spellbook PDF from JSON content records."
    )
    parser.add_argument(
        "records",
        nargs="+",
        type=Path,
        help="Record JSON files, or directories of them (read in name order).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON layout configuration; defaults are used when omitted.",
    )
    parser.add_argument(
        "--output-file",
        "-o",
        type=Path,
        default=Path("output/spellbook.pdf"),
        help="File path into which the resulting pdf will be saved.",
    )
    parser.add_argument(
        "--title",
        default=None,
        help="Document title; adds a title page when given.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar.",
    )
    return parser.parse_args()


def main() -> None:
    """Render the records named on the command line.

    Example:
        >>> main()  # doctest: +SKIP
    """

    args = _parse_args()
    config = load_config(args.config) if args.config else LayoutConfig()
    records = load_records(args.records)
    pages = build_pdf(
        records,
        output_path=args.output_file,
        config=config,
        title=args.title,
        show_progress=not args.no_progress,
    )
    print(f"Wrote {len(pages)} pages to {args.output_file}")


if __name__ == "__main__":
    main()
