"""
sharetriage CLI: turn a file-share scanner log into HTML/CSV triage reports.

Usage examples:
    sharetriage snaffler.log
    sharetriage snaffler.json --sort-by LastWriteTime --format html --open
    python -m sharetriage snaffler.txt --no-aggregate --min-rating Red
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import webbrowser
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base.config import REPORT_FORMATS, LogConfig, TriageConfig, setup_logging
from .base.errors import TriageError, handle_error
from .findings.ordering import SortKey
from .findings.severity import Rating
from .pipeline import triage_file
from .reporting.composer import ReportComposer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharetriage",
        description="Rank, de-duplicate and report file-share scanner findings",
    )
    parser.add_argument("input", help="Scanner output: structured JSON log or line-format text log")
    parser.add_argument(
        "--sort-by",
        metavar="KEY",
        help=f"Secondary sort key within a severity ({', '.join(k.value for k in SortKey)})",
    )
    parser.add_argument(
        "--format",
        choices=[*REPORT_FORMATS, "all"],
        help="Report format to write (default: all)",
    )
    parser.add_argument(
        "--no-aggregate",
        action="store_true",
        help="One row per finding instead of one row per file name",
    )
    parser.add_argument(
        "--min-rating",
        choices=[r.value for r in Rating],
        help="Drop findings less severe than this rating",
    )
    parser.add_argument("--output-dir", type=Path, help="Directory for reports (default: next to the input)")
    parser.add_argument("--open", action="store_true", help="Open the HTML report when done")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[TriageConfig] = None) -> TriageConfig:
    """Merge CLI overrides with the environment (or base) settings, then validate once."""
    overrides: Dict[str, Any] = {}
    if args.sort_by is not None:
        overrides["sort_by"] = args.sort_by
    if args.format is not None:
        overrides["formats"] = REPORT_FORMATS if args.format == "all" else (args.format,)
    if args.no_aggregate:
        overrides["aggregate"] = False
    if args.min_rating is not None:
        overrides["min_rating"] = args.min_rating
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    if args.log_level is not None:
        overrides["log_level"] = args.log_level

    if base is None:
        return TriageConfig.from_env(**overrides)

    if "log_level" in overrides:
        overrides["log"] = dataclasses.replace(base.log, level=overrides.pop("log_level"))
    return dataclasses.replace(base, **overrides) if overrides else base


def run(cfg: TriageConfig, input_path: Path, open_report: bool = False) -> List[Path]:
    records = triage_file(input_path, cfg)
    composer = ReportComposer(input_path)
    out_dir = cfg.output_dir or input_path.resolve().parent
    written = [composer.save(a, out_dir) for a in composer.compose(records, cfg.formats, aggregated=cfg.aggregate)]

    if open_report:
        html_reports = [p for p in written if p.suffix == ".html"]
        if html_reports:
            webbrowser.open(html_reports[0].resolve().as_uri())
    return written


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        # Configuration is validated before the input is touched.
        cfg = config_from_args(args)
    except TriageError as e:
        setup_logging(TriageConfig(log=LogConfig()))
        logger.error(e.message)
        return e.exit_code

    setup_logging(cfg)
    try:
        written = run(cfg, Path(args.input), open_report=args.open)
    except TriageError as e:
        logger.error(e.message)
        return e.exit_code
    except Exception as e:
        error = handle_error(e, context="while triaging input")
        logger.exception(error.message)
        return error.exit_code

    logger.info("Done: %d report(s) written", len(written))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
