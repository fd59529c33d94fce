"""
Command-line interface for the outage / temperature analysis.

Usage:
    python -m outage_temp.run_pipeline --events data/raw/outage.xlsx --temperature data/raw/climdiv-tmpcst.txt
    python -m outage_temp.run_pipeline --skip-models --output results/analysis --log-file logs/pipeline.log

Exit codes:
    0  success
    1  a raw source does not match its expected layout
    2  temperature state codes do not match the reference state list
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from outage_temp.config.pipeline_config import PipelineConfig, resolve_data_paths
from outage_temp.errors import PipelineError
from outage_temp.models.model_utils import ModelUtils
from outage_temp.models.temperature_models import (
    fit_duration_models,
    summarize_models,
    welch_ttest,
)
from outage_temp.pipeline import OutageTemperaturePipeline

ANALYSIS_TABLE_FILE = "outage_temperature_analysis.csv"
MODEL_SUMMARY_FILE = "temperature_model_summary.csv"
TTEST_FILE = "temperature_ttest.json"
RUN_INFO_FILE = "run_info.json"

logger = logging.getLogger("outage_temp")


def setup_logging(log_file: Optional[Path] = None, quiet: bool = False) -> None:
    """Console + file logging for one run."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None):
    defaults = resolve_data_paths()
    parser = argparse.ArgumentParser(
        description="Join outage events with NOAA state temperatures and test for a temperature effect"
    )
    parser.add_argument(
        "--events",
        type=str,
        default=str(defaults["events"]),
        help="Path to the outage event workbook (.xlsx) or CSV export",
    )
    parser.add_argument(
        "--temperature",
        type=str,
        default=str(defaults["temperature"]),
        help="Path to the NOAA climdiv statewide temperature file",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=str(defaults["output_dir"]),
        help="Directory for the analysis table and model summaries",
    )
    parser.add_argument(
        "--temperature-layout",
        choices=["space_split", "whitespace"],
        default=PipelineConfig.temperature_layout,
        help=(
            "How to split temperature lines (default: single-space split with spacer checks). "
            "Real climdiv files contain single-digit and six-character values such as -15.00 "
            "or -99.90 that the default rejects; use whitespace for them"
        ),
    )
    parser.add_argument(
        "--min-year",
        type=int,
        default=PipelineConfig.min_year,
        help="First temperature year to keep",
    )
    parser.add_argument(
        "--hot-threshold",
        type=float,
        default=None,
        help="Fixed is_hot cutoff in F (default: mean joined temperature)",
    )
    parser.add_argument(
        "--skip-models", action="store_true", help="Only build the analysis table"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write the run log to this file (default: console only)",
    )
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    output_dir = Path(args.output)
    setup_logging(Path(args.log_file) if args.log_file else None, quiet=args.quiet)

    config = PipelineConfig(
        temperature_layout=args.temperature_layout,
        min_year=args.min_year,
        hot_threshold=args.hot_threshold,
    )
    pipeline = OutageTemperaturePipeline(config)

    try:
        result = pipeline.run(args.events, args.temperature)
    except PipelineError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return e.exit_code

    utils = ModelUtils(output_dir)
    utils.save_table(result.analysis_table, ANALYSIS_TABLE_FILE)
    utils.save_json(
        {
            "events_path": str(args.events),
            "temperature_path": str(args.temperature),
            "min_year": args.min_year,
            "hot_threshold": result.hot_threshold,
            "row_counts": result.row_counts,
        },
        RUN_INFO_FILE,
    )

    if args.skip_models:
        logger.info("Skipping model fits (--skip-models flag set).")
        return 0

    models = fit_duration_models(result.analysis_table)
    utils.save_table(summarize_models(models), MODEL_SUMMARY_FILE)

    try:
        ttest = welch_ttest(result.analysis_table)
    except ValueError as e:
        logger.warning(f"Welch t-test not run: {e}")
    else:
        utils.save_json(ttest.to_dict(), TTEST_FILE)

    return 0


if __name__ == "__main__":
    sys.exit(main())
