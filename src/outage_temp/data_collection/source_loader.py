# Raw source loading for the outage / temperature analysis
# I read both inputs once, fully into memory, and fail fast on layout problems

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from outage_temp.config.pipeline_config import (
    MONTH_COLUMNS,
    OUTAGE_RAW_COLUMNS,
    PIPELINE_CONFIG,
    TEMPERATURE_RAW_COLUMNS,
)
from outage_temp.errors import SchemaMismatchError

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xls"}


def _require_file(path: Path) -> None:
    if not path.exists():
        logger.error(f"File not found: {path}")
        raise FileNotFoundError(f"Could not find file: {path}")


def _is_label_column(name) -> bool:
    # The workbook's first column only carries the "variables"/"Units" row labels
    text = str(name).strip().lower()
    return text == "variables" or text.startswith("unnamed")


def load_outage_events(
    file_path: Union[str, Path],
    header_rows: int = PIPELINE_CONFIG["outage_header_rows"],
) -> pd.DataFrame:
    """
    Load the major power outage event table.

    The source is a spreadsheet (or a CSV export of it) with ``header_rows``
    banner lines, one header row, and a units-annotation row directly below the
    header. The banner and units rows are discarded.

    :param file_path: Path to the .xlsx/.xls workbook or .csv export
    :param header_rows: Number of banner rows above the header row
    :return: DataFrame with the 56 raw outage columns, one row per outage
    """
    path = Path(file_path)
    logger.info(f"Loading outage events from {path}")
    _require_file(path)

    try:
        if path.suffix.lower() in EXCEL_SUFFIXES:
            df = pd.read_excel(path, skiprows=header_rows, header=0)
        else:
            df = pd.read_csv(path, skiprows=header_rows, header=0, low_memory=False)
    except pd.errors.ParserError as e:
        raise SchemaMismatchError(
            f"Outage source {path.name} is not a table after skipping {header_rows} rows: {e}"
        ) from e
    logger.debug(f"Read {df.shape[0]} rows and {df.shape[1]} columns from {path}")

    label_cols = [c for c in df.columns if _is_label_column(c)]
    df = df.drop(columns=label_cols)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in OUTAGE_RAW_COLUMNS if c not in df.columns]
    unexpected = [c for c in df.columns if c not in OUTAGE_RAW_COLUMNS]
    if missing or unexpected:
        raise SchemaMismatchError(
            f"Outage source {path.name} does not match the expected "
            f"{len(OUTAGE_RAW_COLUMNS)}-column layout "
            f"(missing: {missing}, unexpected: {unexpected})"
        )

    # units row sits directly under the header
    df = df.iloc[1:][OUTAGE_RAW_COLUMNS].reset_index(drop=True)

    logger.info(f"Loaded {len(df):,} outage events with {df.shape[1]} raw columns")
    return df


def _decode_space_split(path: Path) -> pd.DataFrame:
    try:
        raw = pd.read_csv(path, sep=" ", header=None, dtype=str)
    except pd.errors.ParserError as e:
        raise SchemaMismatchError(
            f"Temperature source {path.name} has ragged lines: {e}"
        ) from e

    expected = len(TEMPERATURE_RAW_COLUMNS)
    if raw.shape[1] != expected:
        raise SchemaMismatchError(
            f"Temperature source {path.name} decoded into {raw.shape[1]} columns, "
            f"expected {expected} (identifier + 12 spacer/value pairs)"
        )
    raw.columns = TEMPERATURE_RAW_COLUMNS

    pad_cols = [c for c in TEMPERATURE_RAW_COLUMNS if c.startswith("_pad_")]
    misaligned = [c for c in pad_cols if raw[c].notna().any()]
    if misaligned:
        raise SchemaMismatchError(
            f"Temperature source {path.name} has data in spacer columns {misaligned}; "
            "month values would be misaligned"
        )
    return raw[["state_year_id"] + MONTH_COLUMNS]


def _decode_whitespace(path: Path) -> pd.DataFrame:
    try:
        raw = pd.read_csv(path, sep=r"\s+", header=None, dtype=str)
    except pd.errors.ParserError as e:
        raise SchemaMismatchError(
            f"Temperature source {path.name} has ragged lines: {e}"
        ) from e

    expected = 1 + len(MONTH_COLUMNS)
    if raw.shape[1] != expected:
        raise SchemaMismatchError(
            f"Temperature source {path.name} decoded into {raw.shape[1]} columns, "
            f"expected {expected} (identifier + 12 months)"
        )
    raw.columns = ["state_year_id"] + MONTH_COLUMNS
    return raw


TEMPERATURE_DECODERS = {
    "space_split": _decode_space_split,
    "whitespace": _decode_whitespace,
}


def load_temperature_records(
    file_path: Union[str, Path],
    layout: str = PIPELINE_CONFIG["temperature_layout"],
) -> pd.DataFrame:
    """
    Load the NOAA nClimDiv statewide monthly average temperature file.

    Each line holds an encoded identifier followed by twelve monthly values.

    Layouts:
        - "space_split": split on single spaces. This leaves one empty field
          in front of every month value; those spacer fields are named
          explicitly, checked to be empty, and dropped by name.
        - "whitespace": split on runs of whitespace, for files whose value
          widths vary (single-digit, negative or -99.90 missing values).

    :param file_path: Path to the climdiv temperature text file
    :param layout: One of TEMPERATURE_DECODERS
    :return: Wide DataFrame: state_year_id (str) + jan..dec (float)
    """
    path = Path(file_path)
    logger.info(f"Loading NOAA temperature records from {path} ({layout} layout)")
    _require_file(path)

    if layout not in TEMPERATURE_DECODERS:
        raise ValueError(
            f"Unknown temperature layout {layout!r}; expected one of {sorted(TEMPERATURE_DECODERS)}"
        )
    df = TEMPERATURE_DECODERS[layout](path).copy()

    try:
        for col in MONTH_COLUMNS:
            df[col] = pd.to_numeric(df[col], errors="raise").astype(float)
    except ValueError as e:
        raise SchemaMismatchError(
            f"Temperature source {path.name} has a non-numeric monthly value: {e}"
        ) from e

    # NOAA writes missing months as -99.90, so an empty field means a short line
    short_lines = df[MONTH_COLUMNS].isna().any(axis=1)
    if short_lines.any():
        first_bad = df.loc[short_lines, "state_year_id"].iloc[0]
        raise SchemaMismatchError(
            f"Temperature source {path.name} has {int(short_lines.sum())} lines with "
            f"fewer than {len(MONTH_COLUMNS)} monthly values (first: {first_bad!r})"
        )

    logger.info(f"Loaded {len(df):,} state-year temperature rows")
    return df
