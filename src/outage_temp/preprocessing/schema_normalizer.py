"""
Canonical schemas for the two raw sources.

Normalization is a pure projection: columns are renamed, retyped or dropped,
but row order and row count never change.
"""

import logging

import numpy as np
import pandas as pd

from outage_temp.config.pipeline_config import (
    EVENT_COLUMNS,
    MONTH_COLUMNS,
    OUTAGE_COLUMN_MAP,
    TEMPERATURE_MISSING_SENTINEL,
)

logger = logging.getLogger(__name__)

INTEGER_KEY_COLUMNS = ["year", "month"]
FLOAT_COLUMNS = [
    "obs_id",
    "anomaly_level",
    "outage_duration_minutes",
    "demand_loss_mw",
    "customers_affected",
    "total_customers",
    "population",
]
STRING_COLUMNS = [
    "state",
    "postal_code",
    "nerc_region",
    "climate_region",
    "climate_category",
    "cause_category",
    "cause_detail",
    "hurricane_name",
]


def _combine_date_time(dates: pd.Series, times: pd.Series) -> pd.Series:
    # Workbook dates come back as timestamps and times as time objects; CSV exports give strings
    day = pd.to_datetime(dates, errors="coerce").dt.normalize()
    offset = pd.to_timedelta(times.astype(str).str.strip(), errors="coerce")
    return day + offset


def normalize_outage_events(raw: pd.DataFrame) -> pd.DataFrame:
    """Rename to canonical names, drop unused covariates and coerce types."""
    rename_map = {raw_name: name for raw_name, name in OUTAGE_COLUMN_MAP.items() if name}
    dropped = [raw_name for raw_name, name in OUTAGE_COLUMN_MAP.items() if name is None]

    df = raw.drop(columns=[c for c in dropped if c in raw.columns]).rename(
        columns=rename_map
    )
    logger.debug(f"Dropped {len(dropped)} pricing/economic/demographic columns")

    for col in INTEGER_KEY_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("Int64")

    for col in FLOAT_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)

    for col in STRING_COLUMNS:
        df[col] = df[col].astype("string").str.strip()

    df["outage_start"] = _combine_date_time(
        df["outage_start_date"], df["outage_start_time"]
    )
    df["outage_restoration"] = _combine_date_time(
        df["outage_restoration_date"], df["outage_restoration_time"]
    )

    df = df[EVENT_COLUMNS].reset_index(drop=True)

    bad_duration = (df["outage_duration_minutes"] < 0).sum()
    if bad_duration > 0:
        logger.warning(
            f"Found {bad_duration} rows with negative outage duration. Setting them to NaN."
        )
        df.loc[df["outage_duration_minutes"] < 0, "outage_duration_minutes"] = np.nan

    logger.info(f"Normalized outage events: {len(df):,} rows × {df.shape[1]} columns")
    return df


def normalize_temperature_records(raw: pd.DataFrame) -> pd.DataFrame:
    """Keep the identifier as a string and turn NOAA's missing sentinel into NaN."""
    df = raw.copy()
    df["state_year_id"] = df["state_year_id"].astype(str).str.strip()

    sentinel_mask = df[MONTH_COLUMNS].apply(
        lambda col: np.isclose(col, TEMPERATURE_MISSING_SENTINEL)
    )
    n_sentinel = int(sentinel_mask.to_numpy().sum())
    if n_sentinel > 0:
        logger.warning(
            f"Found {n_sentinel} monthly values equal to {TEMPERATURE_MISSING_SENTINEL}. "
            "Converting to NaN."
        )
        df[MONTH_COLUMNS] = df[MONTH_COLUMNS].mask(sentinel_mask)

    return df[["state_year_id"] + MONTH_COLUMNS]
