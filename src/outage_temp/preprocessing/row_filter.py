import logging
from typing import Dict, Iterable

import pandas as pd

from outage_temp.config.pipeline_config import (
    EXCLUDED_CAUSE_CATEGORIES,
    EXCLUDED_CAUSE_DETAILS,
    PIPELINE_CONFIG,
)

logger = logging.getLogger(__name__)


def _normalized_text(values: pd.Series) -> pd.Series:
    return values.astype("string").str.strip().str.lower()


def duration_within(df: pd.DataFrame, max_minutes: float) -> pd.Series:
    """Null durations compare false and are dropped."""
    durations = pd.to_numeric(df["outage_duration_minutes"], errors="coerce")
    return (durations <= max_minutes).fillna(False).astype(bool)


def not_in_values(values: pd.Series, excluded: Iterable[str]) -> pd.Series:
    """True where the value is null or not one of ``excluded`` (case-insensitive)."""
    excluded_lower = {value.lower() for value in excluded}
    return (~_normalized_text(values).isin(excluded_lower)).fillna(True).astype(bool)


def filter_analysis_rows(
    df: pd.DataFrame,
    max_duration_minutes: float = PIPELINE_CONFIG["max_duration_minutes"],
    excluded_cause_details: Iterable[str] = EXCLUDED_CAUSE_DETAILS,
    excluded_cause_categories: Iterable[str] = EXCLUDED_CAUSE_CATEGORIES,
) -> pd.DataFrame:
    """
    Keep rows that pass every inclusion predicate.

    Predicates, AND-combined:
        - outage_duration_minutes <= max_duration_minutes
        - cause_detail not in excluded_cause_details
        - cause_category not in excluded_cause_categories

    Returns an empty table with the same columns when nothing survives.
    """
    predicates: Dict[str, pd.Series] = {
        "duration": duration_within(df, max_duration_minutes),
        "cause_detail": not_in_values(df["cause_detail"], excluded_cause_details),
        "cause_category": not_in_values(df["cause_category"], excluded_cause_categories),
    }

    keep = pd.Series(True, index=df.index)
    for name, mask in predicates.items():
        logger.debug(f"Predicate '{name}' rejects {(~mask).sum():,} rows")
        keep &= mask

    filtered = df.loc[keep].reset_index(drop=True)
    logger.info(f"Row filter kept {len(filtered):,} of {len(df):,} rows")

    if filtered.empty:
        logger.info("Row filter removed every row; returning an empty analysis table")
        return df.iloc[0:0].reset_index(drop=True)
    return filtered
