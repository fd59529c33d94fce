# Temperature-derived features for outage events
# The hot/not-hot cutoff is computed from the data and handed in, never hard-coded here

import logging

import numpy as np
import pandas as pd

from outage_temp.config.pipeline_config import PIPELINE_CONFIG

logger = logging.getLogger(__name__)


def compute_hot_threshold(joined: pd.DataFrame) -> float:
    """
    Mean avg_temp_f over the joined table, ignoring nulls.

    This must be computed before row filtering; on the full outage dataset it
    comes out at about 57 F.
    """
    threshold = float(joined["avg_temp_f"].mean(skipna=True))
    if np.isnan(threshold):
        logger.warning("No event matched a temperature; hot threshold is undefined")
    else:
        logger.info(f"Hot threshold (mean joined avg_temp_f): {threshold:.2f} F")
    return threshold


def categorize_temperature(
    temps: pd.Series,
    cold_max: float = PIPELINE_CONFIG["cold_max_f"],
    hot_min: float = PIPELINE_CONFIG["hot_min_f"],
) -> pd.Series:
    """
    Bucket temperatures into cold / neutral / hot.

    "hot" is checked first (>= hot_min), then "cold" (<= cold_max), anything
    else with a value is "neutral". Null temperatures stay null.
    """
    category = pd.Series(pd.NA, index=temps.index, dtype="string")
    has_value = temps.notna()
    category[has_value] = "neutral"
    category[has_value & (temps <= cold_max)] = "cold"
    # hot wins if the bounds are ever configured to overlap
    category[has_value & (temps >= hot_min)] = "hot"
    return category


def flag_hot(temps: pd.Series, hot_threshold: float) -> pd.Series:
    """1 where temps >= hot_threshold, 0 below it, null where temps is null."""
    flags = pd.Series(pd.NA, index=temps.index, dtype="Int64")
    has_value = temps.notna()
    flags[has_value] = (temps[has_value] >= hot_threshold).astype(int)
    return flags


def derive_features(
    joined: pd.DataFrame,
    hot_threshold: float,
    cold_max: float = PIPELINE_CONFIG["cold_max_f"],
    hot_min: float = PIPELINE_CONFIG["hot_min_f"],
) -> pd.DataFrame:
    """Add temp_category and is_hot to a copy of the joined table."""
    df = joined.copy()
    temps = df["avg_temp_f"].astype(float)

    df["temp_category"] = categorize_temperature(temps, cold_max=cold_max, hot_min=hot_min)
    df["is_hot"] = flag_hot(temps, hot_threshold)

    counts = df["temp_category"].value_counts(dropna=False).to_dict()
    logger.debug(f"temp_category counts: {counts}")
    return df
