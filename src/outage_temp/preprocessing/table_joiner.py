import logging

import pandas as pd

from outage_temp.config.pipeline_config import JOIN_KEYS

logger = logging.getLogger(__name__)


def _align_key_types(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df["state"] = df["state"].astype("string")
    df["year"] = df["year"].astype("Int64")
    df["month"] = df["month"].astype("Int64")
    return df


def join_events_with_temperature(
    events: pd.DataFrame, temps: pd.DataFrame
) -> pd.DataFrame:
    """
    Left-join outage events to state-month temperatures on (state, year, month).

    Every event row is kept exactly once and in its original order; events
    without a matching temperature keep a null avg_temp_f. The temperature
    side must have unique keys.
    """
    left = _align_key_types(events)
    right = _align_key_types(temps[JOIN_KEYS + ["avg_temp_f"]])

    joined = left.merge(right, on=JOIN_KEYS, how="left", validate="many_to_one")
    joined = joined.reset_index(drop=True)

    unmatched = int(joined["avg_temp_f"].isna().sum())
    logger.info(
        f"Joined {len(joined):,} events with temperatures; "
        f"{unmatched:,} rows have no matching state-month temperature"
    )
    return joined
