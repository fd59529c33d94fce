"""
Unit tests for the event / temperature left join.
"""

import numpy as np
import pandas as pd
import pytest

from outage_temp.preprocessing.table_joiner import join_events_with_temperature


@pytest.fixture
def events():
    return pd.DataFrame(
        {
            "obs_id": [1.0, 2.0, 3.0, 4.0],
            "state": pd.array(["Texas", "Texas", "Alaska", "Texas"], dtype="string"),
            "year": pd.array([2011, 2011, 2011, 2011], dtype="Int64"),
            "month": pd.array([8, 8, 3, 1], dtype="Int64"),
            "outage_duration_minutes": [3000.0, 120.0, 900.0, 1500.0],
        }
    )


@pytest.fixture
def temps():
    return pd.DataFrame(
        {
            "state": ["Texas", "Texas", "Ohio"],
            "year": [2011, 2011, 2011],
            "month": [8, 1, 8],
            "avg_temp_f": [85.0, 45.0, 72.0],
        }
    )


class TestJoinEventsWithTemperature:

    def test_matches_on_state_year_month(self, events, temps):
        joined = join_events_with_temperature(events, temps)
        assert joined.loc[0, "avg_temp_f"] == 85.0
        assert joined.loc[3, "avg_temp_f"] == 45.0

    def test_unmatched_events_keep_null_temperature(self, events, temps):
        joined = join_events_with_temperature(events, temps)
        assert np.isnan(joined.loc[2, "avg_temp_f"])

    def test_keeps_every_event_in_order(self, events, temps):
        joined = join_events_with_temperature(events, temps)
        assert len(joined) == len(events)
        assert joined["obs_id"].tolist() == events["obs_id"].tolist()

    def test_no_deduplication_of_events(self, events, temps):
        joined = join_events_with_temperature(events, temps)
        # two Texas August outages both get the same month
        assert (joined["avg_temp_f"] == 85.0).sum() == 2

    def test_duplicate_temperature_keys_rejected(self, events, temps):
        dup = pd.concat([temps, temps.iloc[[0]]], ignore_index=True)
        with pytest.raises(pd.errors.MergeError):
            join_events_with_temperature(events, dup)

    def test_plain_integer_keys_are_aligned(self, events, temps):
        plain = events.astype({"year": int, "month": int, "state": object})
        joined = join_events_with_temperature(plain, temps)
        assert joined["avg_temp_f"].notna().sum() == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
