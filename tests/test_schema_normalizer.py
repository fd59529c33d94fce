"""
Unit tests for canonical schema normalization.
"""

import numpy as np
import pandas as pd
import pytest

from outage_temp.config.pipeline_config import EVENT_COLUMNS, MONTH_COLUMNS
from outage_temp.data_collection.source_loader import load_outage_events
from outage_temp.preprocessing.schema_normalizer import (
    normalize_outage_events,
    normalize_temperature_records,
)

from raw_sources import make_raw_event, write_outage_csv


@pytest.fixture
def normalized_events(outage_file):
    return normalize_outage_events(load_outage_events(outage_file))


class TestNormalizeOutageEvents:

    def test_canonical_columns(self, normalized_events):
        assert list(normalized_events.columns) == EVENT_COLUMNS
        for dropped in ["res_price", "RES.PRICE", "PC.REALGSP.STATE", "POPDEN_URBAN"]:
            assert dropped not in normalized_events.columns

    def test_preserves_row_order_and_count(self, normalized_events, raw_events):
        assert len(normalized_events) == len(raw_events)
        assert normalized_events["obs_id"].tolist() == [
            float(e["OBS"]) for e in raw_events
        ]

    def test_types(self, normalized_events):
        assert str(normalized_events["year"].dtype) == "Int64"
        assert str(normalized_events["month"].dtype) == "Int64"
        assert normalized_events["outage_duration_minutes"].dtype == float
        assert normalized_events.loc[0, "state"] == "Texas"

    def test_combines_start_and_restoration(self, normalized_events):
        assert normalized_events.loc[0, "outage_start"] == pd.Timestamp("2011-07-01 17:00:00")
        assert normalized_events.loc[0, "outage_restoration"] == pd.Timestamp(
            "2011-07-03 20:00:00"
        )

    def test_blank_values_become_null(self, normalized_events):
        # last fixture row has no duration, all rows have no demand loss
        assert np.isnan(normalized_events.loc[6, "outage_duration_minutes"])
        assert normalized_events["demand_loss_mw"].isna().all()

    def test_negative_duration_becomes_null(self, tmp_path):
        path = write_outage_csv(
            tmp_path / "outage.csv",
            [make_raw_event(**{"OUTAGE.DURATION": -5}), make_raw_event()],
        )
        df = normalize_outage_events(load_outage_events(path))
        assert np.isnan(df.loc[0, "outage_duration_minutes"])
        assert df.loc[1, "outage_duration_minutes"] == 3060.0

    def test_does_not_mutate_input(self, outage_file):
        raw = load_outage_events(outage_file)
        before = raw.copy()
        normalize_outage_events(raw)
        pd.testing.assert_frame_equal(raw, before)


class TestNormalizeTemperatureRecords:

    def test_sentinel_becomes_null(self):
        raw = pd.DataFrame(
            [["0012020"] + [50.0] * 10 + [-99.9, -99.9]],
            columns=["state_year_id"] + MONTH_COLUMNS,
        )
        df = normalize_temperature_records(raw)
        assert df["nov"].isna().all()
        assert df["dec"].isna().all()
        assert df.loc[0, "oct"] == 50.0

    def test_identifier_kept_as_text(self):
        raw = pd.DataFrame(
            [[" 0012020 "] + [50.0] * 12], columns=["state_year_id"] + MONTH_COLUMNS
        )
        df = normalize_temperature_records(raw)
        assert df.loc[0, "state_year_id"] == "0012020"
        assert len(df) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
