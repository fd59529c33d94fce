"""
Unit tests for the results writers.
"""

import json

import numpy as np
import pandas as pd
import pytest

from outage_temp.models.model_utils import ModelUtils


class TestSaveJson:

    def test_nan_written_as_null(self, tmp_path):
        utils = ModelUtils(tmp_path / "results")
        path = utils.save_json(
            {"hot_threshold": np.float64("nan"), "row_counts": {"matched": 0, "ratio": float("inf")}},
            "run_info.json",
        )
        text = path.read_text()
        assert "NaN" not in text
        assert "Infinity" not in text

        payload = json.loads(text)
        assert payload["hot_threshold"] is None
        assert payload["row_counts"] == {"matched": 0, "ratio": None}

    def test_finite_values_unchanged(self, tmp_path):
        path = ModelUtils(tmp_path).save_json({"p_value": 0.03, "n_hot": 4}, "ttest.json")
        assert json.loads(path.read_text()) == {"p_value": 0.03, "n_hot": 4}


class TestSaveTable:

    def test_creates_results_dir_and_drops_index(self, tmp_path):
        utils = ModelUtils(tmp_path / "nested" / "results")
        df = pd.DataFrame(
            {"obs_id": [1.0, 2.0], "outage_start": pd.to_datetime(["2011-07-01 17:00", None])}
        )
        path = utils.save_table(df, "table.csv")
        lines = path.read_text().splitlines()
        assert lines[0] == "obs_id,outage_start"
        assert lines[1] == "1.0,2011-07-01T17:00:00"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
