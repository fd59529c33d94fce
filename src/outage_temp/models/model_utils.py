"""
Utility functions for saving analysis outputs.

I keep every writer here so the pipeline runner and any ad-hoc analysis
script put files in the same place with the same conventions.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Union

import pandas as pd

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    # NaN/inf are not valid JSON; write them as null
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class ModelUtils:
    """
    I implement output helpers for the outage / temperature analysis.
    This ensures tables and model summaries are written consistently.
    """

    def __init__(self, results_dir: Union[str, Path, None] = None):
        if results_dir is None:
            self.results_dir = Path.cwd() / "results" / "analysis"
        else:
            self.results_dir = Path(results_dir)

    def _ensure_dir(self) -> Path:
        self.results_dir.mkdir(parents=True, exist_ok=True)
        return self.results_dir

    def save_table(self, df: pd.DataFrame, filename: str) -> Path:
        """
        Save a table as CSV without the index.

        Timestamps are written in ISO format so repeated runs produce identical files.
        """
        output_file = self._ensure_dir() / filename
        df.to_csv(output_file, index=False, date_format="%Y-%m-%dT%H:%M:%S")
        logger.info(f"Saved {len(df):,} rows to: {output_file}")
        return output_file

    def save_json(self, payload: Dict, filename: str) -> Path:
        """Save a JSON document; NaN values are written as null."""
        output_file = self._ensure_dir() / filename
        with open(output_file, "w") as f:
            json.dump(_json_safe(payload), f, indent=2, allow_nan=False)
        logger.info(f"Saved JSON to: {output_file}")
        return output_file
