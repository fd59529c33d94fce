# Orchestrates the outage / temperature reconciliation from raw files to the analysis table
# Each stage gets the previous stage's output and returns a new table

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd

from outage_temp.config.pipeline_config import PipelineConfig
from outage_temp.data_collection.source_loader import (
    load_outage_events,
    load_temperature_records,
)
from outage_temp.preprocessing.feature_deriver import (
    compute_hot_threshold,
    derive_features,
)
from outage_temp.preprocessing.key_reconciler import reconcile_temperature_records
from outage_temp.preprocessing.row_filter import filter_analysis_rows
from outage_temp.preprocessing.schema_normalizer import (
    normalize_outage_events,
    normalize_temperature_records,
)
from outage_temp.preprocessing.table_joiner import join_events_with_temperature

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    joined: pd.DataFrame
    analysis_table: pd.DataFrame
    hot_threshold: float
    row_counts: Dict[str, int]


class OutageTemperaturePipeline:
    """
    Runs load -> normalize -> reconcile -> join -> derive -> filter.

    Schema and reconciliation errors propagate to the caller; nothing is
    returned for a run that fails part-way.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()

    def build_event_table(self, events_path: Union[str, Path]) -> pd.DataFrame:
        raw = load_outage_events(events_path, header_rows=self.config.outage_header_rows)
        return normalize_outage_events(raw)

    def build_temperature_table(self, temperature_path: Union[str, Path]) -> pd.DataFrame:
        raw = load_temperature_records(
            temperature_path, layout=self.config.temperature_layout
        )
        temps = normalize_temperature_records(raw)
        return reconcile_temperature_records(
            temps,
            state_names=self.config.state_names,
            code_mapping=self.config.state_code_mapping,
            min_year=self.config.min_year,
        )

    def transform(self, events: pd.DataFrame, temps: pd.DataFrame) -> PipelineResult:
        """Join, derive and filter already-normalized tables."""
        joined = join_events_with_temperature(events, temps)

        if self.config.hot_threshold is None:
            hot_threshold = compute_hot_threshold(joined)
        else:
            hot_threshold = float(self.config.hot_threshold)
            logger.info(f"Using configured hot threshold: {hot_threshold:.2f} F")

        derived = derive_features(
            joined,
            hot_threshold,
            cold_max=self.config.cold_max_f,
            hot_min=self.config.hot_min_f,
        )
        analysis_table = filter_analysis_rows(
            derived,
            max_duration_minutes=self.config.max_duration_minutes,
            excluded_cause_details=self.config.excluded_cause_details,
            excluded_cause_categories=self.config.excluded_cause_categories,
        )

        row_counts = {
            "events": len(events),
            "temperature_rows": len(temps),
            "joined": len(derived),
            "matched": int(derived["avg_temp_f"].notna().sum()),
            "analysis": len(analysis_table),
        }
        return PipelineResult(
            joined=derived,
            analysis_table=analysis_table,
            hot_threshold=hot_threshold,
            row_counts=row_counts,
        )

    def run(
        self, events_path: Union[str, Path], temperature_path: Union[str, Path]
    ) -> PipelineResult:
        logger.info("=== Starting outage / temperature reconciliation ===")
        events = self.build_event_table(events_path)
        temps = self.build_temperature_table(temperature_path)
        result = self.transform(events, temps)
        logger.info(f"=== Pipeline completed: {result.row_counts} ===")
        return result
