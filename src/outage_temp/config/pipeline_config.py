# Configuration for the outage / temperature reconciliation pipeline
# I keep every fixed constant of the analysis here so stages receive them explicitly

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

from dotenv import load_dotenv

from outage_temp.config.contiguous_states import CONTIGUOUS_STATES

# Raw outage workbook labels (in file order) -> canonical names.
# None marks a covariate the analysis does not use; it is dropped during normalization.
OUTAGE_COLUMN_MAP: Dict[str, Optional[str]] = {
    "OBS": "obs_id",
    "YEAR": "year",
    "MONTH": "month",
    "U.S._STATE": "state",
    "POSTAL.CODE": "postal_code",
    "NERC.REGION": "nerc_region",
    "CLIMATE.REGION": "climate_region",
    "ANOMALY.LEVEL": "anomaly_level",
    "CLIMATE.CATEGORY": "climate_category",
    "OUTAGE.START.DATE": "outage_start_date",
    "OUTAGE.START.TIME": "outage_start_time",
    "OUTAGE.RESTORATION.DATE": "outage_restoration_date",
    "OUTAGE.RESTORATION.TIME": "outage_restoration_time",
    "CAUSE.CATEGORY": "cause_category",
    "CAUSE.CATEGORY.DETAIL": "cause_detail",
    "HURRICANE.NAMES": "hurricane_name",
    "OUTAGE.DURATION": "outage_duration_minutes",
    "DEMAND.LOSS.MW": "demand_loss_mw",
    "CUSTOMERS.AFFECTED": "customers_affected",
    # Electricity price by sector
    "RES.PRICE": None,
    "COM.PRICE": None,
    "IND.PRICE": None,
    "TOTAL.PRICE": None,
    # Electricity consumption by sector
    "RES.SALES": None,
    "COM.SALES": None,
    "IND.SALES": None,
    "TOTAL.SALES": None,
    "RES.PERCEN": None,
    "COM.PERCEN": None,
    "IND.PERCEN": None,
    # Customers served by sector
    "RES.CUSTOMERS": None,
    "COM.CUSTOMERS": None,
    "IND.CUSTOMERS": None,
    "TOTAL.CUSTOMERS": "total_customers",
    "RES.CUST.PCT": None,
    "COM.CUST.PCT": None,
    "IND.CUST.PCT": None,
    # Economic characteristics
    "PC.REALGSP.STATE": None,
    "PC.REALGSP.USA": None,
    "PC.REALGSP.REL": None,
    "PC.REALGSP.CHANGE": None,
    "UTIL.REALGSP": None,
    "TOTAL.REALGSP": None,
    "UTIL.CONTRI": None,
    "PI.UTIL.OFUSA": None,
    # Land-use and demographics
    "POPULATION": "population",
    "POPPCT_URBAN": None,
    "POPPCT_UC": None,
    "POPDEN_URBAN": None,
    "POPDEN_UC": None,
    "POPDEN_RURAL": None,
    "AREAPCT_URBAN": None,
    "AREAPCT_UC": None,
    "PCT_LAND": None,
    "PCT_WATER_TOT": None,
    "PCT_WATER_INLAND": None,
}

OUTAGE_RAW_COLUMNS: List[str] = list(OUTAGE_COLUMN_MAP.keys())

# Canonical event columns after normalization, in output order
EVENT_COLUMNS: List[str] = [
    "obs_id",
    "year",
    "month",
    "state",
    "postal_code",
    "nerc_region",
    "climate_region",
    "anomaly_level",
    "climate_category",
    "outage_start",
    "outage_restoration",
    "cause_category",
    "cause_detail",
    "hurricane_name",
    "outage_duration_minutes",
    "demand_loss_mw",
    "customers_affected",
    "total_customers",
    "population",
]

MONTH_COLUMNS: List[str] = [
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
]

# Naive single-space splitting of the climdiv file yields one empty field before every month value
TEMPERATURE_RAW_COLUMNS: List[str] = ["state_year_id"] + [
    name for month in MONTH_COLUMNS for name in (f"_pad_{month}", month)
]

TEMPERATURE_MISSING_SENTINEL = -99.9

JOIN_KEYS: List[str] = ["state", "year", "month"]

EXCLUDED_CAUSE_DETAILS: FrozenSet[str] = frozenset(
    {"snow/ice storm", "hurricanes", "earthquake", "computer hardware"}
)
EXCLUDED_CAUSE_CATEGORIES: FrozenSet[str] = frozenset(
    {"intentional attack", "fuel supply emergency", "system operability disruption"}
)

# Defaults for one analysis run
PIPELINE_CONFIG = {
    "outage_header_rows": 5,  # banner rows above the header in the Purdue workbook
    "temperature_layout": "space_split",
    "min_year": 2000,  # first year of outage coverage
    "cold_max_f": 40.0,
    "hot_min_f": 80.0,
    "max_duration_minutes": 30000.0,
    "default_events_path": "data/raw/outage.xlsx",
    "default_temperature_path": "data/raw/climdiv-tmpcst.txt",
    "default_output_dir": "results/analysis",
}


@dataclass
class PipelineConfig:
    """
    Parameters for one pipeline run.

    ``hot_threshold`` is normally left as None so the pipeline computes it from
    the joined table; tests pass a fixed value instead.
    """

    outage_header_rows: int = PIPELINE_CONFIG["outage_header_rows"]
    temperature_layout: str = PIPELINE_CONFIG["temperature_layout"]
    min_year: int = PIPELINE_CONFIG["min_year"]
    cold_max_f: float = PIPELINE_CONFIG["cold_max_f"]
    hot_min_f: float = PIPELINE_CONFIG["hot_min_f"]
    max_duration_minutes: float = PIPELINE_CONFIG["max_duration_minutes"]
    hot_threshold: Optional[float] = None
    state_names: List[str] = field(default_factory=lambda: list(CONTIGUOUS_STATES))
    state_code_mapping: Optional[Dict[str, str]] = None
    excluded_cause_details: FrozenSet[str] = EXCLUDED_CAUSE_DETAILS
    excluded_cause_categories: FrozenSet[str] = EXCLUDED_CAUSE_CATEGORIES


def resolve_data_paths(project_root: Optional[Path] = None) -> Dict[str, Path]:
    """
    Resolve input/output locations, letting a project .env override the defaults.

    Recognised variables: OUTAGE_EVENTS_PATH, NOAA_TEMPERATURE_PATH, ANALYSIS_OUTPUT_DIR.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    load_dotenv(root / ".env") or load_dotenv(root / "config" / ".env")

    return {
        "events": Path(
            os.getenv("OUTAGE_EVENTS_PATH", root / PIPELINE_CONFIG["default_events_path"])
        ),
        "temperature": Path(
            os.getenv(
                "NOAA_TEMPERATURE_PATH",
                root / PIPELINE_CONFIG["default_temperature_path"],
            )
        ),
        "output_dir": Path(
            os.getenv("ANALYSIS_OUTPUT_DIR", root / PIPELINE_CONFIG["default_output_dir"])
        ),
    }
