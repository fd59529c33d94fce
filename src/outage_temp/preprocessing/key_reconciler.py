"""
Reconcile NOAA temperature identifiers with the outage table's state names.

Architecture:
    - split_state_year_id: decodes one identifier into (state code, year)
    - StateCodeMapping: explicit, validated state code -> state name lookup
    - reconcile_temperature_records: wide identifier table -> long
      (state, year, month, avg_temp_f) table
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from outage_temp.config.contiguous_states import CONTIGUOUS_STATES
from outage_temp.config.pipeline_config import MONTH_COLUMNS, PIPELINE_CONFIG
from outage_temp.errors import ReconciliationCountMismatchError, SchemaMismatchError

logger = logging.getLogger(__name__)

YEAR_DIGITS = 4


def split_state_year_id(identifier: str) -> Tuple[str, int]:
    """
    Split an encoded identifier into its state code and year.

    The trailing four digits are the year and everything before them is the
    state code, e.g. ``"0102011" -> ("010", 2011)``.
    """
    text = str(identifier).strip()
    if len(text) <= YEAR_DIGITS or not text.isdigit():
        raise SchemaMismatchError(f"Malformed temperature identifier: {identifier!r}")
    return text[:-YEAR_DIGITS], int(text[-YEAR_DIGITS:])


def distinct_in_order(values: Iterable[str]) -> List[str]:
    seen = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


@dataclass(frozen=True)
class StateCodeMapping:
    """Validated lookup from encoded state code to state name."""

    code_to_name: Dict[str, str]

    @classmethod
    def from_positions(
        cls, codes: Sequence[str], state_names: Sequence[str]
    ) -> "StateCodeMapping":
        """
        Pair the Nth distinct code (first-appearance order) with the Nth name.

        Raises ReconciliationCountMismatchError instead of truncating or padding
        when the number of distinct codes differs from the number of names.
        """
        distinct = distinct_in_order(codes)
        if len(distinct) != len(state_names):
            raise ReconciliationCountMismatchError(len(distinct), len(state_names))
        return cls(dict(zip(distinct, state_names)))

    def validate_against(self, codes: Iterable[str]) -> None:
        observed = set(codes)
        expected = set(self.code_to_name)
        if observed != expected:
            unknown = sorted(observed - expected)
            unused = sorted(expected - observed)
            raise ReconciliationCountMismatchError(
                len(observed),
                len(expected),
                f"codes without a name: {unknown[:5]}, names without a code: {unused[:5]}",
            )

    @property
    def state_order(self) -> List[str]:
        return list(self.code_to_name.values())


def build_state_code_mapping(
    codes: Sequence[str], state_names: Sequence[str] = CONTIGUOUS_STATES
) -> Dict[str, str]:
    """Functional form of StateCodeMapping.from_positions."""
    return StateCodeMapping.from_positions(codes, state_names).code_to_name


def reconcile_temperature_records(
    temps: pd.DataFrame,
    state_names: Sequence[str] = CONTIGUOUS_STATES,
    code_mapping: Optional[Dict[str, str]] = None,
    min_year: int = PIPELINE_CONFIG["min_year"],
) -> pd.DataFrame:
    """
    Turn the wide identifier table into one row per (state, year, month).

    :param temps: Normalized wide table (state_year_id + jan..dec)
    :param state_names: Reference names for positional mapping
    :param code_mapping: Explicit code -> name mapping; overrides positional mapping
    :param min_year: First year kept, applied before codes are mapped
    :return: Long DataFrame with columns state, year, month, avg_temp_f
    """
    logger.info(f"Reconciling {len(temps):,} temperature rows (years >= {min_year})")

    decoded = [split_state_year_id(i) for i in temps["state_year_id"]]
    df = temps.copy()
    df["state_code"] = [code for code, _ in decoded]
    df["year"] = [year for _, year in decoded]

    df = df[df["year"] >= min_year].copy()
    codes = df["state_code"].tolist()

    if code_mapping is None:
        mapping = StateCodeMapping.from_positions(codes, state_names)
    else:
        mapping = StateCodeMapping(dict(code_mapping))
        mapping.validate_against(codes)
    logger.debug(f"Mapped {len(mapping.code_to_name)} state codes to names")

    df["state"] = df["state_code"].map(mapping.code_to_name)

    long_df = df.melt(
        id_vars=["state", "year"],
        value_vars=MONTH_COLUMNS,
        var_name="month",
        value_name="avg_temp_f",
    )
    long_df["month"] = long_df["month"].map(
        {name: i for i, name in enumerate(MONTH_COLUMNS, start=1)}
    )
    long_df["state"] = pd.Categorical(
        long_df["state"], categories=mapping.state_order, ordered=True
    )
    long_df = long_df.sort_values(["state", "year", "month"]).reset_index(drop=True)
    long_df["state"] = long_df["state"].astype(str).astype("string")
    long_df["year"] = long_df["year"].astype("Int64")
    long_df["month"] = long_df["month"].astype("Int64")
    long_df["avg_temp_f"] = long_df["avg_temp_f"].astype(float)

    duplicated = long_df.duplicated(["state", "year", "month"]).sum()
    if duplicated > 0:
        raise SchemaMismatchError(
            f"Temperature source repeats {duplicated} (state, year, month) keys"
        )

    logger.info(
        f"Reconciled temperatures: {len(long_df):,} state-month rows "
        f"for {long_df['state'].nunique()} states"
    )
    return long_df[["state", "year", "month", "avg_temp_f"]]
