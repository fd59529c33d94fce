"""
Does ambient temperature predict outage duration?
=================================================

- OLS fits (statsmodels formula API) of outage_duration_minutes against
  the monthly temperature, the is_hot flag, the temperature bucket and
  temperature + climate region
- Welch two-sample t-test (scipy) of duration for hot vs. not-hot outages
- summarize_models flattens fitted models into one tidy table
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf
from scipy import stats as scipy_stats

logger = logging.getLogger(__name__)

TARGET_COL = "outage_duration_minutes"

MODEL_SPECS: Dict[str, Dict] = {
    "duration_vs_temperature": {
        "formula": f"{TARGET_COL} ~ avg_temp_f",
        "numeric": ["avg_temp_f"],
        "categorical": [],
    },
    "duration_vs_is_hot": {
        "formula": f"{TARGET_COL} ~ is_hot",
        "numeric": ["is_hot"],
        "categorical": [],
    },
    "duration_vs_temp_category": {
        "formula": f"{TARGET_COL} ~ C(temp_category, Treatment(reference='neutral'))",
        "numeric": [],
        "categorical": ["temp_category"],
        "reference": {"temp_category": "neutral"},
    },
    "duration_vs_temperature_and_region": {
        "formula": f"{TARGET_COL} ~ avg_temp_f + C(climate_region)",
        "numeric": ["avg_temp_f"],
        "categorical": ["climate_region"],
    },
}

MIN_MODEL_ROWS = 3


@dataclass
class TTestSummary:
    statistic: float
    p_value: float
    hot_mean: float
    not_hot_mean: float
    n_hot: int
    n_not_hot: int

    def to_dict(self) -> Dict:
        return asdict(self)


def _model_frame(table: pd.DataFrame, spec: Dict) -> pd.DataFrame:
    cols = [TARGET_COL] + spec["numeric"] + spec["categorical"]
    frame = table[cols].dropna().copy()
    # patsy does not understand pandas nullable dtypes
    for col in [TARGET_COL] + spec["numeric"]:
        frame[col] = frame[col].astype(float)
    for col in spec["categorical"]:
        frame[col] = frame[col].astype(str)
    return frame


def _skip_reason(frame: pd.DataFrame, spec: Dict) -> str:
    if len(frame) < MIN_MODEL_ROWS:
        return f"only {len(frame)} complete rows"
    for col in spec["categorical"]:
        if frame[col].nunique() < 2:
            return f"'{col}' has fewer than 2 levels"
    for col, level in spec.get("reference", {}).items():
        if level not in set(frame[col]):
            return f"reference level '{level}' missing from '{col}'"
    for col in spec["numeric"]:
        if frame[col].nunique() < 2:
            return f"'{col}' is constant"
    return ""


def fit_duration_models(table: pd.DataFrame) -> Dict[str, object]:
    """
    Fit every model in MODEL_SPECS on the rows complete for its variables.

    Models without enough data are skipped with a warning rather than failing
    the whole analysis.
    """
    results = {}
    for name, spec in MODEL_SPECS.items():
        frame = _model_frame(table, spec)
        reason = _skip_reason(frame, spec)
        if reason:
            logger.warning(f"Skipping model '{name}': {reason}")
            continue

        fitted = smf.ols(spec["formula"], data=frame).fit()
        logger.info(
            f"Fitted '{name}' on {int(fitted.nobs):,} rows: "
            f"R² = {fitted.rsquared:.4f}, F p-value = {fitted.f_pvalue:.4g}"
        )
        results[name] = fitted
    return results


def summarize_models(results: Dict[str, object]) -> pd.DataFrame:
    """One row per (model, term) with coefficient, standard error and p-value."""
    rows: List[Dict] = []
    for name, fitted in results.items():
        for term in fitted.params.index:
            rows.append(
                {
                    "model": name,
                    "term": term,
                    "coef": float(fitted.params[term]),
                    "std_err": float(fitted.bse[term]),
                    "p_value": float(fitted.pvalues[term]),
                    "r_squared": float(fitted.rsquared),
                    "n_obs": int(fitted.nobs),
                }
            )
    return pd.DataFrame(
        rows, columns=["model", "term", "coef", "std_err", "p_value", "r_squared", "n_obs"]
    )


def welch_ttest(table: pd.DataFrame) -> TTestSummary:
    """
    Compare mean outage duration of hot (is_hot == 1) and not-hot outages.

    Uses Welch's t-test (unequal variances). Rows with a null flag or
    duration are ignored.
    """
    flags = table["is_hot"]
    durations = pd.to_numeric(table[TARGET_COL], errors="coerce")

    hot = durations[(flags == 1).fillna(False).astype(bool)].dropna().to_numpy(float)
    not_hot = durations[(flags == 0).fillna(False).astype(bool)].dropna().to_numpy(float)

    if len(hot) < 2 or len(not_hot) < 2:
        raise ValueError(
            f"Welch t-test needs at least 2 observations per group "
            f"(hot={len(hot)}, not hot={len(not_hot)})"
        )

    statistic, p_value = scipy_stats.ttest_ind(hot, not_hot, equal_var=False)
    summary = TTestSummary(
        statistic=float(statistic),
        p_value=float(p_value),
        hot_mean=float(np.mean(hot)),
        not_hot_mean=float(np.mean(not_hot)),
        n_hot=int(len(hot)),
        n_not_hot=int(len(not_hot)),
    )
    logger.info(
        f"Welch t-test hot vs not hot: t = {summary.statistic:.3f}, "
        f"p = {summary.p_value:.4g} (n = {summary.n_hot} / {summary.n_not_hot})"
    )
    return summary
