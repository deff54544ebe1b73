import logging
import os
from os.path import join
from typing import Dict, List

import pandas as pd
from tqdm import tqdm

from eventtiming.constants.config import (
    ANALYSES,
    ANALYSIS,
    DEFAULTS,
    SUPPORTED_DATA_FORMATS,
)
from eventtiming.constants.data import CENSORED
from eventtiming.constants.paths import DIAGNOSTIC_SUFFIX, OUTCOME_COUNTS_FILE
from eventtiming.functional.utils.log import log_table
from eventtiming.functional.utils.time import to_datetime
from eventtiming.modules.monitoring.logger import TqdmToLogger
from eventtiming.modules.setup.config import Config
from eventtiming.modules.timeline.calculator import TimeToEventCalculator
from eventtiming.modules.timeline.config import TimeToEventConfig


def get_analysis_configs(cfg: Config) -> Dict[str, TimeToEventConfig]:
    """
    Builds one TimeToEventConfig per entry in cfg.analyses.
    Keys in cfg.defaults apply to every analysis unless the analysis overrides them.
    The analysis name defaults to the entry key.
    """
    analyses = cfg.get(ANALYSES, None)
    if not analyses:
        raise ValueError("Config must define at least one entry under 'analyses'")
    defaults = cfg.get(DEFAULTS, None) or Config()

    analysis_cfgs = {}
    for key, analysis_cfg in analyses.items():
        merged = {**defaults.to_dict(), **analysis_cfg.to_dict()}
        merged.setdefault(ANALYSIS, key)
        analysis_cfgs[key] = TimeToEventConfig(**merged)
    return analysis_cfgs


def load_data(path: str, date_columns: List[str]) -> pd.DataFrame:
    """Loads the input table (csv or parquet) and parses the date columns."""
    _, ext = os.path.splitext(path)
    if ext not in SUPPORTED_DATA_FORMATS:
        raise ValueError(
            f"Unsupported data format '{ext}', use one of {SUPPORTED_DATA_FORMATS}"
        )
    if ext == ".csv":
        data = pd.read_csv(path)
    else:
        data = pd.read_parquet(path)

    for column in date_columns:
        if column in data.columns:
            data[column] = to_datetime(data[column])
    return data


def get_date_columns(analysis_cfgs: Dict[str, TimeToEventConfig]) -> List[str]:
    """Union of the date columns of all analyses, in first-seen order."""
    columns = []
    for analysis_cfg in analysis_cfgs.values():
        for column in analysis_cfg.date_columns:
            if column not in columns:
                columns.append(column)
    return columns


def count_outcomes(result: pd.DataFrame, outcome_col: str) -> pd.Series:
    """Number of subjects per outcome, including unresolved (missing) subjects."""
    counts = result[outcome_col].value_counts(sort=False, dropna=False)
    counts.index = counts.index.astype(object).fillna("Missing")
    return counts


def run_analyses(
    data: pd.DataFrame,
    analysis_cfgs: Dict[str, TimeToEventConfig],
    results_path: str,
    logger: logging.Logger,
) -> pd.DataFrame:
    """
    Runs every analysis and writes <name>.csv (and <name>_diagnostic.csv in debug
    mode) to results_path.

    Returns:
        Outcome counts with one column per analysis.
    """
    counts = {}
    for key, analysis_cfg in tqdm(
        analysis_cfgs.items(),
        total=len(analysis_cfgs),
        desc="Time to event",
        file=TqdmToLogger(logger),
    ):
        calculator = TimeToEventCalculator(analysis_cfg)
        output = calculator(data)

        output.result.to_csv(join(results_path, f"{key}.csv"), index=False)
        if output.diagnostic is not None:
            output.diagnostic.to_csv(
                join(results_path, f"{key}{DIAGNOSTIC_SUFFIX}.csv"), index=False
            )
        counts[key] = count_outcomes(output.result, calculator.names.outcome)

    outcome_counts = pd.DataFrame(counts).fillna(0).astype(int)
    ordered = [CENSORED] + [i for i in outcome_counts.index if i != CENSORED]
    outcome_counts = outcome_counts.loc[ordered]
    log_table(outcome_counts, logger, title="Outcome counts per analysis")
    outcome_counts.to_csv(join(results_path, OUTCOME_COUNTS_FILE), index_label="outcome")
    return outcome_counts
