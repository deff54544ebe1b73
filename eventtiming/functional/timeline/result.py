import re
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from eventtiming.constants.data import (
    BLANK_DATE_COL,
    BLANKED_COL,
    CENSORED,
    EVENT_DATE_COL,
    FOLLOWUP_OK_COL,
    LABELS_ATTR,
    MUST_START_BEFORE_COL,
    OBSTIME_COL,
    OBSTIME_LABEL,
    OBSTIME_PREFIX,
    OUTCOME_COL,
    OUTCOME_INT_PREFIX,
    OUTCOME_LABEL,
    OUTCOME_PREFIX,
    PRIORITY_COL,
    SOURCE_COL,
    TIMETO_LABEL,
    TIMETO_PREFIX,
)
from eventtiming.functional.utils.time import get_elapsed_time


@dataclass(frozen=True)
class ResultNames:
    """Column names and labels of the result table for one analysis."""

    timeto: str
    outcome: str
    outcome_int: str
    obstime: str
    labels: Dict[str, str]


def make_varname(analysis: str) -> str:
    """
    Lower-case column suffix from a human-readable analysis name.
    Runs of characters that are not letters or digits become one underscore.
    """
    varname = re.sub(r"[^0-9A-Za-z]+", "_", analysis).strip("_").lower()
    if not varname or varname[0].isdigit():
        varname = f"x{varname}"
    return varname


def get_result_names(analysis: str) -> ResultNames:
    varname = make_varname(analysis)
    timeto = f"{TIMETO_PREFIX}{varname}"
    outcome = f"{OUTCOME_PREFIX}{varname}"
    outcome_int = f"{OUTCOME_INT_PREFIX}{varname}"
    obstime = f"{OBSTIME_PREFIX}{varname}"
    return ResultNames(
        timeto=timeto,
        outcome=outcome,
        outcome_int=outcome_int,
        obstime=obstime,
        labels={
            timeto: TIMETO_LABEL.format(analysis=analysis),
            outcome: OUTCOME_LABEL.format(analysis=analysis),
            outcome_int: OUTCOME_LABEL.format(analysis=analysis),
            obstime: OBSTIME_LABEL.format(analysis=analysis),
        },
    )


def get_outcome_categories(event_names: List[str]) -> List[str]:
    """Survival packages expect Censored as the first level, i.e. code 0."""
    return [CENSORED] + list(event_names)


def assemble_result(
    first_outcomes: pd.DataFrame,
    start_dates: pd.DataFrame,
    identifier: str,
    start_time: str,
    event_names: List[str],
    names: ResultNames,
    time_units: pd.Timedelta,
) -> pd.DataFrame:
    """
    Join the resolved outcomes onto every subject of the roster.

    The roster is authoritative: every subject appears exactly once, sorted by
    identifier, and subjects without a resolved outcome have missing values in
    all derived columns. Column labels are stored in result.attrs["labels"].
    """
    outcomes = pd.DataFrame({identifier: first_outcomes[identifier].values})
    outcomes[names.timeto] = get_elapsed_time(
        first_outcomes[start_time], first_outcomes[EVENT_DATE_COL], time_units
    ).values
    outcomes[names.outcome] = first_outcomes[OUTCOME_COL].values
    outcomes[names.obstime] = first_outcomes[OBSTIME_COL].values

    result = start_dates[[identifier]].merge(outcomes, on=identifier, how="left")

    categories = get_outcome_categories(event_names)
    result[names.outcome] = pd.Categorical(
        result[names.outcome], categories=categories
    )
    codes = pd.Series(result[names.outcome].cat.codes, index=result.index)
    result[names.outcome_int] = codes.where(codes >= 0).astype("Int64")

    result = result[
        [identifier, names.timeto, names.outcome, names.outcome_int, names.obstime]
    ]
    result.attrs[LABELS_ATTR] = dict(names.labels)
    return result


def format_diagnostic(
    timeline: pd.DataFrame, identifier: str, start_time: str, event_names: List[str]
) -> pd.DataFrame:
    """The sorted, annotated timeline of all dates before filtering."""
    diagnostic = timeline[
        [
            identifier,
            start_time,
            BLANK_DATE_COL,
            EVENT_DATE_COL,
            SOURCE_COL,
            OUTCOME_COL,
            PRIORITY_COL,
            BLANKED_COL,
            MUST_START_BEFORE_COL,
            FOLLOWUP_OK_COL,
            OBSTIME_COL,
        ]
    ].copy()
    diagnostic[OUTCOME_COL] = pd.Categorical(
        diagnostic[OUTCOME_COL], categories=get_outcome_categories(event_names)
    )
    return diagnostic.reset_index(drop=True)
