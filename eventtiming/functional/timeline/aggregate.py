from enum import Enum
from typing import List

import pandas as pd

from eventtiming.constants.data import (
    CENSORED,
    EVENT_DATE_COL,
    OUTCOME_COL,
    SOURCE_COL,
)
from eventtiming.functional.timeline.utils import create_empty_timeline
from eventtiming.functional.utils.time import to_datetime


class Aggregation(Enum):
    """How the dates of one column are collapsed to a single date per subject."""

    EARLIEST = "earliest"  # early censors: apply as soon as they happen
    LATEST = "latest"  # late censors: apply when they stop happening


def summarise_dates(
    data: pd.DataFrame,
    identifier: str,
    dates: List[str],
    aggregation: Aggregation,
    outcome: str = CENSORED,
) -> pd.DataFrame:
    """
    Summarise each date column to one date per subject.

    Every column is aggregated independently, so a subject gets one row per column
    that has at least one non-missing date for them. Subjects whose values are all
    missing for a column get no row for that column.

    Args:
        data: Input data, one or many rows per subject.
        identifier: Name of the subject identifier column.
        dates: Date columns to summarise. May be empty.
        aggregation: Aggregation.EARLIEST (minimum) or Aggregation.LATEST (maximum).
        outcome: Outcome label attached to the rows.

    Returns:
        Long-format DataFrame with columns identifier, event_date, source_column, outcome.
    """
    if not dates:
        return create_empty_timeline(identifier, data[identifier].dtype)
    summaries = [
        _summarise_column(data, identifier, column, aggregation, outcome)
        for column in dates
    ]
    return pd.concat(summaries, ignore_index=True)


def _summarise_column(
    data: pd.DataFrame,
    identifier: str,
    column: str,
    aggregation: Aggregation,
    outcome: str,
) -> pd.DataFrame:
    dates = pd.DataFrame(
        {identifier: data[identifier].values, EVENT_DATE_COL: to_datetime(data[column]).values}
    )
    grouped = dates.groupby(identifier, sort=True)[EVENT_DATE_COL]
    if aggregation is Aggregation.EARLIEST:
        summary = _earliest(grouped)
    elif aggregation is Aggregation.LATEST:
        summary = _latest(grouped)
    else:
        raise TypeError(f"Unknown aggregation {aggregation!r}")

    summary = summary.dropna().reset_index()
    summary[SOURCE_COL] = column
    summary[OUTCOME_COL] = outcome
    return summary


def _earliest(grouped) -> pd.Series:
    return grouped.min()


def _latest(grouped) -> pd.Series:
    return grouped.max()
