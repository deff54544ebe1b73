import logging
from typing import Dict, List

import pandas as pd

from eventtiming.constants.data import (
    EVENT_DATE_COL,
    OUTCOME_COL,
    PRIORITY_COL,
    SOURCE_COL,
)
from eventtiming.functional.timeline.aggregate import Aggregation, summarise_dates
from eventtiming.functional.timeline.checks import (
    check_censor_coverage,
    check_censors,
    check_event_times,
    check_roles,
)
from eventtiming.functional.timeline.utils import create_empty_timeline
from eventtiming.functional.utils.time import to_datetime

logger = logging.getLogger(__name__)


def get_priority_ranks(
    event_times: Dict[str, List[str]], early_censors: List[str], late_censors: List[str]
) -> Dict[str, int]:
    """
    Tie-break rank of every date column: event columns in the order given
    (groups in order, columns within a group in order), then early censors,
    then late censors. Lower rank wins when two dates are equal.
    """
    ordered = [column for columns in event_times.values() for column in columns]
    ordered += list(early_censors) + list(late_censors)
    return {column: rank for rank, column in enumerate(ordered)}


def get_event_dates(
    data: pd.DataFrame, identifier: str, event_times: Dict[str, List[str]]
) -> pd.DataFrame:
    """
    Every non-missing event date in long format.

    All rows of the input are candidate occurrences, so many-rows-per-subject data
    does not have to be aggregated first. Duplicated (subject, date, column)
    triples are kept once.
    """
    events = []
    for outcome, columns in event_times.items():
        for column in columns:
            dates = pd.DataFrame(
                {
                    identifier: data[identifier].values,
                    EVENT_DATE_COL: to_datetime(data[column]).values,
                }
            )
            dates = dates.dropna(subset=[identifier, EVENT_DATE_COL])
            dates = dates.drop_duplicates()
            dates[SOURCE_COL] = column
            dates[OUTCOME_COL] = outcome
            events.append(dates)
    return _concat_timelines(events, identifier, data[identifier].dtype)


def build_timeline(
    data: pd.DataFrame,
    identifier: str,
    event_times: Dict[str, List[str]],
    early_censors: List[str],
    late_censors: List[str],
) -> pd.DataFrame:
    """
    Build the long-format timeline of events and censors for every subject.

    Events are taken row by row, early censors are the earliest date per subject
    and column, late censors the latest. Each row carries the priority rank of
    its source column.

    Raises:
        ConfigurationError: if a column is listed twice or in two roles.
        DataIntegrityError: if any subject has no censor date at all.
    """
    check_event_times(event_times)
    check_censors(early_censors, late_censors)
    check_roles(event_times, early_censors, late_censors)

    event_dates = get_event_dates(data, identifier, event_times)
    early_censor_dates = summarise_dates(
        data, identifier, early_censors, Aggregation.EARLIEST
    )
    late_censor_dates = summarise_dates(
        data, identifier, late_censors, Aggregation.LATEST
    )
    timeline = _concat_timelines(
        [event_dates, early_censor_dates, late_censor_dates],
        identifier,
        data[identifier].dtype,
    )

    subjects = pd.Series(data[identifier].dropna().unique())
    check_censor_coverage(
        timeline, subjects, identifier, list(early_censors) + list(late_censors)
    )

    priority = get_priority_ranks(event_times, early_censors, late_censors)
    timeline[PRIORITY_COL] = timeline[SOURCE_COL].map(priority).astype(int)

    logger.info(
        f"Timeline: {len(event_dates)} event dates, "
        f"{len(early_censor_dates)} early censor dates, "
        f"{len(late_censor_dates)} late censor dates "
        f"for {len(subjects)} subjects"
    )
    return timeline


def _concat_timelines(frames: List[pd.DataFrame], identifier: str, id_dtype) -> pd.DataFrame:
    frames = [frame for frame in frames if not frame.empty]
    if not frames:
        return create_empty_timeline(identifier, id_dtype)
    return pd.concat(frames, ignore_index=True)
