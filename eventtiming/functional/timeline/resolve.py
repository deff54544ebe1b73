import logging

import pandas as pd

from eventtiming.constants.data import (
    BLANKED_COL,
    EVENT_DATE_COL,
    FOLLOWUP_OK_COL,
    PRIORITY_COL,
)

logger = logging.getLogger(__name__)


def sort_timeline(timeline: pd.DataFrame, identifier: str) -> pd.DataFrame:
    """
    Sort each subject's dates earliest first. Ties on the same date are broken by
    the priority rank of the source column, so events win over censors and
    earlier-listed columns over later-listed ones.
    """
    return timeline.sort_values(
        [identifier, EVENT_DATE_COL, PRIORITY_COL], kind="mergesort"
    ).reset_index(drop=True)


def select_first_outcomes(
    timeline: pd.DataFrame, identifier: str, start_time: str
) -> pd.DataFrame:
    """
    Select the earliest qualifying date per subject.

    Rows are dropped if the subject has no start date, if the date is blanked, or
    if the subject lacks the minimum follow-up. The first remaining row of each
    subject is their outcome; subjects with no remaining rows are absent.
    """
    timeline = sort_timeline(timeline, identifier)
    keep = (
        timeline[start_time].notna()
        & ~timeline[BLANKED_COL].astype(bool)
        & timeline[FOLLOWUP_OK_COL].astype(bool)
    )
    first_outcomes = timeline[keep].drop_duplicates(subset=identifier, keep="first")
    logger.info(f"Resolved outcomes for {len(first_outcomes)} subjects")
    return first_outcomes.reset_index(drop=True)
