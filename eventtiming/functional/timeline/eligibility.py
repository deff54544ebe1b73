import logging
import warnings

import pandas as pd

from eventtiming.constants.data import (
    BLANK_DATE_COL,
    BLANKED_COL,
    CENSORED,
    EVENT_DATE_COL,
    FOLLOWUP_OK_COL,
    MUST_START_BEFORE_COL,
    OBSTIME_COL,
    OUTCOME_COL,
)
from eventtiming.functional.timeline.checks import check_follow_up_cutoffs
from eventtiming.functional.utils.time import get_elapsed_time, to_datetime
from eventtiming.modules.timeline.exceptions import MissingStartDateWarning

logger = logging.getLogger(__name__)


def get_start_dates(
    data: pd.DataFrame, identifier: str, start_time: str, blanking: pd.Timedelta
) -> pd.DataFrame:
    """
    One start date per subject (the earliest non-missing one) and the end of the
    blanking period.

    Subjects without any start date are kept with a missing start date and a
    MissingStartDateWarning is issued; their derived results will be missing.

    Returns:
        DataFrame sorted by identifier with columns identifier, start_time, blank_date.
    """
    starts = pd.DataFrame(
        {
            identifier: data[identifier].values,
            start_time: to_datetime(data[start_time]).values,
        }
    )
    start_dates = (
        starts.groupby(identifier, sort=True)[start_time].min().reset_index()
    )
    start_dates[BLANK_DATE_COL] = start_dates[start_time] + blanking

    missing = start_dates.loc[start_dates[start_time].isna(), identifier]
    if not missing.empty:
        message = (
            f"These `{identifier}` have no valid start dates from `{start_time}`:\n\n"
            f"  {', '.join(str(i) for i in missing)}\n\n"
            "They will be missing for the derived variables."
        )
        logger.warning(message)
        warnings.warn(message, MissingStartDateWarning, stacklevel=2)
    return start_dates


def flag_blanked(timeline: pd.DataFrame, start_dates: pd.DataFrame, identifier: str) -> pd.DataFrame:
    """
    Attach start and blanking dates to the timeline and flag blanked events.

    An event is blanked when it happens strictly before the end of the blanking
    period. Censor dates are never blanked.
    """
    flagged = start_dates.merge(timeline, on=identifier, how="inner")
    flagged[BLANKED_COL] = (flagged[EVENT_DATE_COL] < flagged[BLANK_DATE_COL]) & (
        flagged[OUTCOME_COL] != CENSORED
    )
    logger.info(f"Blanked event dates: {int(flagged[BLANKED_COL].sum())}")
    return flagged


def get_follow_ups(
    timeline: pd.DataFrame,
    start_dates: pd.DataFrame,
    identifier: str,
    start_time: str,
    minimum_time: pd.Timedelta,
    time_units: pd.Timedelta,
) -> pd.DataFrame:
    """
    Minimum follow-up requirement and potential observation time per subject.

    The reference censor date is the subject's earliest censor date. A subject has
    enough follow-up if they started no later than reference - minimum_time.
    Observation time runs from the start date to the reference censor date, whether
    or not an event happened first, and is computed for ineligible subjects too.
    Blanking only touches event dates, so it never moves the reference censor date.

    Returns:
        DataFrame with columns identifier, must_start_before, followup_okay, obstime.

    Raises:
        DataIntegrityError: if a subject has no follow-up cutoff date.
    """
    censors = timeline[timeline[OUTCOME_COL] == CENSORED]
    reference_dates = (
        censors.groupby(identifier, sort=True)[EVENT_DATE_COL].min().reset_index()
    )
    follow_ups = start_dates[[identifier, start_time]].merge(
        reference_dates, on=identifier, how="inner"
    )

    follow_ups[MUST_START_BEFORE_COL] = follow_ups[EVENT_DATE_COL] - minimum_time
    follow_ups[FOLLOWUP_OK_COL] = (
        follow_ups[start_time] <= follow_ups[MUST_START_BEFORE_COL]
    )
    follow_ups[OBSTIME_COL] = get_elapsed_time(
        follow_ups[start_time], follow_ups[EVENT_DATE_COL], time_units
    )
    check_follow_up_cutoffs(follow_ups, identifier)

    has_start = follow_ups[start_time].notna()
    n_ineligible = int((has_start & ~follow_ups[FOLLOWUP_OK_COL]).sum())
    logger.info(f"Subjects with insufficient follow-up: {n_ineligible}")
    return follow_ups[[identifier, MUST_START_BEFORE_COL, FOLLOWUP_OK_COL, OBSTIME_COL]]


def add_follow_ups(
    timeline: pd.DataFrame, follow_ups: pd.DataFrame, identifier: str
) -> pd.DataFrame:
    """Attach the follow-up columns to every row of the subject's timeline."""
    return timeline.merge(follow_ups, on=identifier, how="inner")
