import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

import pandas as pd

from eventtiming.constants.data import DIAGNOSTIC, RESULT
from eventtiming.functional.timeline.build import build_timeline
from eventtiming.functional.timeline.checks import check_columns_in_data
from eventtiming.functional.timeline.eligibility import (
    add_follow_ups,
    flag_blanked,
    get_follow_ups,
    get_start_dates,
)
from eventtiming.functional.timeline.resolve import select_first_outcomes, sort_timeline
from eventtiming.functional.timeline.result import (
    assemble_result,
    format_diagnostic,
    get_result_names,
)
from eventtiming.functional.utils.time import Duration
from eventtiming.modules.timeline.config import TimeToEventConfig

logger = logging.getLogger(__name__)


@dataclass
class TimeToEventResult:
    """Result table and, in debug mode, the diagnostic timeline."""

    result: pd.DataFrame
    diagnostic: Optional[pd.DataFrame] = None

    def to_dict(self) -> Dict[str, pd.DataFrame]:
        output = {RESULT: self.result}
        if self.diagnostic is not None:
            output[DIAGNOSTIC] = self.diagnostic
        return output


class TimeToEventCalculator:
    """
    Calculates time-to-event and outcome for simple, composite and competing events.

    Pipeline:
    1. Build the long-format timeline of event and censor dates
       (early censors: earliest per subject, late censors: latest per subject)
    2. Flag events inside the blanking period and compute the minimum follow-up
       requirement and observation time per subject
    3. Sort by date and tie-break rank, keep the first unblanked date of each
       eligible subject
    4. Join the outcomes back onto all subjects

    The input DataFrame is not modified.
    """

    def __init__(self, cfg: TimeToEventConfig):
        self.cfg = cfg
        self.names = get_result_names(cfg.analysis)

    def __call__(self, data: pd.DataFrame) -> TimeToEventResult:
        cfg = self.cfg
        logger.info(f"Calculating time to event for analysis '{cfg.analysis}'")
        check_columns_in_data(data, [cfg.identifier] + cfg.date_columns)

        timeline = build_timeline(
            data,
            cfg.identifier,
            cfg.event_times,
            cfg.early_censors,
            cfg.late_censors,
        )
        start_dates = get_start_dates(
            data, cfg.identifier, cfg.start_time, cfg.blanking
        )
        timeline = flag_blanked(timeline, start_dates, cfg.identifier)
        follow_ups = get_follow_ups(
            timeline,
            start_dates,
            cfg.identifier,
            cfg.start_time,
            cfg.minimum_time,
            cfg.time_units,
        )
        timeline = add_follow_ups(timeline, follow_ups, cfg.identifier)
        timeline = sort_timeline(timeline, cfg.identifier)

        first_outcomes = select_first_outcomes(timeline, cfg.identifier, cfg.start_time)
        result = assemble_result(
            first_outcomes,
            start_dates,
            cfg.identifier,
            cfg.start_time,
            cfg.event_names,
            self.names,
            cfg.time_units,
        )

        diagnostic = None
        if cfg.debug:
            diagnostic = format_diagnostic(
                timeline, cfg.identifier, cfg.start_time, cfg.event_names
            )
        return TimeToEventResult(result=result, diagnostic=diagnostic)


def when_did_that_happen(
    data: pd.DataFrame,
    analysis: str,
    identifier: str,
    start_time: str,
    event_times: Dict[str, List[str]],
    early_censors: Optional[List[str]] = None,
    late_censors: Optional[List[str]] = None,
    time_units: Duration = pd.Timedelta(days=1),
    blanking: Duration = pd.Timedelta(0),
    minimum_time: Duration = pd.Timedelta(0),
    debug: bool = False,
) -> Union[pd.DataFrame, TimeToEventResult]:
    """
    Calculate the time from start_time to the earliest event or censor date.

    Example:
        >>> when_did_that_happen(
        ...     data=example_events,
        ...     analysis="Any Surgery cw Death",
        ...     identifier="personid",
        ...     start_time="index_date",
        ...     event_times={
        ...         "Any Surgery": ["heartsurgery_date", "lungsurgery_date"],
        ...         "Death": ["death_date"],
        ...     },
        ...     early_censors=["end_of_study"],
        ...     late_censors=["followup_date"],
        ...     blanking={"weeks": 4},
        ...     minimum_time={"weeks": 24},
        ... )

    Returns:
        The result DataFrame, or a TimeToEventResult holding the result and the
        diagnostic timeline if debug is True.
    """
    cfg = TimeToEventConfig(
        analysis=analysis,
        identifier=identifier,
        start_time=start_time,
        event_times=event_times,
        early_censors=early_censors,
        late_censors=late_censors,
        time_units=time_units,
        blanking=blanking,
        minimum_time=minimum_time,
        debug=debug,
    )
    output = TimeToEventCalculator(cfg)(data)
    if debug:
        return output
    return output.result
