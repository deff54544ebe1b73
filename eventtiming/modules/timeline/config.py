from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from eventtiming.functional.timeline.checks import (
    check_censors,
    check_event_times,
    check_roles,
)
from eventtiming.functional.utils.time import Duration, parse_duration
from eventtiming.modules.timeline.exceptions import ConfigurationError


@dataclass
class TimeToEventConfig:
    """
    Configuration of one time-to-event analysis.

    event_times maps a human-readable outcome name to the date columns that count
    as that outcome. More than one entry gives competing risks. The order of the
    groups, of the columns within them, and of the censor lists decides how ties
    on the same date are broken.

    Durations (time_units, blanking, minimum_time) accept a pd.Timedelta, a
    Timedelta string such as "30D", or keywords such as {"weeks": 8}.
    """

    analysis: str
    identifier: str
    start_time: str
    event_times: Dict[str, List[str]]
    early_censors: List[str] = field(default_factory=list)
    late_censors: List[str] = field(default_factory=list)
    time_units: Duration = field(default_factory=lambda: pd.Timedelta(days=1))
    blanking: Duration = field(default_factory=lambda: pd.Timedelta(0))
    minimum_time: Duration = field(default_factory=lambda: pd.Timedelta(0))
    debug: bool = False

    def __post_init__(self):
        self.event_times = {
            name: _as_list(columns) for name, columns in (self.event_times or {}).items()
        }
        self.early_censors = _as_list(self.early_censors)
        self.late_censors = _as_list(self.late_censors)
        try:
            self.time_units = parse_duration(self.time_units)
            self.blanking = parse_duration(self.blanking)
            self.minimum_time = parse_duration(self.minimum_time)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(e)) from e
        self._validate_config()

    def _validate_config(self):
        """Validate that the configuration is consistent."""
        if not self.analysis or not str(self.analysis).strip():
            raise ConfigurationError("`analysis` must be a non-empty name")
        if self.time_units <= pd.Timedelta(0):
            raise ConfigurationError(
                f"`time_units` must be a positive duration, got {self.time_units}"
            )
        if self.blanking < pd.Timedelta(0):
            raise ConfigurationError(
                f"`blanking` cannot be negative, got {self.blanking}"
            )
        if self.minimum_time < pd.Timedelta(0):
            raise ConfigurationError(
                f"`minimum_time` cannot be negative, got {self.minimum_time}"
            )
        check_event_times(self.event_times)
        check_censors(self.early_censors, self.late_censors)
        check_roles(self.event_times, self.early_censors, self.late_censors)

    @property
    def event_names(self) -> List[str]:
        return list(self.event_times)

    @property
    def event_columns(self) -> List[str]:
        return [column for columns in self.event_times.values() for column in columns]

    @property
    def censor_columns(self) -> List[str]:
        return self.early_censors + self.late_censors

    @property
    def date_columns(self) -> List[str]:
        """All date columns read from the data, start date first."""
        return [self.start_time] + self.event_columns + self.censor_columns


def _as_list(columns) -> List[str]:
    if columns is None:
        return []
    if isinstance(columns, str):
        return [columns]
    return list(columns)
