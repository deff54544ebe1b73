from datetime import timedelta
from typing import Mapping, Union

import pandas as pd

Duration = Union[pd.Timedelta, timedelta, str, Mapping[str, float], None]


def parse_duration(duration: Duration) -> pd.Timedelta:
    """
    Converts a duration given in the config into a pd.Timedelta.

    Accepts a pd.Timedelta/datetime.timedelta, a Timedelta string ("30D", "8W")
    or a mapping of Timedelta keywords, e.g. {"weeks": 8} or {"days": 1, "hours": 12}.
    None is read as a zero duration.
    Calendar units (months, years) are not supported because their length varies.
    """
    if duration is None:
        return pd.Timedelta(0)
    if isinstance(duration, Mapping):
        try:
            return pd.Timedelta(**duration)
        except (TypeError, ValueError) as e:
            raise ValueError(
                f"Invalid duration {dict(duration)}. "
                "Durations can be given in weeks, days, hours, minutes, seconds"
            ) from e
    if isinstance(duration, (pd.Timedelta, timedelta, str)):
        parsed = pd.Timedelta(duration)
        if pd.isna(parsed):
            raise ValueError(f"Invalid duration {duration!r}")
        return parsed
    raise TypeError(
        "Invalid type for duration, only pd.Timedelta, timedelta, str and dict are supported."
    )


def to_datetime(values: pd.Series) -> pd.Series:
    """
    Converts a column of dates/timestamps to timezone-naive datetime64.
    Text columns are parsed element by element, so date-only and date-time
    strings may be mixed in one column.
    """
    if pd.api.types.is_string_dtype(values.dtype):
        timestamps = pd.to_datetime(values, format="mixed")
    else:
        timestamps = pd.to_datetime(values)
    if timestamps.dt.tz is not None:
        timestamps = timestamps.dt.tz_convert("UTC").dt.tz_localize(None)
    return timestamps


def get_elapsed_time(
    start: pd.Series, end: pd.Series, time_units: pd.Timedelta
) -> pd.Series:
    """
    Elapsed time between start and end, expressed in multiples of time_units.
    Missing start or end gives NaN.
    """
    return ((end - start) / time_units).astype(float)
