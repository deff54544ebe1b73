from collections import Counter
from typing import Dict, Iterable, List

import pandas as pd

from eventtiming.constants.data import CENSORED, MUST_START_BEFORE_COL, OUTCOME_COL
from eventtiming.modules.timeline.exceptions import (
    ConfigurationError,
    DataIntegrityError,
)


def check_event_times(event_times: Dict[str, List[str]]) -> None:
    """
    Each outcome group must be named, non-empty and not use the reserved Censored label.
    Each event column may belong to one outcome group only, and only once.
    """
    if not event_times or not any(event_times.values()):
        raise ConfigurationError(
            "At least one event date must be provided, and you provided none. Provide it as:\n"
            '    event_times = {"Outcome name": ["date_column"]}'
        )
    for name, columns in event_times.items():
        if name is None or not str(name).strip():
            raise ConfigurationError(
                "All outcome groups in `event_times` must be named. Provide it as:\n"
                '    event_times = {"Outcome name": ["date_column"]}'
            )
        if name == CENSORED:
            raise ConfigurationError(
                f'"{CENSORED}" is reserved for censored outcomes and cannot name an event group.'
            )
        if not columns:
            raise ConfigurationError(f'Outcome group "{name}" has no date columns.')

    duplicated = _duplicated(
        column for columns in event_times.values() for column in columns
    )
    if duplicated:
        raise ConfigurationError(
            "These columns appear more than once in `event_times`:\n\n"
            f"  {_quote(duplicated)}\n\n"
            "List each column once only."
        )


def check_censors(early_censors: List[str], late_censors: List[str]) -> None:
    """At least one censor column must be given, and each censor column only once."""
    censors = list(early_censors) + list(late_censors)
    if not censors:
        raise ConfigurationError(
            "At least one censor date must be provided, and you provided none.\n"
            "  Early censor dates apply as soon as they happen, e.g. death.\n"
            "  Late censor dates apply when they stop happening, e.g. last contact with the patient.\n"
            "  If you don't need one of them, leave it empty."
        )
    duplicated = _duplicated(censors)
    if duplicated:
        raise ConfigurationError(
            "These columns appear more than once in `early_censors` and/or `late_censors`:\n\n"
            f"  {_quote(duplicated)}\n\n"
            "List each column once only."
        )


def check_roles(
    event_times: Dict[str, List[str]], early_censors: List[str], late_censors: List[str]
) -> None:
    """A date column cannot be used as both an event and a censor."""
    censors = set(early_censors) | set(late_censors)
    shared = [
        column
        for columns in event_times.values()
        for column in columns
        if column in censors
    ]
    if shared:
        raise ConfigurationError(
            "These columns appear as both events and censors:\n\n"
            f"  {_quote(shared)}\n\n"
            "The same variable cannot be an event and a censor at the same time."
        )


def check_columns_in_data(data: pd.DataFrame, columns: Iterable[str]) -> None:
    """Check that all configured columns are present in the DataFrame."""
    missing = [column for column in columns if column not in data.columns]
    if missing:
        raise ConfigurationError(f"Columns not found in data: {_quote(missing)}")


def check_censor_coverage(
    timeline: pd.DataFrame, subjects: pd.Series, identifier: str, censors: List[str]
) -> None:
    """Every subject needs at least one censor observation in the timeline."""
    censored_ids = timeline.loc[timeline[OUTCOME_COL] == CENSORED, identifier].unique()
    missing = subjects[~subjects.isin(censored_ids)]
    if not missing.empty:
        raise DataIntegrityError(
            f"These `{identifier}` have no valid censor dates from "
            f"{' or '.join(f'`{c}`' for c in censors)}:\n\n"
            f"  {', '.join(str(i) for i in missing)}\n\n"
            "All subjects must have at least one censor date."
        )


def check_follow_up_cutoffs(follow_ups: pd.DataFrame, identifier: str) -> None:
    """Every subject with a censor date must have a follow-up cutoff date."""
    missing = follow_ups.loc[follow_ups[MUST_START_BEFORE_COL].isna(), identifier]
    if not missing.empty:
        raise DataIntegrityError(
            f"These `{identifier}` have no valid follow-up requirement dates:\n\n"
            f"  {', '.join(str(i) for i in missing)}\n\n"
            "Check that the `minimum_time` argument is valid."
        )


def _duplicated(items: Iterable[str]) -> List[str]:
    return [item for item, count in Counter(items).items() if count > 1]


def _quote(items: Iterable[str]) -> str:
    return ", ".join(f'"{item}"' for item in items)
