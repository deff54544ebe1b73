import unittest

import pandas as pd

from eventtiming.constants.data import (
    BLANKED_COL,
    CENSORED,
    EVENT_DATE_COL,
    FOLLOWUP_OK_COL,
    OUTCOME_COL,
    PRIORITY_COL,
    SOURCE_COL,
)
from eventtiming.functional.timeline.resolve import select_first_outcomes, sort_timeline


def make_annotated_timeline(rows):
    """rows: list of (pid, start, date, source, outcome, priority, blanked, followup_okay)"""
    columns = [
        "pid",
        "index_date",
        EVENT_DATE_COL,
        SOURCE_COL,
        OUTCOME_COL,
        PRIORITY_COL,
        BLANKED_COL,
        FOLLOWUP_OK_COL,
    ]
    timeline = pd.DataFrame(rows, columns=columns)
    timeline["index_date"] = pd.to_datetime(timeline["index_date"])
    timeline[EVENT_DATE_COL] = pd.to_datetime(timeline[EVENT_DATE_COL])
    return timeline


class TestSortTimeline(unittest.TestCase):
    def test_sorted_by_subject_date_and_priority(self):
        timeline = make_annotated_timeline(
            [
                (2, "2025-01-01", "2025-02-01", "followup", CENSORED, 2, False, True),
                (1, "2025-01-01", "2025-03-01", "followup", CENSORED, 2, False, True),
                (1, "2025-01-01", "2025-03-01", "surgery", "Surgery", 0, False, True),
                (1, "2025-01-01", "2025-02-01", "death", CENSORED, 1, False, True),
            ]
        )
        ordered = sort_timeline(timeline, "pid")
        self.assertEqual(
            ordered[SOURCE_COL].tolist(), ["death", "surgery", "followup", "followup"]
        )
        self.assertEqual(ordered["pid"].tolist(), [1, 1, 1, 2])
        self.assertEqual(ordered.index.tolist(), [0, 1, 2, 3])


class TestSelectFirstOutcomes(unittest.TestCase):
    def test_event_beats_censor_on_same_day(self):
        timeline = make_annotated_timeline(
            [
                (1, "2025-01-01", "2025-04-10", "followup", CENSORED, 1, False, True),
                (1, "2025-01-01", "2025-04-10", "x", "X", 0, False, True),
            ]
        )
        first = select_first_outcomes(timeline, "pid", "index_date")
        self.assertEqual(first[OUTCOME_COL].tolist(), ["X"])

    def test_earlier_listed_event_group_wins_tie(self):
        timeline = make_annotated_timeline(
            [
                (1, "2025-01-01", "2025-04-10", "death", "Death", 1, False, True),
                (1, "2025-01-01", "2025-04-10", "surgery", "Surgery", 0, False, True),
                (1, "2025-01-01", "2025-06-01", "followup", CENSORED, 2, False, True),
            ]
        )
        first = select_first_outcomes(timeline, "pid", "index_date")
        self.assertEqual(first[SOURCE_COL].tolist(), ["surgery"])

    def test_blanked_rows_are_skipped(self):
        timeline = make_annotated_timeline(
            [
                (1, "2025-01-01", "2025-01-10", "a", "A", 0, True, True),
                (1, "2025-01-01", "2025-02-10", "a", "A", 0, False, True),
                (1, "2025-01-01", "2025-06-01", "followup", CENSORED, 1, False, True),
            ]
        )
        first = select_first_outcomes(timeline, "pid", "index_date")
        self.assertEqual(first[EVENT_DATE_COL].tolist(), [pd.Timestamp("2025-02-10")])

    def test_ineligible_and_startless_subjects_are_absent(self):
        timeline = make_annotated_timeline(
            [
                (1, "2025-01-01", "2025-01-10", "a", "A", 0, False, False),
                (1, "2025-01-01", "2025-02-01", "followup", CENSORED, 1, False, False),
                (2, None, "2025-02-01", "followup", CENSORED, 1, False, False),
                (3, "2025-01-01", "2025-02-01", "followup", CENSORED, 1, False, True),
            ]
        )
        first = select_first_outcomes(timeline, "pid", "index_date")
        self.assertEqual(first["pid"].tolist(), [3])
        self.assertEqual(first[OUTCOME_COL].tolist(), [CENSORED])

    def test_one_row_per_subject(self):
        timeline = make_annotated_timeline(
            [
                (1, "2025-01-01", "2025-01-10", "a", "A", 0, False, True),
                (1, "2025-01-01", "2025-01-20", "a", "A", 0, False, True),
                (2, "2025-01-01", "2025-03-01", "followup", CENSORED, 1, False, True),
                (1, "2025-01-01", "2025-05-01", "followup", CENSORED, 1, False, True),
            ]
        )
        first = select_first_outcomes(timeline, "pid", "index_date")
        self.assertEqual(first["pid"].tolist(), [1, 2])
        self.assertEqual(
            first[EVENT_DATE_COL].tolist(),
            [pd.Timestamp("2025-01-10"), pd.Timestamp("2025-03-01")],
        )

    def test_same_result_for_shuffled_input(self):
        timeline = make_annotated_timeline(
            [
                (1, "2025-01-01", "2025-04-10", "death", "Death", 1, False, True),
                (1, "2025-01-01", "2025-04-10", "surgery", "Surgery", 0, False, True),
                (2, "2025-01-01", "2025-03-01", "followup", CENSORED, 2, False, True),
                (2, "2025-01-01", "2025-03-01", "end", CENSORED, 3, False, True),
            ]
        )
        first = select_first_outcomes(timeline, "pid", "index_date")
        shuffled = timeline.sample(frac=1, random_state=7).reset_index(drop=True)
        pd.testing.assert_frame_equal(
            select_first_outcomes(shuffled, "pid", "index_date"), first
        )


if __name__ == "__main__":
    unittest.main()
