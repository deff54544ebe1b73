import unittest

import pandas as pd

from eventtiming.constants.data import (
    CENSORED,
    EVENT_DATE_COL,
    OUTCOME_COL,
    SOURCE_COL,
)
from eventtiming.functional.timeline.aggregate import Aggregation, summarise_dates


class TestSummariseDates(unittest.TestCase):
    def setUp(self):
        self.data = pd.DataFrame(
            {
                "pid": [1, 1, 2, 2, 3],
                "followup_date": pd.to_datetime(
                    ["2025-01-10", "2025-03-01", None, "2025-02-01", None]
                ),
                "death_date": pd.to_datetime([None, "2025-05-01", None, None, None]),
            }
        )

    def _dates_for(self, summary: pd.DataFrame, column: str) -> dict:
        rows = summary[summary[SOURCE_COL] == column]
        return dict(zip(rows["pid"], rows[EVENT_DATE_COL]))

    def test_earliest_takes_minimum_per_subject(self):
        summary = summarise_dates(
            self.data, "pid", ["followup_date"], Aggregation.EARLIEST
        )
        self.assertEqual(
            self._dates_for(summary, "followup_date"),
            {1: pd.Timestamp("2025-01-10"), 2: pd.Timestamp("2025-02-01")},
        )

    def test_latest_takes_maximum_per_subject(self):
        summary = summarise_dates(
            self.data, "pid", ["followup_date"], Aggregation.LATEST
        )
        self.assertEqual(
            self._dates_for(summary, "followup_date"),
            {1: pd.Timestamp("2025-03-01"), 2: pd.Timestamp("2025-02-01")},
        )

    def test_subjects_with_only_missing_dates_are_omitted(self):
        summary = summarise_dates(
            self.data, "pid", ["followup_date", "death_date"], Aggregation.EARLIEST
        )
        self.assertNotIn(3, summary["pid"].tolist())
        self.assertEqual(
            self._dates_for(summary, "death_date"), {1: pd.Timestamp("2025-05-01")}
        )

    def test_one_row_per_subject_per_column(self):
        summary = summarise_dates(
            self.data, "pid", ["followup_date", "death_date"], Aggregation.LATEST
        )
        self.assertEqual(len(summary), 3)
        self.assertFalse(summary.duplicated(subset=["pid", SOURCE_COL]).any())
        self.assertTrue((summary[OUTCOME_COL] == CENSORED).all())

    def test_empty_column_list_gives_empty_result(self):
        summary = summarise_dates(self.data, "pid", [], Aggregation.EARLIEST)
        self.assertTrue(summary.empty)
        self.assertListEqual(
            list(summary.columns), ["pid", EVENT_DATE_COL, SOURCE_COL, OUTCOME_COL]
        )

    def test_string_dates_are_parsed(self):
        data = pd.DataFrame(
            {"pid": ["a", "a"], "followup_date": ["2025-01-10", "2025-03-01"]}
        )
        summary = summarise_dates(data, "pid", ["followup_date"], Aggregation.LATEST)
        self.assertEqual(summary[EVENT_DATE_COL].iloc[0], pd.Timestamp("2025-03-01"))

    def test_input_is_not_modified(self):
        original = self.data.copy()
        summarise_dates(self.data, "pid", ["followup_date"], Aggregation.LATEST)
        pd.testing.assert_frame_equal(self.data, original)


if __name__ == "__main__":
    unittest.main()
