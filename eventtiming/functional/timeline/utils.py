import pandas as pd

from eventtiming.constants.data import EVENT_DATE_COL, OUTCOME_COL, SOURCE_COL


def create_empty_timeline(identifier: str, id_dtype=object) -> pd.DataFrame:
    """Empty long-format timeline with the expected columns and dtypes."""
    return pd.DataFrame(
        {
            identifier: pd.Series(dtype=id_dtype),
            EVENT_DATE_COL: pd.Series(dtype="datetime64[ns]"),
            SOURCE_COL: pd.Series(dtype=object),
            OUTCOME_COL: pd.Series(dtype=object),
        }
    )
