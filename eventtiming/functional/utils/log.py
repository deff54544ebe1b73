import logging
from typing import Optional

import pandas as pd


def log_table(table: pd.DataFrame, logger: logging.Logger, title: Optional[str] = None):
    """Log a formatted table, optionally preceded by a title line."""
    header = f"{title}\n" if title else "\n"
    logger.info(header + table.to_string())
