"""
Time utility functions for the hourly sample axis
"""

import numpy as np
from typing import List

HOURS_PER_DAY = 24


def hours_of_day() -> np.ndarray:
    """
    Integer hours of one day

    Returns:
        Array [0, 1, ..., 23]
    """
    return np.arange(HOURS_PER_DAY)


def format_hour_label(hour: int) -> str:
    """
    Format an hour as a chart label

    Args:
        hour: Hour of day (0-23)

    Returns:
        Label such as "7:00" (no zero padding)
    """
    return f"{int(hour)}:00"


def hour_labels(hours=None) -> List[str]:
    """Labels for each hour, in order"""
    if hours is None:
        hours = hours_of_day()
    return [format_hour_label(h) for h in hours]
