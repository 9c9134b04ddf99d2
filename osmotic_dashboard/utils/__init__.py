"""
Utility modules for the osmotic energy dashboard
"""

from .time_utils import hours_of_day, format_hour_label, hour_labels
from .plotting import create_hour_axis, apply_color_palette
from .models import HourlySample, KPI

__all__ = [
    "hours_of_day",
    "format_hour_label",
    "hour_labels",
    "create_hour_axis",
    "apply_color_palette",
    "HourlySample",
    "KPI",
]
