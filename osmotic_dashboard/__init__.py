"""
QBLUE osmotic energy dashboard
"""

from .sample_series import generate_sample_series, samples_to_frame

__version__ = "0.1.0"

__all__ = ["generate_sample_series", "samples_to_frame"]
