"""
[1] SAMPLE SERIES MODULE
Generate one day of synthetic reservoir readings and energy output

Each call produces a fresh batch of 24 hourly samples: sinusoidal daily
cycles for both reservoirs plus uniform jitter, a regular energy output
derived from the pressure/salinity differentials, and a "QML optimized"
output that closes part of the headroom to 130% of the best regular sample.

Note: the QML series is derived from the already-jittered regular series and
is then jittered again.
"""

import numpy as np
import pandas as pd
import logging
from typing import Dict, List, Optional

from .utils.models import HourlySample
from .utils.time_utils import hours_of_day, hour_labels

logger = logging.getLogger(__name__)

# Jitter strengths (half-width of the uniform noise band)
NOISE_STRENGTHS = {
    "freshTemp": 0.5,
    "salineTemp": 0.6,
    "freshPressure": 0.1,
    "salinePressure": 0.2,
    "freshSalinity": 0.05,
    "salineSalinity": 0.8,
    "regularOutput": 0.8,
    "qmlOutput": 0.2,
}

FRESH_SALINITY_FLOOR = 0.3

# Energy output model
TEMP_FACTOR_COEFFICIENT = 0.1
OUTPUT_SCALE = 0.2

# QML headroom-closing transform
QML_THEORETICAL_MAX_FACTOR = 1.3
QML_BASE_IMPROVEMENT = 1.02
QML_HEADROOM_CLOSURE = 0.4

# Order in which series consume draws from the random source
SENSOR_SERIES = [
    "freshTemp",
    "salineTemp",
    "freshPressure",
    "salinePressure",
    "freshSalinity",
    "salineSalinity",
]


def base_curves(hours: Optional[np.ndarray] = None) -> Dict[str, np.ndarray]:
    """
    Noise-free daily cycles for both reservoirs

    Args:
        hours: Hours to evaluate (defaults to 0..23)

    Returns:
        Dictionary of series name -> base values
    """
    if hours is None:
        hours = hours_of_day()
    h = np.asarray(hours, dtype=float)

    return {
        "freshTemp": 15 + 5 * np.sin(2 * np.pi * (h - 14) / 24),
        "salineTemp": 18 + 4 * np.sin(2 * np.pi * (h - 12) / 24),
        "freshPressure": 2.5 + 0.3 * np.sin(2 * np.pi * h / 24),
        "salinePressure": 7.2
        + 0.8 * np.sin(2 * np.pi * h / 12)
        + 0.4 * np.sin(2 * np.pi * h / 6),
        "freshSalinity": 0.5 + 0.1 * np.sin(2 * np.pi * h / 24),
        "salineSalinity": 35 + 2 * np.sin(2 * np.pi * (h - 3) / 12),
    }


def add_noise(base, strength: float, rng) -> np.ndarray:
    """
    Add uniform jitter in [-strength, strength) to every element

    Args:
        base: Base values
        strength: Half-width of the noise band
        rng: Random source exposing ``random(size)`` (e.g. numpy Generator)

    Returns:
        New array with noise applied
    """
    if strength < 0:
        raise ValueError(f"Noise strength must be non-negative, got {strength}")

    base = np.asarray(base, dtype=float)
    draws = np.asarray(rng.random(base.shape), dtype=float)
    return base + strength * (draws * 2 - 1)


def compute_regular_output(
    fresh_temp: np.ndarray,
    saline_temp: np.ndarray,
    fresh_pressure: np.ndarray,
    saline_pressure: np.ndarray,
    fresh_salinity: np.ndarray,
    saline_salinity: np.ndarray,
) -> np.ndarray:
    """
    Baseline energy output from reservoir differentials (before jitter)

    Output grows with the pressure and salinity gradients and is damped by
    the temperature mismatch between the two reservoirs.
    """
    pressure_diff = saline_pressure - fresh_pressure
    salinity_diff = saline_salinity - fresh_salinity
    temp_factor = 1 / (np.abs(saline_temp - fresh_temp) * TEMP_FACTOR_COEFFICIENT + 1)
    return pressure_diff * salinity_diff * temp_factor * OUTPUT_SCALE


def compute_qml_output(regular_output: np.ndarray) -> np.ndarray:
    """
    QML optimized output (before jitter)

    Moves every sample 40% of the way from a 2% improvement toward 130% of
    the series maximum. The maximum is taken once over the whole series.
    """
    regular_output = np.asarray(regular_output, dtype=float)
    theoretical_max = regular_output.max() * QML_THEORETICAL_MAX_FACTOR
    improved = regular_output * QML_BASE_IMPROVEMENT
    return improved + (theoretical_max - improved) * QML_HEADROOM_CLOSURE


def generate_sample_series(rng=None, noise_scale: float = 1.0) -> List[HourlySample]:
    """
    Generate a batch of 24 hourly samples

    Args:
        rng: Random source exposing ``random(size)``; a fresh unseeded
            numpy Generator is used when omitted
        noise_scale: Multiplier applied to every jitter strength
            (1.0 keeps the standard strengths, 0.0 disables jitter)

    Returns:
        List of HourlySample for hours 0..23, in order
    """
    if noise_scale < 0:
        raise ValueError(f"noise_scale must be non-negative, got {noise_scale}")
    if rng is None:
        rng = np.random.default_rng()

    hours = hours_of_day()
    base = base_curves(hours)

    series = {}
    for name in SENSOR_SERIES:
        series[name] = add_noise(base[name], NOISE_STRENGTHS[name] * noise_scale, rng)

    series["freshSalinity"] = np.maximum(series["freshSalinity"], FRESH_SALINITY_FLOOR)

    regular_raw = compute_regular_output(
        series["freshTemp"],
        series["salineTemp"],
        series["freshPressure"],
        series["salinePressure"],
        series["freshSalinity"],
        series["salineSalinity"],
    )
    regular = add_noise(regular_raw, NOISE_STRENGTHS["regularOutput"] * noise_scale, rng)

    qml_raw = compute_qml_output(regular)
    qml = add_noise(qml_raw, NOISE_STRENGTHS["qmlOutput"] * noise_scale, rng)

    samples = [
        HourlySample(
            hour_label=label,
            fresh_temp=float(series["freshTemp"][i]),
            saline_temp=float(series["salineTemp"][i]),
            fresh_pressure=float(series["freshPressure"][i]),
            saline_pressure=float(series["salinePressure"][i]),
            fresh_salinity=float(series["freshSalinity"][i]),
            saline_salinity=float(series["salineSalinity"][i]),
            regular_output=float(regular[i]),
            qml_output=float(qml[i]),
        )
        for i, label in enumerate(hour_labels(hours))
    ]

    logger.debug(
        f"Generated {len(samples)} samples "
        f"(peak regular {regular.max():.2f} MW, peak QML {qml.max():.2f} MW)"
    )

    return samples


def samples_to_frame(samples: List[HourlySample]) -> pd.DataFrame:
    """
    Convert a sample batch to a chart-ready DataFrame

    Args:
        samples: Batch from generate_sample_series

    Returns:
        DataFrame with one row per hour and chart identifiers as columns
    """
    return pd.DataFrame([sample.to_dict() for sample in samples])
