"""
[2] KPI ENGINE MODULE
Summarize a sample batch into headline KPIs
"""

import pandas as pd
import numpy as np
import logging
from typing import List, Optional

from .sample_series import samples_to_frame
from .utils.models import HourlySample, KPI

logger = logging.getLogger(__name__)


def calculate_qml_uplift(regular: pd.Series, qml: pd.Series) -> float:
    """
    Relative gain of the QML series over the regular series

    Args:
        regular: Regular output values
        qml: QML optimized output values

    Returns:
        Uplift in percent (0 when the regular mean is 0)
    """
    regular_mean = regular.mean()
    if regular_mean == 0:
        return 0.0
    return float((qml.mean() - regular_mean) / abs(regular_mean) * 100)


def calculate_output_kpis(
    samples: List[HourlySample], targets: Optional[dict] = None
) -> List[KPI]:
    """
    Calculate key performance indicators

    Args:
        samples: Sample batch from generate_sample_series
        targets: Target values from config

    Returns:
        List of KPI objects
    """
    logger.info("Calculating KPIs...")

    targets = targets or {}
    df = samples_to_frame(samples)

    kpis = [
        KPI(
            name="Peak Regular Output",
            value=round(float(df["regularOutput"].max()), 2),
            unit="MW",
        ),
        KPI(
            name="Peak QML Output",
            value=round(float(df["qmlOutput"].max()), 2),
            unit="MW",
        ),
        KPI(
            name="Average Regular Output",
            value=round(float(df["regularOutput"].mean()), 2),
            unit="MW",
        ),
        KPI(
            name="Average QML Output",
            value=round(float(df["qmlOutput"].mean()), 2),
            unit="MW",
        ),
    ]

    # QML uplift vs target
    uplift = calculate_qml_uplift(df["regularOutput"], df["qmlOutput"])
    uplift_target = targets.get("qml_uplift_percent")
    kpis.append(
        KPI(
            name="Average QML Uplift",
            value=round(uplift, 2),
            unit="%",
            target=uplift_target,
            status="good" if uplift >= (uplift_target or 0) else "warning",
        )
    )

    # Salinity gradient drives the osmotic potential
    salinity_gradient = np.mean(df["salineSalinity"] - df["freshSalinity"])
    kpis.append(
        KPI(
            name="Mean Salinity Gradient",
            value=round(float(salinity_gradient), 2),
            unit="g/kg",
        )
    )

    logger.info(f"✓ Calculated {len(kpis)} KPIs")
    return kpis
