"""
Data models for dashboard objects
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HourlySample:
    """One hour of synthetic reservoir measurements and energy output"""

    hour_label: str  # "H:00"

    # Reservoir parameters
    fresh_temp: float
    saline_temp: float
    fresh_pressure: float
    saline_pressure: float
    fresh_salinity: float
    saline_salinity: float

    # Energy output (MW)
    regular_output: float
    qml_output: float

    def to_dict(self) -> dict:
        """Convert to dictionary keyed by chart series identifiers"""
        return {
            "name": self.hour_label,
            "regularOutput": self.regular_output,
            "qmlOutput": self.qml_output,
            "freshTemp": self.fresh_temp,
            "salineTemp": self.saline_temp,
            "freshPressure": self.fresh_pressure,
            "salinePressure": self.saline_pressure,
            "freshSalinity": self.fresh_salinity,
            "salineSalinity": self.saline_salinity,
        }


@dataclass
class KPI:
    """Key Performance Indicator"""

    name: str
    value: float
    unit: str
    target: Optional[float] = None
    status: Optional[str] = None  # "good", "warning"

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "value": self.value,
            "unit": self.unit,
            "target": self.target,
            "status": self.status,
        }
