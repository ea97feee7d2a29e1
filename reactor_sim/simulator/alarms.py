"""
Alarm Types

Severity levels and the alarm record raised by the trip logic.
"""

from dataclasses import dataclass
from enum import Enum


class AlarmLevel(Enum):
    """Alarm severity levels"""
    ADVISORY = "advisory"
    WARNING = "warning"
    TRIP = "trip"


@dataclass(frozen=True)
class AlarmEvent:
    """An alarm raised during a step"""
    level: AlarmLevel
    message: str
    time: float
