"""
Simulator Package

State record, bounded history and the simulation stepper.
"""

from .alarms import AlarmEvent, AlarmLevel
from .history import AlarmLog, ReactorHistory
from .state import HistoryEntry, ReactorPhase, ReactorState

__all__ = [
    'ReactorState', 'ReactorPhase', 'AlarmEvent', 'AlarmLevel', 'HistoryEntry',
    'ReactorHistory', 'AlarmLog',
]
