"""
Reactor State

This module defines the single mutable state record owned by the simulator,
together with the phase and alarm types that live on it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import numpy as np

from ..config import ReactorCoreConfig
from .alarms import AlarmEvent, AlarmLevel
from .history import AlarmLog, ReactorHistory

__all__ = [
    "AlarmEvent",
    "AlarmLevel",
    "HistoryEntry",
    "ReactorPhase",
    "ReactorState",
    "create_initial_state",
    "source_equilibrium_precursors",
]


class ReactorPhase(Enum):
    """Operating phase of the core"""
    SHUTDOWN = "shutdown"
    SUBCRITICAL = "subcritical"
    CRITICAL = "critical"
    POWER_ASCENSION = "power_ascension"
    AT_POWER = "at_power"
    SCRAMMED = "scrammed"


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of the core at one instant"""
    t: float
    power: float
    neutrons: float
    keff: float
    period: float
    fuel_temp: float
    coolant_temp: float
    rod_position: float
    total_reactivity: float
    xenon: float
    phase: ReactorPhase
    startup_rate: float


@dataclass
class ReactorState:
    """Complete reactor core state"""

    # Neutronics
    neutron_density: float = 1e-7
    thermal_power: float = 0.0001           # MW
    precursors: Optional[np.ndarray] = None

    # Thermal hydraulics
    fuel_temp: float = 550.0                # °C
    coolant_temp: float = 550.0             # °C

    # Fission product poisons (normalized)
    iodine_conc: float = 0.0
    xenon_conc: float = 0.0

    # Control rods (% inserted)
    rod_position: float = 95.0
    target_rod_position: float = 95.0

    # Reactivity (pcm)
    rod_reactivity: float = 0.0
    temp_reactivity: float = 0.0
    xenon_reactivity: float = 0.0
    total_reactivity: float = 0.0

    # Kinetics indicators
    keff: float = 0.95
    period: float = float("inf")            # s
    doubling_time: float = float("inf")     # s
    startup_rate: float = 0.0               # DPM

    phase: ReactorPhase = ReactorPhase.SHUTDOWN

    # Bookkeeping
    time: float = 0.0                       # s
    total_energy_mwh: float = 0.0
    history: ReactorHistory = field(default_factory=ReactorHistory)
    alarms: AlarmLog = field(default_factory=AlarmLog)

    def __post_init__(self):
        if self.precursors is None:
            self.precursors = np.zeros(6)

    @property
    def is_scrammed(self) -> bool:
        return self.phase is ReactorPhase.SCRAMMED

    def snapshot(self) -> HistoryEntry:
        """Capture the current values as a history entry"""
        return HistoryEntry(
            t=self.time,
            power=self.thermal_power,
            neutrons=self.neutron_density,
            keff=self.keff,
            period=self.period,
            fuel_temp=self.fuel_temp,
            coolant_temp=self.coolant_temp,
            rod_position=self.rod_position,
            total_reactivity=self.total_reactivity,
            xenon=self.xenon_conc,
            phase=self.phase,
            startup_rate=self.startup_rate,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary of every scalar field"""
        return {
            'time': self.time,
            'neutron_density': self.neutron_density,
            'thermal_power': self.thermal_power,
            'precursors': self.precursors.tolist(),
            'fuel_temp': self.fuel_temp,
            'coolant_temp': self.coolant_temp,
            'iodine_conc': self.iodine_conc,
            'xenon_conc': self.xenon_conc,
            'rod_position': self.rod_position,
            'target_rod_position': self.target_rod_position,
            'rod_reactivity': self.rod_reactivity,
            'temp_reactivity': self.temp_reactivity,
            'xenon_reactivity': self.xenon_reactivity,
            'total_reactivity': self.total_reactivity,
            'keff': self.keff,
            'period': self.period,
            'doubling_time': self.doubling_time,
            'startup_rate': self.startup_rate,
            'phase': self.phase.value,
            'total_energy_mwh': self.total_energy_mwh,
        }


def source_equilibrium_precursors(config: ReactorCoreConfig) -> np.ndarray:
    """Precursor concentrations in equilibrium with the bare neutron source"""
    betas = np.array(config.group_betas)
    decays = np.array(config.group_decays)
    return config.source_strength * betas / decays


def create_initial_state(config: ReactorCoreConfig, initial_rod_worth: float) -> ReactorState:
    """
    Build the documented starting condition

    Args:
        config: Core configuration
        initial_rod_worth: Rod worth (pcm) at the initial rod position

    Returns:
        Fresh ReactorState with empty alarm log and history
    """
    state = ReactorState(
        neutron_density=config.source_strength,
        thermal_power=config.initial_power,
        precursors=source_equilibrium_precursors(config),
        fuel_temp=config.min_temp,
        coolant_temp=config.min_temp,
        rod_position=config.initial_rod_position,
        target_rod_position=config.initial_rod_position,
        rod_reactivity=initial_rod_worth,
        total_reactivity=initial_rod_worth,
        keff=config.shutdown_keff,
        phase=ReactorPhase.SHUTDOWN,
        history=ReactorHistory(window=config.history_window),
        alarms=AlarmLog(maxlen=config.max_alarms),
    )
    state.history.append(state.snapshot())
    return state
