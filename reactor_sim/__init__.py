"""
Reactor Core Simulator - educational reactor core dynamics

This package integrates neutron kinetics, delayed neutron precursors,
fuel/coolant temperatures, xenon poisoning and control rod motion forward in
time, exposing a mutable state record for a visualization or game layer.

Usage:
    import reactor_sim

    simulator = reactor_sim.ReactorSimulator()
    simulator.withdraw_rods(60.0)
    alarms = simulator.step(0.05)
"""

__version__ = "0.1.0"

from .config import ReactorCoreConfig, create_default_config, load_config
from .exceptions import ConfigurationError, ReactorSimError, ScenarioError
from .simulator.core.sim import ReactorSimulator
from .simulator.alarms import AlarmEvent, AlarmLevel
from .simulator.state import HistoryEntry, ReactorPhase, ReactorState
from .systems.reactor.control.rod_actuator import RodStep

__all__ = [
    "ReactorSimulator",
    "ReactorCoreConfig",
    "ReactorState",
    "ReactorPhase",
    "AlarmEvent",
    "AlarmLevel",
    "HistoryEntry",
    "RodStep",
    "create_default_config",
    "load_config",
    "ReactorSimError",
    "ConfigurationError",
    "ScenarioError",
]
