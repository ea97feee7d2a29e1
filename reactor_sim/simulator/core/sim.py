"""
Reactor Core Simulator

The simulation stepper: owns the reactor state and advances it through rod
actuation, neutronics, thermal hydraulics, xenon dynamics, phase
classification, energy accounting and alarm evaluation, in that order.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from ...config import ReactorCoreConfig
from ...systems.reactor.control.rod_actuator import ControlRodActuator, RodStep
from ...systems.reactor.physics.point_kinetics import PointKineticsModel
from ...systems.reactor.physics.thermal_hydraulics import ThermalHydraulicsModel
from ...systems.reactor.physics.xenon_dynamics import XenonDynamicsModel
from ...systems.reactor.reactivity_model import ReactivityModel
from ...systems.reactor.safety.phase_classifier import PhaseClassifier
from ...systems.reactor.safety.scram_logic import ScramSystem
from ..alarms import AlarmEvent
from ..state import ReactorState, create_initial_state

logger = logging.getLogger(__name__)


class ReactorSimulator:
    """Educational reactor core simulator"""

    def __init__(self, config: Optional[ReactorCoreConfig] = None):
        self.config = config if config is not None else ReactorCoreConfig()

        self.reactivity_model = ReactivityModel(self.config)
        self.kinetics = PointKineticsModel(self.config)
        self.thermal_hydraulics = ThermalHydraulicsModel(self.config)
        self.xenon = XenonDynamicsModel(self.config)
        self.rod_actuator = ControlRodActuator(self.config)
        self.phase_classifier = PhaseClassifier(self.config)
        self.scram_system = ScramSystem(self.config, self.rod_actuator)

        self.state: ReactorState = None
        self.reset()

    def reset(self) -> None:
        """Reset the core to its initial shutdown condition"""
        initial_rod_worth = self.reactivity_model.calculate_control_rod_reactivity(
            self.config.initial_rod_position
        )
        self.state = create_initial_state(self.config, initial_rod_worth)
        logger.info(f"Reactor reset: rods at {self.state.rod_position:.0f}% inserted")

    def step(self, dt: float) -> List[AlarmEvent]:
        """
        Advance the simulation by one time step

        Args:
            dt: Requested time step in seconds; clamped to [0, max_timestep],
                non-finite values are treated as 0

        Returns:
            Alarms raised during this step
        """
        requested = dt
        if math.isfinite(dt):
            dt = min(max(dt, 0.0), self.config.max_timestep)
        else:
            dt = 0.0
        if dt != requested:
            logger.debug(f"Time step {requested:.4f}s clamped to {dt:.4f}s")

        state = self.state

        if dt == 0.0:
            # Paused frame: record the unchanged state only
            state.history.append(state.snapshot())
            return []

        self.rod_actuator.update(state, dt)

        total_reactivity = self.reactivity_model.update_reactivity(state)
        self.kinetics.update(state, total_reactivity, dt)

        self.thermal_hydraulics.update(state, dt)
        self.xenon.update(state, dt)
        self.phase_classifier.update(state)

        # MW * hours = MWh
        state.total_energy_mwh += state.thermal_power * (dt / 3600.0)

        alarms = self.scram_system.check_alarms(state)
        state.alarms.extend(alarms)

        state.time += dt
        state.history.append(state.snapshot())

        return alarms

    def move_rods(self, target_percent: float) -> None:
        """Set the rod target (% inserted)"""
        self.rod_actuator.move_rods(self.state, target_percent)

    def insert_rods(self, delta_percent: float) -> None:
        self.rod_actuator.insert_rods(self.state, delta_percent)

    def withdraw_rods(self, delta_percent: float) -> None:
        self.rod_actuator.withdraw_rods(self.state, delta_percent)

    def apply_rod_step(self, step: RodStep) -> None:
        """Apply one of the operator panel's preset rod moves"""
        self.rod_actuator.apply_step(self.state, step)

    def scram(self) -> None:
        """Manual reactor trip; no effect if already tripped"""
        self.scram_system.scram(self.state)

    @property
    def capacity_factor(self) -> float:
        """Energy produced as a percentage of running at max power (%)"""
        if self.state.time <= 0:
            return 0.0
        max_energy = self.config.max_power * self.state.time / 3600.0
        return self.state.total_energy_mwh / max_energy * 100.0

    def get_state_dict(self) -> Dict[str, Any]:
        """Get current reactor state as dictionary"""
        state_dict = self.state.to_dict()
        state_dict['capacity_factor'] = self.capacity_factor
        state_dict['alarm_count'] = len(self.state.alarms)
        return state_dict
