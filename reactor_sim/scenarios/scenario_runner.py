"""
Reactor Scenario Runner

Scripted operator command timelines that drive the simulator headlessly at a
fixed time step, for demonstrations, regression checks and data export.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from ..config import ReactorCoreConfig
from ..exceptions import ScenarioError
from ..simulator.core.sim import ReactorSimulator
from ..simulator.alarms import AlarmEvent, AlarmLevel
from ..systems.reactor.control.rod_actuator import RodStep

logger = logging.getLogger(__name__)


class ScenarioCommand(Enum):
    """Operator commands a scenario can issue"""
    MOVE_RODS = "move_rods"
    INSERT_RODS = "insert_rods"
    WITHDRAW_RODS = "withdraw_rods"
    ROD_STEP = "rod_step"
    SCRAM = "scram"


@dataclass
class ScenarioAction:
    """Represents a single command in a scenario"""
    time: float
    command: ScenarioCommand
    value: Any = None
    description: str = ""


@dataclass
class Scenario:
    """Complete scenario definition"""
    name: str
    duration: float  # seconds
    actions: List[ScenarioAction] = field(default_factory=list)
    dt: float = 0.05
    description: str = ""

    def __post_init__(self):
        self.validate()
        for action in self.actions:
            action.value = self._normalize_value(action)
        self.actions.sort(key=lambda a: a.time)

    def validate(self) -> None:
        """
        Check duration and time step

        Raises:
            ScenarioError: If either is not a positive finite number
        """
        if not (math.isfinite(self.duration) and self.duration > 0):
            raise ScenarioError(f"Scenario duration must be positive, got {self.duration}", self.name)
        if not (math.isfinite(self.dt) and self.dt > 0):
            raise ScenarioError(f"Scenario time step must be positive, got {self.dt}", self.name)

    def _normalize_value(self, action: ScenarioAction) -> Any:
        if action.time < 0:
            raise ScenarioError(f"Action scheduled at negative time {action.time}", self.name)
        if not isinstance(action.command, ScenarioCommand):
            raise ScenarioError(f"Unknown scenario command: {action.command!r}", self.name)

        if action.command is ScenarioCommand.SCRAM:
            return action.value

        if action.command is ScenarioCommand.ROD_STEP:
            if isinstance(action.value, RodStep):
                return action.value
            try:
                return RodStep[str(action.value)]
            except KeyError:
                raise ScenarioError(f"Unknown rod step: {action.value!r}", self.name) from None

        # Rod moves take a percentage
        if isinstance(action.value, bool) or not isinstance(action.value, (int, float)):
            raise ScenarioError(
                f"{action.command.value} needs a numeric value, got {action.value!r}", self.name
            )
        if not math.isfinite(action.value):
            raise ScenarioError(f"{action.command.value} value must be finite", self.name)
        return float(action.value)


@dataclass
class ScenarioResult:
    """Outcome of a scenario run"""
    scenario_name: str
    final_state: Dict[str, Any]
    alarms: List[AlarmEvent]
    peak_power: float
    history: pd.DataFrame

    @property
    def trip_count(self) -> int:
        return sum(1 for alarm in self.alarms if alarm.level is AlarmLevel.TRIP)


def approach_to_critical(duration: float = 180.0) -> Scenario:
    """Withdraw rods from the shutdown position to the critical region"""
    return Scenario(
        name="approach_to_critical",
        duration=duration,
        actions=[
            ScenarioAction(0.0, ScenarioCommand.MOVE_RODS, 35.0, "Withdraw to critical rod height"),
        ],
        description="Rod withdrawal from shutdown to first criticality",
    )


def power_ascension(duration: float = 600.0) -> Scenario:
    """Approach criticality then withdraw in steps to raise power"""
    return Scenario(
        name="power_ascension",
        duration=duration,
        actions=[
            ScenarioAction(0.0, ScenarioCommand.MOVE_RODS, 35.0, "Withdraw to critical rod height"),
            ScenarioAction(150.0, ScenarioCommand.ROD_STEP, RodStep.OUT_SLOW, "Small withdrawal"),
            ScenarioAction(200.0, ScenarioCommand.ROD_STEP, RodStep.OUT_SLOW, "Small withdrawal"),
            ScenarioAction(250.0, ScenarioCommand.WITHDRAW_RODS, 2.0, "Continue ascension"),
        ],
        description="Startup followed by stepwise power ascension",
    )


def manual_scram(duration: float = 120.0) -> Scenario:
    """Start up, then trip the reactor by hand"""
    return Scenario(
        name="manual_scram",
        duration=duration,
        actions=[
            ScenarioAction(0.0, ScenarioCommand.MOVE_RODS, 40.0, "Partial withdrawal"),
            ScenarioAction(duration / 2.0, ScenarioCommand.SCRAM, None, "Manual trip"),
        ],
        description="Manual SCRAM during rod withdrawal",
    )


BUILTIN_SCENARIOS: Dict[str, Callable[..., Scenario]] = {
    "approach_to_critical": approach_to_critical,
    "power_ascension": power_ascension,
    "manual_scram": manual_scram,
}


def get_scenario(name: str, duration: Optional[float] = None) -> Scenario:
    """Build one of the built-in scenarios by name"""
    try:
        factory = BUILTIN_SCENARIOS[name]
    except KeyError:
        raise ScenarioError(f"Unknown scenario: {name}", name) from None
    return factory() if duration is None else factory(duration)


class ScenarioRunner:
    """Runs scenarios against a fresh simulator"""

    def __init__(self, config: Optional[ReactorCoreConfig] = None):
        self.simulator = ReactorSimulator(config)

    def _apply(self, action: ScenarioAction) -> None:
        sim = self.simulator
        logger.info(f"t={sim.state.time:.1f}s {action.command.value} {action.value!r} {action.description}")

        if action.command is ScenarioCommand.MOVE_RODS:
            sim.move_rods(action.value)
        elif action.command is ScenarioCommand.INSERT_RODS:
            sim.insert_rods(action.value)
        elif action.command is ScenarioCommand.WITHDRAW_RODS:
            sim.withdraw_rods(action.value)
        elif action.command is ScenarioCommand.ROD_STEP:
            sim.apply_rod_step(action.value)
        elif action.command is ScenarioCommand.SCRAM:
            sim.scram()

    def run(self, scenario: Scenario) -> ScenarioResult:
        """
        Execute a scenario from the reset condition

        Args:
            scenario: Scenario to run

        Returns:
            ScenarioResult with final state, alarms and history

        Raises:
            ScenarioError: If the scenario's duration or time step was set
                to an invalid value after construction
        """
        scenario.validate()
        sim = self.simulator
        sim.reset()

        pending = list(scenario.actions)
        raised: List[AlarmEvent] = []
        peak_power = sim.state.thermal_power

        logger.info(f"Running scenario '{scenario.name}' for {scenario.duration:.0f}s")

        while sim.state.time < scenario.duration:
            while pending and pending[0].time <= sim.state.time:
                self._apply(pending.pop(0))

            raised.extend(sim.step(scenario.dt))
            peak_power = max(peak_power, sim.state.thermal_power)

        return ScenarioResult(
            scenario_name=scenario.name,
            final_state=sim.get_state_dict(),
            alarms=raised,
            peak_power=peak_power,
            history=sim.state.history.to_dataframe(),
        )
