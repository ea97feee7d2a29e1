"""
SCRAM Logic System

This module implements the reactor trip (SCRAM) logic and alarm monitoring:
short period, high power and high temperature trips, plus the power-approach
and startup-rate warnings.
"""

import logging
from typing import Any, Dict, List

from ....config import ReactorCoreConfig
from ....simulator.alarms import AlarmEvent, AlarmLevel
from ....simulator.state import ReactorPhase
from ..control.rod_actuator import ControlRodActuator

logger = logging.getLogger(__name__)


class ScramSystem:
    """
    Reactor trip system and alarm monitor
    """

    def __init__(self, config: ReactorCoreConfig, rod_actuator: ControlRodActuator):
        """Initialize SCRAM system with trip setpoints"""
        self.config = config
        self.rod_actuator = rod_actuator

        self.scram_period = config.scram_period      # s
        self.scram_power = config.scram_power        # MW
        self.scram_temp = config.scram_temp          # °C
        self.power_warning = config.power_warning    # MW
        self.startup_rate_warning = config.startup_rate_warning  # DPM

    def scram(self, reactor_state, reason: str = "Manual SCRAM") -> bool:
        """
        Trip the reactor

        Args:
            reactor_state: Current reactor state
            reason: Text for the log

        Returns:
            True if this call tripped the reactor, False if already tripped
        """
        if reactor_state.phase is ReactorPhase.SCRAMMED:
            logger.debug(f"SCRAM ignored, reactor already tripped ({reason})")
            return False

        logger.warning(f"REACTOR SCRAM at t={reactor_state.time:.1f}s: {reason}")
        reactor_state.phase = ReactorPhase.SCRAMMED
        self.rod_actuator.scram_insertion(reactor_state)
        return True

    def check_alarms(self, reactor_state) -> List[AlarmEvent]:
        """
        Evaluate trips and warnings for the current state

        Trips are checked first and each forces a SCRAM; any combination may
        fire in the same step.

        Args:
            reactor_state: Current reactor state

        Returns:
            Alarms raised, in evaluation order
        """
        alarms = []
        now = reactor_state.time
        period = reactor_state.period
        power = reactor_state.thermal_power

        if 0 < period < self.scram_period:
            self.scram(reactor_state, f"Short period {period:.1f}s")
            alarms.append(AlarmEvent(
                level=AlarmLevel.TRIP,
                message=f"REACTOR TRIP: Short period ({period:.1f}s)",
                time=now,
            ))

        if power > self.scram_power:
            self.scram(reactor_state, f"High power {power:.0f} MW")
            alarms.append(AlarmEvent(
                level=AlarmLevel.TRIP,
                message=f"REACTOR TRIP: High power ({power:.0f} MW)",
                time=now,
            ))

        if reactor_state.fuel_temp > self.scram_temp or reactor_state.coolant_temp > self.scram_temp:
            self.scram(
                reactor_state,
                f"High temperature (fuel {reactor_state.fuel_temp:.1f}°C, "
                f"coolant {reactor_state.coolant_temp:.1f}°C)",
            )
            alarms.append(AlarmEvent(
                level=AlarmLevel.TRIP,
                message="REACTOR TRIP: High temperature",
                time=now,
            ))

        if (self.power_warning < power <= self.scram_power
                and reactor_state.phase is not ReactorPhase.SCRAMMED):
            alarms.append(AlarmEvent(
                level=AlarmLevel.WARNING,
                message=f"Power approaching limit: {power:.0f} MW",
                time=now,
            ))

        if (reactor_state.startup_rate > self.startup_rate_warning
                and reactor_state.phase is ReactorPhase.SUBCRITICAL):
            alarms.append(AlarmEvent(
                level=AlarmLevel.WARNING,
                message=f"High startup rate: {reactor_state.startup_rate:.1f} DPM",
                time=now,
            ))

        for alarm in alarms:
            if alarm.level is AlarmLevel.TRIP:
                logger.warning(alarm.message)
            else:
                logger.info(alarm.message)

        return alarms

    def get_safety_margins(self, reactor_state) -> Dict[str, float]:
        """
        Calculate margins to the trip setpoints

        Args:
            reactor_state: Current reactor state

        Returns:
            Dictionary with margins (positive = safe, negative = exceeded)
        """
        return {
            "power_margin": self.scram_power - reactor_state.thermal_power,
            "fuel_temperature_margin": self.scram_temp - reactor_state.fuel_temp,
            "coolant_temperature_margin": self.scram_temp - reactor_state.coolant_temp,
        }

    def get_scram_conditions(self, reactor_state) -> List[Dict[str, Any]]:
        """
        Detailed information about each trip condition

        Args:
            reactor_state: Current reactor state

        Returns:
            List of dictionaries with condition details
        """
        period = reactor_state.period
        return [
            {
                "name": "Short Period",
                "current_value": period,
                "limit": self.scram_period,
                "unit": "s",
                "exceeded": 0 < period < self.scram_period,
            },
            {
                "name": "High Power",
                "current_value": reactor_state.thermal_power,
                "limit": self.scram_power,
                "unit": "MW",
                "exceeded": reactor_state.thermal_power > self.scram_power,
            },
            {
                "name": "High Fuel Temperature",
                "current_value": reactor_state.fuel_temp,
                "limit": self.scram_temp,
                "unit": "°C",
                "exceeded": reactor_state.fuel_temp > self.scram_temp,
            },
            {
                "name": "High Coolant Temperature",
                "current_value": reactor_state.coolant_temp,
                "limit": self.scram_temp,
                "unit": "°C",
                "exceeded": reactor_state.coolant_temp > self.scram_temp,
            },
        ]
