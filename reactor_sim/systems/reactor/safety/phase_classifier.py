"""
Phase Classifier

Classifies the operating phase of the core from k-effective and thermal
power. A scrammed core stays scrammed until the simulator is reset.
"""

import logging

from ....config import ReactorCoreConfig
from ....simulator.state import ReactorPhase

logger = logging.getLogger(__name__)


class PhaseClassifier:
    """Deterministic phase classification with a sticky tripped state"""

    def __init__(self, config: ReactorCoreConfig):
        self.config = config

    def classify(self, keff: float, thermal_power: float) -> ReactorPhase:
        """
        Phase for the given kinetics/power condition, ignoring trip status

        Args:
            keff: Effective multiplication factor
            thermal_power: Thermal power in MW

        Returns:
            ReactorPhase other than SCRAMMED
        """
        cfg = self.config
        if keff < cfg.shutdown_keff:
            return ReactorPhase.SHUTDOWN
        if keff < cfg.subcritical_keff:
            return ReactorPhase.SUBCRITICAL
        if thermal_power < cfg.critical_power:
            return ReactorPhase.CRITICAL
        if thermal_power < cfg.max_power * cfg.at_power_fraction:
            return ReactorPhase.POWER_ASCENSION
        return ReactorPhase.AT_POWER

    def update(self, state) -> ReactorPhase:
        """Update the phase on the state in place"""
        if state.phase is ReactorPhase.SCRAMMED:
            return state.phase

        phase = self.classify(state.keff, state.thermal_power)
        if phase is not state.phase:
            logger.info(f"Phase change at t={state.time:.1f}s: {state.phase.value} -> {phase.value}")
            state.phase = phase
        return phase
