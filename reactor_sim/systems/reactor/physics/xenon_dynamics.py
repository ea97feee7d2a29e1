"""
Xenon Dynamics Model

Iodine-135 / xenon-135 production, decay and burnup on a normalized [0, 1]
concentration scale, driven by the normalized flux (thermal power over
maximum power). Rates are scaled up relative to real half-lives so xenon
transients play out at interactive pace.
"""

from typing import Dict

import numpy as np

from ....config import ReactorCoreConfig


class XenonDynamicsModel:
    """
    Iodine/xenon poisoning model
    """

    def __init__(self, config: ReactorCoreConfig):
        self.config = config

    def calculate_rates(self, reactor_state) -> Dict[str, float]:
        """
        Calculate iodine and xenon rates of change

        Args:
            reactor_state: Current reactor state

        Returns:
            Dictionary with production/loss terms and net derivatives
        """
        cfg = self.config
        flux = reactor_state.thermal_power / cfg.max_power

        iodine_production = cfg.iodine_yield * flux * cfg.poison_production_scale
        iodine_decay = cfg.iodine_decay * reactor_state.iodine_conc * cfg.poison_decay_scale

        xenon_from_iodine = iodine_decay
        xenon_direct = cfg.xenon_direct_yield * flux * cfg.poison_production_scale
        xenon_decay = cfg.xenon_decay * reactor_state.xenon_conc * cfg.poison_decay_scale
        xenon_burnup = cfg.xenon_burnup_rate * flux * reactor_state.xenon_conc

        return {
            "iodine_production": iodine_production,
            "iodine_decay": iodine_decay,
            "xenon_decay": xenon_decay,
            "xenon_burnup": xenon_burnup,
            "iodine_dot": iodine_production - iodine_decay,
            "xenon_dot": xenon_from_iodine + xenon_direct - xenon_decay - xenon_burnup,
        }

    def update(self, reactor_state, dt: float) -> Dict[str, float]:
        """
        Advance iodine and xenon concentrations

        Args:
            reactor_state: ReactorState, updated in place
            dt: Time step in seconds

        Returns:
            The rates used for the step
        """
        rates = self.calculate_rates(reactor_state)
        reactor_state.iodine_conc = float(np.clip(
            reactor_state.iodine_conc + rates["iodine_dot"] * dt, 0.0, 1.0
        ))
        reactor_state.xenon_conc = float(np.clip(
            reactor_state.xenon_conc + rates["xenon_dot"] * dt, 0.0, 1.0
        ))
        return rates
