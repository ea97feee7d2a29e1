"""
Reactivity Model

This module maps control rod position, fuel/coolant temperatures and xenon
concentration to reactivity contributions in pcm. Every calculation is a pure
function of its arguments and the configuration.
"""

from typing import Dict, Optional, Tuple

import numpy as np

from ...config import ReactorCoreConfig


class ReactivityModel:
    """
    Reactivity contributions for the educational core
    """

    def __init__(self, config: Optional[ReactorCoreConfig] = None):
        """Initialize the reactivity model with reactor configuration"""
        self.config = config if config is not None else ReactorCoreConfig()

    def calculate_total_reactivity(self, state) -> Tuple[float, Dict[str, float]]:
        """
        Calculate total reactivity from all sources

        Args:
            state: ReactorState with rod position, temperatures and xenon

        Returns:
            tuple: (total_reactivity_pcm, component_breakdown_dict)
        """
        components = {
            "control_rods": self.calculate_control_rod_reactivity(state.rod_position),
            "temperature": self.calculate_temperature_feedback(
                state.fuel_temp, state.coolant_temp
            ),
            "xenon": self.calculate_xenon_reactivity(state.xenon_conc),
        }

        total_reactivity = sum(components.values())

        return total_reactivity, components

    def calculate_control_rod_reactivity(self, position: float) -> float:
        """
        Calculate control rod worth

        Linear from the maximum positive worth (fully withdrawn) down to zero
        at the critical point, then a tanh saturation toward the maximum
        negative worth as the rods reach full insertion.

        Args:
            position: Rod position (% inserted, 0-100)

        Returns:
            Reactivity in pcm
        """
        x = position / 100.0
        critical_point = self.config.rod_critical_point

        if x <= critical_point:
            fraction = x / critical_point
            return self.config.rod_max_positive_worth * (1.0 - fraction)

        fraction = (x - critical_point) / (1.0 - critical_point)
        return self.config.rod_max_negative_worth * float(np.tanh(fraction * 2.0))

    def calculate_doppler_reactivity(self, fuel_temp: float) -> float:
        """
        Calculate Doppler reactivity feedback from fuel temperature

        Args:
            fuel_temp: Fuel temperature in °C

        Returns:
            Reactivity in pcm
        """
        return self.config.doppler_coeff * (fuel_temp - self.config.normal_temp)

    def calculate_moderator_temp_reactivity(self, coolant_temp: float) -> float:
        """
        Calculate moderator temperature reactivity feedback

        Args:
            coolant_temp: Coolant temperature in °C

        Returns:
            Reactivity in pcm
        """
        return self.config.moderator_coeff * (coolant_temp - self.config.normal_temp)

    def calculate_temperature_feedback(self, fuel_temp: float, coolant_temp: float) -> float:
        """Combined fuel and moderator temperature feedback (pcm)"""
        return (self.calculate_doppler_reactivity(fuel_temp)
                + self.calculate_moderator_temp_reactivity(coolant_temp))

    def calculate_xenon_reactivity(self, xenon_conc: float) -> float:
        """
        Calculate xenon poisoning reactivity

        Args:
            xenon_conc: Normalized Xe-135 concentration (0-1)

        Returns:
            Reactivity in pcm
        """
        return self.config.xenon_max_worth * xenon_conc

    def update_reactivity(self, state) -> float:
        """
        Recompute the reactivity terms on the state

        Args:
            state: ReactorState, updated in place

        Returns:
            Total reactivity in pcm
        """
        total, components = self.calculate_total_reactivity(state)
        state.rod_reactivity = components["control_rods"]
        state.temp_reactivity = components["temperature"]
        state.xenon_reactivity = components["xenon"]
        state.total_reactivity = total
        return total
