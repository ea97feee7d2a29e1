"""
Thermal Hydraulics Model

This module implements the two-node (fuel, coolant) lumped heat balance for
the reactor core.
"""

from typing import Dict

import numpy as np

from ....config import ReactorCoreConfig


class ThermalHydraulicsModel:
    """
    Thermal hydraulics model for fuel and coolant temperature calculations
    """

    def __init__(self, config: ReactorCoreConfig):
        """Initialize thermal hydraulics model with the effective coefficients"""
        self.config = config
        coefficients = config.thermal_model
        self.HEAT_TRANSFER_COEFF = coefficients.heat_transfer_coeff
        self.COOLING_EFFICIENCY = coefficients.cooling_efficiency
        self.TEMP_DRIVEN_COOLING = coefficients.temp_driven_cooling
        self.AMBIENT_LOSS_COEFF = coefficients.ambient_loss_coeff
        self.FUEL_HEAT_CAPACITY = coefficients.fuel_heat_capacity
        self.COOLANT_HEAT_CAPACITY = coefficients.coolant_heat_capacity

    def calculate_thermal_hydraulics(self, reactor_state) -> Dict[str, float]:
        """
        Calculate heat flows and temperature derivatives

        Args:
            reactor_state: Current reactor state

        Returns:
            Dictionary with heat flows (MW) and temperature derivatives (°C/s)
        """
        min_temp = self.config.min_temp
        heat_generated = reactor_state.thermal_power

        heat_transfer = self.HEAT_TRANSFER_COEFF * (
            reactor_state.fuel_temp - reactor_state.coolant_temp
        )

        # Removal cannot exceed what the fuel transfers in
        base_heat_removal = reactor_state.thermal_power * self.COOLING_EFFICIENCY
        temp_driven_cooling = self.TEMP_DRIVEN_COOLING * (reactor_state.coolant_temp - min_temp)
        heat_removed = min(base_heat_removal + temp_driven_cooling, heat_transfer)

        ambient_loss = self.AMBIENT_LOSS_COEFF * (reactor_state.coolant_temp - min_temp)

        fuel_temp_dot = (heat_generated - heat_transfer) / self.FUEL_HEAT_CAPACITY
        coolant_temp_dot = (heat_transfer - heat_removed - ambient_loss) / self.COOLANT_HEAT_CAPACITY

        return {
            "heat_generated": heat_generated,
            "heat_transfer": heat_transfer,
            "heat_removed": heat_removed,
            "ambient_loss": ambient_loss,
            "fuel_temp_dot": fuel_temp_dot,
            "coolant_temp_dot": coolant_temp_dot,
        }

    def update_thermal_state(self, reactor_state, thermal_params: Dict[str, float], dt: float) -> None:
        """
        Update fuel and coolant temperatures

        Args:
            reactor_state: Current reactor state
            thermal_params: Thermal parameter derivatives
            dt: Time step
        """
        min_temp = self.config.min_temp
        max_temp = self.config.max_temp

        reactor_state.fuel_temp += thermal_params["fuel_temp_dot"] * dt
        reactor_state.fuel_temp = float(np.clip(
            reactor_state.fuel_temp, min_temp, max_temp + self.config.fuel_temp_margin
        ))

        reactor_state.coolant_temp += thermal_params["coolant_temp_dot"] * dt
        reactor_state.coolant_temp = float(np.clip(reactor_state.coolant_temp, min_temp, max_temp))

    def update(self, reactor_state, dt: float) -> Dict[str, float]:
        """Advance the heat balance for one time step"""
        thermal_params = self.calculate_thermal_hydraulics(reactor_state)
        self.update_thermal_state(reactor_state, thermal_params, dt)
        return thermal_params
