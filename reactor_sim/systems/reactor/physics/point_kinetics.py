"""
Point Kinetics Model

This module implements the point kinetics equations for the reactor core,
including six delayed neutron precursor groups, the derived kinetics
indicators (k-effective, period, doubling time, startup rate) and the lagged
thermal power signal.
"""

import math
from typing import Tuple

import numpy as np

from ....config import ReactorCoreConfig

# Decades per minute for a one-second e-folding period: 60 / ln(10)
STARTUP_RATE_FACTOR = 26.06


class PointKineticsModel:
    """
    Point kinetics model for neutron density and precursor calculations
    """

    def __init__(self, config: ReactorCoreConfig):
        """Initialize point kinetics model with physical constants"""
        self.config = config
        self.BETA = config.beta_total
        self.LAMBDA_PROMPT = config.generation_time
        self.SOURCE = config.source_strength
        self.BETA_I = np.array(config.group_betas)
        self.LAMBDA = np.array(config.group_decays)

    def calculate_keff(self, rho: float) -> float:
        """
        Effective multiplication factor from reactivity

        Args:
            rho: Reactivity in delta-k/k

        Returns:
            k-effective clamped to the configured bounds
        """
        if rho >= 1.0:
            return self.config.keff_max
        keff = 1.0 / (1.0 - rho)
        return float(np.clip(keff, self.config.keff_min, self.config.keff_max))

    def calculate_period(self, rho: float) -> Tuple[float, float]:
        """
        Reactor period and doubling time

        Args:
            rho: Reactivity in delta-k/k

        Returns:
            Tuple of (period_s, doubling_time_s); both infinite near critical
        """
        if abs(rho) <= self.config.reactivity_epsilon:
            return math.inf, math.inf

        if rho > self.BETA:
            # Prompt critical
            period = self.LAMBDA_PROMPT / (rho - self.BETA)
        elif rho > 0:
            period = self.BETA / (rho * self.LAMBDA_PROMPT)
        else:
            period = -self.LAMBDA_PROMPT / abs(rho)

        return period, period * math.log(2)

    @staticmethod
    def calculate_startup_rate(period: float) -> float:
        """Startup rate in decades per minute"""
        if math.isinf(period) or abs(period) <= 0.1:
            return 0.0
        return STARTUP_RATE_FACTOR / period

    def update_neutron_density(self, state, rho: float, dt: float) -> None:
        """
        Advance neutron density one step

        Deep subcritical uses a quasi-static relaxation toward the
        source-driven level; otherwise the point kinetics equation is
        integrated explicitly with a per-step rate limit.

        Args:
            state: ReactorState, updated in place
            rho: Reactivity in delta-k/k
            dt: Time step in seconds
        """
        if rho < self.config.subcritical_threshold:
            subcritical_level = self.SOURCE / (1.0 - state.keff)
            approach = min(1.0, dt * self.config.subcritical_approach_rate)
            state.neutron_density += (subcritical_level - state.neutron_density) * approach
        else:
            density_dot = (rho - self.BETA) / self.LAMBDA_PROMPT * state.neutron_density
            density_dot += float(np.dot(self.LAMBDA, state.precursors))
            density_dot += self.SOURCE / self.LAMBDA_PROMPT

            if dt > 0 and state.neutron_density > self.config.rate_limit_min_density:
                max_rate = self.config.max_relative_rate / dt * state.neutron_density
                density_dot = float(np.clip(density_dot, -max_rate, max_rate))

            state.neutron_density += density_dot * dt

        state.neutron_density = float(np.clip(state.neutron_density, self.SOURCE, 1.0))

    def update_precursors(self, state, dt: float) -> None:
        """
        Update delayed neutron precursors

        Args:
            state: ReactorState, updated in place
            dt: Time step in seconds
        """
        production = self.BETA_I / self.LAMBDA_PROMPT * state.neutron_density
        decay = self.LAMBDA * state.precursors
        state.precursors = np.maximum(state.precursors + (production - decay) * dt, 0.0)

    def update_thermal_power(self, state, dt: float) -> None:
        """
        Lag thermal power toward the value implied by neutron density

        Args:
            state: ReactorState, updated in place
            dt: Time step in seconds
        """
        target_power = state.neutron_density * self.config.max_power / self.config.reference_density
        alpha = 1.0 - math.exp(-dt / self.config.power_time_constant)
        power = state.thermal_power * (1.0 - alpha) + target_power * alpha
        state.thermal_power = float(np.clip(power, 0.0, self.config.power_ceiling))

    def update(self, state, total_reactivity_pcm: float, dt: float) -> None:
        """
        Advance neutronics for one time step

        Args:
            state: ReactorState, updated in place
            total_reactivity_pcm: Total reactivity in pcm
            dt: Time step in seconds
        """
        rho = total_reactivity_pcm / 100000.0

        state.keff = self.calculate_keff(rho)
        state.period, state.doubling_time = self.calculate_period(rho)
        state.startup_rate = self.calculate_startup_rate(state.period)

        self.update_neutron_density(state, rho, dt)
        self.update_precursors(state, dt)
        self.update_thermal_power(state, dt)
