"""
Reactor Core Configuration

This module provides the configuration for the reactor core simulator,
including kinetics constants, rod worth curve, feedback coefficients,
thermal limits, trip setpoints and integration bounds.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import yaml
from dataclass_wizard import YAMLWizard
from dataclass_wizard.errors import JSONWizardError

from .exceptions import ConfigurationError


@dataclass
class DelayedNeutronGroup:
    """One delayed-neutron precursor group"""

    beta: float    # Delayed neutron fraction of the group
    decay: float   # Precursor decay constant (1/s)


def _default_delayed_groups() -> List[DelayedNeutronGroup]:
    return [
        DelayedNeutronGroup(beta=0.00025, decay=0.0124),
        DelayedNeutronGroup(beta=0.00136, decay=0.0305),
        DelayedNeutronGroup(beta=0.00120, decay=0.111),
        DelayedNeutronGroup(beta=0.00257, decay=0.301),
        DelayedNeutronGroup(beta=0.00075, decay=1.14),
        DelayedNeutronGroup(beta=0.00027, decay=3.01),
    ]


@dataclass
class ThermalModelCoefficients:
    """
    Coefficients actually used by the two-node heat balance.

    These are not the same numbers as the nominal fuel_heat_capacity,
    coolant_heat_capacity, heat_transfer_coeff and ambient_loss_coeff
    constants on ReactorCoreConfig; the heat balance uses these.
    """

    heat_transfer_coeff: float = 2.0        # MW/°C fuel -> coolant
    cooling_efficiency: float = 0.95        # Fraction of power removed by the heat sink
    temp_driven_cooling: float = 0.5        # MW/°C above minimum temperature
    ambient_loss_coeff: float = 0.01        # MW/°C
    fuel_heat_capacity: float = 100.0       # MW·s/°C
    coolant_heat_capacity: float = 150.0    # MW·s/°C


@dataclass
class ReactorCoreConfig(YAMLWizard):
    """Reactor core configuration parameters"""

    # Neutron kinetics
    beta_total: float = 0.0065              # Total delayed neutron fraction
    generation_time: float = 2.4e-5         # Prompt generation time (s)
    source_strength: float = 1e-7           # Neutron source (normalized)
    delayed_groups: List[DelayedNeutronGroup] = field(default_factory=_default_delayed_groups)
    reference_density: float = 1e-3        # Neutron density producing max_power
    power_time_constant: float = 3.0        # Thermal power lag (s)
    subcritical_threshold: float = -0.01    # Δk/k below which the quasi-static approach is used
    subcritical_approach_rate: float = 0.5  # 1/s
    max_relative_rate: float = 0.2          # Max fractional density change per step
    rate_limit_min_density: float = 1e-6    # Rate limiter applies above this density
    reactivity_epsilon: float = 1e-6        # |ρ| below this gives an infinite period
    keff_min: float = 0.85
    keff_max: float = 1.15

    # Control rods
    rod_worth_total: float = 0.08           # Nominal total rod worth (Δk/k)
    rod_critical_point: float = 0.35        # Fractional insertion with zero rod worth
    rod_max_positive_worth: float = 3000.0  # pcm, fully withdrawn
    rod_max_negative_worth: float = -5000.0 # pcm, asymptote when fully inserted
    rod_speed: float = 0.5                  # %/s
    scram_insertion_kick: float = 5.0       # % inserted immediately on SCRAM
    initial_rod_position: float = 95.0      # % inserted

    # Temperature feedback
    doppler_coeff: float = -2.5             # pcm/°C fuel
    moderator_coeff: float = -0.8           # pcm/°C coolant

    # Nominal thermal constants
    fuel_heat_capacity: float = 250.0       # MW·s/°C
    coolant_heat_capacity: float = 300.0    # MW·s/°C
    heat_transfer_coeff: float = 1.5        # MW/°C
    ambient_loss_coeff: float = 0.001       # MW/°C
    thermal_model: ThermalModelCoefficients = field(default_factory=ThermalModelCoefficients)

    # Temperatures and power
    min_temp: float = 550.0                 # Minimum operating temp (°C)
    normal_temp: float = 650.0              # Reference operating temp (°C)
    max_temp: float = 750.0                 # Maximum safe temp (°C)
    fuel_temp_margin: float = 50.0          # Fuel may exceed max_temp by this much
    max_power: float = 250.0                # Maximum thermal power (MW)
    power_ceiling_factor: float = 1.2       # Thermal power clamp as a multiple of max_power
    initial_power: float = 0.0001           # MW

    # Trip setpoints
    scram_power: float = 300.0              # MW
    scram_temp: float = 750.0               # °C
    scram_period: float = 10.0              # s
    power_warning: float = 255.0            # MW
    startup_rate_warning: float = 1.0       # DPM

    # Phase boundaries
    shutdown_keff: float = 0.95
    subcritical_keff: float = 0.999
    critical_power: float = 1.0             # MW
    at_power_fraction: float = 0.9          # Fraction of max_power

    # Fission product poisons
    xenon_yield: float = 0.061              # Xe-135 cumulative yield
    xenon_decay: float = 2.1e-5             # Xe-135 decay constant (1/s)
    iodine_decay: float = 2.9e-5            # I-135 decay constant (1/s)
    xenon_absorption: float = 2.6e6         # Microscopic absorption cross section (barns)
    xenon_max_worth: float = -3000.0        # pcm at normalized concentration 1.0
    iodine_yield: float = 0.061
    xenon_direct_yield: float = 0.003
    poison_production_scale: float = 0.002  # Normalizes yields to the [0, 1] poison scale
    poison_decay_scale: float = 10.0        # Accelerates decay for interactive pacing
    xenon_burnup_rate: float = 0.2          # 1/s at full flux

    # Integration and bookkeeping
    max_timestep: float = 0.05              # s
    history_window: float = 600.0           # Simulated seconds of history retained
    max_alarms: int = 10

    def __post_init__(self):
        """Validate configuration parameters"""
        self._validate_parameters()

    def _validate_parameters(self):
        errors = []

        if len(self.delayed_groups) != 6:
            errors.append(f"Expected 6 delayed neutron groups, got {len(self.delayed_groups)}")

        group_beta = sum(group.beta for group in self.delayed_groups)
        if abs(group_beta - self.beta_total) > 0.05 * self.beta_total:
            errors.append(f"Group betas sum to {group_beta:.5f}, expected {self.beta_total:.5f}")

        if any(group.decay <= 0 for group in self.delayed_groups):
            errors.append("Delayed group decay constants must be positive")

        if self.generation_time <= 0:
            errors.append("Generation time must be positive")

        if self.source_strength <= 0 or self.source_strength >= 1.0:
            errors.append("Source strength must be in (0, 1)")

        if not (0.0 < self.rod_critical_point < 1.0):
            errors.append("Rod critical point must lie strictly between 0 and 1")

        if self.rod_speed <= 0:
            errors.append("Rod speed must be positive")

        if not (0.0 <= self.initial_rod_position <= 100.0):
            errors.append("Initial rod position must be within 0-100%")

        if self.min_temp >= self.max_temp:
            errors.append("Minimum temperature must be below maximum temperature")

        if self.max_power <= 0:
            errors.append("Max power must be positive")

        if self.keff_min >= self.keff_max:
            errors.append("keff bounds are inverted")

        if self.max_timestep <= 0:
            errors.append("Max timestep must be positive")

        if self.history_window <= 0:
            errors.append("History window must be positive")

        if self.max_alarms <= 0:
            errors.append("Alarm log size must be positive")

        if errors:
            raise ValueError("Reactor configuration validation failed:\n" +
                             "\n".join(f"  - {error}" for error in errors))

    @property
    def group_betas(self) -> List[float]:
        return [group.beta for group in self.delayed_groups]

    @property
    def group_decays(self) -> List[float]:
        return [group.decay for group in self.delayed_groups]

    @property
    def power_ceiling(self) -> float:
        """Upper clamp for thermal power (MW)"""
        return self.max_power * self.power_ceiling_factor


def create_default_config() -> ReactorCoreConfig:
    """Create the default educational core configuration"""
    return ReactorCoreConfig()


def load_config(path: Optional[Union[str, Path]] = None) -> ReactorCoreConfig:
    """
    Load a configuration from a YAML file

    Args:
        path: YAML file path, or None for the default configuration

    Returns:
        ReactorCoreConfig instance
    """
    if path is None:
        return create_default_config()

    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        return ReactorCoreConfig.from_yaml_file(str(path))
    except (yaml.YAMLError, JSONWizardError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration file {path}: {e}") from e
