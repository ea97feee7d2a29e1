"""
Thermal Hydraulics and Xenon Dynamics Tests
"""

import pytest

from reactor_sim.systems.reactor.physics.thermal_hydraulics import ThermalHydraulicsModel
from reactor_sim.systems.reactor.physics.xenon_dynamics import XenonDynamicsModel


@pytest.fixture
def thermal(config):
    return ThermalHydraulicsModel(config)


@pytest.fixture
def xenon(config):
    return XenonDynamicsModel(config)


class TestThermalHydraulics:
    """Two-node heat balance"""

    def test_uses_effective_coefficients(self, thermal, config):
        """The heat balance runs on the effective values, not the nominal constants."""
        assert thermal.HEAT_TRANSFER_COEFF == 2.0
        assert thermal.FUEL_HEAT_CAPACITY == 100.0
        assert thermal.COOLANT_HEAT_CAPACITY == 150.0
        assert config.heat_transfer_coeff == 1.5
        assert config.fuel_heat_capacity == 250.0

    def test_cold_idle_core_is_stationary(self, thermal, state):
        state.thermal_power = 0.0

        params = thermal.calculate_thermal_hydraulics(state)

        assert params["fuel_temp_dot"] == pytest.approx(0.0)
        assert params["coolant_temp_dot"] == pytest.approx(0.0)

    def test_power_heats_fuel(self, thermal, state):
        state.thermal_power = 100.0

        thermal.update(state, 1.0)

        assert state.fuel_temp == pytest.approx(551.0)
        assert state.coolant_temp == pytest.approx(550.0)

    def test_heat_removal_limited_by_transfer(self, thermal, state):
        state.thermal_power = 0.0
        state.fuel_temp = 600.0
        state.coolant_temp = 560.0

        params = thermal.calculate_thermal_hydraulics(state)

        assert params["heat_transfer"] == pytest.approx(80.0)
        assert params["heat_removed"] == pytest.approx(5.0)
        assert params["ambient_loss"] == pytest.approx(0.1)
        assert params["fuel_temp_dot"] == pytest.approx(-0.8)
        assert params["coolant_temp_dot"] == pytest.approx((80.0 - 5.0 - 0.1) / 150.0)

        state.thermal_power = 250.0
        params = thermal.calculate_thermal_hydraulics(state)
        assert params["heat_removed"] == pytest.approx(params["heat_transfer"])

    def test_temperature_clamps(self, thermal, state):
        state.thermal_power = 300.0
        state.fuel_temp = 799.0
        state.coolant_temp = 749.9

        thermal.update(state, 100.0)

        assert state.fuel_temp <= 800.0
        assert state.coolant_temp <= 750.0

        state.thermal_power = 0.0
        state.fuel_temp = 551.0
        state.coolant_temp = 700.0
        thermal.update(state, 100.0)

        assert state.fuel_temp >= 550.0
        assert state.coolant_temp >= 550.0

    def test_operating_point_is_near_equilibrium(self, thermal, state):
        """At 250 MW the fuel/coolant pair settles near 699.5/574.5 °C."""
        state.thermal_power = 250.0
        state.fuel_temp = 699.5
        state.coolant_temp = 574.5

        params = thermal.calculate_thermal_hydraulics(state)

        assert abs(params["fuel_temp_dot"]) < 0.01
        assert abs(params["coolant_temp_dot"]) < 0.01


class TestXenonDynamics:
    """Iodine and xenon poisoning"""

    def test_clean_core_at_full_power(self, xenon, state, config):
        state.thermal_power = config.max_power

        rates = xenon.calculate_rates(state)

        assert rates["iodine_dot"] == pytest.approx(0.061 * 0.002)
        assert rates["xenon_dot"] == pytest.approx(0.003 * 0.002)

    def test_shutdown_decay(self, xenon, state):
        state.thermal_power = 0.0
        state.xenon_conc = 0.5

        rates = xenon.calculate_rates(state)

        assert rates["xenon_burnup"] == 0.0
        assert rates["xenon_dot"] == pytest.approx(-2.1e-5 * 0.5 * 10)

    def test_burnup_grows_with_flux(self, xenon, state, config):
        state.xenon_conc = 0.5
        state.thermal_power = config.max_power
        full = xenon.calculate_rates(state)["xenon_burnup"]

        state.thermal_power = config.max_power / 2
        half = xenon.calculate_rates(state)["xenon_burnup"]

        assert full == pytest.approx(0.1)
        assert half == pytest.approx(0.05)

    def test_iodine_decay_feeds_xenon(self, xenon, state):
        state.thermal_power = 0.0
        state.iodine_conc = 0.8

        xenon.update(state, 1.0)

        assert state.xenon_conc > 0.0
        assert state.iodine_conc < 0.8

    def test_concentrations_clamped(self, xenon, state, config):
        state.thermal_power = config.max_power
        xenon.update(state, 1e6)

        assert 0.0 <= state.iodine_conc <= 1.0
        assert 0.0 <= state.xenon_conc <= 1.0

        state.thermal_power = config.power_ceiling
        state.xenon_conc = 0.01
        xenon.update(state, 1e6)

        assert state.xenon_conc >= 0.0
