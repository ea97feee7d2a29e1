"""
Simulation Core Tests

Tests for the stepper: reset condition, step ordering, state bounds, energy
accounting, history and alarm bookkeeping, and the startup/trip scenarios.
"""

import math

import numpy as np
import pytest

from reactor_sim.config import ReactorCoreConfig
from reactor_sim.simulator.core.sim import ReactorSimulator
from reactor_sim.simulator.state import AlarmLevel, ReactorPhase
from reactor_sim.systems.reactor.control.rod_actuator import RodStep


def assert_state_bounds(state, config):
    assert config.source_strength <= state.neutron_density <= 1.0
    assert np.all(state.precursors >= 0.0)
    assert 0.0 <= state.iodine_conc <= 1.0
    assert 0.0 <= state.xenon_conc <= 1.0
    assert 0.0 <= state.rod_position <= 100.0
    assert 0.0 <= state.target_rod_position <= 100.0
    assert config.keff_min <= state.keff <= config.keff_max
    assert 0.0 <= state.thermal_power <= config.power_ceiling
    assert config.min_temp <= state.fuel_temp <= config.max_temp + config.fuel_temp_margin
    assert config.min_temp <= state.coolant_temp <= config.max_temp


class TestReset:
    """Initial condition"""

    def test_initial_condition(self, simulator, config):
        s = simulator.state

        assert s.rod_position == 95.0
        assert s.target_rod_position == 95.0
        assert s.phase is ReactorPhase.SHUTDOWN
        assert s.keff == 0.95
        assert s.neutron_density == config.source_strength
        assert s.thermal_power == pytest.approx(0.0001)
        assert s.fuel_temp == config.min_temp
        assert s.coolant_temp == config.min_temp
        assert s.iodine_conc == 0.0
        assert s.xenon_conc == 0.0
        assert math.isinf(s.period)
        assert math.isinf(s.doubling_time)
        assert s.startup_rate == 0.0
        assert s.time == 0.0
        assert s.total_energy_mwh == 0.0
        assert len(s.alarms) == 0
        assert len(s.history) == 1

        expected = config.source_strength * np.array(config.group_betas) / np.array(config.group_decays)
        np.testing.assert_allclose(s.precursors, expected)

        worth = simulator.reactivity_model.calculate_control_rod_reactivity(95.0)
        assert s.rod_reactivity == pytest.approx(worth)
        assert s.total_reactivity == pytest.approx(worth)
        assert s.temp_reactivity == 0.0
        assert s.xenon_reactivity == 0.0

    def test_reset_after_operation(self, simulator):
        simulator.withdraw_rods(50.0)
        for _ in range(100):
            simulator.step(0.05)
        simulator.scram()

        simulator.reset()

        assert simulator.state.phase is ReactorPhase.SHUTDOWN
        assert simulator.state.rod_position == 95.0
        assert simulator.state.time == 0.0
        assert len(simulator.state.history) == 1

    def test_instances_are_independent(self, config):
        first = ReactorSimulator(config)
        second = ReactorSimulator(config)

        first.move_rods(0.0)
        first.step(0.05)

        assert second.state.target_rod_position == 95.0
        assert second.state.time == 0.0


class TestStep:
    """Single-step behavior"""

    def test_dt_clamped(self, simulator):
        simulator.step(1.0)
        assert simulator.state.time == pytest.approx(0.05)

    def test_negative_dt_treated_as_zero(self, simulator):
        simulator.step(-1.0)
        assert simulator.state.time == 0.0

    @pytest.mark.parametrize("dt", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_dt_is_a_paused_frame(self, simulator, dt):
        simulator.move_rods(0.0)
        for _ in range(20):
            simulator.step(0.05)
        before = simulator.get_state_dict()

        alarms = simulator.step(dt)

        assert alarms == []
        assert simulator.get_state_dict() == before
        assert simulator.state.time == pytest.approx(1.0)

        simulator.step(0.05)
        assert math.isfinite(simulator.state.time)
        assert np.all(np.isfinite(simulator.state.precursors))
        assert math.isfinite(simulator.state.thermal_power)

    def test_zero_dt_changes_nothing(self, simulator):
        before = simulator.get_state_dict()
        history_length = len(simulator.state.history)

        alarms = simulator.step(0.0)

        assert alarms == []
        assert simulator.get_state_dict() == before
        assert len(simulator.state.history) == history_length + 1

    def test_step_records_history(self, simulator):
        simulator.step(0.05)

        latest = simulator.state.history.latest()
        assert latest.t == pytest.approx(0.05)
        assert latest.rod_position == simulator.state.rod_position
        assert len(simulator.state.history) == 2

    def test_reactivity_recomputed(self, simulator):
        simulator.step(0.05)
        s = simulator.state

        assert s.temp_reactivity == pytest.approx(330.0)
        assert s.total_reactivity == pytest.approx(
            s.rod_reactivity + s.temp_reactivity + s.xenon_reactivity
        )

    def test_energy_accounting(self, at_power_simulator):
        sim = at_power_simulator
        sim.step(0.05)

        expected = sim.state.thermal_power * 0.05 / 3600.0
        assert sim.state.total_energy_mwh == pytest.approx(expected)

    def test_energy_non_decreasing(self, simulator):
        simulator.move_rods(30.0)
        last = simulator.state.total_energy_mwh
        for _ in range(500):
            simulator.step(0.05)
            assert simulator.state.total_energy_mwh >= last
            last = simulator.state.total_energy_mwh

    def test_capacity_factor(self, simulator, at_power_simulator):
        assert simulator.capacity_factor == 0.0

        at_power_simulator.step(0.05)
        assert 90.0 < at_power_simulator.capacity_factor <= 120.0


class TestCommands:
    """Rod and scram commands through the simulator"""

    def test_rod_commands(self, simulator):
        simulator.move_rods(60.0)
        assert simulator.state.target_rod_position == 60.0

        simulator.insert_rods(5.0)
        assert simulator.state.target_rod_position == 65.0

        simulator.withdraw_rods(15.0)
        assert simulator.state.target_rod_position == 50.0

        simulator.apply_rod_step(RodStep.IN_FAST)
        assert simulator.state.target_rod_position == 60.0

    def test_scram_twice_equals_once(self, simulator):
        simulator.move_rods(50.0)
        for _ in range(200):
            simulator.step(0.05)

        simulator.scram()
        once = simulator.get_state_dict()
        simulator.scram()

        assert simulator.get_state_dict() == once
        assert simulator.state.phase is ReactorPhase.SCRAMMED
        assert simulator.state.target_rod_position == 100.0

    def test_scram_sticky_until_reset(self, simulator):
        simulator.scram()
        simulator.move_rods(0.0)
        for _ in range(400):
            simulator.step(0.05)

        assert simulator.state.phase is ReactorPhase.SCRAMMED

        simulator.reset()
        assert simulator.state.phase is ReactorPhase.SHUTDOWN


class TestBookkeeping:
    """History window and alarm log bounds"""

    def test_history_window(self):
        config = ReactorCoreConfig(history_window=1.0)
        sim = ReactorSimulator(config)

        for _ in range(100):
            sim.step(0.05)

        history = list(sim.state.history)
        assert history[0].t >= sim.state.time - 1.0 - 1e-9
        assert len(history) <= 22

    def test_alarm_log_bounded(self, at_power_simulator):
        sim = at_power_simulator
        for _ in range(15):
            sim.state.thermal_power = 260.0
            sim.state.phase = ReactorPhase.AT_POWER
            sim.step(0.05)

        assert len(sim.state.alarms) == 10


class TestScenarios:
    """End-to-end behavior"""

    def test_withdrawal_reaches_criticality(self, simulator):
        initial_power = simulator.state.thermal_power
        simulator.move_rods(0.0)

        for _ in range(2400):
            simulator.step(0.05)
            assert simulator.state.thermal_power >= initial_power

        assert simulator.state.keff > 0.999
        assert simulator.state.phase is not ReactorPhase.SHUTDOWN

    def test_over_temperature_trip_from_power(self, at_power_simulator):
        sim = at_power_simulator
        sim.state.fuel_temp = 760.0

        alarms = sim.step(0.05)

        trips = [a for a in alarms if a.level is AlarmLevel.TRIP]
        assert len(trips) == 1
        assert trips[0].message == "REACTOR TRIP: High temperature"
        assert sim.state.phase is ReactorPhase.SCRAMMED
        assert sim.state.target_rod_position == 100.0

    def test_steady_power_step_is_quiet(self, at_power_simulator):
        alarms = at_power_simulator.step(0.05)
        assert alarms == []
        assert at_power_simulator.state.phase is not ReactorPhase.SCRAMMED

    def test_bounds_hold_through_transient(self, simulator, config):
        commands = [
            (0, lambda: simulator.move_rods(0.0)),
            (3000, lambda: simulator.apply_rod_step(RodStep.IN_FAST)),
            (5000, lambda: simulator.withdraw_rods(20.0)),
            (7000, simulator.scram),
        ]
        for index in range(9000):
            for at_step, command in commands:
                if index == at_step:
                    command()
            simulator.step(0.05)
            assert_state_bounds(simulator.state, config)
