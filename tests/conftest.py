"""
Shared fixtures for the reactor core simulator test suite.
"""

import numpy as np
import pytest

from reactor_sim.config import ReactorCoreConfig
from reactor_sim.simulator.core.sim import ReactorSimulator
from reactor_sim.simulator.state import ReactorPhase, ReactorState


@pytest.fixture
def config():
    return ReactorCoreConfig()


@pytest.fixture
def simulator(config):
    return ReactorSimulator(config)


@pytest.fixture
def state():
    return ReactorState()


@pytest.fixture
def at_power_simulator(config):
    """Simulator at the 250 MW thermal operating point, rods at the critical height"""
    sim = ReactorSimulator(config)
    s = sim.state
    density = config.reference_density
    betas = np.array(config.group_betas)
    decays = np.array(config.group_decays)

    s.rod_position = 35.0
    s.target_rod_position = 35.0
    s.neutron_density = density
    s.precursors = betas * density / (config.generation_time * decays)
    s.thermal_power = 250.0
    s.fuel_temp = 699.5
    s.coolant_temp = 574.5
    s.keff = 1.0
    s.period = float("inf")
    s.doubling_time = float("inf")
    s.phase = ReactorPhase.AT_POWER
    return sim
