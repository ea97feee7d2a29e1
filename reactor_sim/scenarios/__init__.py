"""Scripted scenarios for headless runs"""

from .scenario_runner import (
    BUILTIN_SCENARIOS,
    Scenario,
    ScenarioAction,
    ScenarioCommand,
    ScenarioResult,
    ScenarioRunner,
    get_scenario,
)

__all__ = [
    'Scenario', 'ScenarioAction', 'ScenarioCommand', 'ScenarioResult',
    'ScenarioRunner', 'get_scenario', 'BUILTIN_SCENARIOS',
]
