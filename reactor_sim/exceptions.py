"""
Custom exceptions for the reactor core simulator.

Physical edge cases never raise; these cover configuration and scripting
mistakes made by callers.
"""


class ReactorSimError(Exception):
    """Base exception for all reactor simulator errors."""
    pass


class ConfigurationError(ReactorSimError, ValueError):
    """Configuration file could not be read or parsed."""
    pass


class ScenarioError(ReactorSimError):
    """Malformed scenario script."""

    def __init__(self, message: str, scenario_name: str = None):
        super().__init__(message)
        self.scenario_name = scenario_name
