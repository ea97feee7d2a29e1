#!/usr/bin/env python3
"""
Reactor Core Simulator - Command Line Interface

Runs built-in scenarios headlessly and prints a summary of the final core
state, trip conditions and alarms.
"""

import argparse
import logging
import math
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import load_config
from .exceptions import ReactorSimError
from .scenarios.scenario_runner import BUILTIN_SCENARIOS, ScenarioRunner, get_scenario
from .simulator.alarms import AlarmLevel

console = Console()


def _format_value(value) -> str:
    if isinstance(value, float):
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"
        return f"{value:.4g}"
    return str(value)


def _state_table(state_dict) -> Table:
    table = Table(title="Final Core State")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in state_dict.items():
        if key == "precursors":
            continue
        table.add_row(key, _format_value(value))
    return table


def _conditions_table(conditions) -> Table:
    table = Table(title="Trip Conditions")
    table.add_column("Condition")
    table.add_column("Value", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Status")
    for condition in conditions:
        status = "[red]EXCEEDED[/red]" if condition["exceeded"] else "[green]NORMAL[/green]"
        table.add_row(
            condition["name"],
            f"{_format_value(condition['current_value'])} {condition['unit']}",
            f"{condition['limit']:.0f} {condition['unit']}",
            status,
        )
    return table


def _alarm_table(alarms) -> Table:
    table = Table(title="Alarms Raised")
    table.add_column("Time (s)", justify="right")
    table.add_column("Level")
    table.add_column("Message")
    for alarm in alarms:
        style = "red" if alarm.level is AlarmLevel.TRIP else "yellow"
        table.add_row(f"{alarm.time:.1f}", f"[{style}]{alarm.level.value.upper()}[/{style}]", alarm.message)
    return table


def run_command(args) -> None:
    config = load_config(args.config)
    scenario = get_scenario(args.scenario, args.duration)
    if args.dt is not None:
        scenario.dt = args.dt

    runner = ScenarioRunner(config)
    with console.status(f"Running {scenario.name}..."):
        result = runner.run(scenario)

    console.print(_state_table(result.final_state))
    console.print(_conditions_table(
        runner.simulator.scram_system.get_scram_conditions(runner.simulator.state)
    ))
    if result.alarms:
        console.print(_alarm_table(result.alarms))
    console.print(f"Peak power: {result.peak_power:.2f} MW    Trips: {result.trip_count}")

    if args.csv:
        result.history.to_csv(args.csv, index=False)
        console.print(f"History written to {args.csv}")


def list_command(args) -> None:
    table = Table(title="Built-in Scenarios")
    table.add_column("Name", style="cyan")
    table.add_column("Duration (s)", justify="right")
    table.add_column("Description")
    for name, factory in BUILTIN_SCENARIOS.items():
        scenario = factory()
        table.add_row(name, f"{scenario.duration:.0f}", scenario.description)
    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reactor-sim",
        description="Educational reactor core dynamics simulator",
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    run_parser = subparsers.add_parser('run', help='Run a built-in scenario')
    run_parser.add_argument('scenario', choices=sorted(BUILTIN_SCENARIOS),
                            help='Scenario to run')
    run_parser.add_argument('--duration', type=float, help='Duration in simulated seconds')
    run_parser.add_argument('--dt', type=float, help='Time step in seconds (default: 0.05)')
    run_parser.add_argument('--config', help='YAML configuration file')
    run_parser.add_argument('--csv', help='Write the history to this CSV file')
    run_parser.set_defaults(func=run_command)

    list_parser = subparsers.add_parser('list', help='List built-in scenarios')
    list_parser.set_defaults(func=list_command)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        sys.exit(1)
    except ReactorSimError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
