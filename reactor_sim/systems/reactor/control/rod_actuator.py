"""
Control Rod Actuator

Rate-limited servo that drives the actual rod position toward the commanded
target, plus the operator commands that move the target.
"""

from enum import Enum

import numpy as np

from ....config import ReactorCoreConfig


class RodStep(Enum):
    """Preset rod moves from the operator panel (% change in insertion)"""
    OUT_FAST = -10.0
    OUT_SLOW = -1.0
    OUT_FINE = -0.5
    OUT_ULTRAFINE = -0.1
    IN_ULTRAFINE = 0.1
    IN_FINE = 0.5
    IN_SLOW = 1.0
    IN_FAST = 10.0


def clamp_rod_position(position: float) -> float:
    return float(np.clip(position, 0.0, 100.0))


class ControlRodActuator:
    """
    Moves the rods toward their target at a fixed maximum speed
    """

    def __init__(self, config: ReactorCoreConfig):
        self.config = config
        self.max_speed = config.rod_speed  # %/s

    def update(self, state, dt: float) -> float:
        """
        Move rods one step toward the target

        Args:
            state: ReactorState, updated in place
            dt: Time step in seconds

        Returns:
            Distance moved this step (% inserted, signed)
        """
        start = state.rod_position
        rod_diff = state.target_rod_position - state.rod_position
        max_move = self.max_speed * dt

        if abs(rod_diff) > max_move:
            state.rod_position += float(np.sign(rod_diff)) * max_move
        else:
            state.rod_position = state.target_rod_position

        state.rod_position = clamp_rod_position(state.rod_position)
        return state.rod_position - start

    def move_rods(self, state, target_percent: float) -> None:
        """Set an absolute rod target (% inserted)"""
        state.target_rod_position = clamp_rod_position(target_percent)

    def insert_rods(self, state, delta_percent: float) -> None:
        self.move_rods(state, state.target_rod_position + delta_percent)

    def withdraw_rods(self, state, delta_percent: float) -> None:
        self.move_rods(state, state.target_rod_position - delta_percent)

    def apply_step(self, state, step: RodStep) -> None:
        """Apply a panel preset move"""
        amount = step.value
        if amount > 0:
            self.insert_rods(state, amount)
        else:
            self.withdraw_rods(state, abs(amount))

    def scram_insertion(self, state) -> None:
        """Drive the target fully in and give the rods their initial drop"""
        state.target_rod_position = 100.0
        state.rod_position = min(100.0, state.rod_position + self.config.scram_insertion_kick)
