"""Control rod drive"""

from .rod_actuator import ControlRodActuator, RodStep

__all__ = ['ControlRodActuator', 'RodStep']
