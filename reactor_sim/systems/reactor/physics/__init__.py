"""Reactor physics models"""

from .point_kinetics import PointKineticsModel
from .thermal_hydraulics import ThermalHydraulicsModel
from .xenon_dynamics import XenonDynamicsModel

__all__ = ['PointKineticsModel', 'ThermalHydraulicsModel', 'XenonDynamicsModel']
