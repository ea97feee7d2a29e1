"""
Reactor Systems Package

Contains reactivity, kinetics, thermal, xenon, rod control and safety models.
"""

from .reactivity_model import ReactivityModel

__all__ = ['ReactivityModel']
