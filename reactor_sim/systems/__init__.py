"""
Systems Package

Reactor core component models.
"""
