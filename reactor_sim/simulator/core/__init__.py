"""Simulation stepper"""
