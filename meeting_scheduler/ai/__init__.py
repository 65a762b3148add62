"""Constraint-programming engines backed by OR-Tools."""

from .cp_sat_solver import CPSatSolver

__all__ = [
    "CPSatSolver",
]
