"""Search engines and the orchestrator that drives them."""

from .backtracking import BacktrackingSolver, SearchStats, check_valid_assignment
from .base import BaseSolver
from .orchestrator import Orchestrator, solve, validate_problem

__all__ = [
    "BaseSolver",
    "BacktrackingSolver",
    "SearchStats",
    "check_valid_assignment",
    "Orchestrator",
    "solve",
    "validate_problem",
]
