"""Meeting scheduler: a calendar constraint satisfaction solver.

Modules:
- config: solver configuration (JSON or YAML)
- constraints: unary/binary date constraints and the comparison predicate
- data_io: date-range domains and CSV helpers
- domain: meeting variables and the variable store
- services: node and arc consistency preprocessing
- engine: backtracking search and the orchestrator exposing ``solve``
- ai: OR-Tools CP-SAT engine
- validator: solution checks and summaries
- cli: command-line interface entrypoints
"""

from .constraints import BinaryConstraint, UnaryConstraint
from .engine.orchestrator import solve

__all__ = [
    "BinaryConstraint",
    "UnaryConstraint",
    "solve",
]
