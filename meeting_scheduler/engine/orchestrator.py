"""Orchestrator - validates a problem, prunes domains and runs the configured engine."""

from __future__ import annotations

import sys
from datetime import date, datetime
from typing import Iterable, List, Optional

from meeting_scheduler.ai.cp_sat_solver import CPSatSolver
from meeting_scheduler.config import SolverConfig
from meeting_scheduler.constraints import Constraint, parse_constraints
from meeting_scheduler.data_io import build_domain
from meeting_scheduler.domain.models import VariableStore
from meeting_scheduler.logging_utils import get_logger
from meeting_scheduler.services.consistency import preprocess

from .backtracking import BacktrackingSolver
from .base import BaseSolver

logger = get_logger("orchestrator")

RECURSION_HEADROOM = 200


def _require_date(value, label: str) -> date:
    if isinstance(value, datetime) or not isinstance(value, date):
        raise ValueError(f"{label} must be a datetime.date, got {value!r}")
    return value


def validate_problem(
    n_meetings: int,
    range_start: date,
    range_end: date,
    constraints: Iterable,
) -> List[Constraint]:
    """
    Reject malformed input before any search starts.

    Returns:
        The constraints in parsed form

    Raises:
        ValueError: On a non-positive meeting count, an inverted range, an
            unknown operator or a constraint referencing a missing meeting
    """
    if isinstance(n_meetings, bool) or not isinstance(n_meetings, int):
        raise ValueError(f"n_meetings must be an int, got {n_meetings!r}")
    if n_meetings <= 0:
        raise ValueError(f"n_meetings must be positive, got {n_meetings}")

    _require_date(range_start, "range_start")
    _require_date(range_end, "range_end")
    if range_start > range_end:
        raise ValueError(f"Inverted date range: {range_start} is after {range_end}")

    parsed = parse_constraints(constraints)
    for constraint in parsed:
        for index in constraint.meetings:
            if not 0 <= index < n_meetings:
                raise ValueError(
                    f"Constraint {constraint} references meeting {index}, "
                    f"expected 0..{n_meetings - 1}"
                )
    return parsed


class Orchestrator:
    """
    Runs one solve call end to end.

    Domain building, node/arc consistency and the empty-domain short circuit
    happen here; the engine only ever sees a pruned store.
    """

    def __init__(self, cfg: SolverConfig | None = None):
        self.cfg = cfg or SolverConfig()
        self.store: Optional[VariableStore] = None
        self.engine: Optional[BaseSolver] = None

    def recursion_depth_limit(self) -> int:
        # Leave headroom below the interpreter limit for the caller's own frames
        return min(self.cfg.recursion_limit, sys.getrecursionlimit() - RECURSION_HEADROOM)

    def make_engine(self, n_meetings: int) -> BaseSolver:
        if self.cfg.engine == "cp-sat":
            return CPSatSolver(time_limit=self.cfg.cp_sat_time_limit)
        return BacktrackingSolver(
            max_nodes=self.cfg.max_nodes,
            iterative=n_meetings > self.recursion_depth_limit(),
        )

    def solve(
        self,
        n_meetings: int,
        range_start: date,
        range_end: date,
        constraints: Iterable,
    ) -> Optional[List[date]]:
        parsed = validate_problem(n_meetings, range_start, range_end, constraints)
        logger.info(
            "Solving %d meetings over %s..%s with %d constraints",
            n_meetings, range_start, range_end, len(parsed),
        )

        self.store = VariableStore(n_meetings, build_domain(range_start, range_end))
        preprocess(
            self.store,
            parsed,
            node=self.cfg.node_consistency,
            arc=self.cfg.arc_consistency,
        )
        if self.store.any_domain_empty():
            empty = [var.index for var in self.store if not var.domain]
            logger.info("No solution: empty domain for meetings %s", empty)
            return None

        self.engine = self.make_engine(n_meetings)
        logger.info("Running %s engine", self.engine.get_name())
        return self.engine.search(self.store, parsed)


def solve(
    n_meetings: int,
    range_start: date,
    range_end: date,
    constraints: Iterable,
    cfg: SolverConfig | None = None,
) -> Optional[List[date]]:
    """
    Schedule ``n_meetings`` meetings inside ``[range_start, range_end]``.

    Args:
        n_meetings: Number of meetings, indexed 0..n-1
        range_start: First admissible date (inclusive)
        range_end: Last admissible date (inclusive)
        constraints: Constraint objects or literals ``(i, op, date)`` / ``(i, op, j)``
        cfg: Optional SolverConfig

    Returns:
        One date per meeting, or None if no assignment satisfies every constraint

    Raises:
        ValueError: If the problem is malformed
    """
    return Orchestrator(cfg).solve(n_meetings, range_start, range_end, constraints)
