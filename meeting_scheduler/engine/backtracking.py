"""Chronological backtracking search over meeting indices."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, List, Optional

from meeting_scheduler.constraints import Constraint
from meeting_scheduler.domain.models import VariableStore
from meeting_scheduler.logging_utils import get_logger

from .base import BaseSolver

logger = get_logger("backtracking")


class SearchBudgetExhausted(Exception):
    """Raised inside the search when the node budget runs out."""


@dataclass
class SearchStats:
    nodes: int = 0
    backtracks: int = 0
    budget_exhausted: bool = False


def check_valid_assignment(assignment: List[date], constraints: Iterable[Constraint]) -> bool:
    """
    Check a partial assignment against every constraint it fully covers.

    Only meetings ``0..len(assignment)-1`` are assigned; a constraint that
    references a later meeting holds vacuously.
    """
    assigned = len(assignment)
    for constraint in constraints:
        if constraint.arity == 1:
            if constraint.meeting < assigned and not constraint.is_satisfied(assignment[constraint.meeting]):
                return False
        elif constraint.left < assigned and constraint.right < assigned:
            if not constraint.is_satisfied(assignment[constraint.left], assignment[constraint.right]):
                return False
    return True


def ordered_candidates(store: VariableStore, index: int) -> List[date]:
    # Chronological order keeps the search reproducible across runs
    return sorted(store.get_domain(index))


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search assigning meetings in index order.

    Each candidate date is appended to the assignment, the covered prefix is
    re-validated, and the engine recurses into the next meeting. The first
    complete satisfying assignment wins.
    """

    name = "backtracking"

    def __init__(self, max_nodes: Optional[int] = None, iterative: bool = False):
        """
        Args:
            max_nodes: Stop after visiting this many nodes and report no solution
            iterative: Use an explicit stack instead of recursion
        """
        self.max_nodes = max_nodes
        self.iterative = iterative
        self.stats = SearchStats()

    def search(
        self,
        store: VariableStore,
        constraints: Iterable[Constraint],
    ) -> Optional[List[date]]:
        self.stats = SearchStats()
        constraints = list(constraints)
        assert all(var.current is None for var in store), "search requires an unassigned store"

        try:
            if self.iterative:
                result = self._search_iterative(store, constraints)
            else:
                result = self._backtrack(store, [], constraints, 0)
        except SearchBudgetExhausted:
            self.stats.budget_exhausted = True
            logger.warning("Search stopped after %d nodes without a solution", self.stats.nodes)
            return None

        logger.info(
            "Backtracking finished: %s after %d nodes, %d backtracks",
            "solution found" if result is not None else "no solution",
            self.stats.nodes,
            self.stats.backtracks,
        )
        return list(result) if result is not None else None

    def _visit(self) -> None:
        self.stats.nodes += 1
        if self.max_nodes is not None and self.stats.nodes > self.max_nodes:
            raise SearchBudgetExhausted()

    def _assign(self, store: VariableStore, assignment: List[date], index: int, value: date) -> None:
        assignment.append(value)
        store.set_current(index, value)

    def _retract(self, store: VariableStore, assignment: List[date], index: int) -> None:
        assert len(assignment) == index + 1, "assignment out of step with meeting index"
        assignment.pop()
        store.unassign(index)
        self.stats.backtracks += 1

    def _backtrack(
        self,
        store: VariableStore,
        assignment: List[date],
        constraints: List[Constraint],
        assign_index: int,
    ) -> Optional[List[date]]:
        assert len(assignment) == assign_index, "assignment out of step with meeting index"

        if assign_index == len(store):
            if check_valid_assignment(assignment, constraints):
                return assignment
            return None

        for candidate in ordered_candidates(store, assign_index):
            self._visit()
            self._assign(store, assignment, assign_index, candidate)
            if check_valid_assignment(assignment, constraints):
                result = self._backtrack(store, assignment, constraints, assign_index + 1)
                if result is not None:
                    return result
            self._retract(store, assignment, assign_index)

        return None

    def _search_iterative(
        self,
        store: VariableStore,
        constraints: List[Constraint],
    ) -> Optional[List[date]]:
        n_meetings = len(store)
        assignment: List[date] = []
        # One candidate iterator per meeting on the active path
        frames: List[Iterator[date]] = [iter(ordered_candidates(store, 0))]

        while frames:
            index = len(frames) - 1
            assert len(assignment) == index, "assignment out of step with meeting index"
            descended = False

            for candidate in frames[-1]:
                self._visit()
                self._assign(store, assignment, index, candidate)
                if check_valid_assignment(assignment, constraints):
                    if index + 1 == n_meetings:
                        return assignment
                    frames.append(iter(ordered_candidates(store, index + 1)))
                    descended = True
                    break
                self._retract(store, assignment, index)

            if descended:
                continue

            frames.pop()
            if frames:
                self._retract(store, assignment, len(frames) - 1)

        return None
