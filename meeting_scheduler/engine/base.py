"""Base solver interface that every search engine must implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional

from meeting_scheduler.constraints import Constraint
from meeting_scheduler.domain.models import VariableStore


class BaseSolver(ABC):
    """
    Abstract base class for meeting CSP engines.

    An engine receives a store whose domains have already been pruned and
    returns one date per meeting, or None when no assignment exists.
    """

    name: str | None = None  # Override in subclasses (e.g., "backtracking")

    @abstractmethod
    def search(
        self,
        store: VariableStore,
        constraints: Iterable[Constraint],
    ) -> Optional[List[date]]:
        """
        Find an assignment satisfying every constraint.

        Args:
            store: Variable store with (pruned) domains, all meetings unassigned
            constraints: Unary and binary constraints over meeting indices

        Returns:
            List of dates indexed by meeting, or None if unsatisfiable
        """
        pass

    def get_name(self) -> str:
        return self.name or "UNKNOWN"
