"""Meeting variables and the store that holds their domains and assignments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Set


@dataclass
class MeetingVariable:
    """A single meeting: its index, current date (if any) and admissible dates."""

    index: int
    current: Optional[date] = None
    domain: Set[date] = field(default_factory=set)

    @property
    def is_assigned(self) -> bool:
        return self.current is not None

    def __repr__(self) -> str:
        return f"<MeetingVariable(index={self.index}, current={self.current}, domain_size={len(self.domain)})>"


class VariableStore:
    """
    Per-meeting state for one solve call.

    Every variable receives its own copy of the initial domain, so pruning
    one meeting never affects another.
    """

    def __init__(self, n_meetings: int, domain: Iterable[date]):
        if n_meetings <= 0:
            raise ValueError(f"n_meetings must be positive, got {n_meetings}")
        full_domain = set(domain)
        self.variables: List[MeetingVariable] = [
            MeetingVariable(index=i, current=None, domain=set(full_domain))
            for i in range(n_meetings)
        ]

    def __len__(self) -> int:
        return len(self.variables)

    def __iter__(self):
        return iter(self.variables)

    def __getitem__(self, index: int) -> MeetingVariable:
        return self.variables[index]

    def get_domain(self, index: int) -> Set[date]:
        return self.variables[index].domain

    def set_domain(self, index: int, domain: Iterable[date]) -> None:
        self.variables[index].domain = set(domain)

    def get_current(self, index: int) -> Optional[date]:
        return self.variables[index].current

    def set_current(self, index: int, value: date) -> None:
        self.variables[index].current = value

    def unassign(self, index: int) -> None:
        self.variables[index].current = None

    def any_domain_empty(self) -> bool:
        return any(not var.domain for var in self.variables)

    def domain_sizes(self) -> Dict[int, int]:
        return {var.index: len(var.domain) for var in self.variables}

    def snapshot_domains(self) -> Dict[int, frozenset]:
        """Immutable copy of every domain, keyed by meeting index."""
        return {var.index: frozenset(var.domain) for var in self.variables}

    def assigned_values(self) -> List[Optional[date]]:
        return [var.current for var in self.variables]
