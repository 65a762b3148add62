"""Constraint types and the date comparison predicate shared by preprocessing and search."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Tuple, Union


OPERATORS = ("==", "!=", "<", "<=", ">", ">=")

_FLIPPED = {"==": "==", "!=": "!=", "<": ">", "<=": ">=", ">": "<", ">=": "<="}


def _require_operator(op: str) -> str:
    if op not in OPERATORS:
        raise ValueError(f"Unknown operator {op!r}; expected one of {', '.join(OPERATORS)}")
    return op


def check_consistency(left: date, right: date, op: str) -> bool:
    """
    Evaluate ``left OP right`` for two dates.

    Args:
        left: Date on the left-hand side
        right: Date on the right-hand side
        op: One of ``==, !=, <, <=, >, >=``

    Returns:
        True if the relation holds

    Raises:
        ValueError: If ``op`` is not a recognised operator
    """
    if op == "==":
        return left == right
    if op == "!=":
        return left != right
    if op == "<":
        return left < right
    if op == "<=":
        return left <= right
    if op == ">":
        return left > right
    if op == ">=":
        return left >= right
    raise ValueError(f"Unknown operator {op!r}; expected one of {', '.join(OPERATORS)}")


def flip_operator(op: str) -> str:
    """Mirror an operator so that ``a OP b`` holds iff ``b flip(OP) a`` holds."""
    return _FLIPPED[_require_operator(op)]


@dataclass(frozen=True)
class UnaryConstraint:
    """``date(meeting) OP value`` for a fixed date operand."""

    meeting: int
    op: str
    value: date

    def __post_init__(self) -> None:
        _require_operator(self.op)

    @property
    def arity(self) -> int:
        return 1

    @property
    def meetings(self) -> Tuple[int, ...]:
        return (self.meeting,)

    def is_satisfied(self, candidate: date) -> bool:
        return check_consistency(candidate, self.value, self.op)

    def __str__(self) -> str:
        return f"M{self.meeting} {self.op} {self.value.isoformat()}"


@dataclass(frozen=True)
class BinaryConstraint:
    """``date(left) OP date(right)`` between two meetings."""

    left: int
    op: str
    right: int

    def __post_init__(self) -> None:
        _require_operator(self.op)

    @property
    def arity(self) -> int:
        return 2

    @property
    def meetings(self) -> Tuple[int, ...]:
        return (self.left, self.right)

    def is_satisfied(self, left_date: date, right_date: date) -> bool:
        return check_consistency(left_date, right_date, self.op)

    def __str__(self) -> str:
        return f"M{self.left} {self.op} M{self.right}"


Constraint = Union[UnaryConstraint, BinaryConstraint]


def parse_constraint(item) -> Constraint:
    """
    Build a constraint from its literal form.

    Unary literals are ``(meeting, op, date)`` and binary literals are
    ``(left, op, right)``. Constraint instances are passed through unchanged.

    Raises:
        ValueError: If the literal has the wrong shape or operand types
    """
    if isinstance(item, (UnaryConstraint, BinaryConstraint)):
        return item
    try:
        left, op, right = item
    except (TypeError, ValueError):
        raise ValueError(f"Constraint literal must be a 3-tuple, got {item!r}") from None

    if isinstance(left, bool) or not isinstance(left, int):
        raise ValueError(f"Meeting index must be an int, got {left!r}")
    # datetime is a date subclass; a time component would break equality with domain dates
    if isinstance(right, datetime):
        raise ValueError(f"Unary operand must be a date without time, got {right!r}")
    if isinstance(right, date):
        return UnaryConstraint(left, op, right)
    if isinstance(right, int) and not isinstance(right, bool):
        return BinaryConstraint(left, op, right)
    raise ValueError(f"Right operand must be a date or a meeting index, got {right!r}")


def parse_constraints(items: Iterable) -> List[Constraint]:
    return [parse_constraint(item) for item in items]


def unary_constraints(constraints: Iterable[Constraint]) -> List[UnaryConstraint]:
    return [c for c in constraints if c.arity == 1]


def binary_constraints(constraints: Iterable[Constraint]) -> List[BinaryConstraint]:
    return [c for c in constraints if c.arity == 2]
