from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

import pandas as pd

from .constraints import Constraint, parse_constraints


def violated_constraints(solution: List[date], constraints: Iterable) -> List[Constraint]:
    violated = []
    for constraint in parse_constraints(constraints):
        if constraint.arity == 1:
            ok = constraint.is_satisfied(solution[constraint.meeting])
        else:
            ok = constraint.is_satisfied(solution[constraint.left], solution[constraint.right])
        if not ok:
            violated.append(constraint)
    return violated


def validate_solution(
    solution: List[date],
    n_meetings: int,
    constraints: Iterable,
    range_start: Optional[date] = None,
    range_end: Optional[date] = None,
) -> None:
    # Shape
    if len(solution) != n_meetings:
        raise ValueError(f"Solution has {len(solution)} dates for {n_meetings} meetings")
    if any(d is None for d in solution):
        raise ValueError("Solution leaves some meetings unassigned")

    # Date range
    for index, d in enumerate(solution):
        if range_start is not None and d < range_start:
            raise ValueError(f"Meeting {index} on {d} is before range start {range_start}")
        if range_end is not None and d > range_end:
            raise ValueError(f"Meeting {index} on {d} is after range end {range_end}")

    # Constraint references
    parsed = parse_constraints(constraints)
    for constraint in parsed:
        if any(not 0 <= i < n_meetings for i in constraint.meetings):
            raise ValueError(f"Constraint {constraint} references an unknown meeting")

    violated = violated_constraints(solution, parsed)
    if violated:
        raise ValueError(
            f"{len(violated)} constraint(s) violated, first: {violated[0]}"
        )


def summarize_solution(solution: List[date]) -> str:
    if not solution:
        return "No solution."
    df = pd.DataFrame({"meeting": range(len(solution)), "date": pd.to_datetime(solution)})
    df["weekday"] = df["date"].dt.day_name()
    df["date"] = df["date"].dt.strftime("%Y-%m-%d")

    per_day = df.groupby("date")["meeting"].apply(lambda s: ",".join(str(m) for m in s))

    lines = ["Meeting dates:"]
    lines.append(df.to_string(index=False))
    lines.append("")
    lines.append("Meetings per day:")
    lines.append(per_day.to_string())
    return "\n".join(lines)
