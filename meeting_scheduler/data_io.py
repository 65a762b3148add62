from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Iterable, List, Set

import pandas as pd

from .constraints import BinaryConstraint, Constraint, UnaryConstraint


CONSTRAINT_COLUMNS = ["kind", "left", "op", "right"]
SOLUTION_COLUMNS = ["meeting", "date"]
ISO_DATE_FORMAT = "%Y-%m-%d"


def build_domain(range_start: date, range_end: date) -> Set[date]:
    """Every date from range_start to range_end inclusive; empty if the range is inverted."""
    return {ts.date() for ts in pd.date_range(range_start, range_end, freq="D")}


def parse_date(value: str) -> date:
    """Strict ISO calendar date (YYYY-MM-DD)."""
    ts = pd.to_datetime(str(value).strip(), format=ISO_DATE_FORMAT)
    if pd.isna(ts):
        raise ValueError(f"Missing date value: {value!r}")
    return ts.date()


def read_constraints(path: str | Path) -> List[Constraint]:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = df.columns.str.lower().str.strip()
    missing = [c for c in CONSTRAINT_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Constraint file {path} is missing columns: {', '.join(missing)}")

    constraints: List[Constraint] = []
    for row_num, row in enumerate(df.itertuples(index=False), start=2):
        kind = str(row.kind).strip().lower()
        op = str(row.op).strip()
        try:
            left = int(row.left)
            if kind == "unary":
                constraints.append(UnaryConstraint(left, op, parse_date(row.right)))
            elif kind == "binary":
                constraints.append(BinaryConstraint(left, op, int(row.right)))
            else:
                raise ValueError(f"kind must be 'unary' or 'binary', got {row.kind!r}")
        except ValueError as e:
            raise ValueError(f"{path}, line {row_num}: {e}") from e
    return constraints


def write_constraints(path: str | Path, constraints: Iterable[Constraint]) -> None:
    rows = []
    for c in constraints:
        if c.arity == 1:
            rows.append({"kind": "unary", "left": c.meeting, "op": c.op, "right": c.value.isoformat()})
        else:
            rows.append({"kind": "binary", "left": c.left, "op": c.op, "right": c.right})
    pd.DataFrame(rows, columns=CONSTRAINT_COLUMNS).to_csv(path, index=False)


def solution_to_frame(solution: List[date]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"meeting": i, "date": d.isoformat()} for i, d in enumerate(solution)],
        columns=SOLUTION_COLUMNS,
    )


def write_solution(path: str | Path, solution: List[date]) -> None:
    solution_to_frame(solution).to_csv(path, index=False)


def read_solution(path: str | Path) -> List[date]:
    df = pd.read_csv(path, dtype=str)
    df.columns = df.columns.str.lower().str.strip()
    missing = [c for c in SOLUTION_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Solution file {path} is missing columns: {', '.join(missing)}")
    df["meeting"] = df["meeting"].astype(int)
    df.sort_values("meeting", inplace=True)
    if list(df["meeting"]) != list(range(len(df))):
        raise ValueError(f"Solution file {path} must list meetings 0..{len(df) - 1} exactly once")
    return [parse_date(v) for v in df["date"]]
