from __future__ import annotations

import argparse

from .config import load_config
from .data_io import parse_date, read_constraints, read_solution, write_solution
from .engine.orchestrator import solve
from .logging_utils import set_log_level
from .validator import summarize_solution, validate_solution


def _cmd_solve(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    if args.engine:
        cfg.engine = args.engine
    set_log_level(cfg.log_level)

    start = parse_date(args.start)
    end = parse_date(args.end)
    constraints = read_constraints(args.constraints) if args.constraints else []
    solution = solve(args.meetings, start, end, constraints, cfg)
    if solution is None:
        print("[INFO] No schedule satisfies the constraints.")
        raise SystemExit(1)

    validate_solution(solution, args.meetings, constraints, start, end)
    if args.out:
        write_solution(args.out, solution)
        print("[OK] Solution written to", args.out)
    print(summarize_solution(solution))


def _cmd_validate(args: argparse.Namespace) -> None:
    constraints = read_constraints(args.constraints)
    solution = read_solution(args.solution)
    validate_solution(solution, args.meetings, constraints)
    print("[OK] Validation passed.")


def _cmd_summarize(args: argparse.Namespace) -> None:
    print(summarize_solution(read_solution(args.solution)))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="meeting-scheduler")
    sub = parser.add_subparsers(dest="command", required=True)

    s = sub.add_parser("solve", help="Find a date for every meeting")
    s.add_argument("--meetings", type=int, required=True)
    s.add_argument("--start", required=True, help="First admissible date (YYYY-MM-DD)")
    s.add_argument("--end", required=True, help="Last admissible date (YYYY-MM-DD)")
    s.add_argument("--constraints", help="Constraint CSV (kind,left,op,right)")
    s.add_argument("--config", help="JSON or YAML solver config")
    s.add_argument("--engine", choices=["backtracking", "cp-sat"])
    s.add_argument("--out", help="Write the solution CSV here")
    s.set_defaults(func=_cmd_solve)

    v = sub.add_parser("validate", help="Check a solution CSV against constraints")
    v.add_argument("--meetings", type=int, required=True)
    v.add_argument("--constraints", required=True)
    v.add_argument("--solution", required=True)
    v.set_defaults(func=_cmd_validate)

    m = sub.add_parser("summarize", help="Summarize a solution CSV")
    m.add_argument("--solution", required=True)
    m.set_defaults(func=_cmd_summarize)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ValueError as e:
        print(f"[ERROR] {e}")
        raise SystemExit(2) from e


if __name__ == "__main__":
    main()
