"""Tests for the solve() entry point - full pipeline from range to assignment."""

import itertools
import random
from datetime import date, datetime, timedelta

import pytest

from meeting_scheduler import solve
from meeting_scheduler.config import SolverConfig
from meeting_scheduler.constraints import OPERATORS, BinaryConstraint, UnaryConstraint
from meeting_scheduler.engine.backtracking import BacktrackingSolver
from meeting_scheduler.engine.orchestrator import Orchestrator, validate_problem
from meeting_scheduler.validator import violated_constraints


def _brute_force(n_meetings, domain, constraints):
    for candidate in itertools.product(sorted(domain), repeat=n_meetings):
        if not violated_constraints(list(candidate), constraints):
            return list(candidate)
    return None


def _random_problem(seed):
    rng = random.Random(seed)
    n_meetings = rng.randint(2, 4)
    start = date(2025, 9, 1)
    days = rng.randint(2, 4)
    domain = [start + timedelta(days=i) for i in range(days)]
    constraints = set()
    for _ in range(rng.randint(1, 5)):
        op = rng.choice(OPERATORS)
        if rng.random() < 0.3:
            constraints.add(UnaryConstraint(rng.randrange(n_meetings), op, rng.choice(domain)))
        else:
            left, right = rng.sample(range(n_meetings), 2)
            constraints.add(BinaryConstraint(left, op, right))
    return n_meetings, domain, constraints


# Scenarios


def test_two_meetings_ordered(dates):
    result = solve(2, dates[0], dates[4], {(0, "<", 1)})
    assert len(result) == 2
    assert dates.index(result[0]) < dates.index(result[1])


def test_single_meeting_fixed_date(dates):
    assert solve(1, dates[0], dates[4], {(0, "==", dates[2])}) == [dates[2]]


def test_conflicting_fixed_dates_unsatisfiable(dates):
    constraints = {(0, "==", dates[0]), (1, "==", dates[0]), (0, "!=", 1)}
    assert solve(2, dates[0], dates[4], constraints) is None


def test_no_constraints_reuses_single_date(dates):
    assert solve(3, dates[0], dates[0], set()) == [dates[0]] * 3


def test_accepts_constraint_objects(dates):
    constraints = [UnaryConstraint(1, "<=", dates[1]), BinaryConstraint(0, ">", 1)]
    result = solve(2, dates[0], dates[4], constraints)
    assert not violated_constraints(result, constraints)


# Properties


@pytest.mark.parametrize("seed", range(40))
def test_matches_brute_force(seed):
    n_meetings, domain, constraints = _random_problem(seed)
    expected = _brute_force(n_meetings, domain, constraints)
    result = solve(n_meetings, domain[0], domain[-1], constraints)
    if expected is None:
        assert result is None
    else:
        assert result is not None
        assert len(result) == n_meetings
        assert not violated_constraints(result, constraints)
        assert all(domain[0] <= d <= domain[-1] for d in result)


@pytest.mark.parametrize("seed", range(15))
def test_preprocessing_does_not_change_answer(seed):
    n_meetings, domain, constraints = _random_problem(seed)
    plain = SolverConfig(node_consistency=False, arc_consistency=False)
    with_pruning = solve(n_meetings, domain[0], domain[-1], constraints)
    without_pruning = solve(n_meetings, domain[0], domain[-1], constraints, plain)
    assert (with_pruning is None) == (without_pruning is None)


def test_empty_domain_short_circuits_search(dates, monkeypatch):
    calls = []

    def fake_search(self, store, constraints):
        calls.append(store)
        return None

    monkeypatch.setattr(BacktrackingSolver, "search", fake_search)
    result = solve(2, dates[0], dates[4], {(0, "<", dates[0])})
    assert result is None
    assert calls == []


def test_orchestrator_keeps_pruned_store(dates):
    orchestrator = Orchestrator()
    result = orchestrator.solve(2, dates[0], dates[4], {(0, ">", 1), (1, ">=", dates[3])})
    assert result == [dates[4], dates[3]]
    assert orchestrator.store.get_domain(0) == {dates[4]}
    assert orchestrator.store.get_domain(1) == {dates[3]}
    assert orchestrator.engine.get_name() == "backtracking"


def test_large_meeting_count_uses_iterative_search(dates):
    orchestrator = Orchestrator(SolverConfig(recursion_limit=10))
    result = orchestrator.solve(20, dates[0], dates[1], {(i, "<=", i + 1) for i in range(19)})
    assert result == [dates[0]] * 20
    assert orchestrator.engine.iterative


def test_node_budget_returns_none(dates):
    constraints = {(i, "!=", j) for i in range(7) for j in range(i + 1, 7)}
    cfg = SolverConfig(max_nodes=100, arc_consistency=False)
    assert solve(7, dates[0], dates[4], constraints, cfg) is None


# Malformed input


@pytest.mark.parametrize("n_meetings", [0, -1, 1.5, True, "2"])
def test_rejects_bad_meeting_count(dates, n_meetings):
    with pytest.raises(ValueError):
        solve(n_meetings, dates[0], dates[4], set())


def test_rejects_inverted_range(dates):
    with pytest.raises(ValueError, match="Inverted"):
        solve(1, dates[4], dates[0], set())


def test_rejects_datetime_bounds(dates):
    with pytest.raises(ValueError):
        solve(1, datetime(2025, 9, 1, 9), dates[4], set())


@pytest.mark.parametrize(
    "constraint",
    [(2, "<", 0), (0, "<", 2), (-1, "==", date(2025, 9, 1)), (0, "=~", 1)],
)
def test_rejects_bad_constraints(dates, constraint):
    with pytest.raises(ValueError):
        solve(2, dates[0], dates[4], {constraint})


def test_validate_problem_returns_parsed_constraints(dates):
    parsed = validate_problem(2, dates[0], dates[4], [(0, "<", 1), (1, "==", dates[2])])
    assert parsed == [BinaryConstraint(0, "<", 1), UnaryConstraint(1, "==", dates[2])]


def test_recursion_limit_above_interpreter_limit_still_solves(dates):
    orchestrator = Orchestrator(SolverConfig(recursion_limit=5000))
    result = orchestrator.solve(2000, dates[0], dates[0], set())
    assert result == [dates[0]] * 2000
    assert orchestrator.engine.iterative
