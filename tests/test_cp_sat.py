"""Tests for the OR-Tools CP-SAT engine."""

import pytest

from meeting_scheduler import solve
from meeting_scheduler.ai.cp_sat_solver import CPSatSolver
from meeting_scheduler.config import SolverConfig
from meeting_scheduler.constraints import BinaryConstraint, UnaryConstraint
from meeting_scheduler.domain.models import VariableStore
from meeting_scheduler.validator import violated_constraints

pytestmark = pytest.mark.cp_sat


def test_cp_sat_solves_ordering(dates):
    store = VariableStore(3, set(dates))
    constraints = [BinaryConstraint(0, ">", 1), BinaryConstraint(1, ">", 2), UnaryConstraint(2, ">=", dates[2])]
    result = CPSatSolver().search(store, constraints)
    assert result == [dates[4], dates[3], dates[2]]
    assert store.assigned_values() == result


def test_cp_sat_reports_infeasible(dates):
    store = VariableStore(2, set(dates[:1]))
    assert CPSatSolver().search(store, [BinaryConstraint(0, "!=", 1)]) is None


def test_cp_sat_respects_pruned_domains(dates):
    store = VariableStore(2, set(dates))
    store.set_domain(0, [dates[1], dates[3]])
    result = CPSatSolver().search(store, [BinaryConstraint(0, ">", 1), UnaryConstraint(1, "!=", dates[0])])
    assert result[0] in {dates[1], dates[3]}
    assert result[0] == dates[3]
    assert dates[0] < result[1] < dates[3]


def test_cp_sat_self_reference(dates):
    store = VariableStore(1, set(dates))
    assert CPSatSolver().search(store, [BinaryConstraint(0, "<", 0)]) is None
    store = VariableStore(1, set(dates))
    assert CPSatSolver().search(store, [BinaryConstraint(0, "<=", 0)]) is not None


def test_cp_sat_empty_domain(dates):
    store = VariableStore(2, set(dates))
    store.set_domain(1, [])
    assert CPSatSolver().search(store, []) is None


@pytest.mark.parametrize(
    "constraints, n_meetings",
    [
        ({(0, "<", 1), (1, "<", 2), (2, "<", 3)}, 4),
        ({(0, "<", 1), (1, "<", 2), (2, "<", 3), (3, "<", 4), (4, "<", 5)}, 6),
        ({(0, "!=", 1), (1, "!=", 2), (0, "==", 2)}, 3),
        ({(0, ">=", 1), (1, ">=", 0), (0, "!=", 1)}, 2),
    ],
)
def test_engines_agree_on_satisfiability(dates, constraints, n_meetings):
    backtracking = solve(n_meetings, dates[0], dates[4], constraints)
    cp_sat = solve(n_meetings, dates[0], dates[4], constraints, SolverConfig(engine="cp-sat"))
    assert (backtracking is None) == (cp_sat is None)
    if cp_sat is not None:
        assert not violated_constraints(cp_sat, constraints)
