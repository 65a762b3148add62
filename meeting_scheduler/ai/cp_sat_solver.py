"""CP-SAT formulation of the meeting CSP, used as an alternative engine and cross-check."""

from __future__ import annotations

import operator
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from ortools.sat.python import cp_model

from meeting_scheduler.constraints import Constraint
from meeting_scheduler.domain.models import VariableStore
from meeting_scheduler.engine.base import BaseSolver
from meeting_scheduler.logging_utils import get_logger

logger = get_logger("cp_sat")


_RELATIONS: Dict[str, Callable] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class CPSatSolver(BaseSolver):
    """
    Meeting CSP solved with Google OR-Tools CP-SAT.

    Each meeting becomes an integer variable over the proleptic ordinals of
    the dates left in its domain; date comparisons become linear relations
    between those ordinals.
    """

    name = "cp-sat"

    def __init__(self, time_limit: float = 10.0):
        """
        Args:
            time_limit: Solver wall-clock limit in seconds
        """
        self.time_limit = time_limit

    def search(
        self,
        store: VariableStore,
        constraints: Iterable[Constraint],
    ) -> Optional[List[date]]:
        if store.any_domain_empty():
            return None

        model = cp_model.CpModel()
        meeting_vars = self._create_variables(model, store)
        self._add_constraints(model, meeting_vars, constraints)

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.time_limit
        solver.parameters.num_workers = 1

        logger.info("Solving CP-SAT model with %d meetings", len(meeting_vars))
        status = solver.Solve(model)

        if status == cp_model.OPTIMAL or status == cp_model.FEASIBLE:
            solution = [date.fromordinal(solver.Value(var)) for var in meeting_vars]
            for index, value in enumerate(solution):
                store.set_current(index, value)
            logger.info("CP-SAT found a solution (status: %s)", solver.StatusName(status))
            return solution
        if status == cp_model.INFEASIBLE:
            logger.info("CP-SAT proved the problem infeasible")
            return None
        raise RuntimeError(
            f"CP-SAT solver failed to decide the problem (status: {solver.StatusName(status)})"
        )

    def _create_variables(self, model: cp_model.CpModel, store: VariableStore) -> List[cp_model.IntVar]:
        meeting_vars = []
        for var in store:
            ordinals = sorted(d.toordinal() for d in var.domain)
            meeting_vars.append(
                model.NewIntVarFromDomain(cp_model.Domain.FromValues(ordinals), f"meeting_{var.index}")
            )
        return meeting_vars

    def _add_constraints(
        self,
        model: cp_model.CpModel,
        meeting_vars: List[cp_model.IntVar],
        constraints: Iterable[Constraint],
    ) -> None:
        for constraint in constraints:
            relation = _RELATIONS[constraint.op]
            if constraint.arity == 1:
                model.Add(relation(meeting_vars[constraint.meeting], constraint.value.toordinal()))
            elif constraint.left == constraint.right:
                # m OP m reduces to a constant truth value
                if not relation(0, 0):
                    model.AddBoolOr([])
            else:
                model.Add(relation(meeting_vars[constraint.left], meeting_vars[constraint.right]))
