"""Domain pruning before search: node consistency and AC-3 arc consistency."""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from datetime import date
from typing import Deque, Dict, Iterable, List, NamedTuple, Set

from meeting_scheduler.constraints import BinaryConstraint, Constraint, binary_constraints, unary_constraints
from meeting_scheduler.domain.models import VariableStore
from meeting_scheduler.logging_utils import get_logger

logger = get_logger("consistency")


class Arc(NamedTuple):
    """Directed arc: prune ``tail`` against ``head`` through ``constraint``."""

    tail: int
    head: int
    constraint: BinaryConstraint

    def supports(self, tail_date: date, head_date: date) -> bool:
        # The constraint is always evaluated as date(left) OP date(right)
        if self.tail == self.constraint.left:
            return self.constraint.is_satisfied(tail_date, head_date)
        return self.constraint.is_satisfied(head_date, tail_date)


def node_consistency(store: VariableStore, constraints: Iterable[Constraint]) -> bool:
    """
    Remove every date that fails a constraint referencing a single meeting.

    Unary constraints filter their meeting's domain against the fixed operand.
    Binary constraints whose two ends are the same meeting filter with
    ``d OP d``.

    Returns:
        True if any date was removed
    """
    constraints = list(constraints)
    changed = False

    for constraint in unary_constraints(constraints):
        domain = store.get_domain(constraint.meeting)
        violated = {d for d in domain if not constraint.is_satisfied(d)}
        if violated:
            domain -= violated
            changed = True
            logger.debug("Node consistency %s removed %d dates", constraint, len(violated))

    for constraint in binary_constraints(constraints):
        if constraint.left != constraint.right:
            continue
        domain = store.get_domain(constraint.left)
        violated = {d for d in domain if not constraint.is_satisfied(d, d)}
        if violated:
            domain -= violated
            changed = True
            logger.debug("Node consistency %s removed %d dates", constraint, len(violated))

    return changed


def generate_arcs(constraints: Iterable[Constraint]) -> List[Arc]:
    """Two directed arcs per binary constraint between distinct meetings."""
    arcs: List[Arc] = []
    seen: Set[Arc] = set()
    for constraint in binary_constraints(constraints):
        if constraint.left == constraint.right:
            continue
        for arc in (
            Arc(constraint.left, constraint.right, constraint),
            Arc(constraint.right, constraint.left, constraint),
        ):
            if arc not in seen:
                seen.add(arc)
                arcs.append(arc)
    return arcs


def revise(store: VariableStore, arc: Arc) -> bool:
    """
    Drop tail dates that have no supporting date in the head's domain.

    The unsupported set is computed for this arc only.
    """
    tail_domain = store.get_domain(arc.tail)
    head_domain = store.get_domain(arc.head)
    unsupported = {
        t for t in tail_domain
        if not any(arc.supports(t, h) for h in head_domain)
    }
    if not unsupported:
        return False
    tail_domain -= unsupported
    logger.debug(
        "Arc M%d -> M%d (%s) removed %d dates", arc.tail, arc.head, arc.constraint, len(unsupported)
    )
    return True


def arc_consistency(store: VariableStore, constraints: Iterable[Constraint]) -> bool:
    """
    AC-3 over every binary constraint.

    Whenever a tail is pruned, every arc pointing at that tail is queued
    again unless it is already waiting.

    Returns:
        True if any date was removed
    """
    arcs = generate_arcs(constraints)
    arcs_by_head: Dict[int, List[Arc]] = defaultdict(list)
    for arc in arcs:
        arcs_by_head[arc.head].append(arc)

    queue: Deque[Arc] = deque(arcs)
    queued: Set[Arc] = set(arcs)
    changed = False
    revisions = 0

    while queue:
        arc = queue.popleft()
        queued.discard(arc)
        revisions += 1
        if not revise(store, arc):
            continue
        changed = True
        if not store.get_domain(arc.tail):
            logger.debug("Arc consistency emptied the domain of M%d", arc.tail)
            break
        for dependent in arcs_by_head[arc.tail]:
            if dependent not in queued:
                queue.append(dependent)
                queued.add(dependent)

    logger.debug("Arc consistency processed %d arcs (%d revisions)", len(arcs), revisions)
    return changed


def preprocess(
    store: VariableStore,
    constraints: Iterable[Constraint],
    node: bool = True,
    arc: bool = True,
) -> bool:
    """Run the enabled stages in order; True if any domain shrank."""
    constraints = list(constraints)
    report = logger.isEnabledFor(logging.INFO)
    before = sum(store.domain_sizes().values()) if report else 0
    changed = False
    if node:
        changed = node_consistency(store, constraints) or changed
    if arc and not store.any_domain_empty():
        changed = arc_consistency(store, constraints) or changed
    if report:
        after = sum(store.domain_sizes().values())
        logger.info("Preprocessing pruned %d of %d candidate dates", before - after, before)
    return changed
