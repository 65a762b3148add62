"""Services for domain pruning."""

from .consistency import Arc, arc_consistency, generate_arcs, node_consistency, preprocess, revise

__all__ = [
    "Arc",
    "arc_consistency",
    "generate_arcs",
    "node_consistency",
    "preprocess",
    "revise",
]
