"""Graph analysis of the allowed writer -> target edges."""

from .constraint_graph import (
    build_constraint_graph,
    is_flow_feasible,
    max_assignable,
    max_assignable_for_index,
)

__all__ = [
    "build_constraint_graph",
    "is_flow_feasible",
    "max_assignable",
    "max_assignable_for_index",
]
