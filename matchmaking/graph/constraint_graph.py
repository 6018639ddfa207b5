"""
Constraint graph built with NetworkX for flow-capacity analysis.

Writers and targets are separate node layers. An edge writer -> target
exists for every pair the writer does not avoid, with capacity 1. The
source feeds each writer N units and each target drains N units to the sink,
so the max-flow value is the largest number of assignments any search could
place. A roster is feasible exactly when that value equals len(roster) * N.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import networkx as nx

from matchmaking.models import Participant
from matchmaking.solver.context import ParticipantIndex, check_target_count

logger = logging.getLogger(__name__)

SOURCE = "__source__"
SINK = "__sink__"


def writer_node(participant_id: str) -> tuple[str, str]:
    return ("writer", participant_id)


def target_node(participant_id: str) -> tuple[str, str]:
    return ("target", participant_id)


def build_constraint_graph(index: ParticipantIndex, n: int) -> nx.DiGraph:
    """Build the writer/target flow network for an indexed roster.

    Args:
        index: Indexed roster
        n: Targets per writer

    Returns:
        DiGraph with "capacity" on every edge and "preferred" on allowed
        writer -> target edges
    """
    graph = nx.DiGraph()
    graph.add_node(SOURCE)
    graph.add_node(SINK)

    for idx, pid in enumerate(index.ids):
        name = index.name_of(idx)
        graph.add_node(writer_node(pid), participant_id=pid, name=name, layer="writer")
        graph.add_node(target_node(pid), participant_id=pid, name=name, layer="target")
        graph.add_edge(SOURCE, writer_node(pid), capacity=n)
        graph.add_edge(target_node(pid), SINK, capacity=n)

    for writer_idx, writer_id in enumerate(index.ids):
        prefs = index.preferences[writer_idx]
        for target_idx in index.valid_targets(writer_idx):
            graph.add_edge(
                writer_node(writer_id),
                target_node(index.ids[target_idx]),
                capacity=1,
                preferred=target_idx in prefs,
            )

    logger.debug(
        f"Constraint graph: {len(index)} participants, "
        f"{graph.number_of_edges() - 2 * len(index)} allowed writer->target edges"
    )
    return graph


def max_assignable_for_index(index: ParticipantIndex, n: int) -> int:
    """Max-flow value of the constraint graph (0 for empty rosters or N < 1)."""
    if len(index) == 0 or n < 1:
        return 0
    graph = build_constraint_graph(index, n)
    flow_value, _ = nx.maximum_flow(graph, SOURCE, SINK)
    return int(flow_value)


def max_assignable(participants: Sequence[Participant], n: int) -> int:
    """Largest number of assignments achievable under every writer/target cap of N."""
    n = check_target_count(n)
    return max_assignable_for_index(ParticipantIndex.build(participants), n)


def is_flow_feasible(participants: Sequence[Participant], n: int) -> bool:
    """True when a complete assignment exists."""
    n = check_target_count(n)
    index = ParticipantIndex.build(participants)
    if len(index) < 2 or n < 1:
        return False
    return max_assignable_for_index(index, n) == len(index) * n
