"""
sequencing.py

Single-agent ordering of a PrecedenceGraph:
  - sequence(): the lexicographically smallest topological order
  - expected_runtime(): duration-weighted critical path length
"""

import logging

from stepsched.errors import CycleDetected

logger = logging.getLogger(__name__)


def sequence(graph):
    """
    Kahn's algorithm, always taking the smallest ready step next, so the
    result depends only on the graph and not on edge insertion order.

    Works on a copy; `graph` is left untouched.
    Raises CycleDetected if steps remain but none is ready.
    """
    remaining = graph.copy()
    order = []

    while len(remaining):
        ready = remaining.ready()
        if not ready:
            raise CycleDetected(remaining.nodes())
        current = min(ready)
        order.append(current)
        remaining.remove_node(current)

    return order


def sequence_string(graph):
    return "".join(str(s) for s in sequence(graph))


def expected_runtime(graph, base_time=0):
    """
    Critical path length:
      finish[s] = max(finish[p] for p in predecessors(s)) + duration(s)
    Return max(finish.values()), or 0 for an empty graph.
    """
    finish = {}
    for step in sequence(graph):
        preds = graph.predecessors[step]
        start = max((finish[p] for p in preds), default=0)
        finish[step] = start + step.duration(base_time)

    critical = max(finish.values(), default=0)
    logger.debug(f"Critical path for base_time={base_time}: {critical}")
    return critical
