import itertools
import random

import pytest

from stepsched.steps import Step
from stepsched.tasks_parser import build_graph, parse_graph

EXAMPLE = """\
Step C must be finished before step A can begin.
Step C must be finished before step F can begin.
Step A must be finished before step B can begin.
Step A must be finished before step D can begin.
Step B must be finished before step E can begin.
Step D must be finished before step E can begin.
Step F must be finished before step E can begin.
"""

EXAMPLE_EDGES = """\
# canonical example as an edge list
C -> A
C -> F
A B
A D
B E
D E
F E
"""


@pytest.fixture
def example_graph():
    return parse_graph(EXAMPLE)


@pytest.fixture
def cycle_graph():
    return parse_graph("A B\nB A\n", fmt="edges")


def random_dag(seed, size=12, density=0.3):
    """Random acyclic graph: edges only go from a lower to a higher shuffled rank."""
    rng = random.Random(seed)
    steps = [Step(i) for i in range(size)]
    rng.shuffle(steps)
    pairs = [(a, b) for a, b in itertools.combinations(steps, 2) if rng.random() < density]
    graph = build_graph(pairs)
    for s in steps:
        graph.add_node(s)
    return graph
