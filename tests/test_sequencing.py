import itertools

import pytest

from conftest import random_dag
from stepsched.errors import CycleDetected
from stepsched.graph import PrecedenceGraph
from stepsched.sequencing import expected_runtime, sequence, sequence_string
from stepsched.steps import steps_from_string
from stepsched.tasks_parser import parse_graph


def test_example_order(example_graph) -> None:
    assert sequence_string(example_graph) == "CABDFE"


def test_empty_graph() -> None:
    assert sequence(PrecedenceGraph()) == []
    assert sequence_string(PrecedenceGraph()) == ""


def test_smallest_ready_step_wins() -> None:
    graph = parse_graph("Z Y\nB Y\nA Q", fmt="edges")
    assert sequence_string(graph) == "ABQZY"


def test_independent_of_insertion_order() -> None:
    edges = "C A\nC F\nA B\nA D\nB E\nD E\nF E".splitlines()
    for perm in itertools.islice(itertools.permutations(edges), 0, 200, 17):
        assert sequence_string(parse_graph("\n".join(perm), fmt="edges")) == "CABDFE"


@pytest.mark.parametrize("seed", range(20))
def test_order_respects_every_edge(seed) -> None:
    graph = random_dag(seed)
    order = sequence(graph)
    assert sorted(order) == sorted(graph.nodes())
    position = {s: i for i, s in enumerate(order)}
    for required, step in graph.edges():
        assert position[required] < position[step]
    assert sequence(graph) == order


def test_caller_graph_untouched(example_graph) -> None:
    before = example_graph.copy()
    sequence(example_graph)
    assert example_graph == before


def test_two_node_cycle(cycle_graph) -> None:
    with pytest.raises(CycleDetected) as exc:
        sequence(cycle_graph)
    assert exc.value.remaining == steps_from_string("AB")


def test_cycle_behind_valid_prefix() -> None:
    graph = parse_graph("A B\nB C\nC D\nD B", fmt="edges")
    with pytest.raises(CycleDetected) as exc:
        sequence(graph)
    assert exc.value.remaining == steps_from_string("BCD")


def test_expected_runtime(example_graph) -> None:
    # C(3) -> F(6) -> E(5)
    assert expected_runtime(example_graph, 0) == 14
    # with +60 per step the four-step chain C -> A -> D -> E dominates
    assert expected_runtime(example_graph, 60) == 253


def test_expected_runtime_empty() -> None:
    assert expected_runtime(PrecedenceGraph(), 60) == 0
