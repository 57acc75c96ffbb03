# tests/test_graph.py
import pytest

from capflow import CapacityGraph, DenseResidual, InvalidArgument, SparseResidual, example_graph, residual_from
from capflow.main import build_graph


def test_example_graph_edges():
    g = example_graph()
    assert g.n == 6
    assert list(g.edges()) == [
        (0, 1, 15), (0, 2, 12), (1, 2, 9), (1, 3, 11), (2, 1, 5),
        (2, 4, 13), (3, 2, 9), (3, 5, 25), (4, 3, 8), (4, 5, 6),
    ]
    assert g.out_capacity(0) == 27


def test_capacity_graph_copies_its_input():
    table = [[0, 3], [1, 0]]
    g = CapacityGraph(table)
    table[0][1] = 99
    assert g.capacity(0, 1) == 3
    assert g[0] == (0, 3)


def test_capacity_graph_is_immutable():
    g = example_graph()
    with pytest.raises(AttributeError):
        g._rows = ()
    with pytest.raises(TypeError):
        g[0][1] = 3


def test_integral_floats_are_accepted():
    g = CapacityGraph([[0, 2.0], [0, 0]])
    assert g.capacity(0, 1) == 2
    assert isinstance(g.capacity(0, 1), int)


@pytest.mark.parametrize("table", [
    [[0, 1], [0]],
    [[0, 1, 2], [0, 0, 0]],
    [[0, -3], [0, 0]],
    [[0, 1.5], [0, 0]],
    [[0, "7"], [0, 0]],
    [[0, True], [0, 0]],
    [[0, None], [0, 0]],
    5,
])
def test_bad_tables_rejected(table):
    with pytest.raises(InvalidArgument):
        CapacityGraph(table)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        CapacityGraph([[0, -1], [0, 0]])


def test_from_edges_sums_repeated_pairs():
    g = CapacityGraph.from_edges(3, [(0, 1, 4), (0, 1, 6), (1, 2, 5)])
    assert g.capacity(0, 1) == 10
    assert g.capacity(1, 2) == 5
    assert g.capacity(2, 0) == 0


@pytest.mark.parametrize("edges", [[(0, 3, 1)], [(-1, 0, 1)], [(0, 1, -2)]])
def test_from_edges_rejects_bad_entries(edges):
    with pytest.raises(InvalidArgument):
        CapacityGraph.from_edges(3, edges)


def test_residual_is_a_deep_copy():
    g = example_graph()
    for representation in ("dense", "sparse"):
        r = residual_from(g, representation)
        r.push(0, 1, 5)
        assert g.capacity(0, 1) == 15
        assert g.capacity(1, 0) == 0
        assert r.capacity(0, 1) == 10
        assert r.capacity(1, 0) == 5


def test_residual_layouts():
    assert isinstance(residual_from(example_graph()), DenseResidual)
    assert isinstance(residual_from(example_graph(), "sparse"), SparseResidual)


def test_sparse_neighbours_include_reverse_arcs():
    r = SparseResidual(example_graph())
    # 3 has out-arcs to 2 and 5, and in-arcs from 1 and 4
    assert r.neighbours(3) == [1, 2, 4, 5]
    assert r.neighbours(0) == [1, 2]
    assert r.capacity(3, 1) == 0
    assert r.capacity(0, 4) == 0


def test_snapshots_agree():
    g = example_graph()
    assert DenseResidual(g).snapshot() == SparseResidual(g).snapshot() == g.to_lists()


def test_build_graph_edge_list_infers_size():
    g = build_graph({"edges": [{"from": 0, "to": 3, "capacity": 2}]})
    assert g.n == 4
    assert g.capacity(0, 3) == 2


@pytest.mark.parametrize("data", [
    {},
    {"capacity": "nope"},
    {"edges": [{"to": 1}]},
    {"edges": {"from": 0}},
])
def test_build_graph_rejects_malformed_input(data):
    with pytest.raises(InvalidArgument):
        build_graph(data)
