"""Tests for simulation.topology and simulation.propagation."""

import pytest
from simulation.propagation import ShortCircuitError, propagate, walk
from simulation.topology import NodeMark, build_topology
from tests.conftest import make_wire, pos


class TestBuildTopology:
    def test_nodes_deduplicated_first_seen_order(self):
        topo = build_topology([
            make_wire((0, 0), (0, 3)),
            make_wire((0, 3), (4, 3)),
            make_wire((4, 3), (0, 0)),
        ])
        assert topo.positions == [pos(0, 0), pos(0, 3), pos(4, 3)]
        assert topo.edges == [(0, 1), (1, 2), (2, 0)]

    def test_every_node_starts_unvisited(self):
        topo = build_topology([make_wire((0, 0), (0, 3))])
        assert topo.marks == [NodeMark.UNVISITED, NodeMark.UNVISITED]

    def test_duplicate_edges_kept(self):
        topo = build_topology([make_wire((0, 0), (0, 3)), make_wire((0, 0), (0, 3))])
        assert len(topo) == 2
        assert topo.edges == [(0, 1), (0, 1)]

    def test_orientation_does_not_change_connectivity(self):
        forward = build_topology([make_wire((1, 1), (1, 5))])
        backward = build_topology([make_wire((1, 5), (1, 1))])
        assert set(forward.positions) == set(backward.positions)
        assert forward.neighbors[forward.index_of(pos(1, 1))] == [forward.index_of(pos(1, 5))]
        assert backward.neighbors[backward.index_of(pos(1, 1))] == [backward.index_of(pos(1, 5))]

    def test_only_endpoints_become_nodes(self):
        topo = build_topology([make_wire((0, 0), (5, 0))])
        assert topo.index_of(pos(2, 0)) is None

    def test_self_loop(self):
        topo = build_topology([make_wire((2, 2), (2, 2))])
        assert len(topo) == 1
        assert topo.neighbors == [[0]]

    def test_empty(self):
        topo = build_topology([])
        assert len(topo) == 0
        assert topo.mark_at(pos(0, 0)) is None


class TestWalk:
    def test_marks_reachable_nodes(self):
        topo = build_topology([
            make_wire((0, 0), (0, 3)),
            make_wire((0, 3), (4, 3)),
            make_wire((9, 9), (9, 8)),
        ])
        marked = walk(pos(0, 0), NodeMark.POSITIVE, topo)
        assert marked == 3
        assert topo.mark_at(pos(4, 3)) is NodeMark.POSITIVE
        assert topo.mark_at(pos(9, 9)) is NodeMark.UNVISITED

    def test_cycle_terminates(self):
        topo = build_topology([
            make_wire((0, 0), (0, 3)),
            make_wire((0, 3), (3, 3)),
            make_wire((3, 3), (3, 0)),
            make_wire((3, 0), (0, 0)),
        ])
        assert walk(pos(0, 0), NodeMark.NEGATIVE, topo) == 4

    def test_unwired_source_is_noop(self):
        topo = build_topology([make_wire((5, 5), (5, 6))])
        assert walk(pos(0, 0), NodeMark.POSITIVE, topo) == 0
        assert topo.unvisited_positions() == [pos(5, 5), pos(5, 6)]

    def test_same_mark_twice_is_noop(self):
        topo = build_topology([make_wire((0, 0), (0, 3))])
        walk(pos(0, 0), NodeMark.POSITIVE, topo)
        assert walk(pos(0, 3), NodeMark.POSITIVE, topo) == 0

    def test_opposite_mark_raises(self):
        topo = build_topology([make_wire((0, 0), (0, 3))])
        walk(pos(0, 0), NodeMark.POSITIVE, topo)
        with pytest.raises(ShortCircuitError) as exc_info:
            walk(pos(0, 3), NodeMark.NEGATIVE, topo)
        assert exc_info.value.position == pos(0, 3)

    def test_unvisited_mark_rejected(self):
        topo = build_topology([make_wire((0, 0), (0, 3))])
        with pytest.raises(ValueError):
            walk(pos(0, 0), NodeMark.UNVISITED, topo)


class TestPropagate:
    def test_separate_nets(self):
        topo = build_topology([
            make_wire((0, 19), (3, 19)),
            make_wire((3, 16), (0, 16)),
        ])
        propagate(pos(0, 19), pos(0, 16), topo)
        assert topo.mark_at(pos(3, 19)) is NodeMark.POSITIVE
        assert topo.mark_at(pos(3, 16)) is NodeMark.NEGATIVE

    def test_short_reported_on_negative_walk(self):
        topo = build_topology([make_wire((0, 19), (0, 16))])
        with pytest.raises(ShortCircuitError) as exc_info:
            propagate(pos(0, 19), pos(0, 16), topo)
        # The positive walk finished first, so the negative terminal itself clashes
        assert exc_info.value.position == pos(0, 16)
        assert topo.mark_at(pos(0, 19)) is NodeMark.POSITIVE

    def test_island_left_unvisited(self):
        topo = build_topology([
            make_wire((0, 19), (3, 19)),
            make_wire((10, 10), (12, 10)),
            make_wire((12, 10), (12, 12)),
            make_wire((12, 12), (10, 10)),
        ])
        propagate(pos(0, 19), pos(0, 16), topo)
        assert set(topo.unvisited_positions()) == {pos(10, 10), pos(12, 10), pos(12, 12)}
