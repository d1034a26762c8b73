import math
from itertools import combinations

import numpy as np
import pytest

from layoutgraph import (
    CenterGravity,
    FruchtermanReingold,
    FruchtermanReingoldState,
    FruchtermanReingoldWithCenterGravity,
    Graph,
    LayoutEngine,
    LayoutStateStore,
    Rect,
    get_force_directed_defaults,
    set_force_directed_defaults,
)
from layoutgraph.layouts.force_directed import (
    attractive_forces,
    cap_displacement,
    ideal_edge_length,
    repulsive_forces,
)

AREA = Rect(0.0, 0.0, 300.0, 300.0)


def _graph(points, edges=(), directed=False):
    g = Graph(directed=directed)
    ids = [g.add_node(location=p) for p in points]
    for u, v in edges:
        g.add_edge(ids[u], ids[v])
    return g, ids


def _running_engine(layout_cls=FruchtermanReingold, **overrides):
    engine = LayoutEngine(layout_cls)
    state = engine.state
    for key, value in overrides.items():
        setattr(state, key, value)
    state.start()
    engine.set_state(state)
    return engine


def _pairwise_distances(g, ids):
    out = []
    for a, b in combinations(ids, 2):
        (ax, ay), (bx, by) = g.node(a).location, g.node(b).location
        out.append(math.hypot(bx - ax, by - ay))
    return out


def test_default_state_for_unused_layout_is_stopped():
    store = LayoutStateStore()
    state = store.load(FruchtermanReingold)

    assert isinstance(state, FruchtermanReingoldState)
    assert state.running is False
    assert state.temperature == 0.0
    assert state.iterations == 0
    assert state.extras == ()
    assert FruchtermanReingold in store


def test_from_default_state_does_not_raise_and_round_trips():
    layout = FruchtermanReingold.from_state(FruchtermanReingold.default_state())
    exported = layout.export_state()
    assert exported == FruchtermanReingold.default_state()


def test_stopped_layout_never_moves_nodes():
    g, ids = _graph([(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)], [(0, 1), (1, 2), (2, 0)])
    before = g.positions()
    engine = LayoutEngine(FruchtermanReingold)

    for _ in range(20):
        engine.step(g, AREA)

    assert g.positions() == before
    assert engine.state.iterations == 0


@pytest.mark.parametrize("running", [False, True])
@pytest.mark.parametrize("layout_cls", [FruchtermanReingold, FruchtermanReingoldWithCenterGravity])
def test_single_isolated_node_is_left_alone(running, layout_cls):
    g, (only,) = _graph([(12.5, -3.0)])
    engine = LayoutEngine(layout_cls)
    state = engine.state
    state.running = running
    engine.set_state(state)

    for _ in range(5):
        engine.step(g, AREA)

    assert g.node(only).location == (12.5, -3.0)


def test_empty_graph_step_is_noop():
    engine = _running_engine()
    engine.step(Graph(), AREA)
    assert engine.state.iterations == 0


def test_running_step_heats_counts_and_cools():
    g, _ = _graph([(100.0, 100.0), (120.0, 100.0)], [(0, 1)])
    engine = _running_engine()

    engine.step(g, AREA)
    state = engine.state

    assert state.iterations == 1
    assert state.temperature == pytest.approx(10.0 * 0.98)
    assert state.last_avg_displacement is not None
    assert state.last_avg_displacement <= 10.0 + 1e-9


def test_temperature_cools_to_floor():
    g, _ = _graph([(100.0, 100.0), (120.0, 100.0)], [(0, 1)])
    engine = _running_engine(cooling=0.5, min_temperature=2.0)
    for _ in range(20):
        engine.step(g, AREA)
    assert engine.state.temperature == pytest.approx(2.0)


def test_displacement_is_capped_by_temperature():
    g, ids = _graph([(150.0, 150.0), (150.5, 150.0)])
    engine = _running_engine(initial_temperature=3.0, min_temperature=3.0)
    engine.step(g, AREA)
    for node_id, start in zip(ids, [(150.0, 150.0), (150.5, 150.0)]):
        x, y = g.node(node_id).location
        assert math.hypot(x - start[0], y - start[1]) <= 3.0 + 1e-9


def test_coincident_nodes_are_separated_and_stay_finite():
    g, ids = _graph([(0.0, 0.0)] * 6, [(0, 1), (1, 2), (3, 4), (0, 0)])
    engine = _running_engine()

    for _ in range(60):
        engine.step(g, AREA)
        coords = np.asarray([g.node(i).location for i in ids])
        assert np.isfinite(coords).all()

    assert min(_pairwise_distances(g, ids)) > 1e-6


def test_coincident_perturbation_is_deterministic():
    def run():
        g, ids = _graph([(5.0, 5.0)] * 4)
        engine = _running_engine()
        engine.step(g, AREA)
        return [g.node(i).location for i in ids]

    assert run() == run()


@pytest.mark.parametrize(
    "area",
    [AREA, Rect(0.0, 0.0, 0.0, 0.0), Rect(-1e6, -1e6, 2e6, 2e6), Rect(0.0, 0.0, 1e-3, 1e-3)],
)
def test_positions_remain_finite_for_extreme_inputs(area):
    points = [(0.0, 0.0), (1e-12, 0.0), (1e6, -1e6), (-1e6, 1e6), (3.0, 4.0)]
    g, ids = _graph(points, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0), (0, 2)])
    engine = _running_engine(FruchtermanReingoldWithCenterGravity)

    for _ in range(50):
        engine.step(g, area)
        coords = np.asarray([g.node(i).location for i in ids])
        assert np.isfinite(coords).all()


def test_non_finite_input_location_is_repaired():
    g, ids = _graph([(0.0, 0.0), (10.0, 0.0)], [(0, 1)])
    g.node(ids[0]).location = (math.nan, math.inf)
    engine = _running_engine()
    engine.step(g, AREA)
    assert all(math.isfinite(v) for v in g.node(ids[0]).location)


def test_dragged_node_is_never_moved_but_still_pushes_others():
    g, ids = _graph([(150.0, 150.0), (151.0, 150.0), (150.0, 152.0)], [(0, 1), (0, 2)])
    g.set_dragged(ids[0], True)
    others_before = [g.node(i).location for i in ids[1:]]
    engine = _running_engine(FruchtermanReingoldWithCenterGravity, initial_temperature=50.0)

    for _ in range(100):
        engine.step(g, AREA)
        assert g.node(ids[0]).location == (150.0, 150.0)

    others_after = [g.node(i).location for i in ids[1:]]
    assert others_after != others_before
    for node_id in ids[1:]:
        x, y = g.node(node_id).location
        assert math.hypot(x - 150.0, y - 150.0) > 2.0


def test_triangle_converges_to_ideal_edge_length_and_stays():
    g, ids = _graph([(140.0, 150.0), (160.0, 150.0), (150.0, 165.0)], [(0, 1), (1, 2), (2, 0)])
    engine = _running_engine()
    k = ideal_edge_length(AREA, 3)

    for _ in range(400):
        engine.step(g, AREA)

    distances = _pairwise_distances(g, ids)
    for d in distances:
        assert d == pytest.approx(k, rel=1e-2)

    for _ in range(50):
        engine.step(g, AREA)
    for before, after in zip(distances, _pairwise_distances(g, ids)):
        assert abs(after - before) < 1e-3


def test_auto_stop_threshold_stops_simulation():
    g, _ = _graph([(100.0, 100.0), (120.0, 100.0)], [(0, 1)])
    engine = _running_engine(auto_stop_threshold=1e9)
    engine.step(g, AREA)
    assert engine.state.running is False
    before = g.positions()
    engine.step(g, AREA)
    assert g.positions() == before


def test_state_survives_across_frames_and_reset_restores_defaults():
    g, _ = _graph([(100.0, 100.0), (120.0, 100.0)], [(0, 1)])
    engine = _running_engine()
    for _ in range(3):
        engine.step(g, AREA)
    assert engine.state.iterations == 3

    engine.reset()
    assert engine.state == FruchtermanReingold.default_state()


def test_ideal_edge_length_formula():
    assert ideal_edge_length(Rect(0, 0, 100, 100), 4) == pytest.approx(50.0)
    assert ideal_edge_length(Rect(0, 0, 100, 100), 4, k_scale=2.0) == pytest.approx(100.0)
    assert ideal_edge_length(Rect(0, 0, 0, 0), 1) == pytest.approx(1.0)


def test_core_forces_balance_at_ideal_length():
    k = 10.0
    pos = np.array([[0.0, 0.0], [k, 0.0]])
    repulse = repulsive_forces(pos, k, 1.0, 1e-3)
    attract = attractive_forces(pos, np.array([0]), np.array([1]), k, 1.0)

    assert repulse[0].tolist() == pytest.approx([-k, 0.0])
    assert attract[0].tolist() == pytest.approx([k, 0.0])
    assert np.allclose(repulse + attract, 0.0)


def test_forces_are_antisymmetric():
    pos = np.array([[0.0, 0.0], [3.0, 4.0], [-2.0, 1.0]])
    repulse = repulsive_forces(pos, 5.0, 1.0, 1e-3)
    attract = attractive_forces(pos, np.array([0, 1]), np.array([1, 2]), 5.0, 1.0)
    assert np.allclose(repulse.sum(axis=0), 0.0)
    assert np.allclose(attract.sum(axis=0), 0.0)


def test_cap_displacement_keeps_small_moves():
    moves = np.array([[3.0, 4.0], [0.3, 0.4], [0.0, 0.0]])
    capped = cap_displacement(moves, 1.0)
    assert capped[0].tolist() == pytest.approx([0.6, 0.8])
    assert capped[1].tolist() == pytest.approx([0.3, 0.4])
    assert capped[2].tolist() == pytest.approx([0.0, 0.0])


def test_configured_defaults_apply_to_new_states():
    original = get_force_directed_defaults()
    try:
        set_force_directed_defaults(FruchtermanReingoldState(dt=0.1, k_scale=2.0))
        state = FruchtermanReingold.default_state()
        assert state.dt == 0.1
        assert state.k_scale == 2.0
        assert state.running is False
    finally:
        set_force_directed_defaults(original)
    assert FruchtermanReingold.default_state().dt == 0.05


@pytest.mark.parametrize(
    "overrides",
    [{"epsilon": 0.0}, {"cooling": 0.0}, {"cooling": 1.5}, {"min_temperature": 20.0}],
)
def test_invalid_parameters_are_rejected(overrides):
    with pytest.raises(ValueError):
        FruchtermanReingoldState(**overrides)


def test_state_helpers_toggle_running_and_reheat():
    state = FruchtermanReingoldState()
    state.start()
    assert state.running
    state.reheat()
    assert state.temperature == state.initial_temperature
    state.stop()
    assert not state.running


def test_center_gravity_layout_shares_no_state_with_plain_layout():
    store = LayoutStateStore()
    plain = store.load(FruchtermanReingold)
    with_gravity = store.load(FruchtermanReingoldWithCenterGravity)
    assert plain.extras == ()
    assert with_gravity.extras == (CenterGravity(),)
    assert len(store) == 2


def test_repulsion_saturates_below_epsilon():
    def magnitude(d):
        force = repulsive_forces(np.array([[0.0, 0.0], [d, 0.0]]), 10.0, 1.0, 1e-3)
        return float(np.hypot(*force[1]))

    distances = [1e-3, 1e-4, 1e-6, 1e-9, 1e-11, 1e-12]
    magnitudes = [magnitude(d) for d in distances]

    for farther, closer in zip(magnitudes, magnitudes[1:]):
        assert closer >= farther * (1.0 - 1e-9)
    for value in magnitudes:
        assert value == pytest.approx(10.0 * 10.0 / 1e-3)
    assert magnitude(1e-6) > magnitude(1.0)


def test_auto_stop_waits_while_every_node_is_dragged():
    g, ids = _graph([(100.0, 100.0), (120.0, 100.0)], [(0, 1)])
    for node_id in ids:
        g.set_dragged(node_id, True)
    engine = _running_engine(auto_stop_threshold=1e9)

    engine.step(g, AREA)
    assert engine.state.running is True
    assert engine.state.iterations == 1

    g.set_dragged(ids[1], False)
    engine.step(g, AREA)
    assert engine.state.running is False
