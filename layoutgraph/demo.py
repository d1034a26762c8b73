import logging

from . import (
    CenterGravity,
    FruchtermanReingold,
    Graph,
    LayoutEngine,
    RandomLayout,
    RandomState,
    Rect,
)

logger = logging.getLogger(__name__)

AREA = Rect(0.0, 0.0, 400.0, 300.0)


def build_demo_graph() -> Graph:
    g = Graph(directed=True)
    a = g.add_node(label="A")
    b = g.add_node(label="B")
    c = g.add_node(label="C")
    d = g.add_node(label="D")
    g.add_edge(a, b)
    g.add_edge(b, c)
    g.add_edge(c, a)
    g.add_edge(c, d)
    # parallel edges get consecutive order indices
    g.add_edge(d, c, label="back")
    return g


def run(steps: int = 200, seed: int = 7) -> Graph:
    g = build_demo_graph()
    logger.info("Running demo layout for %d steps on %r", steps, g)

    engine = LayoutEngine(RandomLayout)
    engine.set_state(RandomState(seed=seed))
    engine.step(g, AREA)

    engine.switch(FruchtermanReingold.compose(CenterGravity(c=0.05), name="DemoLayout"))
    state = engine.state
    state.start()
    engine.set_state(state)
    for _ in range(steps):
        engine.step(g, AREA)

    final = engine.state
    print(f"After {final.iterations} steps (temperature={final.temperature:.3f}):")
    for node_id, node in g.nodes_iter():
        x, y = node.location
        print(f"  {node.display_label(node_id):>3}: ({x:8.2f}, {y:8.2f})")
    for edge_id, edge in g.edges_iter():
        source, target = g.edge_endpoints(edge_id)
        print(
            f"  edge {g.node(source).display_label(source)}->{g.node(target).display_label(target)}"
            f" order={edge.order}"
        )
    return g


if __name__ == "__main__":
    run()
