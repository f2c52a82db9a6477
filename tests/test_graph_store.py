import pytest
import networkx as nx

from dagcanvas.graph import GraphStore, Position


@pytest.fixture
def store():
    return GraphStore()


@pytest.fixture
def three_nodes(store):
    a = store.add_node('python', 'extract', 'cyan', Position(10, 10))
    b = store.add_node('bash', 'transform', 'emerald', Position(250, 10))
    c = store.add_node('sql', 'load', 'blue', Position(500, 10))
    return a, b, c


def test_add_node_ids_are_unique(store):
    nodes = [store.add_node('python', f'task {i}', 'cyan', Position(i, i)) for i in range(50)]
    ids = [n.id for n in nodes]
    assert len(set(ids)) == len(ids)
    assert [n.id for n in store.nodes] == ids


def test_add_node_copies_template_fields(store):
    node = store.add_node('email', 'notify', 'purple', Position(-40, 9000))
    assert node.kind == 'email'
    assert node.label == 'notify'
    assert node.color == 'purple'
    # No bounds on positions
    assert node.position == Position(-40, 9000)


def test_scenario_two_nodes_one_connection(store):
    a = store.add_node('python', 'extract', 'cyan', Position(10, 10))
    b = store.add_node('sql', 'load', 'blue', Position(300, 10))
    conn = store.add_connection(a.id, b.id)

    assert len(store.nodes) == 2
    assert len(store.connections) == 1
    assert conn.source == a.id and conn.target == b.id


def test_self_loop_is_ignored(store):
    a = store.add_node('python', 'extract', 'cyan', Position(0, 0))
    assert store.add_connection(a.id, a.id) is None
    assert store.connections == ()


def test_duplicate_connection_is_ignored(three_nodes, store):
    a, b, _ = three_nodes
    first = store.add_connection(a.id, b.id)
    second = store.add_connection(a.id, b.id)

    assert first is not None
    assert second is None
    assert [(c.source, c.target) for c in store.connections] == [(a.id, b.id)]


def test_reverse_connection_is_a_separate_edge(three_nodes, store):
    a, b, _ = three_nodes
    store.add_connection(a.id, b.id)
    store.add_connection(b.id, a.id)
    assert {(c.source, c.target) for c in store.connections} == {(a.id, b.id), (b.id, a.id)}


def test_connection_to_unknown_node_is_ignored(three_nodes, store):
    a, _, _ = three_nodes
    assert store.add_connection(a.id, 'node-missing') is None
    assert store.connections == ()


def test_move_node_updates_position_only(three_nodes, store):
    a, b, _ = three_nodes
    store.add_connection(a.id, b.id)
    before = store.connections

    store.move_node(a.id, Position(50, 80))

    assert store.get_node(a.id).position == Position(50, 80)
    assert store.get_node(a.id).label == 'extract'
    assert store.connections == before


def test_repeated_move_to_same_position(three_nodes, store):
    a, _, _ = three_nodes
    store.move_node(a.id, Position(7, 7))
    store.move_node(a.id, Position(7, 7))
    assert store.get_node(a.id).position == Position(7, 7)
    assert len(store.nodes) == 3


def test_move_unknown_node_is_noop(three_nodes, store):
    before = store.nodes
    store.move_node('node-missing', Position(1, 1))
    assert store.nodes == before


def test_delete_middle_node_cascades(three_nodes, store):
    a, b, c = three_nodes
    store.add_connection(a.id, b.id)
    store.add_connection(b.id, c.id)
    keep = store.add_connection(a.id, c.id)

    store.delete_node(b.id)

    assert [n.id for n in store.nodes] == [a.id, c.id]
    assert store.get_node(a.id).position == Position(10, 10)
    assert store.get_node(c.id).position == Position(500, 10)
    assert store.connections == (keep,)
    assert all(b.id not in (conn.source, conn.target) for conn in store.connections)


def test_delete_unknown_node_is_noop(three_nodes, store):
    a, b, _ = three_nodes
    store.add_connection(a.id, b.id)
    nodes, conns = store.nodes, store.connections
    store.delete_node('node-missing')
    assert store.nodes == nodes
    assert store.connections == conns


def test_clear_empties_everything(three_nodes, store):
    a, b, _ = three_nodes
    store.add_connection(a.id, b.id)
    store.clear()
    assert store.nodes == ()
    assert store.connections == ()


def test_snapshots_are_not_live(three_nodes, store):
    snapshot = store.nodes
    store.add_node('spark', 'crunch', 'orange', Position(0, 0))
    assert len(snapshot) == 3
    assert len(store.nodes) == 4


def test_to_digraph_and_summary(three_nodes, store):
    a, b, c = three_nodes
    store.add_connection(a.id, b.id)
    store.add_connection(a.id, c.id)

    G = store.to_digraph()
    assert isinstance(G, nx.DiGraph)
    assert set(G.successors(a.id)) == {b.id, c.id}
    assert G.nodes[a.id]['label'] == 'extract'

    assert store.summary() == {'nodes': 3, 'connections': 2, 'roots': 1}

    # Recomputed, not cached
    store.delete_node(a.id)
    assert store.summary() == {'nodes': 2, 'connections': 0, 'roots': 2}
