import pytest

from dagcanvas.graph import GraphStore, Position
from dagcanvas.canvas.geometry import (
    input_anchor,
    output_anchor,
    curve_control_points,
    connection_path,
    delete_control_rect,
    point_in_rect,
)
from dagcanvas.canvas.renderer import (
    CanvasRenderer,
    fill_for_color,
    EMPTY_HINT_TITLE,
)


def test_anchor_points_are_edge_centers():
    pos = Position(10, 10)
    assert input_anchor(pos) == (10, 54)
    assert output_anchor(pos) == (190, 54)


def test_control_points_keep_horizontal_bias():
    c1, c2 = curve_control_points((190, 54), (300, 200))
    assert c1 == (245, 54)
    assert c2 == (245, 200)


def test_connection_path_right_to_left():
    store = GraphStore()
    a = store.add_node('python', 'a', 'cyan', Position(400, 0))
    b = store.add_node('sql', 'b', 'blue', Position(0, 100))
    # Output of a is at (580, 44), input of b at (0, 144)
    assert connection_path(a, b) == "M 580 44 C 290 44, 290 144, 0 144"


def test_connection_path_fractional_coordinates():
    store = GraphStore()
    a = store.add_node('python', 'a', 'cyan', Position(0.5, 0))
    b = store.add_node('sql', 'b', 'blue', Position(300, 0))
    assert connection_path(a, b).startswith("M 180.5 44 C 240.25 44")


def test_delete_control_inside_header():
    rect = delete_control_rect(Position(10, 10))
    assert point_in_rect((170, 30), rect)
    assert not point_in_rect((100, 70), rect)


@pytest.mark.parametrize("tag,expected", [
    ('cyan', '#0891b2'),
    ('bg-emerald-600', '#059669'),
    ('#123abc', '#123abc'),
    ('rgb(1, 2, 3)', 'rgb(1, 2, 3)'),
    ('not-a-color', '#475569'),
    ('', '#475569'),
    (None, '#475569'),
])
def test_fill_for_color(tag, expected):
    assert fill_for_color(tag) == expected


class TestRenderer:

    def test_empty_canvas_shows_hint(self):
        svg = CanvasRenderer().render(GraphStore())
        assert EMPTY_HINT_TITLE in svg
        assert 'class="node"' not in svg

    def test_renders_nodes_and_connections(self):
        store = GraphStore()
        a = store.add_node('python', 'extract', 'cyan', Position(10, 10))
        b = store.add_node('sql', 'load', 'blue', Position(300, 10))
        store.add_connection(a.id, b.id)

        svg = CanvasRenderer().render(store)
        assert EMPTY_HINT_TITLE not in svg
        assert svg.count('class="node"') == 2
        assert svg.count('class="connection"') == 1
        assert 'marker-end="url(#arrowhead)"' in svg
        assert 'd="M 190 54 C 245 54, 245 54, 300 54"' in svg
        # Connections are drawn below nodes
        assert svg.index('class="connection"') < svg.index('class="node"')

    def test_curve_follows_moved_node(self):
        store = GraphStore()
        a = store.add_node('python', 'extract', 'cyan', Position(10, 10))
        b = store.add_node('sql', 'load', 'blue', Position(300, 10))
        store.add_connection(a.id, b.id)
        renderer = CanvasRenderer()

        store.move_node(b.id, Position(300, 200))
        assert 'd="M 190 54 C 245 54, 245 244, 300 244"' in renderer.render(store)

    def test_selection_and_pending_highlights(self):
        store = GraphStore()
        a = store.add_node('python', 'extract', 'cyan', Position(10, 10))
        b = store.add_node('sql', 'load', 'blue', Position(300, 10))

        svg = CanvasRenderer().render(store, selected_id=a.id, pending_source_id=b.id)
        assert svg.count('class="delete-control"') == 1
        assert svg.count('class="pending-ring"') == 1

        plain = CanvasRenderer().render(store)
        assert 'delete-control' not in plain
        assert 'pending-ring' not in plain

    def test_label_is_escaped_and_truncated(self):
        store = GraphStore()
        store.add_node('python', '<script>alert(1)</script>', 'cyan', Position(0, 0))
        svg = CanvasRenderer().render(store)
        assert '<script>' not in svg
        assert '&lt;script&gt;' in svg
        assert '…' in svg
