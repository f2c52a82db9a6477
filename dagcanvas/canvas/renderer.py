"""
Canvas renderer that produces SVG markup for the current graph.

The output is the inner content of an SVG element (it is handed to NiceGUI's
interactive_image as `content`). It contains, bottom to top:
  - a grid background
  - one cubic curve per connection, ending in an arrow marker
  - one box per node (header with label, kind badge, input/output anchors)
  - or, when there are no nodes, a placeholder hint

Connection geometry is recomputed from live node positions on every call.

Node colors are opaque tags. Hex / rgb() / hsl() values are used as-is, known
color names (and 'bg-<name>-600' style tags) map to a fill, anything else is
drawn in a neutral slate.
"""

import re
from html import escape
from typing import List, Optional

from dagcanvas.graph import GraphStore, Node
from dagcanvas.canvas.constants import (
    NODE_WIDTH,
    NODE_HEIGHT,
    NODE_HEADER_HEIGHT,
    ANCHOR_RADIUS,
    CONNECTION_COLOR,
    CONNECTION_WIDTH,
)
from dagcanvas.canvas.geometry import (
    connection_path,
    delete_control_rect,
    input_anchor,
    output_anchor,
)

_DEFAULT_FILL = "#475569"  # slate-600

TAG_COLORS = {
    "cyan": "#0891b2",
    "emerald": "#059669",
    "blue": "#2563eb",
    "orange": "#ea580c",
    "amber": "#d97706",
    "purple": "#9333ea",
    "pink": "#db2777",
    "indigo": "#4f46e5",
    "slate": "#475569",
    "gray": "#4b5563",
    "red": "#dc2626",
    "green": "#16a34a",
    "teal": "#0d9488",
    "violet": "#7c3aed",
    "yellow": "#ca8a04",
}

_CSS_COLOR = re.compile(r"^(#[0-9a-fA-F]{3,8}|(rgb|rgba|hsl|hsla)\([0-9.,%\s]+\))$")
_TAILWIND_BG = re.compile(r"^bg-([a-z]+)-\d{2,3}$")

EMPTY_HINT_TITLE = "Drag operators here to build your DAG"
EMPTY_HINT_SUBTITLE = "Connect tasks to define dependencies"

MAX_LABEL_CHARS = 18


def fill_for_color(color: Optional[str]) -> str:
    """Resolve an opaque color tag to an SVG fill."""
    tag = (color or "").strip()
    if _CSS_COLOR.match(tag):
        return tag
    match = _TAILWIND_BG.match(tag)
    if match:
        tag = match.group(1)
    return TAG_COLORS.get(tag.lower(), _DEFAULT_FILL)


def _truncate(text: str, limit: int = MAX_LABEL_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit - 1] + "…"


class CanvasRenderer:
    """Build the SVG content for a GraphStore plus the editor's highlight state."""

    def __init__(self, width: int = 1600, height: int = 1000, grid_size: int = 24):
        self.width = width
        self.height = height
        self.grid_size = grid_size

    def render(self, store: GraphStore, selected_id: Optional[str] = None,
               pending_source_id: Optional[str] = None) -> str:
        parts = [self._defs(), self._grid()]
        nodes = store.nodes
        if not nodes:
            parts.append(self._empty_hint())
            return "\n".join(parts)

        parts.extend(self.render_connections(store))
        for node in nodes:
            parts.append(self.render_node(
                node,
                is_selected=node.id == selected_id,
                is_pending_source=node.id == pending_source_id,
            ))
        return "\n".join(parts)

    def render_connections(self, store: GraphStore) -> List[str]:
        by_id = {node.id: node for node in store.nodes}
        paths = []
        for conn in store.connections:
            source, target = by_id.get(conn.source), by_id.get(conn.target)
            if source is None or target is None:
                continue
            paths.append(
                f'<path class="connection" data-id="{escape(conn.id)}" '
                f'd="{connection_path(source, target)}" stroke="{CONNECTION_COLOR}" '
                f'stroke-width="{CONNECTION_WIDTH}" fill="none" opacity="0.8" '
                f'marker-end="url(#arrowhead)" />'
            )
        return paths

    def render_node(self, node: Node, is_selected: bool = False,
                    is_pending_source: bool = False) -> str:
        x, y = node.position.x, node.position.y
        fill = fill_for_color(node.color)
        border = "#06b6d4" if is_selected else "#cbd5e1"
        in_x, in_y = input_anchor(node.position)
        out_x, out_y = output_anchor(node.position)

        parts = [f'<g class="node" data-id="{escape(node.id)}">']
        if is_pending_source:
            parts.append(
                f'<rect class="pending-ring" x="{x - 4}" y="{y - 4}" '
                f'width="{NODE_WIDTH + 8}" height="{NODE_HEIGHT + 8}" rx="10" '
                f'fill="none" stroke="#22d3ee" stroke-width="2" />'
            )
        parts.append(
            f'<rect x="{x}" y="{y}" width="{NODE_WIDTH}" height="{NODE_HEIGHT}" rx="8" '
            f'fill="#ffffff" stroke="{border}" stroke-width="2" />'
        )
        parts.append(
            f'<rect x="{x}" y="{y}" width="{NODE_WIDTH}" height="{NODE_HEADER_HEIGHT}" rx="8" '
            f'fill="{fill}" />'
        )
        parts.append(
            f'<text x="{x + 16}" y="{y + NODE_HEADER_HEIGHT / 2 + 5}" fill="#ffffff" '
            f'font-size="14">{escape(_truncate(node.label))}</text>'
        )
        parts.append(
            f'<text x="{x + 16}" y="{y + NODE_HEADER_HEIGHT + 28}" fill="#475569" '
            f'font-size="12">{escape(node.kind)}</text>'
        )
        if is_selected:
            dx, dy, dw, dh = delete_control_rect(node.position)
            parts.append(
                f'<g class="delete-control"><rect x="{dx}" y="{dy}" width="{dw}" height="{dh}" '
                f'rx="4" fill="#ffffff" fill-opacity="0.2" />'
                f'<text x="{dx + dw / 2}" y="{dy + dh / 2 + 5}" fill="#ffffff" '
                f'font-size="14" text-anchor="middle">×</text></g>'
            )
        for cls, (ax, ay) in (("input-anchor", (in_x, in_y)), ("output-anchor", (out_x, out_y))):
            parts.append(
                f'<circle class="{cls}" cx="{ax}" cy="{ay}" r="{ANCHOR_RADIUS}" '
                f'fill="#ffffff" stroke="#94a3b8" stroke-width="2" />'
            )
        parts.append("</g>")
        return "".join(parts)

    def _defs(self) -> str:
        return (
            '<defs>'
            '<marker id="arrowhead" markerWidth="10" markerHeight="10" refX="9" refY="3" orient="auto">'
            f'<polygon points="0 0, 10 3, 0 6" fill="{CONNECTION_COLOR}" />'
            '</marker>'
            f'<pattern id="grid" width="{self.grid_size}" height="{self.grid_size}" '
            'patternUnits="userSpaceOnUse">'
            f'<path d="M {self.grid_size} 0 L 0 0 0 {self.grid_size}" fill="none" '
            'stroke="#e2e8f0" stroke-width="1" />'
            '</pattern>'
            '</defs>'
        )

    def _grid(self) -> str:
        return f'<rect class="grid" width="{self.width}" height="{self.height}" fill="url(#grid)" />'

    def _empty_hint(self) -> str:
        cx, cy = self.width / 2, self.height / 2
        return (
            f'<g class="empty-hint">'
            f'<text x="{cx}" y="{cy}" fill="#94a3b8" font-size="16" text-anchor="middle">'
            f'{EMPTY_HINT_TITLE}</text>'
            f'<text x="{cx}" y="{cy + 24}" fill="#cbd5e1" font-size="13" text-anchor="middle">'
            f'{EMPTY_HINT_SUBTITLE}</text>'
            f'</g>'
        )
