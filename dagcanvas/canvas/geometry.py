"""
Geometry helpers for the canvas.

Everything is derived from a node's current position on every call; no
anchor or curve geometry is ever stored on nodes or connections.
"""

import math
from typing import Tuple

from dagcanvas.graph import Node, Position
from dagcanvas.canvas.constants import (
    NODE_WIDTH,
    NODE_HEIGHT,
    ANCHOR_RADIUS,
    DELETE_CONTROL_SIZE,
    DELETE_CONTROL_MARGIN,
    NODE_HEADER_HEIGHT,
)

Point = Tuple[float, float]
Rect = Tuple[float, float, float, float]  # x, y, width, height


def input_anchor(position: Position) -> Point:
    """Left-center of the node box."""
    return (position.x, position.y + NODE_HEIGHT / 2)


def output_anchor(position: Position) -> Point:
    """Right-center of the node box."""
    return (position.x + NODE_WIDTH, position.y + NODE_HEIGHT / 2)


def node_rect(position: Position) -> Rect:
    return (position.x, position.y, NODE_WIDTH, NODE_HEIGHT)


def delete_control_rect(position: Position) -> Rect:
    """Delete button, vertically centered in the header at the right edge."""
    x = position.x + NODE_WIDTH - DELETE_CONTROL_MARGIN - DELETE_CONTROL_SIZE
    y = position.y + (NODE_HEADER_HEIGHT - DELETE_CONTROL_SIZE) / 2
    return (x, y, DELETE_CONTROL_SIZE, DELETE_CONTROL_SIZE)


def point_in_rect(point: Point, rect: Rect) -> bool:
    px, py = point
    x, y, w, h = rect
    return x <= px <= x + w and y <= py <= y + h


def distance(a: Point, b: Point) -> float:
    return math.sqrt((a[0] - b[0])**2 + (a[1] - b[1])**2)


def point_on_anchor(point: Point, anchor: Point) -> bool:
    return distance(point, anchor) <= ANCHOR_RADIUS


def curve_control_points(start: Point, end: Point) -> Tuple[Point, Point]:
    """
    Control points for a left-to-right connection curve.

    Both sit horizontally halfway between the anchors, each at the height of
    its own anchor, so the curve leaves and enters horizontally.
    """
    mid_x = (start[0] + end[0]) / 2
    return (mid_x, start[1]), (mid_x, end[1])


def connection_path(source: Node, target: Node) -> str:
    """SVG path data for a connection between two live nodes."""
    start = output_anchor(source.position)
    end = input_anchor(target.position)
    c1, c2 = curve_control_points(start, end)
    return (
        f"M {_fmt(start[0])} {_fmt(start[1])} "
        f"C {_fmt(c1[0])} {_fmt(c1[1])}, {_fmt(c2[0])} {_fmt(c2[1])}, "
        f"{_fmt(end[0])} {_fmt(end[1])}"
    )


def _fmt(value: float) -> str:
    """Compact number formatting for SVG attributes (10.0 -> '10')."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0")
