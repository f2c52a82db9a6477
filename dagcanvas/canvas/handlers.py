"""
Canvas Handlers - Event handlers wiring NiceGUI events to the CanvasController.

This module keeps payload normalisation and event routing out of app.py so the
page only deals with layout. Every handler runs one controller operation to
completion and then refreshes the view.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from dagcanvas.palette import NodeTemplate, template_from_dict
from dagcanvas.canvas.controller import CanvasController

logger = logging.getLogger(__name__)


def parse_template_payload(raw: Any) -> Optional[NodeTemplate]:
    """
    Parse a palette drag payload into a template.

    Accepts a mapping or its JSON string. Returns None for anything that
    cannot be understood; callers ignore such drops.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug(f"Ignoring unparseable drop payload: {raw!r}")
            return None
    template = template_from_dict(raw)
    if template is None:
        logger.debug(f"Ignoring malformed drop payload: {raw!r}")
    return template


def normalize_pointer(raw: Any) -> Optional[Tuple[float, float]]:
    """
    Extract canvas coordinates from the various event shapes we receive.

    Supports NiceGUI MouseEventArguments (image_x / image_y), dicts with
    offsetX / offsetY or x / y, and plain 2-element sequences.
    """
    if hasattr(raw, 'image_x') and hasattr(raw, 'image_y'):
        x, y = raw.image_x, raw.image_y
    elif isinstance(raw, dict):
        x = raw.get('offsetX', raw.get('x'))
        y = raw.get('offsetY', raw.get('y'))
    elif isinstance(raw, (list, tuple)) and len(raw) >= 2:
        x, y = raw[0], raw[1]
    else:
        return None

    try:
        return float(x), float(y)
    except (TypeError, ValueError):
        return None


def drop_to_canvas(args: Dict[str, Any], canvas_size: Tuple[float, float]) -> Optional[Tuple[float, float]]:
    """
    Convert a drop's viewport coordinates into canvas units.

    The canvas image may be shown at a different CSS size than its canvas
    size, so the offset inside the image is scaled by canvas size / shown size,
    the same way interactive_image scales its own mouse events.
    """
    pointer = normalize_pointer({'x': args.get('clientX'), 'y': args.get('clientY')})
    if pointer is None:
        return None
    left, top = normalize_pointer({'x': args.get('left', 0), 'y': args.get('top', 0)}) or (0.0, 0.0)

    scale_x = scale_y = 1.0
    shown = normalize_pointer({'x': args.get('width'), 'y': args.get('height')})
    if shown and shown[0] > 0 and shown[1] > 0:
        scale_x = canvas_size[0] / shown[0]
        scale_y = canvas_size[1] / shown[1]
    return (pointer[0] - left) * scale_x, (pointer[1] - top) * scale_y


def setup_canvas_handlers(controller: CanvasController, refresh: Callable[[], None]) -> Dict[str, Callable]:
    """
    Set up all canvas event handlers.

    Args:
        controller: CanvasController owning the graph and editor state
        refresh: Function re-rendering the canvas and status line

    Returns:
        Dict with handler functions for binding to UI events
    """

    def handle_mouse(event):
        """Route an interactive_image mouse event by its type."""
        point = normalize_pointer(event)
        if point is None:
            return
        event_type = getattr(event, 'type', None)

        if event_type == 'mousedown':
            controller.pointer_down(point)
        elif event_type == 'mousemove':
            if controller.dragging_node_id is None:
                return
            if getattr(event, 'buttons', None) == 0:
                # Button was released outside the canvas
                controller.pointer_up(point)
            else:
                controller.pointer_move(point)
        elif event_type == 'mouseup':
            controller.pointer_up(point)
        elif event_type == 'click':
            controller.click(point)
        else:
            return
        refresh()

    def handle_drop(event):
        """Create a node from a palette drop. Malformed payloads are ignored."""
        args = event.args if hasattr(event, 'args') else event
        if not isinstance(args, dict):
            return

        template = parse_template_payload(args.get('payload'))
        pointer = drop_to_canvas(args, (controller.renderer.width, controller.renderer.height))
        if template is None or pointer is None:
            return

        controller.drop(template, pointer)
        refresh()

    def handle_release(event=None):
        """Document-level mouseup: ends a drag released anywhere on the page."""
        if controller.dragging_node_id is None:
            return
        controller.pointer_up((0.0, 0.0))
        refresh()

    def handle_clear():
        controller.clear()
        refresh()

    return {
        'handle_mouse': handle_mouse,
        'handle_drop': handle_drop,
        'handle_release': handle_release,
        'handle_clear': handle_clear,
    }
