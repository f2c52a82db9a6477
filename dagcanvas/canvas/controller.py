"""
Canvas Controller - single owner of canvas-level interaction state.

This controller coordinates between:
- Pointer events from the UI (already converted to canvas coordinates)
- Per-node interaction controllers (drag, anchor clicks, delete)
- The GraphStore, which is the only place graph data changes

Gesture disambiguation is done by explicit hit testing rather than by event
bubbling. Targets are tested in a fixed order: anchors, then the selected
node's delete control or node bodies (topmost first), then background.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from dagcanvas.graph import GraphStore, Node, Position
from dagcanvas.palette import NodeTemplate
from dagcanvas.canvas.constants import NODE_WIDTH, DROP_OFFSET_Y
from dagcanvas.canvas.geometry import (
    Point,
    input_anchor,
    output_anchor,
    node_rect,
    delete_control_rect,
    point_in_rect,
    point_on_anchor,
)
from dagcanvas.canvas.node_controller import NodeInteractionController, NodeIntents
from dagcanvas.canvas.renderer import CanvasRenderer

logger = logging.getLogger(__name__)

# Hit targets
OUTPUT_ANCHOR = "output_anchor"
INPUT_ANCHOR = "input_anchor"
DELETE_CONTROL = "delete_control"
NODE_BODY = "node_body"
BACKGROUND = "background"


@dataclass
class EditorState:
    """Transient interaction state, kept apart from the graph collections."""
    selected_id: Optional[str] = None
    pending_source_id: Optional[str] = None


@dataclass(frozen=True)
class Hit:
    target: str
    node_id: Optional[str] = None


class CanvasController:
    """Routes canvas gestures into GraphStore operations."""

    def __init__(self, store: Optional[GraphStore] = None,
                 renderer: Optional[CanvasRenderer] = None):
        self.store = store or GraphStore()
        self.renderer = renderer or CanvasRenderer()
        self.state = EditorState()
        self._node_controllers: Dict[str, NodeInteractionController] = {}
        self._press_consumed = False

    # --- Node controllers ---

    def node_controller(self, node_id: str) -> NodeInteractionController:
        controller = self._node_controllers.get(node_id)
        if controller is None:
            controller = NodeInteractionController(node_id, NodeIntents(
                on_select=self.select,
                on_move=self.move_node,
                on_begin_connection=self.begin_connection,
                on_end_connection=self.end_connection,
                on_delete=self.delete_node,
            ))
            self._node_controllers[node_id] = controller
        return controller

    @property
    def dragging_node_id(self) -> Optional[str]:
        for node_id, controller in self._node_controllers.items():
            if controller.is_dragging:
                return node_id
        return None

    # --- Commands ---

    def drop(self, template: NodeTemplate, pointer: Point,
             canvas_offset: Point = (0.0, 0.0)) -> Node:
        """Create a node from a palette template, centered under the pointer."""
        x = pointer[0] - canvas_offset[0] - NODE_WIDTH / 2
        y = pointer[1] - canvas_offset[1] - DROP_OFFSET_Y
        return self.store.add_node(template.kind, template.label, template.color, Position(x, y))

    def select(self, node_id: Optional[str]) -> None:
        self.state.selected_id = node_id

    def move_node(self, node_id: str, position: Position) -> None:
        self.store.move_node(node_id, position)

    def delete_node(self, node_id: str) -> None:
        self.store.delete_node(node_id)
        controller = self._node_controllers.pop(node_id, None)
        if controller is not None:
            controller.reset()
        if self.state.selected_id == node_id:
            self.state.selected_id = None
        if self.state.pending_source_id == node_id:
            self.state.pending_source_id = None

    def begin_connection(self, node_id: str) -> None:
        self.state.pending_source_id = node_id
        logger.debug(f"Pending connection from {node_id}")

    def end_connection(self, node_id: str) -> None:
        """Complete a connection from the pending source; always clears it."""
        source = self.state.pending_source_id
        if source is None:
            logger.debug(f"end_connection on {node_id} ignored: no pending source")
            return
        self.store.add_connection(source, node_id)
        self.state.pending_source_id = None

    def background_click(self) -> None:
        """Click on empty canvas: abandon selection and any pending connection."""
        self.state.selected_id = None
        self.state.pending_source_id = None

    def clear(self) -> None:
        """Empty the graph and reset every piece of transient state."""
        self.store.clear()
        for controller in self._node_controllers.values():
            controller.reset()
        self._node_controllers = {}
        self.state = EditorState()
        self._press_consumed = False

    # --- Hit testing ---

    def hit_test(self, point: Point) -> Hit:
        topmost_first = list(reversed(self.store.nodes))

        for node in topmost_first:
            if point_on_anchor(point, output_anchor(node.position)):
                return Hit(OUTPUT_ANCHOR, node.id)
            if point_on_anchor(point, input_anchor(node.position)):
                return Hit(INPUT_ANCHOR, node.id)

        # The delete control lies inside its node, so a body stacked above
        # the selected node hides it.
        for node in topmost_first:
            if node.id == self.state.selected_id and point_in_rect(point, delete_control_rect(node.position)):
                return Hit(DELETE_CONTROL, node.id)
            if point_in_rect(point, node_rect(node.position)):
                return Hit(NODE_BODY, node.id)

        return Hit(BACKGROUND)

    # --- Pointer dispatch ---

    def pointer_down(self, point: Point) -> Hit:
        hit = self.hit_test(point)
        self._press_consumed = False
        if hit.target == NODE_BODY:
            node = self.store.get_node(hit.node_id)
            self._press_consumed = self.node_controller(hit.node_id).press(
                Position(*point), node.position
            )
        return hit

    def pointer_move(self, point: Point) -> None:
        pointer = Position(*point)
        for controller in list(self._node_controllers.values()):
            controller.move(pointer)

    def pointer_up(self, point: Point) -> None:
        for controller in self._node_controllers.values():
            controller.release()

    def click(self, point: Point) -> Hit:
        hit = self.hit_test(point)
        press_consumed, self._press_consumed = self._press_consumed, False
        if press_consumed:
            # Trailing click of a press or drag on a node body
            return hit

        if hit.target == OUTPUT_ANCHOR:
            self.node_controller(hit.node_id).click_output()
        elif hit.target == INPUT_ANCHOR:
            self.node_controller(hit.node_id).click_input()
        elif hit.target == DELETE_CONTROL:
            self.node_controller(hit.node_id).click_delete()
        elif hit.target == BACKGROUND:
            self.background_click()
        return hit

    # --- Rendering ---

    def render(self) -> str:
        return self.renderer.render(
            self.store,
            selected_id=self.state.selected_id,
            pending_source_id=self.state.pending_source_id,
        )

    def summary(self) -> Dict[str, object]:
        summary = self.store.summary()
        summary["pending_source"] = self.state.pending_source_id
        return summary
