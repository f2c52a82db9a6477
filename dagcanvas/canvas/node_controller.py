"""
Node Interaction Controller - per-node gesture handling.

Each node on the canvas gets one controller. It only remembers whether the
node is being dragged and where inside the node the pointer grabbed it.
Selection and pending-connection flags belong to the canvas; this class
reports intents through callbacks and never stores them.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from dagcanvas.graph import Position

IDLE = "idle"
DRAGGING = "dragging"


@dataclass
class NodeIntents:
    """Callbacks a node controller reports to (all receive the node id)."""
    on_select: Callable[[str], None]
    on_move: Callable[[str, Position], None]
    on_begin_connection: Callable[[str], None]
    on_end_connection: Callable[[str], None]
    on_delete: Callable[[str], None]


class NodeInteractionController:
    """Drag and anchor handling for a single node: idle -> dragging -> idle."""

    def __init__(self, node_id: str, intents: NodeIntents):
        self.node_id = node_id
        self._intents = intents
        self._mode = IDLE
        self._offset: Optional[Position] = None

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def is_dragging(self) -> bool:
        return self._mode == DRAGGING

    def press(self, pointer: Position, node_position: Position) -> bool:
        """
        Pointer pressed on the node body.

        Records the grab offset, selects the node and starts dragging.
        Returns True: the press is consumed and must not reach the canvas.
        """
        self._offset = Position(pointer.x - node_position.x, pointer.y - node_position.y)
        self._mode = DRAGGING
        self._intents.on_select(self.node_id)
        return True

    def move(self, pointer: Position) -> None:
        # Every move is forwarded; no coalescing.
        if self._mode != DRAGGING or self._offset is None:
            return
        new_position = Position(pointer.x - self._offset.x, pointer.y - self._offset.y)
        self._intents.on_move(self.node_id, new_position)

    def release(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._mode = IDLE
        self._offset = None

    def click_output(self) -> bool:
        self._intents.on_begin_connection(self.node_id)
        return True

    def click_input(self) -> bool:
        self._intents.on_end_connection(self.node_id)
        return True

    def click_delete(self) -> bool:
        self._intents.on_delete(self.node_id)
        return True
