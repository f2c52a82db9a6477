"""
Interactive canvas for the DAG editor.

This package provides the editing interactions on top of the GraphStore:
- CanvasController: pending connection, selection, hit testing and dispatch
- NodeInteractionController: per-node drag and anchor clicks
- CanvasRenderer: SVG markup for nodes and connection curves
- canvas handlers: NiceGUI event handlers for app.py integration

Usage:
    from dagcanvas.canvas import CanvasController, CanvasRenderer
    from dagcanvas.canvas.handlers import setup_canvas_handlers
"""

from dagcanvas.canvas.constants import (
    NODE_WIDTH,
    NODE_HEIGHT,
    DROP_OFFSET_Y,
    ANCHOR_RADIUS,
)
from dagcanvas.canvas.node_controller import NodeInteractionController, NodeIntents
from dagcanvas.canvas.renderer import CanvasRenderer
from dagcanvas.canvas.controller import CanvasController, EditorState, Hit
from dagcanvas.canvas.handlers import setup_canvas_handlers

__all__ = [
    'CanvasController',
    'EditorState',
    'Hit',
    'NodeInteractionController',
    'NodeIntents',
    'CanvasRenderer',
    'setup_canvas_handlers',
    'NODE_WIDTH',
    'NODE_HEIGHT',
    'DROP_OFFSET_Y',
    'ANCHOR_RADIUS',
]
