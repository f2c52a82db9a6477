"""
Shared constants for the canvas.

These values are used by both geometry/hit testing and the SVG renderer.
Keep them in sync!
"""

# Rendered node box, in canvas pixels
NODE_WIDTH = 180.0
NODE_HEIGHT = 88.0

# Header strip carrying the label and the delete control
NODE_HEADER_HEIGHT = 40.0

# Drop placement: pointer is moved left by half a node and up by this much
DROP_OFFSET_Y = 40.0

# Radius in pixels of the clickable input/output anchors
ANCHOR_RADIUS = 12.0

# Square delete control in the header of the selected node
DELETE_CONTROL_SIZE = 24.0
DELETE_CONTROL_MARGIN = 8.0

CONNECTION_COLOR = "#06b6d4"
CONNECTION_WIDTH = 3
