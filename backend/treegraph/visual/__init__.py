# Visual module
# Keeps coordinate computation separate from drawing: everything here
# produces data, the renderer package consumes it.

from treegraph.visual.visual_style import DEPTH_PALETTE, VISUAL_STYLE, color_token
from treegraph.visual.tree_layout import TreeLayout, NetworkxTreeLayout
from treegraph.visual.projector import LayoutProjector, project_tree
from treegraph.visual.visual_mapper import map_rows_to_visual

__all__ = [
    "DEPTH_PALETTE",
    "VISUAL_STYLE",
    "color_token",
    "TreeLayout",
    "NetworkxTreeLayout",
    "LayoutProjector",
    "project_tree",
    "map_rows_to_visual",
]
