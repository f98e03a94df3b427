DEPTH_PALETTE = (
    "#4CAF50",  # root
    "#2196F3",
    "#FFC107",
    "#9C27B0",
    "#FF5722",
)

VISUAL_STYLE = {
    "node": {
        "shape": "rounded_rect",
        "width": 120,
        "height": 40,
        "text_color": "#FFFFFF",
        "font_family": "Arial",
        "font_size": 14,
    },
    "edge": {
        "stroke": "#999999",
        "stroke_width": 2,
    },
}


def color_token(depth: int) -> str:
    """Colour for a node at *depth*; cycles through DEPTH_PALETTE."""
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    return DEPTH_PALETTE[depth % len(DEPTH_PALETTE)]
