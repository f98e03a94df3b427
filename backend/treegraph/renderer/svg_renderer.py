from html import escape

from treegraph.ir.tree import GraphLayout
from treegraph.visual.visual_style import VISUAL_STYLE


def render_svg(graph: GraphLayout) -> str:
    """Draw an already positioned GraphLayout. Node x/y are box centres."""
    node_style = VISUAL_STYLE["node"]
    edge_style = VISUAL_STYLE["edge"]
    bw = node_style["width"]
    bh = node_style["height"]

    w = graph.width
    h = graph.height

    svg = [
        f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" '
        f'xmlns="http://www.w3.org/2000/svg">'
    ]

    node_map = {n.id: n for n in graph.nodes}

    # Draw edges first
    for e in graph.edges:
        src = node_map.get(e.source)
        dst = node_map.get(e.target)
        if src is None or dst is None:
            continue

        svg.append(
            f'<line x1="{src.x}" y1="{src.y}" x2="{dst.x}" y2="{dst.y}" '
            f'stroke="{edge_style["stroke"]}" stroke-width="{edge_style["stroke_width"]}" '
            f'data-source="{escape(e.source)}" data-target="{escape(e.target)}"/>'
        )

    # Draw nodes
    for n in graph.nodes:
        label = escape(n.id)
        svg.append(
            f'<g class="node" data-id="{label}" data-depth="{n.depth}">'
        )
        # Hover popup: name, description, parent
        tooltip = f"{n.id}\n{n.description}"
        if n.parent_id:
            tooltip += f"\nParent: {n.parent_id}"
        svg.append(f"<title>{escape(tooltip)}</title>")

        svg.append(
            f'<rect x="{n.x - bw / 2}" y="{n.y - bh / 2}" '
            f'width="{bw}" height="{bh}" '
            f'rx="8" ry="8" fill="{n.color}" stroke="#333"/>'
        )

        svg.append(
            f'<text x="{n.x}" y="{n.y}" '
            f'text-anchor="middle" dominant-baseline="middle" '
            f'fill="{node_style["text_color"]}" '
            f'font-family="{node_style["font_family"]}" font-size="{node_style["font_size"]}">'
            f'{label}</text>'
        )
        svg.append("</g>")

    svg.append("</svg>")
    return "\n".join(svg)
