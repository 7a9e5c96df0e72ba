# Plan tree -> SVG wireframe output
from html import escape
from typing import Dict, Any, List, Optional, Tuple

from uiplan.errors import UnknownComponent
from uiplan.schema import DEFAULT_WHITELIST, ComponentWhitelist, LayoutNode, Plan, children_of

# One fill per whitelisted kind; nothing else can be drawn
DEFAULT_COLORS = {
    "ColumnLayout": "#f8f9fa",
    "RowLayout": "#f1f3f5",
    "GridLayout": "#e9ecef",
    "Button": "#f5c16c",
    "Card": "#ffffff",
    "Input": "#d3f8e2",
    "Table": "#b8c0ff",
    "Modal": "#d0bdf4",
    "Sidebar": "#9bd3f0",
    "Navbar": "#b9e6a4",
    "Chart": "#f4bfbf",
}

TARGET_SVG_WIDTH = 800
LEAF_HEIGHT = 40
HEADER_HEIGHT = 26
DEFAULT_SPACING = 8
MAX_SPACING = 24


def _spacing(node, key: str) -> float:
    value = node.props.get(key, DEFAULT_SPACING) if isinstance(node, LayoutNode) else DEFAULT_SPACING
    return max(0, min(float(value), MAX_SPACING))


def _grid_columns(node) -> int:
    return max(1, int(node.props.get("columns", 2)))


def _measure(node) -> float:
    """Height of a node's box; widths are handed down by the parent."""
    children = children_of(node)
    if not children:
        return LEAF_HEIGHT
    pad, gap = _spacing(node, "padding"), _spacing(node, "gap")
    heights = [_measure(c) for c in children]
    top = pad if isinstance(node, LayoutNode) else HEADER_HEIGHT
    if node.kind == "RowLayout":
        return top + max(heights) + pad
    if node.kind == "GridLayout":
        cols = _grid_columns(node)
        rows = [heights[i:i + cols] for i in range(0, len(heights), cols)]
        return top + sum(max(r) for r in rows) + gap * (len(rows) - 1) + pad
    return top + sum(heights) + gap * (len(heights) - 1) + pad


def _child_boxes(node, x: float, y: float, w: float) -> List[Tuple[Any, float, float, float, float]]:
    children = children_of(node)
    pad, gap = _spacing(node, "padding"), _spacing(node, "gap")
    top = y + (pad if isinstance(node, LayoutNode) else HEADER_HEIGHT)
    inner_w = w - 2 * pad
    boxes = []

    if node.kind == "RowLayout":
        cw = (inner_w - gap * (len(children) - 1)) / len(children)
        h = max(_measure(c) for c in children)
        for i, c in enumerate(children):
            boxes.append((c, x + pad + i * (cw + gap), top, cw, h))
    elif node.kind == "GridLayout":
        cols = _grid_columns(node)
        cw = (inner_w - gap * (cols - 1)) / cols
        row_y = top
        for start in range(0, len(children), cols):
            row = children[start:start + cols]
            h = max(_measure(c) for c in row)
            for i, c in enumerate(row):
                boxes.append((c, x + pad + i * (cw + gap), row_y, cw, h))
            row_y += h + gap
    else:
        cy = top
        for c in children:
            h = _measure(c)
            boxes.append((c, x + pad, cy, inner_w, h))
            cy += h + gap
    return boxes


def _label_for(node) -> str:
    for key in ("title", "label", "placeholder"):
        value = node.props.get(key)
        if isinstance(value, str) and value:
            return f"{node.kind}: {value}"
    return node.kind


def _draw(node, x, y, w, h, svg: List[str], whitelist: ComponentWhitelist):
    if not whitelist.allows(node.kind) or node.kind not in DEFAULT_COLORS:
        raise UnknownComponent(node.kind, node.id, "cannot be rendered")

    dashed = ' stroke-dasharray="6 4"' if isinstance(node, LayoutNode) else ""
    svg.append(f'<rect x="{x:.1f}" y="{y:.1f}" width="{w:.1f}" height="{h:.1f}" fill="{DEFAULT_COLORS[node.kind]}" '
               f'stroke="#333" stroke-width="1.5" rx="4" ry="4"{dashed} data-node-id="{escape(node.id)}"/>')
    label_y = y + (HEADER_HEIGHT / 2 if children_of(node) else h / 2)
    svg.append(f'<text x="{x + 8:.1f}" y="{label_y:.1f}" class="label">{escape(_label_for(node))}</text>')

    for child, cx, cy, cw, ch in _child_boxes(node, x, y, w):
        _draw(child, cx, cy, cw, ch, svg, whitelist)


def render_svg(plan: Plan, padding: int = 20, whitelist: Optional[ComponentWhitelist] = None) -> str:
    whitelist = whitelist or DEFAULT_WHITELIST
    root = plan.root
    W = TARGET_SVG_WIDTH
    H = _measure(root)
    width_px = int(W + padding * 2)
    height_px = int(H + padding * 2)

    svg = []
    svg.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{width_px}" height="{height_px}" viewBox="0 0 {width_px} {height_px}">')

    # --- Styles ---
    svg.append('''<style>
        .label { font-family: Inter, system-ui, sans-serif; font-size: 12px; fill: #111; dominant-baseline: middle; }
    </style>''')

    svg.append(f'<rect x="0" y="0" width="{width_px}" height="{height_px}" fill="#ffffff" />')
    _draw(root, padding, padding, W, H, svg, whitelist)

    svg.append("</svg>")
    return "".join(svg)


def render_summary(plan: Plan) -> Dict[str, Any]:
    counts: Dict[str, int] = {}
    stack = [plan.root]
    while stack:
        node = stack.pop()
        counts[node.kind] = counts.get(node.kind, 0) + 1
        stack.extend(children_of(node))
    return {"root": plan.root.id, "counts": dict(sorted(counts.items()))}
