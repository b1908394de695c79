"""
canvas.py — SVG Renderers
==========================
Pure rendering functions: plain snapshot data → SVG string.

    render_bars(values)              – the sorting bars
    render_grid(grid_dict, color)    – the maze, expanded overlay and path

Both take the copies the Session stores in its frames (lists and
`Grid.to_dict()` output), never live engine objects.

Design decisions:
  - NO mutation.  These functions are stateless — the caller passes in
    everything it needs and gets back a string.
  - Colours live in CanvasConfig so the page theme stays in one place.
"""

from typing import Dict, List, Optional, Sequence


# ---------------------------------------------------------------------------
# Visual Config: colour palette, dimensions
# ---------------------------------------------------------------------------
class CanvasConfig:
    # bars
    bar_width_total: int = 640
    bar_height:      int = 200
    bar_gap:         int = 2
    bar_min_height:  int = 6
    bar_color:       str = "#4da3ff"
    bar_label_color: str = "#e6edf3"
    bar_label_size:  int = 10

    # grid
    cell_size:       int = 30
    bg:              str = "#0d1117"
    open_color:      str = "#0b2b3b"
    wall_color:      str = "#111111"
    start_color:     str = "#6bff8a"
    goal_color:      str = "#ff8c6a"
    path_color:      str = "#ff8c6a"
    default_visit:   str = "rgba(77,163,255,0.4)"
    grid_stroke:     str = "rgba(255,255,255,0.03)"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------
def render_bars(
    values: Sequence[float],
    height: Optional[int] = None,
    config: CanvasConfig = CONFIG,
    show_labels: bool = True,
) -> str:
    """One bar per value, scaled to the largest value."""
    height = height or config.bar_height
    width  = config.bar_width_total
    n      = len(values)
    parts  = [
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" class="bars">'
    ]
    if n == 0:
        parts.append("</svg>")
        return "".join(parts)

    top      = max(values) or 1
    slot     = width / n
    bar_w    = max(1.0, slot - config.bar_gap)
    labels   = show_labels and slot >= 14

    for i, v in enumerate(values):
        h = max(config.bar_min_height, round((v / top) * (height - 8)))
        x = i * slot
        y = height - h
        parts.append(
            f'<rect x="{x:.1f}" y="{y}" width="{bar_w:.1f}" height="{h}" '
            f'fill="{config.bar_color}" rx="2"/>'
        )
        if labels:
            parts.append(
                f'<text x="{x + bar_w / 2:.1f}" y="{height - 4}" text-anchor="middle" '
                f'font-size="{config.bar_label_size}" fill="{config.bar_label_color}">{v}</text>'
            )
    parts.append("</svg>")
    return "".join(parts)


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------
def render_grid(
    grid: Dict,
    visit_color: Optional[str] = None,
    config: CanvasConfig = CONFIG,
    cell_size: Optional[int] = None,
) -> str:
    """Walls, expanded-cell overlay (algorithm colour), path, start & goal markers."""
    px     = cell_size or config.cell_size
    rows   = grid["rows"]
    cols   = grid["cols"]
    start  = tuple(grid["start"])
    goal   = tuple(grid["goal"])
    visit  = visit_color or config.default_visit
    width, height = cols * px, rows * px

    parts = [
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" class="maze" data-cell="{px}" '
        f'style="background: {config.bg};">'
    ]
    for row in grid["cells"]:
        for cell in row:
            parts.append(_render_cell(cell, start, goal, visit, px, config))
    parts.append("</svg>")
    return "".join(parts)


def _render_cell(cell: Dict, start: tuple, goal: tuple, visit: str, px: int, config: CanvasConfig) -> str:
    r, c = cell["row"], cell["col"]
    x, y = c * px, r * px
    out: List[str] = [
        f'<rect x="{x}" y="{y}" width="{px}" height="{px}" '
        f'fill="{config.wall_color if cell["obstacle"] else config.open_color}" '
        f'stroke="{config.grid_stroke}" data-row="{r}" data-col="{c}"/>'
    ]
    if cell["expanded"]:
        out.append(f'<rect x="{x + 2}" y="{y + 2}" width="{px - 4}" height="{px - 4}" fill="{visit}"/>')

    marker = None
    if (r, c) == start:
        marker = config.start_color
    elif (r, c) == goal or cell["on_path"]:
        marker = config.goal_color if (r, c) == goal else config.path_color
    if marker:
        out.append(f'<rect x="{x + 4}" y="{y + 4}" width="{px - 8}" height="{px - 8}" fill="{marker}"/>')
    return "".join(out)
