"""
ui/
---
Presentation layer.

    from ui import render_bars, render_grid
    from ui import sort_panel, maze_panel, race_panel, …
"""

from ui.audio import Tone, tone_for_value
from ui.canvas import render_bars, render_grid, CanvasConfig

from ui.controls import (
    sort_panel,
    maze_panel,
    race_panel,
    speed_controls,
    pseudocode_viewer,
)

__all__ = [
    "Tone",
    "tone_for_value",
    "render_bars",
    "render_grid",
    "CanvasConfig",
    "sort_panel",
    "maze_panel",
    "race_panel",
    "speed_controls",
    "pseudocode_viewer",
]
