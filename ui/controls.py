"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • sort_panel          – algorithm dropdown, size slider, run / reset,
                          step mode / next step
  • maze_panel          – search buttons, generate / clear
  • race_panel          – two dropdowns, size, run / reset, winner line
  • speed_controls      – ×½ / ×2 buttons with the live multiplier
  • pseudocode_viewer   – lines of the selected algorithm

Design:
  - All panels are stateless render functions.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional

from algorithms import AlgoInfo
from config import DEFAULT_RACE_SIZE, DEFAULT_SORT_SIZE, MAX_SEQUENCE_SIZE, MIN_SEQUENCE_SIZE


def _options(algorithms: List[AlgoInfo], selected_key: str) -> str:
    out = []
    for algo in algorithms:
        sel = "selected" if algo.key == selected_key else ""
        out.append(f'<option value="{algo.key}" {sel}>{escape(algo.label)} — {escape(algo.complexity_time)}</option>')
    return "".join(out)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
def sort_panel(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble",
    size: int = DEFAULT_SORT_SIZE,
    step_mode: bool = False,
) -> str:
    step_label = "Step Mode ✓" if step_mode else "Step Mode"
    return f"""
    <div class="panel sort-panel">
      <h3>📊 Sorting</h3>
      <select id="sort-select">{_options(algorithms, selected_key)}</select>
      <label>Size: <input type="range" id="sort-size" min="{MIN_SEQUENCE_SIZE}" max="{MAX_SEQUENCE_SIZE}"
             value="{size}"> <span id="sort-size-val">{size}</span></label>
      <div class="button-row">
        <button id="btn-sort-run" class="btn-primary">▶ Run</button>
        <button id="btn-sort-reset">↺ Reset</button>
      </div>
      <div class="button-row">
        <button id="btn-step-mode">{step_label}</button>
        <button id="btn-sort-next" disabled>⏭ Next Step</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Maze
# ---------------------------------------------------------------------------
def maze_panel(algorithms: List[AlgoInfo]) -> str:
    buttons = "".join(
        f'<button class="btn-search" data-algo="{a.key}" style="border-color: {a.color};">{escape(a.label)}</button>'
        for a in algorithms
    )
    return f"""
    <div class="panel maze-panel">
      <h3>🧭 Maze</h3>
      <div class="button-row">{buttons}</div>
      <label>Walls: <input type="range" id="maze-density" min="0" max="0.5" step="0.02" value="0.28"></label>
      <div class="button-row">
        <button id="btn-maze-gen">🎲 Generate</button>
        <button id="btn-maze-clear">✖ Clear</button>
      </div>
      <p class="hint">Click a cell to toggle a wall (not while a search runs).</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Race
# ---------------------------------------------------------------------------
def race_panel(
    algorithms: List[AlgoInfo],
    left_key: str = "bubble",
    right_key: str = "bubble",
    size: int = DEFAULT_RACE_SIZE,
    announcement: str = "",
) -> str:
    return f"""
    <div class="panel race-panel">
      <h3>🏁 Race</h3>
      <select id="race-a">{_options(algorithms, left_key)}</select>
      <span>vs</span>
      <select id="race-b">{_options(algorithms, right_key)}</select>
      <label>Size: <input type="number" id="race-size" value="{size}"
             min="{MIN_SEQUENCE_SIZE}" max="{MAX_SEQUENCE_SIZE}"></label>
      <div class="button-row">
        <button id="btn-race-run" class="btn-primary">▶ Race</button>
        <button id="btn-race-reset">↺ Reset</button>
      </div>
      <div id="race-winner" class="winner">{escape(announcement)}</div>
    </div>
    """


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
def speed_controls(label: str = "1×") -> str:
    return f"""
    <div class="panel speed-controls">
      <h3>⏱ Speed</h3>
      <div class="button-row">
        <button id="btn-slower" data-factor="0.5">×½</button>
        <span id="speed-display">{escape(label)}</span>
        <button id="btn-faster" data-factor="2">×2</button>
      </div>
      <label><input type="checkbox" id="sound-toggle"> Sound</label>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
    algo_label: Optional[str] = "",
) -> str:
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        cls = "pc-line active" if i == current_line else "pc-line"
        lines_html.append(f'<div class="{cls}"><span class="pc-num">{i}</span>{escape(line)}</div>')
    return f"""
    <div class="panel pseudocode-viewer">
      <h3>📝 {escape(algo_label or "Pseudocode")}</h3>
      <div class="pc-body">{''.join(lines_html)}</div>
    </div>
    """
