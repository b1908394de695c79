"""
main.py — Algorithm Animator Flask App
========================================
The web server that powers the animator.

Routes:
  GET  /                       – main UI
  GET  /api/state              – snapshot of every panel + rendered SVG (polled)
  GET  /api/pseudocode/<key>   – pseudocode panel for one algorithm
  POST /api/sort/start         – {"algorithm", "size"?}
  POST /api/sort/reset         – {"size"?}
  POST /api/sort/step-mode     – {"on"}       (hold the sort after every step)
  POST /api/sort/next          – release one held step
  POST /api/search/start       – {"algorithm"}
  POST /api/grid/generate      – {"density"?}
  POST /api/grid/clear
  POST /api/grid/toggle        – {"row", "col"}
  POST /api/speed              – {"factor"}   (2 = faster, 0.5 = slower)
  POST /api/race/start         – {"a", "b", "size"?}
  POST /api/race/reset         – {"size"?}

State management:
  One process-wide Session lives on a BackgroundLoop (an asyncio loop in a
  daemon thread).  Request handlers marshal every call onto that loop with
  `bg.call(...)`, so the animations keep running between requests and
  every read sees a whole step.

  Operations the Session rejects (a run is already active, a wall edit
  during a search) answer {"accepted": false} with HTTP 200; unknown
  algorithms and malformed numbers answer HTTP 400.
"""

from flask import Flask, render_template_string, request, jsonify
import logging
import sys
import os

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from algorithms import AlgorithmKind, UnsupportedAlgorithmError, algorithms_by_kind, get_algorithm
from config import DEFAULT_OBSTACLE_DENSITY, ServerConfig
from engine import BackgroundLoop, Session
from ui import (
    render_bars,
    render_grid,
    sort_panel,
    maze_panel,
    race_panel,
    speed_controls,
    pseudocode_viewer,
)


logger = logging.getLogger(__name__)


class InvalidInput(ValueError):
    """A request field is missing or not a usable number."""


# ---------------------------------------------------------------------------
# Request Helpers
# ---------------------------------------------------------------------------
def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int(data: dict, key: str, default=None):
    value = data.get(key, default)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{key} must be an integer, got {value!r}") from None


def _float(data: dict, key: str, default=None, positive: bool = False):
    value = data.get(key, default)
    if value is None:
        raise InvalidInput(f"{key} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{key} must be a number, got {value!r}") from None
    if number != number or (positive and number <= 0):
        raise InvalidInput(f"{key} must be a positive number, got {value!r}")
    return number


def _bool(data: dict, key: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise InvalidInput(f"{key} must be true or false, got {value!r}")
    return value


def _required(data: dict, key: str) -> str:
    value = data.get(key)
    if not value:
        raise InvalidInput(f"{key} is required")
    return str(value)


def render_state(snapshot: dict) -> dict:
    """Attach the SVG for each panel to a Session snapshot."""
    grid_algo = snapshot["grid"]["algorithm"]
    left_key, right_key = snapshot["race"]["algorithms"]
    snapshot["svg"] = {
        "sort":       render_bars(snapshot["sort"]["values"]),
        "grid":       render_grid(snapshot["grid"]["state"], get_algorithm(grid_algo).color if grid_algo else None),
        "race_left":  _render_race_side(snapshot["race"]["left"], left_key),
        "race_right": _render_race_side(snapshot["race"]["right"], right_key),
    }
    snapshot["pseudocode"] = {"grid": _render_search_pseudocode(snapshot["grid"])}
    return snapshot


def _render_search_pseudocode(grid: dict) -> str:
    if not grid["algorithm"]:
        return ""
    info = get_algorithm(grid["algorithm"])
    return pseudocode_viewer(info.pseudocode, grid["pseudocode_line"], algo_label=info.label)


def _render_race_side(state: dict, algo_key: str) -> str:
    if "values" in state:
        return render_bars(state["values"], height=160, show_labels=False)
    return render_grid(state, get_algorithm(algo_key).color, cell_size=18)


# ---------------------------------------------------------------------------
# App Factory
# ---------------------------------------------------------------------------
def create_app(session: Session = None, bg: BackgroundLoop = None) -> Flask:
    """
    Build the Flask app around one Session.  Tests pass their own Session
    (with a fake sleep) and BackgroundLoop and stop the loop afterwards.
    """
    bg = bg or BackgroundLoop()
    bg.start()
    session = session or Session()

    app = Flask(__name__)
    app.config["ANIMATOR_SESSION"] = session
    app.config["BACKGROUND"] = bg

    # -----------------------------------------------------------------------
    # Errors
    # -----------------------------------------------------------------------
    @app.errorhandler(UnsupportedAlgorithmError)
    def unsupported_algorithm(e):
        logger.info("Rejected request: %s", e)
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(InvalidInput)
    def invalid_input(e):
        logger.info("Rejected request: %s", e)
        return jsonify({"error": str(e)}), 400

    # -----------------------------------------------------------------------
    # Main UI Route
    # -----------------------------------------------------------------------
    @app.route("/")
    def index():
        state = render_state(bg.call(session.snapshot))
        sorts    = algorithms_by_kind(AlgorithmKind.SORT)
        searches = algorithms_by_kind(AlgorithmKind.SEARCH)
        left_key, right_key = state["race"]["algorithms"]
        bubble = get_algorithm("bubble")

        return render_template_string(INDEX_TEMPLATE,
            svg=state["svg"],
            sort_panel=sort_panel(sorts, size=len(state["sort"]["values"]), step_mode=state["sort"]["step_mode"]),
            maze_panel=maze_panel(searches),
            race_panel=race_panel(
                sorts + searches, left_key, right_key,
                size=session.race_size, announcement=state["race"]["announcement"],
            ),
            speed=speed_controls(state["speed"]["label"]),
            pseudocode=pseudocode_viewer(bubble.pseudocode, algo_label=bubble.label),
            search_pseudocode=state["pseudocode"]["grid"],
        )

    # -----------------------------------------------------------------------
    # API: State
    # -----------------------------------------------------------------------
    @app.route("/api/state")
    def api_state():
        return jsonify(render_state(bg.call(session.snapshot)))

    @app.route("/api/pseudocode/<key>")
    def api_pseudocode(key):
        info = get_algorithm(key)
        return jsonify({"html": pseudocode_viewer(info.pseudocode, algo_label=info.label)})

    # -----------------------------------------------------------------------
    # API: Sorting
    # -----------------------------------------------------------------------
    @app.route("/api/sort/start", methods=["POST"])
    def api_sort_start():
        data = _body()
        algorithm = _required(data, "algorithm")
        size = _int(data, "size")
        task = bg.call(session.begin_sort, algorithm, size)
        return jsonify({"accepted": task is not None})

    @app.route("/api/sort/reset", methods=["POST"])
    def api_sort_reset():
        size = _int(_body(), "size")
        values = bg.call(lambda: list(session.reset_sort(size)))
        return jsonify({"accepted": True, "values": values})

    @app.route("/api/sort/step-mode", methods=["POST"])
    def api_sort_step_mode():
        on = bg.call(session.set_step_mode, _bool(_body(), "on"))
        return jsonify({"accepted": True, "step_mode": on})

    @app.route("/api/sort/next", methods=["POST"])
    def api_sort_next():
        return jsonify({"accepted": bg.call(session.next_step)})

    # -----------------------------------------------------------------------
    # API: Maze
    # -----------------------------------------------------------------------
    @app.route("/api/search/start", methods=["POST"])
    def api_search_start():
        algorithm = _required(_body(), "algorithm")
        task = bg.call(session.begin_search, algorithm)
        return jsonify({"accepted": task is not None})

    @app.route("/api/grid/generate", methods=["POST"])
    def api_grid_generate():
        density = _float(_body(), "density", DEFAULT_OBSTACLE_DENSITY)
        if not 0.0 <= density <= 1.0:
            raise InvalidInput(f"density must be within [0, 1], got {density}")
        return jsonify({"accepted": bg.call(session.regenerate_grid, density)})

    @app.route("/api/grid/clear", methods=["POST"])
    def api_grid_clear():
        return jsonify({"accepted": bg.call(session.clear_grid)})

    @app.route("/api/grid/toggle", methods=["POST"])
    def api_grid_toggle():
        data = _body()
        row, col = _int(data, "row"), _int(data, "col")
        if row is None or col is None:
            raise InvalidInput("row and col are required")
        return jsonify({"accepted": bg.call(session.toggle_obstacle, row, col)})

    # -----------------------------------------------------------------------
    # API: Speed
    # -----------------------------------------------------------------------
    @app.route("/api/speed", methods=["POST"])
    def api_speed():
        factor = _float(_body(), "factor", positive=True)
        multiplier = bg.call(session.set_speed, factor)
        label = bg.call(lambda: session.speed.label)
        return jsonify({"accepted": True, "multiplier": multiplier, "label": label})

    # -----------------------------------------------------------------------
    # API: Race
    # -----------------------------------------------------------------------
    @app.route("/api/race/start", methods=["POST"])
    def api_race_start():
        data = _body()
        a, b = _required(data, "a"), _required(data, "b")
        task = bg.call(session.begin_race, a, b, _int(data, "size"))
        return jsonify({"accepted": task is not None})

    @app.route("/api/race/reset", methods=["POST"])
    def api_race_reset():
        bg.call(session.reset_race, _int(_body(), "size"))
        return jsonify({"accepted": True})

    return app


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Algorithm Animator</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-emerald: #10b981;
      --accent-amber: #f59e0b;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      min-height: 100vh;
    }

    /* Sidebar */
    #sidebar {
      width: 340px;
      background: linear-gradient(180deg, var(--bg-dark) 0%, var(--bg-darker) 100%);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    /* Main area */
    #main {
      flex: 1;
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      align-content: start;
    }

    .stage {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
    }
    .stage h3, .panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 14px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }
    .stage svg { max-width: 100%; height: auto; }
    .race-lanes { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; }
    .winner { margin-top: 10px; color: var(--accent-amber); font-weight: 700; }

    /* Panels */
    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }
    .button-row { display: flex; gap: 8px; margin-bottom: 12px; align-items: center; }
    .hint { font-size: 12px; color: var(--text-secondary); }

    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: 1px solid transparent;
      padding: 10px 16px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
      font-family: 'DM Sans', sans-serif;
    }
    .btn-primary { background: linear-gradient(135deg, var(--accent-emerald), #059669); }

    select, input[type="number"], input[type="range"] {
      width: 100%;
      padding: 10px 12px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
      font-size: 13px;
    }

    /* Pseudocode */
    .pc-line {
      font-family: 'JetBrains Mono', monospace;
      font-size: 12px;
      padding: 2px 8px;
      white-space: pre;
      color: var(--text-secondary);
    }
    .pc-line.active { color: var(--text-primary); background: rgba(14, 165, 233, 0.15); }
    .pc-num { display: inline-block; width: 24px; opacity: 0.5; }
  </style>
</head>
<body>
  <div id="sidebar">
    <h2 style="margin-bottom: 20px;">Algorithm Animator</h2>
    {{ speed|safe }}
    {{ sort_panel|safe }}
    {{ maze_panel|safe }}
    {{ race_panel|safe }}
  </div>

  <div id="main">
    <div class="stage">
      <h3>Sorting</h3>
      <div id="sort-svg">{{ svg.sort|safe }}</div>
      <div id="pseudocode">{{ pseudocode|safe }}</div>
    </div>

    <div class="stage">
      <h3>Maze</h3>
      <div id="grid-svg">{{ svg.grid|safe }}</div>
      <div id="grid-pseudocode">{{ search_pseudocode|safe }}</div>
    </div>

    <div class="stage" style="grid-column: span 2;">
      <h3>Race</h3>
      <div class="race-lanes">
        <div id="race-left-svg">{{ svg.race_left|safe }}</div>
        <div id="race-right-svg">{{ svg.race_right|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    // API helpers
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    const $ = (id) => document.getElementById(id);

    // Sound: short square beeps, only after the user opts in
    let audioCtx = null;
    let lastToneSeq = 0;
    function beep(tone) {
      if (!tone || tone.seq === lastToneSeq) return;
      lastToneSeq = tone.seq;
      if (!$('sound-toggle')?.checked) return;
      audioCtx = audioCtx || new (window.AudioContext || window.webkitAudioContext)();
      const osc = audioCtx.createOscillator();
      const gain = audioCtx.createGain();
      osc.type = tone.waveform;
      osc.frequency.value = tone.frequency_hz;
      gain.gain.value = 0.03;
      osc.connect(gain);
      gain.connect(audioCtx.destination);
      osc.start();
      osc.stop(audioCtx.currentTime + tone.duration_ms / 1000);
    }

    // Polling
    async function refresh() {
      const res = await fetch('/api/state');
      const state = await res.json();
      $('sort-svg').innerHTML = state.svg.sort;
      $('grid-svg').innerHTML = state.svg.grid;
      $('race-left-svg').innerHTML = state.svg.race_left;
      $('race-right-svg').innerHTML = state.svg.race_right;
      $('speed-display').textContent = state.speed.label;
      $('race-winner').textContent = state.race.announcement;
      highlight(state.sort);
      $('grid-pseudocode').innerHTML = state.pseudocode.grid;
      stepButtons(state.sort);
      beep(state.tone);
    }

    function stepButtons(sort) {
      $('btn-step-mode').textContent = sort.step_mode ? 'Step Mode ✓' : 'Step Mode';
      $('btn-sort-next').disabled = !sort.awaiting_step;
    }

    function highlight(sort) {
      const line = sort.algorithm === $('sort-select').value ? sort.pseudocode_line : -1;
      document.querySelectorAll('#pseudocode .pc-line').forEach((el, i) =>
        el.classList.toggle('active', i === line));
    }
    setInterval(refresh, 60);

    // Sorting
    $('sort-size').addEventListener('input', (e) => { $('sort-size-val').textContent = e.target.value; });
    $('btn-sort-run').addEventListener('click', () =>
      post('/api/sort/start', {algorithm: $('sort-select').value, size: +$('sort-size').value}));
    $('btn-sort-reset').addEventListener('click', () =>
      post('/api/sort/reset', {size: +$('sort-size').value}));
    $('btn-step-mode').addEventListener('click', () =>
      post('/api/sort/step-mode', {on: !$('btn-step-mode').textContent.includes('✓')}));
    $('btn-sort-next').addEventListener('click', () => post('/api/sort/next'));
    $('sort-select').addEventListener('change', async (e) => {
      const res = await fetch('/api/pseudocode/' + e.target.value);
      $('pseudocode').innerHTML = (await res.json()).html;
    });

    // Maze
    document.querySelectorAll('.btn-search').forEach(btn =>
      btn.addEventListener('click', () => post('/api/search/start', {algorithm: btn.dataset.algo})));
    $('btn-maze-gen').addEventListener('click', () =>
      post('/api/grid/generate', {density: +$('maze-density').value}));
    $('btn-maze-clear').addEventListener('click', () => post('/api/grid/clear'));
    $('grid-svg').addEventListener('click', (e) => {
      const cell = e.target.closest('[data-row]');
      if (cell) post('/api/grid/toggle', {row: +cell.dataset.row, col: +cell.dataset.col});
    });

    // Speed
    ['btn-slower', 'btn-faster'].forEach(id =>
      $(id).addEventListener('click', () => post('/api/speed', {factor: +$(id).dataset.factor})));

    // Race
    $('btn-race-run').addEventListener('click', () =>
      post('/api/race/start', {a: $('race-a').value, b: $('race-b').value, size: +$('race-size').value}));
    $('btn-race-reset').addEventListener('click', () =>
      post('/api/race/reset', {size: +$('race-size').value}));
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    server = ServerConfig.from_env()
    logging.basicConfig(
        level=server.log_level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    print("=" * 60)
    print("  Algorithm Animator")
    print("  Starting Flask server...")
    print(f"  Open http://localhost:{server.port}")
    print("=" * 60)
    create_app().run(host=server.host, port=server.port, debug=server.debug, use_reloader=False)
