"""
config.py — Tunables & Server Settings
=======================================
Module-level constants shared by the engine, the renderer and the web app,
plus `ServerConfig` for the Flask process (read from the environment).

    from config import GRID_SIZE, DEFAULT_SORT_SIZE, ServerConfig
"""

import os
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------
GRID_SIZE               = 15          # 15 x 15 cells
DEFAULT_OBSTACLE_DENSITY = 0.28

# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------
VALUE_MIN          = 10
VALUE_MAX          = 99
DEFAULT_SORT_SIZE  = 20
DEFAULT_RACE_SIZE  = 20
MIN_SEQUENCE_SIZE  = 5
MAX_SEQUENCE_SIZE  = 100

# ---------------------------------------------------------------------------
# Pacing
# ---------------------------------------------------------------------------
SPEED_MIN         = 0.25
SPEED_MAX         = 8.0
DEFAULT_SPEED     = 1.0
PATH_STEP_DELAY_MS = 35
RACE_DELAY_SCALE  = 0.5           # races run at half the solo step delay


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@dataclass
class ServerConfig:
    host:      str  = "0.0.0.0"
    port:      int  = 5000
    debug:     bool = False
    log_level: str  = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "ServerConfig":
        """Build from ALGOVIZ_* environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("ALGOVIZ_HOST", cls.host),
            port=int(env.get("ALGOVIZ_PORT", cls.port)),
            debug=env.get("ALGOVIZ_DEBUG", "0").lower() in ("1", "true", "yes"),
            log_level=env.get("ALGOVIZ_LOG_LEVEL", cls.log_level).upper(),
        )
