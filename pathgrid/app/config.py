# pathgrid/app/config.py
#!/usr/bin/env python3
"""
Viewer settings.

Resolution order (later wins):
- defaults below
- ENV:  PATHGRID_COLUMNS=30, PATHGRID_DENSITY=0.2, ...
- CLI:  --columns=30 --density=0.2 --map=maps/corridor.json ...
"""

import logging
import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional, Sequence

ENV_PREFIX = "PATHGRID_"


@dataclass
class Settings:
    columns: int = 25
    rows: int = 20
    width: int = 800            # window px, grid area only
    height: int = 600
    density: float = 0.3
    seed: Optional[int] = None
    step_delay_ms: int = 100    # path animation, per cell
    map: Optional[Path] = None
    log_level: str = "INFO"

    def __post_init__(self):
        for key in ("columns", "rows", "width", "height"):
            if getattr(self, key) <= 0:
                raise ValueError(f"{key} must be positive, got {getattr(self, key)}")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError(f"density must be within [0, 1], got {self.density}")
        if self.step_delay_ms < 0:
            raise ValueError(f"step_delay_ms must not be negative, got {self.step_delay_ms}")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got {self.log_level!r}")


def _convert(key: str, raw: str):
    if key in ("columns", "rows", "width", "height", "step_delay_ms", "seed"):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{key} expects an integer, got {raw!r}") from None
    if key == "density":
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"density expects a number, got {raw!r}") from None
    if key == "map":
        return Path(raw)
    return raw


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    values = {}
    for f in fields(Settings):
        env_key = ENV_PREFIX + f.name.upper()
        if env_key in environ:
            values[f.name] = _convert(f.name, environ[env_key])

    known = {f.name for f in fields(Settings)}
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, raw = arg[2:].split("=", 1)
        key = key.replace("-", "_")
        if key in known:
            values[key] = _convert(key, raw)

    return Settings(**values)
