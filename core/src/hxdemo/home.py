from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DemoPaths:
    home: Path
    config_dir: Path
    logs_dir: Path

    @property
    def config_path(self) -> Path:
        return self.config_dir / "demo.json"

    @property
    def log_path(self) -> Path:
        return self.logs_dir / "hxdemo.log"


def resolve_demo_home(environ: dict[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ

    raw = (env.get("HXDEMO_HOME") or "").strip()
    if raw:
        candidate = Path(raw).expanduser()
        # Relative values are anchored at the user's home, never the CWD.
        if not candidate.is_absolute():
            candidate = (Path.home() / candidate).resolve()
        else:
            candidate = candidate.resolve()
        return candidate

    def default_home() -> Path:
        if sys.platform.startswith("win"):
            base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
            if base:
                return Path(base) / "hxdemo"
            return Path.home() / "AppData" / "Local" / "hxdemo"

        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support" / "hxdemo"

        xdg = os.environ.get("XDG_DATA_HOME")
        if xdg:
            return Path(xdg) / "hxdemo"
        return Path.home() / ".local" / "share" / "hxdemo"

    return default_home().resolve()


def ensure_demo_layout(home: Path) -> DemoPaths:
    home.mkdir(parents=True, exist_ok=True)

    config_dir = home / "config"
    logs_dir = home / "logs"

    for path in (config_dir, logs_dir):
        path.mkdir(parents=True, exist_ok=True)

    return DemoPaths(home=home, config_dir=config_dir, logs_dir=logs_dir)
