from __future__ import annotations

from pathlib import Path

from hxdemo.home import ensure_demo_layout, resolve_demo_home


def test_resolve_demo_home_from_env(tmp_path: Path) -> None:
    home = resolve_demo_home({"HXDEMO_HOME": str(tmp_path)})
    assert home == tmp_path.resolve()


def test_resolve_demo_home_relative_is_anchored_at_user_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    home = resolve_demo_home({"HXDEMO_HOME": "demo-home"})
    assert home == (Path.home() / "demo-home").resolve()


def test_ensure_demo_layout_creates_required_dirs(tmp_path: Path) -> None:
    paths = ensure_demo_layout(tmp_path)

    assert paths.home.exists()
    assert paths.config_dir.is_dir()
    assert paths.logs_dir.is_dir()
    assert paths.config_path == tmp_path / "config" / "demo.json"
    assert paths.log_path.parent == paths.logs_dir
