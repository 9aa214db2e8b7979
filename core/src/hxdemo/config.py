from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from hxdemo.home import DemoPaths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=9000, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class FormConfig(BaseModel):
    """Rules for the example form."""

    content_max_length: int = Field(
        default=64, ge=1, description="Longest accepted value for the 'content' field."
    )


class FallibleConfig(BaseModel):
    """Settings for the /fallible page, which fails on purpose."""

    failure_rate: float = Field(
        default=0.5, ge=0.0, le=1.0, description="Probability that a request fails."
    )
    seed: int | None = Field(
        default=None, description="Optional seed for reproducible failures."
    )


class ItemsConfig(BaseModel):
    total: int = Field(default=42, ge=0, description="Number of rows in the list demo.")
    page_size: int = Field(default=10, ge=1, le=100)


class DemoConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    form: FormConfig = Field(default_factory=FormConfig)
    fallible: FallibleConfig = Field(default_factory=FallibleConfig)
    items: ItemsConfig = Field(default_factory=ItemsConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_demo_config(paths: DemoPaths) -> DemoConfig:
    """Load config from ${HXDEMO_HOME}/config/demo.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.config_path
    if not config_path.exists():
        return DemoConfig()

    raw = _read_json(config_path)
    return DemoConfig.model_validate(raw)


def write_demo_config(paths: DemoPaths, config: DemoConfig) -> None:
    """Persist config to ${HXDEMO_HOME}/config/demo.json."""

    payload = config.model_dump(mode="json", exclude_none=True)
    paths.config_dir.mkdir(parents=True, exist_ok=True)
    paths.config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


def resolve_listen_address(
    config: DemoConfig, environ: dict[str, str] | None = None
) -> tuple[str, int]:
    """Return (host, port), letting HXDEMO_BIND / HXDEMO_PORT override the config."""

    env = os.environ if environ is None else environ

    host = (env.get("HXDEMO_BIND") or "").strip() or config.network.bind_host

    env_port = (env.get("HXDEMO_PORT") or "").strip()
    port = int(env_port) if env_port else config.network.port
    return host, port
