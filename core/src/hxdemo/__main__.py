from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import uvicorn

from hxdemo.app import LOG_FORMAT, create_app
from hxdemo.config import load_demo_config, resolve_listen_address
from hxdemo.home import ensure_demo_layout, resolve_demo_home


def main() -> None:
    home = resolve_demo_home()
    paths = ensure_demo_layout(home)
    config = load_demo_config(paths)

    logging.basicConfig(
        level=config.logging.level,
        format=LOG_FORMAT,
        handlers=[
            RotatingFileHandler(
                paths.log_path,
                maxBytes=config.logging.max_size_mb * 1024 * 1024,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            ),
            logging.StreamHandler(),
        ],
    )

    host, port = resolve_listen_address(config)
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
