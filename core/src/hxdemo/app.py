from __future__ import annotations

import logging
import random
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles

from hxdemo import __version__
from hxdemo.config import DemoConfig, load_demo_config
from hxdemo.errors import MalformedRequest, UnluckyRequest
from hxdemo.home import DemoPaths, ensure_demo_layout, resolve_demo_home
from hxdemo.ui.render import STATIC_DIR as UI_STATIC_DIR
from hxdemo.ui.responses import htmx_context, render_page_or_fragment
from hxdemo.ui.router import router as ui_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(paths: DemoPaths, config: DemoConfig) -> RotatingFileHandler | None:
    """Attach the rotating log file to the root logger.

    Returns the handler that was added, or None when a rotating file handler
    is already installed (reload, or ``python -m hxdemo``).
    """

    root = logging.getLogger()
    root.setLevel(config.logging.level)

    # Avoid adding duplicate handlers if reloaded
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return None

    file_handler = RotatingFileHandler(
        paths.log_path,
        maxBytes=config.logging.max_size_mb * 1024 * 1024,
        backupCount=config.logging.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)
    return file_handler


def _accepts_html(request: Request) -> bool:
    accept = request.headers.get("accept")
    if accept is None:
        return True
    return "text/html" in accept or "*/*" in accept


def create_app() -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        home = resolve_demo_home()
        paths = ensure_demo_layout(home)
        config = load_demo_config(paths)

        file_handler = configure_logging(paths, config)

        logger.info("hxdemo starting up")
        logger.info(f"Logs directory: {paths.logs_dir}")

        app.state.demo_paths = paths
        app.state.demo_config = config
        app.state.rng = random.Random(config.fallible.seed)

        try:
            yield
        finally:
            logger.info("hxdemo shutting down")
            if file_handler is not None:
                logging.getLogger().removeHandler(file_handler)
                file_handler.close()

    app = FastAPI(title="hxdemo", version=__version__, lifespan=_lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        suffix = " (htmx)" if htmx_context(request) is not None else ""
        logger.info(f"{request.method} {request.url.path} - {response.status_code}{suffix}")
        return response

    @app.exception_handler(MalformedRequest)
    async def _malformed_request_handler(request: Request, exc: MalformedRequest) -> Response:
        return render_page_or_fragment(
            request,
            title="Bad request",
            view="bad_request",
            data={"detail": str(exc)},
            status_code=400,
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> Response:
        detail = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}"
            for e in exc.errors()
        )
        return await _malformed_request_handler(request, MalformedRequest(detail))

    @app.exception_handler(UnluckyRequest)
    async def _unlucky_request_handler(request: Request, exc: UnluckyRequest) -> Response:
        logger.warning(f"{request.method} {request.url.path} failed: {exc}")
        return render_page_or_fragment(
            request,
            title="Internal Error",
            view="internal_error",
            data={"detail": str(exc)},
            status_code=500,
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        if exc.status_code in (404, 405):
            if not _accepts_html(request):
                return Response(status_code=404)
            return render_page_or_fragment(
                request,
                title="Not found",
                view="not_found",
                data={"method": request.method, "path": request.url.path},
                status_code=404,
            )

        detail = exc.detail if isinstance(exc.detail, str) else None
        if exc.status_code < 500:
            return render_page_or_fragment(
                request,
                title="Bad request",
                view="bad_request",
                data={"detail": detail},
                status_code=exc.status_code,
            )
        return render_page_or_fragment(
            request,
            title="Internal Error",
            view="internal_error",
            data={"detail": detail},
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> Response:
        # Avoid leaking internals; the traceback goes to the log.
        logger.exception(f"Unhandled error for {request.method} {request.url.path}")
        return render_page_or_fragment(
            request,
            title="Internal Error",
            view="internal_error",
            status_code=500,
        )

    if UI_STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(UI_STATIC_DIR)), name="static")
    else:
        logger.warning(
            "UI static directory is missing (%s); /static will not be served",
            UI_STATIC_DIR,
        )
    app.include_router(ui_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
