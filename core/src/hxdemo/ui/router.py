"""Request Render Router.

Every page is served the same way: a plain request gets the full document,
an htmx request (boosted link, boosted form, ``hx-get`` button) gets only the
content that htmx swaps into the page. The form posts back to the same path it
is served from, so it works with and without htmx.
"""
from __future__ import annotations

import logging
import random
from typing import Final

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from hxdemo.config import DemoConfig
from hxdemo.errors import MalformedRequest, UnluckyRequest
from hxdemo.forms import FormRules, Invalid, validate_submission
from hxdemo.pagination import paginate
from hxdemo.ui.responses import htmx_context, render_page_or_fragment

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"])

FORM_PATH: Final[str] = "/form-example"
FORM_TITLE: Final[str] = "Example form"
LOAD_MORE_TARGET: Final[str] = "load-more"

_FORM_CONTENT_TYPES: Final[tuple[str, ...]] = (
    "application/x-www-form-urlencoded",
    "multipart/form-data",
)


def _get_config(request: Request) -> DemoConfig:
    config = getattr(request.app.state, "demo_config", None)
    if config is None:
        raise HTTPException(status_code=500, detail="Server not initialized")
    return config


def _get_rng(request: Request) -> random.Random:
    rng = getattr(request.app.state, "rng", None)
    if rng is None:
        raise HTTPException(status_code=500, detail="Server not initialized")
    return rng


def _form_rules(config: DemoConfig) -> FormRules:
    return FormRules(content_max_length=config.form.content_max_length)


@router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    return render_page_or_fragment(request, title="Home page", view="home")


@router.get("/fallible", response_class=HTMLResponse)
async def fallible(request: Request) -> HTMLResponse:
    config = _get_config(request)
    rng = _get_rng(request)

    if rng.random() < config.fallible.failure_rate:
        raise UnluckyRequest("request was unlucky")

    return render_page_or_fragment(request, title="Lucky!", view="lucky")


@router.get(FORM_PATH, response_class=HTMLResponse)
async def form_example(request: Request) -> HTMLResponse:
    return render_page_or_fragment(request, title=FORM_TITLE, view="form")


@router.post(FORM_PATH, response_class=HTMLResponse)
async def form_example_submit(request: Request) -> HTMLResponse:
    rules = _form_rules(_get_config(request))

    content_type = (request.headers.get("content-type") or "").split(";")[0].strip().lower()
    if content_type not in _FORM_CONTENT_TYPES:
        raise MalformedRequest("Expected a form-encoded body")

    form = await request.form()
    if len(form) == 0:
        raise MalformedRequest("The form body is missing")
    # Missing fields are reported by the validator, next to the field.
    submission = {k: v for k, v in form.items() if isinstance(v, str)}

    result = validate_submission(submission, rules)
    if isinstance(result, Invalid):
        logger.info(
            "Form rejected: %s", ", ".join(f"{e.field}: {e.message}" for e in result.errors)
        )
        # Entered values are echoed back so the user can correct them.
        return render_page_or_fragment(
            request,
            title=FORM_TITLE,
            view="form_error",
            data={"errors": result, "values": submission},
            status_code=422,
        )

    return render_page_or_fragment(
        request,
        title=FORM_TITLE,
        view="form_success",
        data={"message": "Content was valid"},
    )


@router.get("/items", response_class=HTMLResponse)
async def items(request: Request, page: int = Query(default=1, ge=1)) -> HTMLResponse:
    config = _get_config(request)
    result = paginate(total=config.items.total, page=page, page_size=config.items.page_size)

    htmx = htmx_context(request)
    if htmx is not None and htmx.wants_fragment and htmx.target == LOAD_MORE_TARGET:
        return render_page_or_fragment(
            request,
            title="",
            view="item_rows",
            data={"page": result},
            swap_in_place=True,
        )

    return render_page_or_fragment(
        request, title=f"Items (page {result.number})", view="items", data={"page": result}
    )
