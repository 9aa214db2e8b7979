from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from fastapi import Request
from fastapi.responses import HTMLResponse

from hxdemo.htmx import HX_RETARGET, HX_RESWAP, HtmxContext
from hxdemo.ui.render import RenderView, renderer

MAIN_TARGET_ID: Final[str] = "main"


def htmx_context(request: Request) -> HtmxContext | None:
    cached = getattr(request.state, "htmx", None)
    if isinstance(cached, HtmxContext):
        return cached
    ctx = HtmxContext.from_headers(request.headers)
    request.state.htmx = ctx
    return ctx


def render_page_or_fragment(
    request: Request,
    *,
    title: str,
    view: str,
    data: Mapping[str, Any] | None = None,
    status_code: int = 200,
    swap_in_place: bool = False,
) -> HTMLResponse:
    """Render ``view`` as a whole document, or just the swappable content for htmx.

    ``swap_in_place`` marks fragments that replace the element that requested
    them (e.g. appended list rows); those are sent as-is, without a title and
    without retargeting.
    """

    htmx = htmx_context(request)
    body = renderer.render_fragment(view, data)

    headers = {"Vary": "HX-Request"}
    if htmx is not None and htmx.wants_fragment:
        if swap_in_place:
            return HTMLResponse(body, status_code=200, headers=headers)

        # The content always belongs in #main, whatever element triggered the request.
        if htmx.target is not None and htmx.target != MAIN_TARGET_ID:
            headers[HX_RETARGET] = f"#{MAIN_TARGET_ID}"
            headers[HX_RESWAP] = "innerHTML"

        # htmx only swaps 2xx responses by default.
        html = renderer.render(RenderView.fragment(title, body))
        return HTMLResponse(html, status_code=200, headers=headers)

    html = renderer.render(RenderView.full_page(title, body))
    return HTMLResponse(html, status_code=status_code, headers=headers)
