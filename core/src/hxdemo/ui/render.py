"""Fragment Renderer.

Views are Jinja2 templates under ``templates/views``. A view renders to the
inner HTML of the page only; ``layout.html`` is the document shell (head, nav,
footer) that wraps a fragment for plain, non-htmx navigation.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Final

from fastapi.templating import Jinja2Templates
from jinja2 import Environment
from markupsafe import Markup, escape

from hxdemo.errors import UnknownView

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

VIEWS: Final[frozenset[str]] = frozenset(
    {
        "home",
        "lucky",
        "form",
        "form_success",
        "form_error",
        "items",
        "item_rows",
        "not_found",
        "bad_request",
        "internal_error",
    }
)

# Present in every full page, absent from every fragment.
SHELL_MARKERS: Final[tuple[str, ...]] = (
    "<!DOCTYPE html>",
    "<head>",
    'id="site-nav"',
    'id="site-footer"',
)

NAV_LINKS: Final[tuple[tuple[str, str], ...]] = (
    ("/", "home"),
    ("/fallible", "fallible"),
    ("/does-not-exist", "does-not-exist"),
    ("/form-example", "form-example"),
    ("/items", "items"),
)


class ViewKind(StrEnum):
    FULL_PAGE = "full_page"
    FRAGMENT = "fragment"


@dataclass(frozen=True)
class RenderView:
    kind: ViewKind
    title: str
    body: str

    @classmethod
    def full_page(cls, title: str, body: str) -> RenderView:
        return cls(kind=ViewKind.FULL_PAGE, title=title, body=body)

    @classmethod
    def fragment(cls, title: str, body: str) -> RenderView:
        return cls(kind=ViewKind.FRAGMENT, title=title, body=body)


class FragmentRenderer:
    def __init__(self, env: Environment | None = None) -> None:
        # Starlette's environment has autoescape enabled.
        self.env = env if env is not None else templates.env

    def render_fragment(self, view: str, data: Mapping[str, Any] | None = None) -> str:
        if view not in VIEWS:
            raise UnknownView(view)
        template = self.env.get_template(f"views/{view}.html")
        return template.render(**dict(data or {}))

    def render_document(self, title: str, body: str) -> str:
        template = self.env.get_template("layout.html")
        return template.render(
            title=title,
            body=Markup(body),
            nav_links=NAV_LINKS,
        )

    def render(self, view: RenderView) -> str:
        if view.kind is ViewKind.FULL_PAGE:
            return self.render_document(view.title, view.body)
        if not view.title:
            return view.body
        # htmx picks up <title> from swapped content and updates document.title.
        return f"<title>{escape(view.title)}</title>\n{view.body}"


renderer = FragmentRenderer()
