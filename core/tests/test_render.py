from __future__ import annotations

import pytest

from hxdemo.errors import UnknownView
from hxdemo.forms import FieldError, Invalid
from hxdemo.pagination import paginate
from hxdemo.ui.render import SHELL_MARKERS, FragmentRenderer, RenderView, ViewKind


@pytest.fixture
def renderer() -> FragmentRenderer:
    return FragmentRenderer()


def test_fragment_has_no_shell(renderer: FragmentRenderer) -> None:
    body = renderer.render_fragment("home")
    html = renderer.render(RenderView.fragment("Home page", body))

    assert html.startswith("<title>Home page</title>")
    assert "This is the home page." in html
    for marker in SHELL_MARKERS:
        assert marker not in html


def test_full_page_wraps_fragment_in_shell(renderer: FragmentRenderer) -> None:
    body = renderer.render_fragment("home")
    view = RenderView.full_page("Home page", body)
    assert view.kind is ViewKind.FULL_PAGE

    html = renderer.render(view)
    for marker in SHELL_MARKERS:
        assert marker in html
    assert body in html
    assert '<a href="/items">items</a>' in html


def test_nav_does_not_depend_on_current_page(renderer: FragmentRenderer) -> None:
    # Boosted swaps leave the nav in place, so it must not mark a current page.
    home = renderer.render(RenderView.full_page("Home page", renderer.render_fragment("home")))
    lucky = renderer.render(RenderView.full_page("Lucky!", renderer.render_fragment("lucky")))

    def nav(html: str) -> str:
        start = html.index('<nav id="site-nav">')
        return html[start : html.index("</nav>", start)]

    assert nav(home) == nav(lucky)
    assert "aria-current" not in home


def test_rendering_is_idempotent(renderer: FragmentRenderer) -> None:
    data = {
        "errors": Invalid(errors=(FieldError(field="content", message="Content is empty"),)),
        "values": {"content": ""},
    }

    def render_once() -> str:
        body = renderer.render_fragment("form_error", data)
        return renderer.render(RenderView.full_page("Example form", body))

    assert render_once() == render_once()


def test_user_input_is_escaped(renderer: FragmentRenderer) -> None:
    data = {
        "errors": Invalid(errors=(FieldError(field="content", message="Content is not ascii"),)),
        "values": {"content": '"><script>alert(1)</script>'},
    }
    html = renderer.render_fragment("form_error", data)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert 'data-field="content"' in html


def test_title_is_escaped(renderer: FragmentRenderer) -> None:
    html = renderer.render(RenderView.fragment("a < b", "<p>x</p>"))
    assert html == "<title>a &lt; b</title>\n<p>x</p>"


def test_untitled_fragment_is_body_only(renderer: FragmentRenderer) -> None:
    rows = renderer.render_fragment("item_rows", {"page": paginate(total=3, page=1, page_size=2)})
    assert renderer.render(RenderView.fragment("", rows)) == rows
    assert "Item 2" in rows
    assert 'id="load-more"' in rows
    assert "/items?page=2" in rows


def test_unknown_view_is_a_programming_error(renderer: FragmentRenderer) -> None:
    with pytest.raises(UnknownView) as excinfo:
        renderer.render_fragment("does-not-exist")
    assert excinfo.value.view == "does-not-exist"
    assert isinstance(excinfo.value, LookupError)
