from __future__ import annotations

from starlette.datastructures import Headers

from hxdemo.htmx import HtmxContext


def test_plain_request_has_no_context() -> None:
    assert HtmxContext.from_headers({}) is None
    assert HtmxContext.from_headers({"HX-Request": "false"}) is None


def test_boosted_request_is_captured() -> None:
    ctx = HtmxContext.from_headers(
        {
            "HX-Request": "true",
            "HX-Boosted": "true",
            "HX-Target": "main",
            "HX-Trigger": "content-form",
            "HX-Trigger-Name": "submit",
            "HX-Current-URL": "http://localhost:9000/form-example",
        }
    )
    assert ctx == HtmxContext(
        boosted=True,
        target="main",
        trigger="content-form",
        trigger_name="submit",
        current_url="http://localhost:9000/form-example",
    )
    assert ctx.wants_fragment


def test_header_names_are_case_insensitive() -> None:
    ctx = HtmxContext.from_headers(Headers({"hx-request": "true", "hx-target": "load-more"}))
    assert ctx is not None
    assert ctx.boosted is False
    assert ctx.target == "load-more"


def test_malformed_current_url_is_ignored() -> None:
    ctx = HtmxContext.from_headers({"HX-Request": "true", "HX-Current-URL": "not a url"})
    assert ctx is not None
    assert ctx.current_url is None


def test_history_restore_wants_full_page() -> None:
    ctx = HtmxContext.from_headers({"HX-Request": "true", "HX-History-Restore-Request": "true"})
    assert ctx is not None
    assert ctx.history_restore
    assert not ctx.wants_fragment
