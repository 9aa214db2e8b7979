from __future__ import annotations


class HxDemoError(Exception):
    """Base class for errors raised by hxdemo itself."""


class UnknownView(HxDemoError, LookupError):
    """A view name with no registered template was requested."""

    def __init__(self, view: str) -> None:
        super().__init__(f"Unknown view: {view!r}")
        self.view = view


class MalformedRequest(HxDemoError, ValueError):
    """The request cannot be interpreted at all (e.g. the form body is missing)."""


class UnluckyRequest(HxDemoError, RuntimeError):
    """Raised on purpose by the /fallible page."""
