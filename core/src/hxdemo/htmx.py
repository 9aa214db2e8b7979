"""Request-side htmx headers.

htmx marks every request it issues with ``HX-Request: true`` and adds a few
more headers describing what triggered it and where the response will be
swapped. A request without ``HX-Request`` is a plain browser navigation.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

HX_REQUEST: Final[str] = "HX-Request"
HX_BOOSTED: Final[str] = "HX-Boosted"
HX_TARGET: Final[str] = "HX-Target"
HX_TRIGGER: Final[str] = "HX-Trigger"
HX_TRIGGER_NAME: Final[str] = "HX-Trigger-Name"
HX_CURRENT_URL: Final[str] = "HX-Current-URL"
HX_HISTORY_RESTORE_REQUEST: Final[str] = "HX-History-Restore-Request"

# Response headers.
HX_RETARGET: Final[str] = "HX-Retarget"
HX_RESWAP: Final[str] = "HX-Reswap"


def _is_true(raw: str | None) -> bool:
    return (raw or "").strip().lower() == "true"


def _parse_url(raw: str) -> str | None:
    parts = urlsplit(raw)
    if not parts.scheme or not parts.netloc:
        return None
    return raw


@dataclass(frozen=True)
class HtmxContext:
    boosted: bool = False
    target: str | None = None
    trigger: str | None = None
    trigger_name: str | None = None
    current_url: str | None = None
    history_restore: bool = False

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> HtmxContext | None:
        """Capture the htmx context, or None for a plain (non-htmx) request.

        Header lookups go through ``headers.get`` so Starlette's
        case-insensitive ``Headers`` works as well as a plain dict.
        """

        if not _is_true(headers.get(HX_REQUEST)):
            return None

        current_url = None
        raw_url = headers.get(HX_CURRENT_URL)
        if raw_url:
            current_url = _parse_url(raw_url)
            if current_url is None:
                logger.debug("Ignoring malformed %s header: %r", HX_CURRENT_URL, raw_url)

        return cls(
            boosted=_is_true(headers.get(HX_BOOSTED)),
            target=headers.get(HX_TARGET) or None,
            trigger=headers.get(HX_TRIGGER) or None,
            trigger_name=headers.get(HX_TRIGGER_NAME) or None,
            current_url=current_url,
            history_restore=_is_true(headers.get(HX_HISTORY_RESTORE_REQUEST)),
        )

    @property
    def wants_fragment(self) -> bool:
        # On a history cache miss htmx replaces the whole document.
        return not self.history_restore
