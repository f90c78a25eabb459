"""Visitor-facing side: turn a shared link into the CTA drawn over the target page."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from cta_client.renderer import CtaVisual, render
from cta_payload.cta_model import CtaData
from cta_payload.logging_utils import get_logger
from cta_payload.payload_codec import AbPayload, CorruptLink, LinkPayload, decode, fragment_from_link
from cta_payload.variant_selector import VariantSelector

_LOGGER = get_logger("Viewer")

ROUTE_VIEWER = "viewer"
ROUTE_CREATOR = "creator"

STATE_READY = "ready"
STATE_ERROR = "error"

CORRUPT_LINK_MESSAGE = "Invalid or corrupted link."

# Visitor-facing frames never get popups or forms.
VIEWER_SANDBOX: Tuple[str, ...] = ("allow-scripts", "allow-same-origin")


@dataclass(frozen=True)
class FrameSpec:
    """Embedded frame for third-party content and its sandbox capabilities."""

    src: str
    sandbox: Tuple[str, ...]
    title: str = "Target Content"

    @property
    def sandbox_attribute(self) -> str:
        return " ".join(self.sandbox)


def route(url: str) -> str:
    """Links carrying a fragment open the viewer; everything else opens the creator."""

    return ROUTE_VIEWER if fragment_from_link(url or "") else ROUTE_CREATOR


class ViewerSession:
    """One visitor's view of a decoded link.

    The A/B choice is made once, when the session starts, and stays fixed for
    every later render. A corrupt link puts the session in a terminal error
    state and nothing is rendered.
    """

    def __init__(self, fragment: str, *, selector: Optional[VariantSelector] = None) -> None:
        self._selector = selector or VariantSelector()
        self._payload: Optional[LinkPayload] = None
        self._resolved: Optional[CtaData] = None
        self._error: Optional[str] = None
        self._error_detail: Optional[str] = None
        try:
            self._payload = decode(fragment)
        except CorruptLink as exc:
            self._error = CORRUPT_LINK_MESSAGE
            self._error_detail = str(exc)
            _LOGGER.warning("Rejected shared link: %s", exc)
            return
        self._resolved = self._resolve(self._payload)

    @classmethod
    def from_url(cls, url: str, *, selector: Optional[VariantSelector] = None) -> "ViewerSession":
        return cls(fragment_from_link(url), selector=selector)

    def _resolve(self, payload: LinkPayload) -> CtaData:
        if isinstance(payload, AbPayload):
            chosen = self._selector.choose(payload.variants)
            _LOGGER.debug("A/B link resolved to variant %s", "A" if chosen is payload.variants[0] else "B")
            return chosen.copy()
        return payload.data.copy()

    @property
    def state(self) -> str:
        return STATE_ERROR if self._error is not None else STATE_READY

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def error_detail(self) -> Optional[str]:
        return self._error_detail

    @property
    def payload(self) -> Optional[LinkPayload]:
        return self._payload

    @property
    def resolved(self) -> Optional[CtaData]:
        """A copy of the session's CTA; the session's own model is never handed out."""

        if self._resolved is None:
            return None
        return self._resolved.copy()

    @property
    def target_frame(self) -> Optional[FrameSpec]:
        if self._payload is None:
            return None
        return FrameSpec(src=self._payload.target_url, sandbox=VIEWER_SANDBOX)

    def render(self) -> Optional[CtaVisual]:
        if self._resolved is None:
            return None
        return render(self._resolved, is_editable=False)
