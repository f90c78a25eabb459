"""Link payload types and the URL-fragment codec.

A payload is serialised as compact JSON, UTF-8 encoded and then base64
encoded, so the whole configuration travels inside the fragment of the shared
link. Decoding is all-or-nothing: any input that does not match one of the
declared shapes raises :class:`CorruptLink`.
"""
from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping, Sequence, Tuple, Union
from urllib.parse import unquote

from cta_payload.cta_model import CtaData, CtaFieldError, complete_cta
from cta_payload.logging_utils import get_logger

_LOGGER = get_logger("Codec")

TYPE_SINGLE = "single"
TYPE_AB = "ab"
PAYLOAD_TYPES = (TYPE_SINGLE, TYPE_AB)
AB_VARIANT_COUNT = 2

_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


class CorruptLink(ValueError):
    """Raised when a link fragment cannot be turned back into a payload."""


@dataclass(frozen=True)
class SinglePayload:
    """One CTA shown unconditionally over ``target_url``."""

    kind: ClassVar[str] = TYPE_SINGLE

    target_url: str
    data: CtaData

    @classmethod
    def capture(cls, target_url: str, data: CtaData) -> "SinglePayload":
        """Freeze a live model; later edits to ``data`` do not reach the payload."""

        return cls(target_url=target_url, data=data.copy())

    def to_payload(self) -> Dict[str, Any]:
        entry = self.data.to_payload()
        entry["targetUrl"] = self.target_url
        return {"type": TYPE_SINGLE, "data": entry}


@dataclass(frozen=True)
class AbPayload:
    """Two independent CTA variants sharing one ``target_url``."""

    kind: ClassVar[str] = TYPE_AB

    target_url: str
    variants: Tuple[CtaData, CtaData]

    def __post_init__(self) -> None:
        variants = tuple(self.variants)
        if len(variants) != AB_VARIANT_COUNT:
            raise ValueError(f"A/B payload requires exactly {AB_VARIANT_COUNT} variants, got {len(variants)}")
        object.__setattr__(self, "variants", variants)

    @classmethod
    def capture(cls, target_url: str, variants: Sequence[CtaData]) -> "AbPayload":
        return cls(target_url=target_url, variants=tuple(variant.copy() for variant in variants))

    def to_payload(self) -> Dict[str, Any]:
        return {
            "type": TYPE_AB,
            "targetUrl": self.target_url,
            "variants": [variant.to_payload() for variant in self.variants],
        }


LinkPayload = Union[SinglePayload, AbPayload]


def encode(payload: LinkPayload) -> str:
    """Serialise a payload into fragment text. No size limit is applied."""

    if not isinstance(payload, (SinglePayload, AbPayload)):
        raise TypeError(f"Cannot encode {type(payload).__name__}; expected SinglePayload or AbPayload")
    document = json.dumps(payload.to_payload(), ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(document.encode("utf-8")).decode("ascii")


def _target_url(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise CorruptLink("targetUrl must be a non-empty string")
    return value


def _payload_from_document(document: Any) -> LinkPayload:
    if not isinstance(document, Mapping):
        raise CorruptLink("payload must be a JSON object")
    kind = document.get("type")
    if kind == TYPE_SINGLE:
        entry = document.get("data")
        if not isinstance(entry, Mapping):
            raise CorruptLink("single payload requires a data object")
        target_url = _target_url(entry.get("targetUrl"))
        return SinglePayload(target_url=target_url, data=complete_cta(entry))
    if kind == TYPE_AB:
        target_url = _target_url(document.get("targetUrl"))
        variants = document.get("variants")
        if not isinstance(variants, list):
            raise CorruptLink("ab payload requires a variants list")
        if len(variants) != AB_VARIANT_COUNT:
            raise CorruptLink(f"ab payload requires exactly {AB_VARIANT_COUNT} variants, got {len(variants)}")
        return AbPayload(target_url=target_url, variants=(complete_cta(variants[0]), complete_cta(variants[1])))
    raise CorruptLink("payload type must be one of: " + ", ".join(PAYLOAD_TYPES))


def payload_from_document(document: Any) -> LinkPayload:
    """Build a payload from an already-parsed JSON document; raises :class:`CorruptLink`."""

    try:
        return _payload_from_document(document)
    except CtaFieldError as exc:
        raise CorruptLink(str(exc)) from exc


def decode(text: str) -> LinkPayload:
    """Rebuild a payload from fragment text, with every optional field completed."""

    if not isinstance(text, str):
        raise CorruptLink("link fragment must be text")
    token = unquote(text.strip())
    if token.startswith("#"):
        token = token[1:]
    if not token:
        raise CorruptLink("link fragment is empty")
    try:
        raw = base64.b64decode(token.translate(_URLSAFE_TO_STANDARD), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CorruptLink(f"link fragment is not valid base64: {exc}") from exc
    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise CorruptLink(f"link fragment does not hold a JSON payload: {exc}") from exc
    payload = payload_from_document(document)
    _LOGGER.debug("Decoded %s payload from %d-character fragment", payload.kind, len(token))
    return payload


def build_link(payload: LinkPayload, base_url: str, *, length_warning: int = 0) -> str:
    """Return ``<base_url>#<fragment>``; logs a warning past ``length_warning`` characters."""

    base = base_url.split("#", 1)[0]
    link = f"{base}#{encode(payload)}"
    if length_warning > 0 and len(link) > length_warning:
        _LOGGER.warning(
            "Generated link is %d characters (warning threshold %d); some apps may truncate it",
            len(link),
            length_warning,
        )
    return link


def fragment_from_link(url: str) -> str:
    """Return the text after the first ``#`` of ``url`` (empty when there is none)."""

    return url.partition("#")[2]
