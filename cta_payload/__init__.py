"""Shared CTA model and link payload codec for Link Brandyler."""
from __future__ import annotations

__version__ = "0.3.0"

from .cta_model import CtaData, CtaFieldError, CustomPosition, complete_cta, default_cta, default_variants
from .payload_codec import (
    AbPayload,
    CorruptLink,
    LinkPayload,
    SinglePayload,
    build_link,
    decode,
    encode,
    fragment_from_link,
    payload_from_document,
)
from .variant_selector import VariantSelector

__all__ = [
    "__version__",
    "AbPayload",
    "CorruptLink",
    "CtaData",
    "CtaFieldError",
    "CustomPosition",
    "LinkPayload",
    "SinglePayload",
    "VariantSelector",
    "build_link",
    "complete_cta",
    "decode",
    "default_cta",
    "default_variants",
    "encode",
    "fragment_from_link",
    "payload_from_document",
]
