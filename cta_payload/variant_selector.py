"""A/B variant choice made at view time."""
from __future__ import annotations

import random
from typing import Optional, Sequence

from cta_payload.cta_model import CtaData
from cta_payload.payload_codec import AB_VARIANT_COUNT


class VariantSelector:
    """Uniform 50/50 choice between the two variants of an A/B payload.

    The selector holds no memory of earlier visits; callers cache the result
    for the lifetime of one viewer session.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def choose(self, variants: Sequence[CtaData]) -> CtaData:
        if len(variants) != AB_VARIANT_COUNT:
            raise ValueError(f"Expected exactly {AB_VARIANT_COUNT} variants, got {len(variants)}")
        return variants[self._rng.randrange(AB_VARIANT_COUNT)]
