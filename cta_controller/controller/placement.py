"""Where the CTA sits: fixed anchors for named positions, clamped drag math for custom."""

from __future__ import annotations

import math
from typing import Optional, Tuple

from cta_client.renderer import AnchorRule, anchor_rule
from cta_payload.cta_model import NAMED_POSITIONS, CustomPosition
from cta_payload.settings import LinkSettings

Vector = Tuple[float, float]


def clamp_axis(value: float, container: float, element: float) -> float:
    """Pin ``value`` into ``[0, container - element]``; the upper bound never drops below 0."""

    upper = max(0.0, float(container) - float(element))
    return max(0.0, min(float(value), upper))


class PlacementEngine:
    """Resolves CTA coordinates inside the preview container.

    Element size is estimated from the configured ``scale`` against a nominal
    footprint rather than measured, so clamping is approximate near the
    right and bottom edges.
    """

    def __init__(
        self,
        nominal_width: float = LinkSettings.nominal_width,
        nominal_height: float = LinkSettings.nominal_height,
    ) -> None:
        self.nominal_width = nominal_width
        self.nominal_height = nominal_height

    @classmethod
    def from_settings(cls, settings: Optional[LinkSettings]) -> "PlacementEngine":
        if settings is None:
            return cls()
        return cls(settings.nominal_width, settings.nominal_height)

    def estimate_extent(self, scale: float) -> Vector:
        if not isinstance(scale, (int, float)) or not math.isfinite(scale) or scale <= 0:
            scale = 1.0
        return self.nominal_width * scale, self.nominal_height * scale

    @staticmethod
    def anchor_for(position: str) -> AnchorRule:
        if position not in NAMED_POSITIONS:
            raise ValueError(f"{position!r} is not a named position")
        return anchor_rule(position)

    def anchored_offset(self, position: str, container: Vector, scale: float) -> CustomPosition:
        """Top-left offset of a CTA drawn at ``position``'s anchor inside ``container``.

        Positions without a named anchor use the bottom-left rule, as the renderer does.
        """

        rule = anchor_rule(position)
        width, height = self.estimate_extent(scale)
        if rule.left is not None:
            x = rule.left
        else:
            x = container[0] - (rule.right or 0.0) - width
        y = container[1] - (rule.bottom or 0.0) - height
        return CustomPosition(
            x=clamp_axis(x, container[0], width),
            y=clamp_axis(y, container[1], height),
        )

    @staticmethod
    def resolve(
        initial_offset: Vector,
        start_pointer: Vector,
        current_pointer: Vector,
        container: Vector,
        element: Vector,
    ) -> CustomPosition:
        """``initial + (current - start)``, clamped per axis to the container."""

        raw_x = initial_offset[0] + (current_pointer[0] - start_pointer[0])
        raw_y = initial_offset[1] + (current_pointer[1] - start_pointer[1])
        return CustomPosition(
            x=clamp_axis(raw_x, container[0], element[0]),
            y=clamp_axis(raw_y, container[1], element[1]),
        )
