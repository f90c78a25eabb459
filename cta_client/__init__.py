from .renderer import ANCHOR_RULES, AnchorRule, CtaVisual, Placement, anchor_rule, render, resolve_font_stack
from .viewer import FrameSpec, ViewerSession, route

__all__ = [
    "ANCHOR_RULES",
    "AnchorRule",
    "CtaVisual",
    "FrameSpec",
    "Placement",
    "ViewerSession",
    "anchor_rule",
    "render",
    "resolve_font_stack",
    "route",
]
