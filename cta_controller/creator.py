"""Creator-side session: edit one CTA or an A/B pair, preview it, generate the link."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from cta_client.renderer import CtaVisual, render
from cta_client.viewer import FrameSpec
from cta_controller.controller.edit_session import EditSession
from cta_controller.controller.placement import PlacementEngine
from cta_controller.input_bindings import EditKeyBindings, PointerEventHub
from cta_controller.services.cta_state import CtaStateService
from cta_controller.services.suggestions import (
    Suggestion,
    SuggestionProvider,
    SuggestionUnavailable,
    fetch_suggestions,
)
from cta_payload.cta_model import default_cta, default_variants
from cta_payload.logging_utils import get_logger
from cta_payload.payload_codec import AbPayload, LinkPayload, SinglePayload, build_link
from cta_payload.settings import LinkSettings

_LOGGER = get_logger("Creator")

TAB_CREATE = "create"
TAB_AB_TEST = "ab-test"
TABS = (TAB_CREATE, TAB_AB_TEST)

VARIANT_A = "A"
VARIANT_B = "B"
VARIANTS = (VARIANT_A, VARIANT_B)

# Preview frames additionally allow forms and popups.
PREVIEW_SANDBOX: Tuple[str, ...] = ("allow-scripts", "allow-same-origin", "allow-forms", "allow-popups")
PREVIEW_TITLE = "Live Preview"

SUGGESTIONS_IDLE = "idle"
SUGGESTIONS_PENDING = "pending"
SUGGESTIONS_READY = "ready"
SUGGESTIONS_UNAVAILABLE = "unavailable"

FIELD_TARGET_URL = "target_url"
FIELD_BUTTON_URL = "button_url"


class ValidationError(ValueError):
    """Creator input that cannot produce a link; ``field`` names the offending input."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass
class SuggestionState:
    status: str = SUGGESTIONS_IDLE
    suggestions: List[Suggestion] = field(default_factory=list)
    message: Optional[str] = None


class CreatorSession:
    """Everything the creator page holds between user actions.

    Edits and drags always land on :attr:`active_state`: the single CTA on the
    create tab, otherwise whichever A/B variant is selected.
    """

    def __init__(
        self,
        *,
        settings: Optional[LinkSettings] = None,
        hub: Optional[PointerEventHub] = None,
        placement: Optional[PlacementEngine] = None,
        key_bindings: Optional[EditKeyBindings] = None,
    ) -> None:
        self.settings = settings or LinkSettings()
        self.hub = hub or PointerEventHub()
        self.single = CtaStateService(default_cta())
        variant_a, variant_b = default_variants()
        self.variant_states = {
            VARIANT_A: CtaStateService(variant_a),
            VARIANT_B: CtaStateService(variant_b),
        }
        self._tab = TAB_CREATE
        self._active_variant = VARIANT_A
        self.target_url = ""
        self.generated_link = ""
        self.preview_url = ""
        self.preview_failed = False
        self.suggestions = SuggestionState()
        self.editor = EditSession(
            self.single,
            hub=self.hub,
            placement=placement or PlacementEngine.from_settings(self.settings),
            key_bindings=key_bindings,
        )

    # Tabs and variants ---------------------------------------------------
    @property
    def tab(self) -> str:
        return self._tab

    @property
    def active_variant(self) -> str:
        return self._active_variant

    @property
    def active_state(self) -> CtaStateService:
        if self._tab == TAB_AB_TEST:
            return self.variant_states[self._active_variant]
        return self.single

    def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab {tab!r}; expected one of: {', '.join(TABS)}")
        if tab == self._tab:
            return
        self._tab = tab
        self.generated_link = ""
        self.editor.retarget(self.active_state)

    def select_variant(self, variant: str) -> None:
        if variant not in VARIANTS:
            raise ValueError(f"Unknown variant {variant!r}; expected A or B")
        if variant == self._active_variant:
            return
        self._active_variant = variant
        if self._tab == TAB_AB_TEST:
            self.editor.retarget(self.active_state)

    # Preview -------------------------------------------------------------
    def set_target_url(self, url: str) -> None:
        self.target_url = url or ""
        self.preview_failed = False

    def refresh_preview(self) -> str:
        self.preview_url = self.target_url.strip()
        self.preview_failed = False
        return self.preview_url

    def mark_preview_failed(self) -> None:
        """The target page refused to be embedded; the editor keeps working."""

        self.preview_failed = True
        _LOGGER.info("Preview of %s refused embedding", self.preview_url or "<empty>")

    @property
    def preview_frame(self) -> Optional[FrameSpec]:
        if not self.preview_url:
            return None
        return FrameSpec(src=self.preview_url, sandbox=PREVIEW_SANDBOX, title=PREVIEW_TITLE)

    def render_preview(self) -> CtaVisual:
        return render(self.active_state.data, is_editable=True, editing_element=self.editor.editing_element)

    # Link generation -----------------------------------------------------
    def _require_target(self) -> str:
        target = self.target_url.strip()
        if not target:
            raise ValidationError("Please provide the target content URL.", FIELD_TARGET_URL)
        return target

    def build_payload(self) -> LinkPayload:
        target = self._require_target()
        if self._tab == TAB_CREATE:
            if not self.single.data.button_url.strip():
                raise ValidationError("Please provide the CTA button URL.", FIELD_BUTTON_URL)
            return SinglePayload.capture(target, self.single.data)
        for name in VARIANTS:
            if not self.variant_states[name].data.button_url.strip():
                raise ValidationError(f"Please provide the button URL for variant {name}.", FIELD_BUTTON_URL)
        return AbPayload.capture(target, [self.variant_states[name].data for name in VARIANTS])

    def generate_link(self) -> str:
        """Freeze the current configuration into a shareable link."""

        try:
            payload = self.build_payload()
        except ValidationError:
            self.generated_link = ""
            raise
        self.generated_link = build_link(
            payload,
            self.settings.base_url,
            length_warning=self.settings.link_length_warning,
        )
        _LOGGER.info("Generated %s link (%d characters)", payload.kind, len(self.generated_link))
        return self.generated_link

    # Suggestions ---------------------------------------------------------
    def request_suggestions(self, provider: Optional[SuggestionProvider]) -> SuggestionState:
        """Fetch copy ideas for the active CTA; failures leave the CTA untouched."""

        target = self._require_target()
        button_url = self.active_state.data.button_url.strip()
        if not button_url:
            raise ValidationError("Please provide the CTA button URL first.", FIELD_BUTTON_URL)
        self.suggestions = SuggestionState(status=SUGGESTIONS_PENDING)
        try:
            found = fetch_suggestions(provider, target, button_url)
        except SuggestionUnavailable as exc:
            _LOGGER.warning("Suggestions unavailable: %s", exc)
            self.suggestions = SuggestionState(status=SUGGESTIONS_UNAVAILABLE, message=str(exc))
            return self.suggestions
        self.suggestions = SuggestionState(status=SUGGESTIONS_READY, suggestions=found)
        return self.suggestions

    def apply_suggestion(self, suggestion: Suggestion) -> None:
        self.active_state.apply_suggestion(suggestion.message, suggestion.button_text)
        self.suggestions = SuggestionState()
