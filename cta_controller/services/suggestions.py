"""Adapter around the external copy-suggestion service."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from cta_payload.logging_utils import get_logger

_LOGGER = get_logger("Creator")

SUGGESTION_COUNT = 3


class SuggestionUnavailable(RuntimeError):
    """The suggestion service failed or had nothing to offer."""


@dataclass(frozen=True)
class Suggestion:
    message: str
    button_text: str


SuggestionProvider = Callable[[str, str], Iterable[Any]]
TextGenerator = Callable[[str], str]


def build_suggestion_prompt(target_url: str, button_url: str, count: int = SUGGESTION_COUNT) -> str:
    return (
        f'You are a marketing copywriter expert. Analyze the webpage at the URL "{target_url}". '
        f"Based on its content, suggest {count} compelling and concise Call-To-Action (CTA) messages. "
        "For each message, also provide a short, motivating button text. "
        f'The button will link to "{button_url}". The goal is to maximize user clicks. '
        'Reply with JSON of the form {"suggestions": [{"message": "...", "buttonText": "..."}]}.'
    )


def _coerce_suggestion(item: Any) -> Optional[Suggestion]:
    if isinstance(item, Suggestion):
        return item
    if not isinstance(item, dict):
        return None
    message = item.get("message")
    button_text = item.get("buttonText", item.get("button_text"))
    if not isinstance(message, str) or not isinstance(button_text, str):
        return None
    if not message.strip() or not button_text.strip():
        return None
    return Suggestion(message=message.strip(), button_text=button_text.strip())


def parse_suggestion_response(text: str) -> List[Suggestion]:
    """Read ``{"suggestions": [...]}``; malformed entries are skipped."""

    try:
        document = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise SuggestionUnavailable(f"suggestion response is not JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise SuggestionUnavailable("suggestion response must be a JSON object")
    entries = document.get("suggestions") or []
    if not isinstance(entries, list):
        raise SuggestionUnavailable("suggestions must be a list")
    return [suggestion for suggestion in map(_coerce_suggestion, entries) if suggestion is not None]


class PromptSuggestionProvider:
    """Provider backed by any prompt-in, text-out model call."""

    def __init__(self, generate_text: TextGenerator, *, count: int = SUGGESTION_COUNT) -> None:
        self._generate_text = generate_text
        self._count = count

    def __call__(self, target_url: str, button_url: str) -> List[Suggestion]:
        prompt = build_suggestion_prompt(target_url, button_url, self._count)
        return parse_suggestion_response(self._generate_text(prompt))


def fetch_suggestions(provider: Optional[SuggestionProvider], target_url: str, button_url: str) -> List[Suggestion]:
    """Ask ``provider`` for copy; raises :class:`SuggestionUnavailable` on failure or no results."""

    if provider is None:
        raise SuggestionUnavailable("suggestion service is not configured")
    try:
        # Lazy results are drained here so streaming failures are wrapped too.
        raw = list(provider(target_url, button_url) or ())
    except SuggestionUnavailable:
        raise
    except Exception as exc:
        raise SuggestionUnavailable(f"suggestion service failed: {exc}") from exc
    suggestions = [suggestion for suggestion in map(_coerce_suggestion, raw) if suggestion is not None]
    if not suggestions:
        raise SuggestionUnavailable("no suggestions available")
    _LOGGER.debug("Received %d suggestions for %s", len(suggestions), target_url)
    return suggestions
