"""Local fallback responder.

Purpose
-------
Produce a supportive reply without any network access when the configured
vendor is unavailable or every attempt failed. Output depends only on the
keyword tables and the injected ``random.Random``; tests pass a seeded
instance for deterministic choices.

Behavior
--------
* Crisis messages get one of the fixed scripts for their kind and
  ``needs_escalation=True``.
* Otherwise the first matching group of :data:`REPLY_GROUPS` answers.
* Otherwise a generic acknowledgement is sampled uniformly.

Replies are chosen in the message's language: any CJK ideograph selects
``zh``, everything else ``en``. Crisis phrases are matched in both languages
regardless.
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..base.models import ChatReply
from .keywords import (
    EMOTION_KEYWORDS,
    GENERIC_REPLIES,
    PANIC_PHRASES,
    PANIC_SCRIPTS,
    REPLY_GROUPS,
    SELF_HARM_PHRASES,
    SELF_HARM_SCRIPTS,
)

_CJK_RE = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]")

PANIC = "panic"
SELF_HARM = "self_harm"


@dataclass(frozen=True)
class CrisisAssessment:
    """Result of crisis phrase detection; ``kind`` is ``panic``, ``self_harm`` or ``None``."""

    is_crisis: bool
    kind: Optional[str] = None


NO_CRISIS = CrisisAssessment(is_crisis=False)


def detect_language(text: str) -> str:
    return "zh" if _CJK_RE.search(text or "") else "en"


def _contains_any(text: str, phrases_by_lang) -> bool:
    return any(p in text for phrases in phrases_by_lang.values() for p in phrases)


def detect_crisis(text: str) -> CrisisAssessment:
    """Classify ``text`` as a self-harm or panic crisis.

    Self-harm phrases are checked first so a message containing both kinds is
    treated as self-harm. Matching is case-insensitive.
    """
    lowered = (text or "").lower()
    if _contains_any(lowered, SELF_HARM_PHRASES):
        return CrisisAssessment(is_crisis=True, kind=SELF_HARM)
    if _contains_any(lowered, PANIC_PHRASES):
        return CrisisAssessment(is_crisis=True, kind=PANIC)
    return NO_CRISIS


def extract_emotion_tags(text: str) -> Tuple[str, ...]:
    """Return emotion labels whose keywords occur in ``text``, in table order."""
    lowered = (text or "").lower()
    return tuple(tag for tag, words in EMOTION_KEYWORDS.items() if any(w in lowered for w in words))


def match_reply_group(text: str) -> Optional[str]:
    """Return the name of the first reply group matching ``text`` (any language)."""
    lowered = (text or "").lower()
    for name, keywords, _ in REPLY_GROUPS:
        if _contains_any(lowered, keywords):
            return name
    return None


class LocalFallbackResponder:
    """Answer from local tables; never performs I/O and never raises for text input."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def respond(self, new_message: str, crisis: Optional[CrisisAssessment] = None) -> ChatReply:
        crisis = crisis if crisis is not None else detect_crisis(new_message)
        lang = detect_language(new_message)
        tags = extract_emotion_tags(new_message)
        if crisis.is_crisis:
            scripts = SELF_HARM_SCRIPTS if crisis.kind == SELF_HARM else PANIC_SCRIPTS
            return ChatReply(
                content=self._rng.choice(scripts[lang]),
                needs_escalation=True,
                is_crisis=True,
                emotion_tags=tags,
                fallback_used=True,
            )
        return ChatReply(
            content=self._rng.choice(self._options_for(new_message, lang)),
            needs_escalation=False,
            is_crisis=False,
            emotion_tags=tags,
            fallback_used=True,
        )

    @staticmethod
    def _options_for(text: str, lang: str) -> Tuple[str, ...]:
        group = match_reply_group(text)
        for name, _, replies in REPLY_GROUPS:
            if name == group:
                return replies[lang]
        return GENERIC_REPLIES[lang]


__all__ = [
    "PANIC",
    "SELF_HARM",
    "CrisisAssessment",
    "NO_CRISIS",
    "detect_language",
    "detect_crisis",
    "extract_emotion_tags",
    "match_reply_group",
    "LocalFallbackResponder",
]
