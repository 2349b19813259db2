"""Detect phrases that make resume text read as machine-written."""

import re

from models.schemas.suggestions import AITellRewrite

# phrase -> plain replacement
AI_TELL_PHRASES: dict[str, str] = {
    "spearheaded": "Led",
    "leveraged": "Used",
    "leverage my expertise": "apply my experience",
    "synergized": "Collaborated",
    "synergize": "collaborate",
    "utilized": "Used",
    "utilize": "use",
    "utilizing": "using",
    "passionate about": "focused on",
    "results-driven": "effective",
    "dynamic professional": "professional",
    "proven track record": "record",
    "i have the pleasure": "I",
    "cutting-edge": "modern",
    "seamlessly": "smoothly",
    "delve into": "explore",
    "in today's fast-paced": "in a busy",
}

_PATTERNS = [
    (phrase, re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", re.IGNORECASE))
    for phrase in sorted(AI_TELL_PHRASES, key=len, reverse=True)
]


def detect_ai_tell_phrases(text: str) -> list[AITellRewrite]:
    """AI-tell phrases present in ``text``, each once, longest first.

    A phrase contained in a longer detected phrase is not reported again.
    """
    found: list[AITellRewrite] = []
    taken: list[tuple[int, int]] = []
    for phrase, pattern in _PATTERNS:
        match = pattern.search(text or "")
        if not match:
            continue
        if any(start <= match.start() and match.end() <= end for start, end in taken):
            continue
        taken.append(match.span())
        found.append(AITellRewrite(detected=match.group(), rewritten=AI_TELL_PHRASES[phrase]))
    return found
