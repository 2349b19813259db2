import re

# Bullet markers: standard + expanded unicode set
BULLET_MARKERS = frozenset("•-–—►▪✓*○◆⚫→▸▹◇■□●◦")

_NUMBERED_RE = re.compile(r"^\d{1,2}[.)]\s")

# Any quantified metric: percentages, currency, multipliers, counts with units
METRIC_PATTERNS: list[re.Pattern] = [
    re.compile(r"\d+\.?\d*\s*%"),
    re.compile(r"\d+\.?\d*\s*percent", re.IGNORECASE),
    re.compile(r"\$[\d,]+(?:\.\d{2})?(?:\s*[KMBkmb])?"),
    re.compile(r"[\d,]+(?:\.\d{2})?\s*(?:dollars?|USD)", re.IGNORECASE),
    re.compile(r"\b\d+x\b", re.IGNORECASE),
    re.compile(
        r"\b\d[\d,]*\+?\s*(?:users|clients|customers|requests|endpoints|services|"
        r"engineers|people|members|teams?|projects|applications|countries|hours|days|weeks)\b",
        re.IGNORECASE,
    ),
    re.compile(r"team\s+of\s+\d+", re.IGNORECASE),
]


def _strip_marker(line: str) -> str | None:
    """Return bullet text without its marker, or None for non-bullet lines."""
    stripped = line.strip()
    if not stripped:
        return None
    if stripped[0] in BULLET_MARKERS:
        cleaned = stripped.lstrip("".join(BULLET_MARKERS) + " ").strip()
        return cleaned or None
    if _NUMBERED_RE.match(stripped):
        cleaned = re.sub(r"^\d{1,2}[.)]\s*", "", stripped).strip()
        return cleaned or None
    return None


def extract_bullets(text: str) -> list[str]:
    """Extract bullet-point lines from resume text."""
    bullets = []
    for line in (text or "").split("\n"):
        cleaned = _strip_marker(line)
        if cleaned:
            bullets.append(cleaned)
    return bullets


_ACCOMPLISHMENT_LINE_RE = re.compile(r"^[A-Z][a-z]+ed?\s")


def extract_experience_bullets(experience_text: str) -> list[str]:
    """Bullets of an experience section.

    Falls back to accomplishment-style lines ("Reduced latency by ...")
    when the section uses few explicit markers.
    """
    bullets: list[str] = []
    seen: set[str] = set()
    for bullet in extract_bullets(experience_text):
        key = bullet.lower()
        if key not in seen and len(bullet) > 12:
            seen.add(key)
            bullets.append(bullet)

    if len(bullets) < 4:
        for line in (experience_text or "").split("\n"):
            trimmed = line.strip()
            if (
                len(trimmed) > 30
                and _ACCOMPLISHMENT_LINE_RE.match(trimmed)
                and trimmed.lower() not in seen
            ):
                seen.add(trimmed.lower())
                bullets.append(trimmed)
    return bullets


def count_bullet_lines(text: str) -> int:
    return len(extract_bullets(text))


def has_metric(bullet: str) -> bool:
    return any(p.search(bullet) for p in METRIC_PATTERNS)


def first_word(bullet: str) -> str:
    """Lower-cased leading word with punctuation removed."""
    words = bullet.strip().lower().split()
    if not words:
        return ""
    return re.sub(r"[^a-z]", "", words[0])


def keywords_in(bullet: str, keywords: list[str]) -> list[str]:
    bullet_lower = bullet.lower()
    return [kw for kw in keywords if kw.lower() in bullet_lower]
