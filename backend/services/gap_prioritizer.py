"""Rank missing keywords so the most valuable additions surface first."""

from models.schemas.keywords import ExtractedKeyword, GapAnalysis, GapCounts

IMPORTANCE_RANK = {"high": 0, "medium": 1, "low": 2}
QUICK_WIN_COUNT = 3


def prioritize(missing: list[ExtractedKeyword]) -> GapAnalysis:
    """Tally missing keywords per importance and pick the top quick wins.

    Quick wins are ordered high → medium → low; keywords of equal
    importance keep their original order. The input list is not modified.
    """
    counts = GapCounts()
    for keyword in missing:
        setattr(counts, keyword.importance, getattr(counts, keyword.importance) + 1)

    ranked = sorted(missing, key=lambda k: IMPORTANCE_RANK[k.importance])
    return GapAnalysis(counts=counts, quick_wins=ranked[:QUICK_WIN_COUNT])


def group_by_category(missing: list[ExtractedKeyword]) -> dict[str, list[ExtractedKeyword]]:
    """Missing keywords grouped by category, each group ranked by importance."""
    groups: dict[str, list[ExtractedKeyword]] = {}
    for keyword in sorted(missing, key=lambda k: IMPORTANCE_RANK[k.importance]):
        groups.setdefault(keyword.category, []).append(keyword)
    return groups
