from models.schemas.keywords import ExtractedKeyword
from services.gap_prioritizer import group_by_category, prioritize


def _kw(keyword: str, importance: str, category: str = "technologies") -> ExtractedKeyword:
    return ExtractedKeyword(keyword=keyword, importance=importance, category=category)


def test_quick_wins_ordered_by_importance():
    missing = [_kw("Docker", "high"), _kw("Rust", "low"), _kw("Go", "medium")]
    analysis = prioritize(missing)
    assert [k.keyword for k in analysis.quick_wins] == ["Docker", "Go", "Rust"]
    assert (analysis.counts.high, analysis.counts.medium, analysis.counts.low) == (1, 1, 1)


def test_quick_wins_capped_at_three_and_stable():
    missing = [
        _kw("Terraform", "medium"),
        _kw("Kafka", "high"),
        _kw("Helm", "medium"),
        _kw("Spark", "high"),
        _kw("Airflow", "low"),
    ]
    analysis = prioritize(missing)
    assert [k.keyword for k in analysis.quick_wins] == ["Kafka", "Spark", "Terraform"]
    assert analysis.counts.medium == 2


def test_fewer_than_three_returns_all():
    analysis = prioritize([_kw("Go", "low"), _kw("Docker", "medium")])
    assert [k.keyword for k in analysis.quick_wins] == ["Docker", "Go"]


def test_empty():
    analysis = prioritize([])
    assert analysis.quick_wins == []
    assert analysis.counts.high == 0


def test_input_not_mutated():
    missing = [_kw("Rust", "low"), _kw("Docker", "high")]
    prioritize(missing)
    assert [k.keyword for k in missing] == ["Rust", "Docker"]


def test_group_by_category():
    missing = [
        _kw("Scrum", "low", "methodologies"),
        _kw("Docker", "medium", "tools"),
        _kw("Kubernetes", "high", "tools"),
    ]
    groups = group_by_category(missing)
    assert list(groups) == ["tools", "methodologies"]
    assert [k.keyword for k in groups["tools"]] == ["Kubernetes", "Docker"]
