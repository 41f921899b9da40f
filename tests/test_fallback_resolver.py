from services.fallback_resolver import PREVIOUS_IMAGE_FIELDS, resolve_fallback


def test_first_existing_candidate_wins():
    existing = {"b.png", "c.png"}
    assert resolve_fallback(["a.png", "b.png", "c.png"], existing.__contains__) == "b.png"


def test_empty_and_missing_candidates_are_skipped():
    existing = {"d.png"}
    assert resolve_fallback([None, "", "a.png", "d.png"], existing.__contains__) == "d.png"


def test_none_when_nothing_exists():
    assert resolve_fallback(["a.png", None], lambda name: False) is None
    assert resolve_fallback([], lambda name: True) is None


def test_predicate_not_called_after_match():
    seen = []

    def exists(name):
        seen.append(name)
        return name == "first.png"

    assert resolve_fallback(["first.png", "second.png"], exists) == "first.png"
    assert seen == ["first.png"]


def test_field_priority_order():
    assert list(PREVIOUS_IMAGE_FIELDS) == ["previousImage", "previousImage1", "previousImage2", "previousImage3"]
