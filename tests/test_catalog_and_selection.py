"""Tests for catalog loading and random question selection."""

import json
import random
from collections import Counter

import pytest

from config import QUESTIONS_PATH
from services.catalog import QuestionCatalog
from services.errors import ConfigurationError
from services.quiz_service import select_question_ids, shuffle


def _records(n):
    return [
        {"id": i, "questionText": f"Q{i}", "options": ["a", "b"], "correctAnswer": "a"}
        for i in range(1, n + 1)
    ]


def test_bundled_catalog_loads():
    catalog = QuestionCatalog.load(QUESTIONS_PATH)
    assert len(catalog) >= 3
    ids = [q.id for q in catalog]
    assert len(ids) == len(set(ids))


def test_load_from_file_keeps_order(tmp_path):
    path = tmp_path / "q.json"
    path.write_text(json.dumps(_records(4)), encoding="utf-8")
    catalog = QuestionCatalog.load(path)
    assert [q.id for q in catalog] == [1, 2, 3, 4]
    assert catalog.get(2).question_text == "Q2"
    assert catalog.get(99) is None


def test_duplicate_ids_rejected():
    records = _records(2) + [_records(1)[0]]
    with pytest.raises(ConfigurationError):
        QuestionCatalog.from_records(records)


@pytest.mark.parametrize(
    "records",
    [
        {"id": 1},
        [{"id": 1, "questionText": "Q1", "options": ["a"]}],
        [{"id": "x", "questionText": "Q1", "options": ["a"], "correctAnswer": "a"}],
    ],
)
def test_malformed_catalog_rejected(records):
    with pytest.raises(ConfigurationError):
        QuestionCatalog.from_records(records)


def test_missing_or_broken_file_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        QuestionCatalog.load(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        QuestionCatalog.load(broken)


def test_shuffle_is_a_permutation():
    items = list(range(20))
    out = shuffle(items[:], random.Random(7))
    assert sorted(out) == items


def test_shuffle_handles_tiny_inputs():
    assert shuffle([]) == []
    assert shuffle([5]) == [5]


@pytest.mark.parametrize("n", [3, 4, 10])
def test_selection_returns_three_unique_catalog_ids(n):
    catalog = QuestionCatalog.from_records(_records(n))
    rng = random.Random(n)
    for _ in range(200):
        ids = select_question_ids(catalog, 3, rng)
        assert len(ids) == 3
        assert len(set(ids)) == 3
        assert all(catalog.get(i) is not None for i in ids)


def test_selection_reaches_every_question():
    catalog = QuestionCatalog.from_records(_records(6))
    rng = random.Random(42)
    counts = Counter()
    for _ in range(3000):
        counts.update(select_question_ids(catalog, 3, rng))
    assert set(counts) == {1, 2, 3, 4, 5, 6}
    # Each id expected ~1500 times; allow generous slack
    assert all(1300 < c < 1700 for c in counts.values())


def test_selection_larger_than_catalog_is_misconfiguration():
    catalog = QuestionCatalog.from_records(_records(2))
    with pytest.raises(ConfigurationError):
        select_question_ids(catalog, 3)
