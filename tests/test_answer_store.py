"""
Test Answer Store - partial updates, defaults and id validation

Run with: pytest tests/test_answer_store.py -v
"""

import pytest

from backend.contracts import Answer
from backend.core.answer_store import (
    UNANSWERED_SCORE_POLICY,
    AnswerStore,
    UnansweredScorePolicy,
    default_score,
)


def test_unanswered_policy_is_zero():
    """Unanswered questions count as 0 throughout the system"""
    assert UNANSWERED_SCORE_POLICY is UnansweredScorePolicy.ZERO


def test_default_score_policies(catalog):
    question = catalog.get("P1")
    assert default_score(question) == 0
    assert default_score(question, UnansweredScorePolicy.ZERO) == 0
    assert default_score(question, UnansweredScorePolicy.MIDPOINT) == 5


def test_get_unvisited_returns_none(store):
    assert store.get("P1") is None
    assert not store.is_visited("P1")


def test_visit_creates_default_answer(store):
    answer = store.visit("P1")
    assert answer == Answer(question_id="P1", score=0, reflection="")
    assert store.is_visited("P1")

    # Second visit keeps the existing answer
    store.set("P1", score=7)
    assert store.visit("P1").score == 7


def test_visit_with_midpoint_policy(catalog):
    store = AnswerStore(catalog, policy=UnansweredScorePolicy.MIDPOINT)
    assert store.visit("P1").score == 5


def test_set_preserves_field_not_supplied(store):
    store.set("P1", score=8)
    store.set("P1", reflection="Good week")
    assert store.get("P1") == Answer("P1", 8, "Good week")

    store.set("P1", score=3)
    assert store.get("P1") == Answer("P1", 3, "Good week")


def test_set_reflection_only_on_new_answer_uses_default_score(store):
    answer = store.set("E1", reflection="Not sure")
    assert answer.score == 0
    assert answer.reflection == "Not sure"


def test_scale_bounds_are_inclusive(store):
    assert store.set("P1", score=0).score == 0
    assert store.set("P1", score=10).score == 10


class TestAnswerStoreRejections:
    """Foreign ids and invalid values are rejected with a reported error"""

    def test_unknown_id_on_set(self, store):
        with pytest.raises(ValueError, match="Unknown question id"):
            store.set("P9", score=5)
        assert len(store) == 0

    def test_unknown_id_on_get(self, store):
        with pytest.raises(ValueError, match="Unknown question id"):
            store.get("nope")

    def test_unknown_id_on_visit(self, store):
        with pytest.raises(ValueError):
            store.visit("nope")

    def test_score_out_of_range(self, store):
        with pytest.raises(ValueError, match="outside scale"):
            store.set("P1", score=11)
        with pytest.raises(ValueError, match="outside scale"):
            store.set("P1", score=-1)
        assert store.get("P1") is None

    def test_score_wrong_type(self, store):
        with pytest.raises(TypeError):
            store.set("P1", score="7")
        with pytest.raises(TypeError):
            store.set("P1", score=True)

    def test_reflection_wrong_type(self, store):
        with pytest.raises(TypeError):
            store.set("P1", reflection=42)


def test_all_is_catalog_ordered_snapshot(store):
    store.set("hap", score=9)
    store.set("A1", score=4)
    store.set("P1", score=6)

    snapshot = store.all()
    assert list(snapshot) == ["A1", "P1", "hap"]

    # Snapshot is detached from later updates
    store.set("A1", score=1)
    assert snapshot["A1"].score == 4
