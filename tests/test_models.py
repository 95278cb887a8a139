"""
Unit tests for the domain models and their factories.
"""

import pytest
from pydantic import ValidationError

from intentflow.domain.models import (
    ClassifierVerdict,
    Intent,
    IntentDetails,
    User,
    create_empty_intent,
    create_empty_user,
)
from intentflow.domain.phrase_schema import TopicCollection


class TestFactories:
    """Test empty intent and user factories."""

    @pytest.mark.unit
    def test_empty_intent(self):
        """Should have no action, no topic, and no details."""
        intent = create_empty_intent()
        assert intent.action is None
        assert intent.topic is None
        assert intent.details.present() == {}

    @pytest.mark.unit
    def test_empty_user_defaults(self):
        """Should start with an empty conversation and state 'none'."""
        user = create_empty_user()
        assert user.conversation == []
        assert user.state == "none"
        assert user.intent == create_empty_intent()

    @pytest.mark.unit
    def test_caller_defaults_override_only_given_keys(self):
        """Should replace state but keep the other base values."""
        user = create_empty_user({"state": "active"})
        assert user.state == "active"
        assert user.conversation == []
        assert user.intent == create_empty_intent()

    @pytest.mark.unit
    def test_extra_fields_allowed(self):
        """Should accept caller-specific fields."""
        user = create_empty_user({"name": "sam"})
        assert user.name == "sam"

    @pytest.mark.unit
    def test_custom_user_class(self):
        """Should build the requested User subclass."""
        class ShopUser(User):
            basket: list = []

        user = create_empty_user({"basket": ["tea"]}, user_cls=ShopUser)
        assert isinstance(user, ShopUser)
        assert user.basket == ["tea"]

    @pytest.mark.unit
    def test_users_do_not_share_conversations(self):
        """Should give every user its own conversation list."""
        first, second = create_empty_user(), create_empty_user()
        first.conversation.append("hi")
        assert second.conversation == []


class TestIntentDetails:
    """Test presence tracking and merging."""

    @pytest.mark.unit
    def test_present_tracks_only_set_keys(self):
        """Should not report unset known fields."""
        details = IntentDetails(confidence=0.5)
        assert details.present() == {"confidence": 0.5}
        assert not details.has("locations")

    @pytest.mark.unit
    def test_extras_are_present(self):
        """Should expose unmodelled keys."""
        details = IntentDetails(city="Paris")
        assert details.get("city") == "Paris"
        assert details.get("missing", "x") == "x"

    @pytest.mark.unit
    def test_with_missing_from_does_not_mutate(self):
        """Should return a new details object."""
        base = IntentDetails(confidence=0.5)
        merged = base.with_missing_from(IntentDetails(confidence=0.9, city="Rome"))
        assert merged.present() == {"confidence": 0.5, "city": "Rome"}
        assert base.present() == {"confidence": 0.5}

    @pytest.mark.unit
    def test_intent_accepts_dict_details(self):
        """Should validate plain dicts into IntentDetails."""
        intent = Intent(action="hello", topic="greetings", details={"confidence": 0.8})
        assert intent.details.confidence == 0.8


class TestValidation:
    """Test model validation."""

    @pytest.mark.unit
    def test_verdict_score_range(self):
        """Should reject scores outside [0, 1]."""
        with pytest.raises(ValidationError):
            ClassifierVerdict(label="x", score=1.5)

    @pytest.mark.unit
    def test_topic_collection_rejects_reserved_label(self):
        """Should refuse a label named 'false'."""
        with pytest.raises(ValidationError):
            TopicCollection(topic="t", labels={"false": ["x"]})

    @pytest.mark.unit
    def test_topic_collection_rejects_empty_label(self):
        """Should refuse labels without phrases."""
        with pytest.raises(ValidationError):
            TopicCollection(topic="t", labels={"a": []})

    @pytest.mark.unit
    def test_negatives_for_label(self):
        """Should use other labels' phrases plus explicit negatives."""
        collection = TopicCollection(
            topic="t", labels={"a": ["a1"], "b": ["b1", "b2"]}, negatives=["n1"],
        )
        assert collection.negatives_for("a") == ["b1", "b2", "n1"]

    @pytest.mark.unit
    def test_merged_with_concatenates(self):
        """Should combine labels and negatives of the same topic."""
        first = TopicCollection(topic="t", labels={"a": ["a1"]}, negatives=["n1"])
        second = TopicCollection(topic="t", labels={"a": ["a2"], "b": ["b1"]})
        merged = first.merged_with(second)
        assert merged.labels == {"a": ["a1", "a2"], "b": ["b1"]}
        assert merged.negatives == ["n1"]
