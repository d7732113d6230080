"""Tests for topic id helpers (F1)."""

import pytest

from sqlguide.utils.validators import (
    AmbiguousTopicIdError,
    TopicNotFoundError,
    is_valid_topic_id,
    resolve_topic_id,
)


class TestIsValidTopicId:
    """Tests for is_valid_topic_id."""

    @pytest.mark.parametrize("topic_id", ["inner-join", "count", "2024-changes", "min-and-max"])
    def test_valid_slugs(self, topic_id):
        assert is_valid_topic_id(topic_id)

    @pytest.mark.parametrize(
        "topic_id",
        ["", "Inner-Join", "inner_join", "inner join", "-inner", "inner-", "inner--join"],
    )
    def test_malformed_ids(self, topic_id):
        assert not is_valid_topic_id(topic_id)


class TestResolveTopicId:
    """Tests for resolve_topic_id."""

    CANDIDATES = ["creating-a-view", "creating-an-index", "inner-join"]

    def test_exact_match(self):
        assert resolve_topic_id("inner-join", self.CANDIDATES) == "inner-join"

    def test_unique_prefix(self):
        assert resolve_topic_id("inner", self.CANDIDATES) == "inner-join"

    def test_ambiguous_prefix(self):
        with pytest.raises(AmbiguousTopicIdError) as exc_info:
            resolve_topic_id("creating", self.CANDIDATES)
        assert exc_info.value.candidates == ["creating-a-view", "creating-an-index"]

    def test_not_found_message(self):
        with pytest.raises(TopicNotFoundError) as exc_info:
            resolve_topic_id("merge", self.CANDIDATES)
        assert str(exc_info.value) == "Topic 'merge' not found"
