"""Fixtures for F2 tests - Reference catalog."""

import pytest

from sqlguide.core.catalog import ReferenceCatalog
from sqlguide.core.models import Category, TopicEntry


@pytest.fixture
def sample_entries() -> list[TopicEntry]:
    """Small hand-built set of entries in authoring order."""
    return [
        TopicEntry(
            id="creating-a-view",
            title="Creating a View",
            category=Category.VIEW,
            example_query="CREATE VIEW v AS SELECT id FROM t;",
            explanation=("A view is a saved query.",),
            memory_trick="A VIEW is a window onto the table.",
            common_question="Does a view store data?",
            common_answer="No.",
        ),
        TopicEntry(
            id="left-join",
            title="LEFT JOIN",
            category=Category.JOIN,
            example_query="SELECT * FROM a LEFT JOIN b ON a.id = b.a_id;",
            explanation=("All rows from the left table.",),
            memory_trick="Nothing on the left is lost, unlike an inner join.",
        ),
        TopicEntry(
            id="inner-join",
            title="INNER JOIN",
            category=Category.JOIN,
            example_query="SELECT * FROM a INNER JOIN b ON a.id = b.a_id;",
            explanation=("Only matching rows.",),
            memory_trick="The overlap of two circles.",
            common_question="What happens to unmatched rows?",
            common_answer="They are dropped.",
        ),
        TopicEntry(
            id="count",
            title="COUNT",
            category=Category.AGGREGATE,
            example_query="SELECT COUNT(*) FROM t;",
            explanation=("Counts rows.",),
        ),
        TopicEntry(
            id="count-distinct",
            title="COUNT DISTINCT",
            category=Category.AGGREGATE,
            example_query="SELECT COUNT(DISTINCT x) FROM t;",
            explanation=("Counts unique values.",),
        ),
    ]


@pytest.fixture
def catalog(sample_entries) -> ReferenceCatalog:
    """Catalog over the sample entries."""
    return ReferenceCatalog(sample_entries)
