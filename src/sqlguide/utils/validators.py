"""Topic id helpers.

ID conventions:
- topic_id: slug of the section title (lowercase, hyphens, no special chars),
  e.g. "creating-a-view", "inner-join"

Functions:
- resolve_topic_id(prefix, candidates) -> str: Resolve prefix to unique topic_id
- is_valid_topic_id(topic_id) -> bool: Check slug format
"""

import re

from sqlguide.core.models import CatalogError

TOPIC_ID_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class TopicNotFoundError(CatalogError, KeyError):
    """Raised when no topic matches the given id or prefix."""

    def __init__(self, topic_id: str):
        self.topic_id = topic_id
        super().__init__(f"Topic '{topic_id}' not found")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class AmbiguousTopicIdError(CatalogError):
    """Raised when a topic_id prefix matches multiple topics."""

    def __init__(self, prefix: str, candidates: list[str]):
        self.prefix = prefix
        self.candidates = candidates
        super().__init__(
            f"Prefix '{prefix}' is ambiguous. Candidates:\n"
            + "\n".join(f"  - {c}" for c in candidates)
        )


def is_valid_topic_id(topic_id: str) -> bool:
    """Check that a topic id is a well-formed slug."""
    return bool(TOPIC_ID_PATTERN.match(topic_id))


def resolve_topic_id(prefix: str, candidates: list[str]) -> str:
    """Resolve a topic_id prefix to a unique full topic_id.

    Args:
        prefix: Partial or full topic_id (e.g., "inner" or "inner-join")
        candidates: All available topic_ids, in catalog order

    Returns:
        The unique matching topic_id

    Raises:
        TopicNotFoundError: If no candidates match the prefix
        AmbiguousTopicIdError: If multiple candidates match the prefix
    """
    # Exact match first
    if prefix in candidates:
        return prefix

    # Prefix match
    matches = [c for c in candidates if prefix and c.startswith(prefix)]

    if len(matches) == 0:
        raise TopicNotFoundError(prefix)
    elif len(matches) == 1:
        return matches[0]
    else:
        raise AmbiguousTopicIdError(prefix, matches)
