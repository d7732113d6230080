"""Core business logic module.

Modules:
- models: TopicEntry and the fixed Category enumeration
- guide_parser: Markdown study guide -> topic entries, guide merging
- catalog: Read-only reference catalog (lookup by id, category, search)
"""

__all__ = [
    "models",
    "guide_parser",
    "catalog",
]
