"""Study guide parser.

Responsibilities:
- Split a Markdown study guide into topic sections (## / ### headings)
- Extract the example query (first fenced code block) of each section
- Collect explanation bullets and "Tip:" lines
- Pick up labelled lines: Memory Trick, Common Question, Answer, Category
- Infer the category from the title when it is not declared
- Merge the primary and secondary guides into one entry per topic

The example query is kept verbatim. It is never parsed as SQL.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path

import structlog

from sqlguide.core.models import Category, InvalidCategoryError, TopicEntry, parse_category
from sqlguide.utils.validators import is_valid_topic_id

logger = structlog.get_logger(__name__)

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")
BULLET_PATTERN = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+(.+)$")
EXPLICIT_ID_PATTERN = re.compile(r"^\s*<!--\s*id\s*:\s*(\S+?)\s*-->\s*$", re.IGNORECASE)
TITLE_NUMBERING_PATTERN = re.compile(r"^(?:\d+(?:\.\d+)*\.|\d+(?:\.\d+)+|[IVXLC]+\.)\s+")

# "Memory Trick: ..." / "**Common Question:** ..." / "> 💡 Tip: ..."
LABEL_PATTERN = re.compile(
    r"^(memory\s+trick|mnemonic|common\s+(?:exam\s+)?question|question|answer|tips?|category)"
    r"\s*:\s*(.*)$",
    re.IGNORECASE,
)

# Category inference from titles, ordered by specificity
CATEGORY_RULES: list[tuple[re.Pattern[str], Category]] = [
    (re.compile(r"\bjoins?\b", re.IGNORECASE), Category.JOIN),
    (
        re.compile(r"\b(?:aggregate|count|sum|avg|average|min|max|having)\b", re.IGNORECASE),
        Category.AGGREGATE,
    ),
    (re.compile(r"\bviews?\b", re.IGNORECASE), Category.VIEW),
    (re.compile(r"\b(?:index|indexes|indices)\b", re.IGNORECASE), Category.INDEX),
    (re.compile(r"\b(?:keys?|constraints?|unique|check)\b", re.IGNORECASE), Category.CONSTRAINT),
    (
        re.compile(r"\b(?:insert|update|delete|drop|alter|truncate)\b", re.IGNORECASE),
        Category.DML,
    ),
]


class GuideFormatError(Exception):
    """Raised when a guide section cannot be turned into a topic entry."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


@dataclass
class TopicDraft:
    """A topic section as read from one guide, fields not yet validated."""

    id: str
    title: str
    category: Category
    source: str = ""
    example_query: str | None = None
    explanation: list[str] = field(default_factory=list)
    memory_trick: str | None = None
    common_question: str | None = None
    common_answer: str | None = None

    def is_empty(self) -> bool:
        """True for grouping headings that carry no content of their own."""
        return (
            self.example_query is None
            and not self.explanation
            and self.memory_trick is None
            and self.common_question is None
            and self.common_answer is None
        )

    def fill_from(self, other: TopicDraft) -> list[str]:
        """Fill fields this draft lacks with values from another draft.

        Fields already present are kept as they are.

        Returns:
            Names of the fields that were filled.
        """
        filled = []
        for name in ("example_query", "memory_trick"):
            if getattr(self, name) is None and getattr(other, name) is not None:
                setattr(self, name, getattr(other, name))
                filled.append(name)
        if not self.explanation and other.explanation:
            self.explanation = list(other.explanation)
            filled.append("explanation")
        # Question and answer travel together
        if self.common_question is None and self.common_answer is None:
            if other.common_question is not None or other.common_answer is not None:
                self.common_question = other.common_question
                self.common_answer = other.common_answer
                filled.extend(["common_question", "common_answer"])
        return filled

    def to_entry(self) -> TopicEntry:
        """Validate and freeze into a TopicEntry.

        Raises:
            GuideFormatError: If the question/answer pair is incomplete
        """
        if (self.common_question is None) != (self.common_answer is None):
            missing = "answer" if self.common_answer is None else "question"
            raise GuideFormatError(f"Topic '{self.id}' has a common question without {missing}", self.source)

        return TopicEntry(
            id=self.id,
            title=self.title,
            category=self.category,
            example_query=self.example_query,
            explanation=tuple(self.explanation),
            memory_trick=self.memory_trick,
            common_question=self.common_question,
            common_answer=self.common_answer,
        )


def slugify(title: str) -> str:
    """Build a topic id from a title: "Creating a View" -> "creating-a-view"."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower())
    return slug.strip("-")


def _clean_title(raw: str) -> str:
    """Strip numbering and inline markup from a heading."""
    title = raw.replace("**", "").replace("`", "").strip()
    title = TITLE_NUMBERING_PATTERN.sub("", title)
    return title.strip()


def infer_category(title: str, parent: Category | None = None) -> Category:
    """Infer a topic category from its title.

    Args:
        title: Section title, e.g. "LEFT JOIN" or "Creating an Index"
        parent: Category of the enclosing grouping heading, if any

    Returns:
        First category whose rule matches, else the parent category,
        else Category.QUERY
    """
    for pattern, category in CATEGORY_RULES:
        if pattern.search(title):
            return category
    if parent is not None:
        return parent
    return Category.QUERY


def _has_category_keyword(title: str) -> bool:
    return any(pattern.search(title) for pattern, _ in CATEGORY_RULES)


def _match_label(text: str) -> tuple[str, str] | None:
    """Detect a labelled line and return (label, value).

    Tolerates blockquote markers, emoji prefixes and bold markup.
    """
    cleaned = text.replace("**", "").replace("__", "").strip()
    cleaned = re.sub(r"^[^\w]+", "", cleaned)
    match = LABEL_PATTERN.match(cleaned)
    if not match:
        return None
    label = re.sub(r"\s+", " ", match.group(1).lower())
    if label == "mnemonic":
        label = "memory trick"
    elif label.startswith("common"):
        label = "question"
    elif label == "tips":
        label = "tip"
    return label, match.group(2).strip()


def _optional(value: str) -> str | None:
    """Map an empty authored value to None."""
    value = value.strip()
    return value or None


def parse_guide(text: str, source: str = "<guide>") -> list[TopicDraft]:
    """Parse one Markdown guide into topic drafts in authoring order.

    Args:
        text: Markdown content
        source: Name used in log events and error messages

    Returns:
        Drafts for every section that carries content. Grouping headings
        (no content of their own) are dropped.

    Raises:
        GuideFormatError: On an unterminated code fence, an unknown
            declared category, a malformed or repeated section id
    """
    drafts: list[TopicDraft] = []
    current: TopicDraft | None = None
    group_category: Category | None = None
    group_draft: TopicDraft | None = None

    in_fence = False
    fence_marker = ""
    fence_lines: list[str] = []
    fence_start = 0

    # Field the previous non-blank line wrote to, for continuation lines
    last_field: str | None = None

    def close_section() -> None:
        if current is not None and not current.is_empty():
            drafts.append(current)

    for lineno, line in enumerate(text.splitlines(), start=1):
        if in_fence:
            if line.strip().startswith(fence_marker):
                in_fence = False
                if current is not None and current.example_query is None:
                    current.example_query = "\n".join(fence_lines).strip("\n")
                fence_lines = []
            else:
                fence_lines.append(line)
            continue

        fence = FENCE_PATTERN.match(line)
        if fence:
            in_fence = True
            fence_marker = fence.group(1)
            fence_start = lineno
            last_field = None
            continue

        heading = HEADING_PATTERN.match(line)
        if heading:
            level = len(heading.group(1))
            last_field = None
            if level == 1:
                # Document title
                continue
            close_section()
            title = _clean_title(heading.group(2))
            if level == 2:
                # A level-2 heading opens a new group for the ### topics below it
                group_category = infer_category(title) if _has_category_keyword(title) else None
            current = TopicDraft(
                id=slugify(title),
                title=title,
                category=infer_category(title, group_category),
                source=source,
            )
            if level == 2:
                group_draft = current
            continue

        if current is None:
            continue

        stripped = line.strip()
        if not stripped:
            last_field = None
            continue

        explicit_id = EXPLICIT_ID_PATTERN.match(line)
        if explicit_id:
            topic_id = explicit_id.group(1).lower()
            if not is_valid_topic_id(topic_id):
                raise GuideFormatError(f"line {lineno}: malformed topic id '{topic_id}'", source)
            current.id = topic_id
            continue

        bullet = BULLET_PATTERN.match(line)
        body = bullet.group(1).strip() if bullet else stripped.lstrip(">").strip()
        label = _match_label(body)

        if label is not None:
            name, value = label
            if name == "memory trick":
                current.memory_trick = _optional(value)
                last_field = "memory_trick"
            elif name == "question":
                current.common_question = _optional(value)
                last_field = "common_question"
            elif name == "answer":
                current.common_answer = _optional(value)
                last_field = "common_answer"
            elif name == "tip":
                if value:
                    current.explanation.append(value)
                    last_field = "explanation"
            elif name == "category":
                try:
                    current.category = parse_category(value)
                except InvalidCategoryError as e:
                    raise GuideFormatError(f"line {lineno}: {e}", source) from e
                if current is group_draft:
                    group_category = current.category
                last_field = None
            continue

        if bullet:
            current.explanation.append(body)
            last_field = "explanation"
            continue

        # Continuation of the previous bullet or labelled value
        if last_field == "explanation" and current.explanation:
            current.explanation[-1] = f"{current.explanation[-1]} {body}"
        elif last_field is not None:
            previous = getattr(current, last_field)
            setattr(current, last_field, f"{previous} {body}" if previous else body)
        # Plain paragraphs are introduction text and are not kept

    if in_fence:
        raise GuideFormatError(f"unterminated code fence opened at line {fence_start}", source)

    close_section()

    seen: set[str] = set()
    for draft in drafts:
        if not is_valid_topic_id(draft.id):
            raise GuideFormatError(f"Section '{draft.title}' has no usable topic id", source)
        if draft.id in seen:
            raise GuideFormatError(f"Topic id '{draft.id}' appears more than once", source)
        seen.add(draft.id)

    logger.debug("guide_parsed", source=source, topics=len(drafts))
    return drafts


def parse_guide_file(path: Path) -> list[TopicDraft]:
    """Read and parse a guide file.

    Raises:
        FileNotFoundError: If the guide does not exist
        GuideFormatError: If the guide is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Guide not found: {path}")
    return parse_guide(path.read_text(encoding="utf-8"), source=path.name)


def merge_guides(
    primary: list[TopicDraft],
    secondary: list[TopicDraft] | None = None,
) -> list[TopicEntry]:
    """Merge two near-duplicate guides into one entry per topic.

    The primary guide wins for every field it provides. The secondary
    guide only fills absent fields and contributes topics the primary
    lacks, appended in its own order.

    Args:
        primary: Drafts from the authoritative guide
        secondary: Drafts from the second guide, if any

    Returns:
        Validated entries in authoring order

    Raises:
        GuideFormatError: If a merged topic is still incomplete
    """
    merged: dict[str, TopicDraft] = {}
    for draft in primary:
        merged[draft.id] = replace(draft, explanation=list(draft.explanation))

    for draft in secondary or []:
        existing = merged.get(draft.id)
        if existing is None:
            merged[draft.id] = replace(draft, explanation=list(draft.explanation))
            logger.debug("topic_added_from_secondary", topic_id=draft.id, source=draft.source)
            continue
        filled = existing.fill_from(draft)
        if filled:
            logger.debug("topic_merged", topic_id=draft.id, filled=filled, source=draft.source)

    return [draft.to_entry() for draft in merged.values()]
