"""Plain text and simple structures to Atlassian Document Format (ADF).

Jira Cloud REST API v3 requires rich-text fields (issue description,
comments) as ADF documents rather than plain strings. These helpers build
well-formed documents from informal input.

Two layers:
- Block helpers (``paragraph``, ``heading``, ``bullet_list`` ...) return
  single block nodes for composition with ``combine_blocks``.
- Document helpers (``text_to_document``, ``bullet_list_document`` ...)
  return a complete ``Document``.

Example:
    >>> doc = combine_blocks([
    ...     heading("Bug Report", 2),
    ...     paragraph("Login fails for SSO users"),
    ...     bullet_list(["Affects web", "Affects mobile"]),
    ... ])
    >>> doc.to_dict()["content"][0]["attrs"]
    {'level': 2}
"""

import json
import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from .nodes import (
    Block,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    Link,
    ListItem,
    Mark,
    OrderedList,
    Paragraph,
    Text,
    mark_from_dict,
)
from .validator import is_valid_document

logger = logging.getLogger("jira_gateway.adf.builder")

__all__ = [
    "PARAGRAPH_SEPARATOR",
    "bullet_list",
    "bullet_list_document",
    "code_block",
    "code_block_document",
    "coerce_description",
    "combine_blocks",
    "formatted_document",
    "heading",
    "heading_with_content_document",
    "link_document",
    "ordered_list",
    "ordered_list_document",
    "paragraph",
    "text",
    "text_to_document",
]

# A blank line: two line breaks with only spaces/tabs between them
PARAGRAPH_SEPARATOR = re.compile(r"\r?\n[ \t]*\r?\n")


# =============================================================================
# Block helpers
# =============================================================================


def text(value: str, marks: Iterable[Mark | dict[str, Any]] = ()) -> Text:
    """Build a text run, parsing any dict mark descriptors."""
    return Text(value, tuple(mark_from_dict(m) for m in marks))


def paragraph(value: str | None = None) -> Paragraph:
    """Paragraph with one unmarked text run, or empty for falsy input."""
    if not value:
        return Paragraph()
    return Paragraph((Text(value),))


def heading(value: str, level: int) -> Heading:
    return Heading(level, (Text(value),) if value else ())


def _list_items(items: Iterable[str]) -> tuple[ListItem, ...]:
    return tuple(ListItem(paragraph(item)) for item in items)


def bullet_list(items: Iterable[str]) -> BulletList:
    return BulletList(_list_items(items))


def ordered_list(items: Iterable[str]) -> OrderedList:
    return OrderedList(_list_items(items))


def code_block(code: str, language: str | None = None) -> CodeBlock:
    return CodeBlock(code or "", language or None)


# =============================================================================
# Document helpers
# =============================================================================


def text_to_document(value: str | None) -> Document:
    """Convert plain text into a document of paragraphs.

    The input is split on blank lines; each segment becomes one paragraph
    holding a single unmarked text run. Empty segments become empty
    paragraphs so vertical whitespace survives. Empty or None input yields
    one empty paragraph, never an empty document.

    Args:
        value: Plain text, may be None

    Returns:
        Document with one paragraph per segment

    Example:
        >>> doc = text_to_document("First\\n\\nSecond")
        >>> [p.content[0].text for p in doc.content]
        ['First', 'Second']
    """
    if not value:
        return Document((Paragraph(),))

    segments = PARAGRAPH_SEPARATOR.split(value)
    logger.debug("adf_text_converted", extra={"paragraphs": len(segments)})
    return Document(tuple(paragraph(segment) for segment in segments))


def formatted_document(nodes: Iterable[Mapping[str, Any]]) -> Document:
    """Build a single-paragraph document from ``{text, marks}`` descriptors.

    Marks are kept in the given order without deduplication; unrecognised
    mark types are passed through unchanged. Entries with empty text are
    skipped since empty runs carry nothing.

    Args:
        nodes: Sequence of mappings with ``text`` and optional ``marks``,
            e.g. ``[{"text": "urgent", "marks": [{"type": "strong"}]}]``

    Raises:
        ValueError: If a mark descriptor has no type
    """
    runs = tuple(
        text(node["text"], node.get("marks") or ())
        for node in nodes
        if node.get("text")
    )
    return Document((Paragraph(runs),))


def bullet_list_document(items: Iterable[str]) -> Document:
    return Document((bullet_list(items),))


def ordered_list_document(items: Iterable[str]) -> Document:
    return Document((ordered_list(items),))


def heading_with_content_document(title: str, level: int, body: str) -> Document:
    """Heading followed by a body paragraph.

    Raises:
        ValueError: If level is outside 1-6
    """
    return Document((heading(title, level), paragraph(body)))


def code_block_document(code: str, language: str | None = None) -> Document:
    """Single code block; ``code`` is kept verbatim, newlines included."""
    return Document((code_block(code, language),))


def link_document(link_text: str, url: str) -> Document:
    """Paragraph holding one text run carrying a link mark.

    Empty link text falls back to the URL itself.

    Raises:
        ValueError: If url is empty
    """
    return Document((Paragraph((Text(link_text or url, (Link(url),)),)),))


def combine_blocks(blocks: Iterable[Block]) -> Document:
    """Wrap pre-built blocks in a document, order and content untouched."""
    return Document(tuple(blocks))


def coerce_description(value: Any) -> dict[str, Any]:
    """Turn an issue description of any shape into a wire ADF document.

    - str: converted with ``text_to_document``
    - Document or dict already valid as ADF: passed through
    - other dict: JSON-encoded, then converted as text
    - None or anything else: one empty paragraph

    Returns:
        ADF document as a JSON-ready dict
    """
    if isinstance(value, str):
        return text_to_document(value).to_dict()
    if isinstance(value, Document):
        return value.to_dict()
    if isinstance(value, Mapping):
        if is_valid_document(value):
            return dict(value)
        logger.debug("adf_description_not_adf", extra={"keys": sorted(map(str, value))})
        return text_to_document(json.dumps(value, default=str)).to_dict()
    return text_to_document("").to_dict()
