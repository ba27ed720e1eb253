"""Atlassian Document Format (ADF) node model.

Immutable value types for the subset of ADF that the gateway writes into
Jira rich-text fields. Marks and blocks are closed unions; every node
serializes to the wire shape expected by Jira Cloud REST API v3 via
``to_dict()``.

Reference: https://developer.atlassian.com/cloud/jira/platform/apis/document/structure/
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

__all__ = [
    "ADF_VERSION",
    "BLOCK_TYPES",
    "DOC_TYPE",
    "MARK_TYPES",
    "Block",
    "BulletList",
    "CodeBlock",
    "Document",
    "Em",
    "Heading",
    "Link",
    "ListItem",
    "Mark",
    "OrderedList",
    "OtherMark",
    "Paragraph",
    "Strong",
    "Text",
    "mark_from_dict",
]

DOC_TYPE = "doc"
ADF_VERSION = 1

# Top-level block discriminators accepted by the validator
BLOCK_TYPES = frozenset(
    {"paragraph", "heading", "bulletList", "orderedList", "codeBlock"}
)

# Mark types with a dedicated variant; any other type is kept as OtherMark
MARK_TYPES = frozenset({"strong", "em", "link"})


# =============================================================================
# Marks
# =============================================================================


@dataclass(frozen=True)
class Strong:
    """Bold text."""

    type = "strong"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class Em:
    """Italic text."""

    type = "em"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class Link:
    """Hyperlink mark.

    Attributes:
        href: Link target. Only non-emptiness is checked, not URI grammar.
    """

    href: str
    type = "link"

    def __post_init__(self) -> None:
        if not isinstance(self.href, str) or not self.href:
            raise ValueError("link mark requires a non-empty href")

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "attrs": {"href": self.href}}


@dataclass(frozen=True)
class OtherMark:
    """Any mark type without a dedicated variant, serialized unchanged.

    Attributes:
        type: Mark type as given (e.g. "underline", "code")
        attrs: Optional attributes, copied to the wire as-is
    """

    type: str
    attrs: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, str) or not self.type:
            raise ValueError("mark descriptor requires a non-empty type")

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"type": self.type}
        if self.attrs is not None:
            node["attrs"] = dict(self.attrs)
        return node


Mark = Union[Strong, Em, Link, OtherMark]


def mark_from_dict(descriptor: "Mark | Mapping[str, Any]") -> Mark:
    """Parse a mark descriptor such as ``{"type": "strong"}``.

    Mark instances are returned unchanged. Link descriptors may carry
    ``href`` either under ``attrs`` (wire shape) or at the top level.
    Unrecognised types become ``OtherMark`` and are passed through.

    Raises:
        ValueError: If the descriptor is not a mapping or has no type.
    """
    if isinstance(descriptor, (Strong, Em, Link, OtherMark)):
        return descriptor
    if not isinstance(descriptor, Mapping):
        raise ValueError(f"mark descriptor must be a dict, got {type(descriptor).__name__}")

    mark_type = descriptor.get("type")
    if mark_type == "strong":
        return Strong()
    if mark_type == "em":
        return Em()
    if mark_type == "link":
        attrs = descriptor.get("attrs") or {}
        return Link(href=attrs.get("href") or descriptor.get("href") or "")
    return OtherMark(mark_type, descriptor.get("attrs"))


# =============================================================================
# Inline nodes
# =============================================================================


@dataclass(frozen=True)
class Text:
    """A run of text with optional marks applied in order."""

    text: str
    marks: tuple[Mark, ...] = ()
    type = "text"

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("text runs must be non-empty")
        # Accept any iterable of marks but store an immutable tuple
        object.__setattr__(self, "marks", tuple(self.marks))

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"type": self.type, "text": self.text}
        if self.marks:
            node["marks"] = [mark.to_dict() for mark in self.marks]
        return node


# =============================================================================
# Block nodes
# =============================================================================


@dataclass(frozen=True)
class Paragraph:
    """Paragraph of inline nodes. Empty content renders as a blank line."""

    content: tuple[Text, ...] = ()
    type = "paragraph"

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", tuple(self.content))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": [n.to_dict() for n in self.content]}


@dataclass(frozen=True)
class Heading:
    """Heading block; ``level`` must be between 1 and 6."""

    level: int
    content: tuple[Text, ...] = ()
    type = "heading"

    def __post_init__(self) -> None:
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise ValueError(f"heading level must be an int, got {self.level!r}")
        if not 1 <= self.level <= 6:
            raise ValueError(f"heading level must be 1-6, got {self.level}")
        object.__setattr__(self, "content", tuple(self.content))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "attrs": {"level": self.level},
            "content": [n.to_dict() for n in self.content],
        }


@dataclass(frozen=True)
class ListItem:
    """List entry wrapping a single paragraph."""

    paragraph: Paragraph
    type = "listItem"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": [self.paragraph.to_dict()]}


@dataclass(frozen=True)
class BulletList:
    content: tuple[ListItem, ...] = ()
    type = "bulletList"

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", tuple(self.content))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": [n.to_dict() for n in self.content]}


@dataclass(frozen=True)
class OrderedList:
    content: tuple[ListItem, ...] = ()
    type = "orderedList"

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", tuple(self.content))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": [n.to_dict() for n in self.content]}


@dataclass(frozen=True)
class CodeBlock:
    """Code block holding the code verbatim as a single text run.

    Attributes:
        code: Raw source, embedded newlines preserved
        language: Syntax highlighting hint; omitted from the wire when None
    """

    code: str
    language: str | None = None
    type = "codeBlock"

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"type": self.type}
        if self.language:
            node["attrs"] = {"language": self.language}
        # Empty code has no text run (runs must be non-empty)
        node["content"] = [Text(self.code).to_dict()] if self.code else []
        return node


Block = Union[Paragraph, Heading, BulletList, OrderedList, CodeBlock]


@dataclass(frozen=True)
class Document:
    """ADF root node.

    Blocks are normally node objects; wire-format mappings (hand-written
    blocks passed to ``combine_blocks``) are serialized as plain dicts.
    """

    content: tuple[Block, ...] = field(default_factory=tuple)
    type = DOC_TYPE
    version = ADF_VERSION

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", tuple(self.content))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "version": self.version,
            "content": [
                dict(block) if isinstance(block, Mapping) else block.to_dict()
                for block in self.content
            ],
        }
