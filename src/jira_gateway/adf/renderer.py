"""Render ADF documents as plain text previews.

Used by the example scripts to show what a built document will look like
in Jira. Walks the tree recursively; unknown node types are logged and
their children rendered so no text is lost.

Reference: https://developer.atlassian.com/cloud/jira/platform/apis/document/structure/
"""

import logging
from typing import Any

from .nodes import Document

logger = logging.getLogger("jira_gateway.adf.renderer")

__all__ = ["document_to_text"]


def document_to_text(document: Document | dict[str, Any] | None) -> str:
    """Convert an ADF document to markdown-flavoured plain text.

    Paragraphs and blocks are separated by a blank line. Marks render as
    ``**strong**``, ``*em*`` and ``[text](href)``.

    Args:
        document: ``Document`` or wire dict, may be None

    Returns:
        Plain text; empty string for None/empty input

    Example:
        >>> document_to_text({"type": "doc", "version": 1, "content": [
        ...     {"type": "paragraph", "content": [{"type": "text", "text": "Hi"}]}
        ... ]})
        'Hi'
    """
    if isinstance(document, Document):
        document = document.to_dict()
    if not document:
        return ""

    blocks: list[str] = []
    for child in _children(document):
        rendered = _render_block(child, depth=0)
        if rendered:
            blocks.append(rendered)
    return "\n\n".join(blocks)


def _children(node: dict[str, Any]) -> list[Any]:
    content = node.get("content")
    return content if isinstance(content, list) else []


def _render_inline(nodes: list[Any]) -> str:
    parts: list[str] = []
    for node in nodes:
        if not isinstance(node, dict):
            continue
        if node.get("type") == "text":
            parts.append(_apply_marks(node.get("text", ""), node.get("marks") or []))
        elif node.get("type") == "hardBreak":
            parts.append("\n")
        else:
            parts.append(_render_inline(_children(node)))
    return "".join(parts)


def _apply_marks(value: str, marks: list[Any]) -> str:
    for mark in marks:
        if not isinstance(mark, dict):
            continue
        mark_type = mark.get("type")
        if mark_type == "strong":
            value = f"**{value}**"
        elif mark_type == "em":
            value = f"*{value}*"
        elif mark_type == "link":
            href = (mark.get("attrs") or {}).get("href", "")
            value = f"[{value}]({href})"
    return value


def _render_list(node: dict[str, Any], depth: int, ordered: bool) -> str:
    lines: list[str] = []
    indent = "  " * depth
    for number, item in enumerate(_children(node), start=1):
        if not isinstance(item, dict):
            continue
        prefix = f"{indent}{number}. " if ordered else f"{indent}- "
        head: list[str] = []
        nested: list[str] = []
        for child in _children(item):
            if isinstance(child, dict) and child.get("type") in ("bulletList", "orderedList"):
                nested.append(_render_block(child, depth + 1))
            elif isinstance(child, dict):
                head.append(_render_inline(_children(child)))
        lines.append(prefix + " ".join(head))
        lines.extend(n for n in nested if n)
    return "\n".join(lines)


def _render_block(node: Any, depth: int) -> str:
    if not isinstance(node, dict):
        return ""

    node_type = node.get("type")
    if node_type == "paragraph":
        return _render_inline(_children(node))
    if node_type == "heading":
        level = (node.get("attrs") or {}).get("level", 1)
        return f"{'#' * level} {_render_inline(_children(node))}"
    if node_type == "bulletList":
        return _render_list(node, depth, ordered=False)
    if node_type == "orderedList":
        return _render_list(node, depth, ordered=True)
    if node_type == "codeBlock":
        language = (node.get("attrs") or {}).get("language") or ""
        return f"```{language}\n{_render_inline(_children(node))}\n```"

    logger.warning("adf_unknown_node_type", extra={"node_type": node_type})
    rendered = (_render_block(child, depth) for child in _children(node))
    return "\n\n".join(r for r in rendered if r)
