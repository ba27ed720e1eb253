"""Atlassian Document Format (ADF) builder, validator and renderer."""

from .builder import (
    bullet_list,
    bullet_list_document,
    code_block,
    code_block_document,
    coerce_description,
    combine_blocks,
    formatted_document,
    heading,
    heading_with_content_document,
    link_document,
    ordered_list,
    ordered_list_document,
    paragraph,
    text,
    text_to_document,
)
from .nodes import (
    ADF_VERSION,
    Block,
    BulletList,
    CodeBlock,
    Document,
    Em,
    Heading,
    Link,
    ListItem,
    Mark,
    OrderedList,
    OtherMark,
    Paragraph,
    Strong,
    Text,
    mark_from_dict,
)
from .renderer import document_to_text
from .validator import is_valid_document

__all__ = [
    "ADF_VERSION",
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
    "bullet_list",
    "bullet_list_document",
    "code_block",
    "code_block_document",
    "coerce_description",
    "combine_blocks",
    "document_to_text",
    "formatted_document",
    "heading",
    "heading_with_content_document",
    "is_valid_document",
    "link_document",
    "mark_from_dict",
    "ordered_list",
    "ordered_list_document",
    "paragraph",
    "text",
    "text_to_document",
]
