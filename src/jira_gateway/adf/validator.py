"""Structural gate for ADF documents before they are sent to Jira.

Checks the document envelope and the shape of each top-level block only.
Inline nodes and marks are not inspected; the builder guarantees those at
construction time.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .nodes import ADF_VERSION, BLOCK_TYPES, DOC_TYPE, Document

logger = logging.getLogger("jira_gateway.adf.validator")

__all__ = ["is_valid_document"]


def is_valid_document(candidate: Any) -> bool:
    """Return True if ``candidate`` looks like an ADF document.

    Accepts a ``Document`` or its wire dict. Any other value, including
    non-mappings, yields False. Never raises.

    Rules:
    1. ``type == "doc"``, ``version == 1`` and ``content`` is a list
    2. every top-level item is a mapping with a known block ``type`` and a
       list ``content`` (empty lists allowed)
    """
    if isinstance(candidate, Document):
        try:
            candidate = candidate.to_dict()
        except (AttributeError, TypeError, ValueError):
            logger.debug("adf_invalid", extra={"reason": "unserializable_block"})
            return False

    if not isinstance(candidate, Mapping):
        logger.debug("adf_invalid", extra={"reason": "not_a_mapping"})
        return False

    if candidate.get("type") != DOC_TYPE:
        logger.debug("adf_invalid", extra={"reason": "wrong_type"})
        return False

    version = candidate.get("version")
    # bool is an int subclass; True == 1 must not pass
    if isinstance(version, bool) or version != ADF_VERSION:
        logger.debug("adf_invalid", extra={"reason": "wrong_version"})
        return False

    content = candidate.get("content")
    if not isinstance(content, list):
        logger.debug("adf_invalid", extra={"reason": "content_not_list"})
        return False

    for index, block in enumerate(content):
        if not _is_valid_block(block):
            logger.debug("adf_invalid", extra={"reason": "bad_block", "index": index})
            return False

    return True


def _is_valid_block(block: Any) -> bool:
    if not isinstance(block, Mapping):
        return False
    block_type = block.get("type")
    if not isinstance(block_type, str) or block_type not in BLOCK_TYPES:
        return False
    return isinstance(block.get("content"), list)
