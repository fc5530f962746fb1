"""Suppression of declarations already present in the source or repeated."""

from __future__ import annotations

from typing import List, Sequence, Set

from .constants import KIND_PROTOTYPE
from .logging import get_logger
from .models import Tag

logger = get_logger("resolvers")

DEFINED_PROTOTYPE = "defined-prototype"
DUPLICATE = "duplicate"


def suppress_defined_prototypes(tags: Sequence[Tag]) -> List[Tag]:
    """Suppress synthesized declarations that the source already spells out.

    Every declaration reported with the ``prototype`` kind shadows the tags of
    other kinds carrying the same text. The explicit prototype tags stay
    active; repeated ones are reduced by :func:`suppress_duplicates`.
    """
    defined: Set[str] = {tag.declaration for tag in tags if tag.kind == KIND_PROTOTYPE}

    result: List[Tag] = []
    for tag in tags:
        if tag.kind != KIND_PROTOTYPE and tag.declaration in defined and not tag.suppressed:
            logger.debug("Skipping tag %s (line %d): already declared", tag.name, tag.line)
            tag = tag.suppress(DEFINED_PROTOTYPE)
        result.append(tag)
    return result


def suppress_duplicates(tags: Sequence[Tag]) -> List[Tag]:
    """Keep the first active tag of each declaration text."""
    seen: Set[str] = set()
    result: List[Tag] = []
    for tag in tags:
        if not tag.suppressed:
            if tag.declaration in seen:
                logger.debug("Skipping tag %s (line %d): duplicate declaration", tag.name, tag.line)
                tag = tag.suppress(DUPLICATE)
            else:
                seen.add(tag.declaration)
        result.append(tag)
    return result


__all__ = ["DEFINED_PROTOTYPE", "DUPLICATE", "suppress_defined_prototypes", "suppress_duplicates"]
