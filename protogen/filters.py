"""Tag predicates and the helper that applies them."""

from __future__ import annotations

from typing import Iterable, List, Protocol, Sequence

from .constants import KNOWN_TAG_KINDS
from .logging import get_logger
from .models import Tag

logger = get_logger("filters")


class TagPredicate(Protocol):
    """Decides whether a tag must be left out of the generated prototypes."""

    name: str

    def __call__(self, tag: Tag) -> bool:
        """Return True when ``tag`` should be suppressed."""


def skip_tags_where(tags: Sequence[Tag], predicate: TagPredicate) -> List[Tag]:
    """Suppress every still active tag matched by ``predicate``."""
    result: List[Tag] = []
    for tag in tags:
        if not tag.suppressed and predicate(tag):
            logger.debug("Skipping tag %s (line %d): %s", tag.name, tag.line, predicate.name)
            tag = tag.suppress(predicate.name)
        result.append(tag)
    return result


class UnknownKind:
    """Matches tags whose kind cannot produce a forward declaration."""

    name = "unknown-kind"

    def __init__(self, known_kinds: Iterable[str] | None = None) -> None:
        self.known_kinds = frozenset(known_kinds) if known_kinds is not None else KNOWN_TAG_KINDS

    def __call__(self, tag: Tag) -> bool:
        return tag.kind not in self.known_kinds


class UnsupportedScope:
    """Matches members of classes, structs and namespaces."""

    name = "unsupported-scope"

    def __call__(self, tag: Tag) -> bool:
        return tag.is_scoped


__all__ = ["TagPredicate", "UnknownKind", "UnsupportedScope", "skip_tags_where"]
