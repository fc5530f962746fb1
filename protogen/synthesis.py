"""Synthesis of forward declaration text for function tags."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from .constants import STATIC, TEMPLATE
from .logging import get_logger
from .models import Tag

logger = get_logger("synthesis")


class DeclarationResolver(Protocol):
    """Source access needed to rebuild template declarations spanning lines."""

    def resolve_multiline_declaration(self, path: str, line: int) -> Optional[str]:
        ...


def synthesize(tags: Sequence[Tag], resolver: DeclarationResolver) -> List[Tag]:
    """Finalize the declaration and modifiers of every active tag."""
    return [tag if tag.suppressed else add_prototype(tag, resolver) for tag in tags]


def add_prototype(tag: Tag, resolver: DeclarationResolver) -> Tag:
    if tag.declaration.startswith(TEMPLATE):
        return _add_template_prototype(tag, resolver)

    modifiers = ""
    if f"{STATIC} " in tag.code_snippet:
        modifiers = f"{modifiers} {STATIC}"
    # extern "C" is attached later, once the linkage blocks are known.
    return tag.with_modifiers(modifiers.strip())


def _add_template_prototype(tag: Tag, resolver: DeclarationResolver) -> Tag:
    code = tag.code_snippet
    if code.startswith(TEMPLATE):
        if "{" in code:
            code = code[: code.index("{")]
        else:
            code = code[: code.rfind(")") + 1]
        return tag.with_declaration(f"{code.rstrip()};")

    # The snippet is the line holding the name; the template header is above it.
    code = resolver.resolve_multiline_declaration(tag.source_file, tag.line)
    if code is None:
        logger.debug(
            "Could not rebuild template declaration of %s at %s:%d, keeping %r",
            tag.name,
            tag.source_file,
            tag.line,
            tag.declaration,
        )
        return tag
    return tag.with_declaration(f"{code};")


__all__ = ["DeclarationResolver", "add_prototype", "synthesize"]
