"""Insertion of the generated prototype section into preprocessed source."""

from __future__ import annotations

from typing import List, Sequence

from .logging import get_logger
from .models import Prototype

logger = get_logger("adder")


def quote_cpp_string(text: str) -> str:
    """Return ``text`` as a C string literal usable in a ``#line`` directive."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def join_prototypes(
    prototypes: Sequence[Prototype],
    *,
    skip_default_arguments: bool = True,
    line_directives: bool = True,
) -> str:
    rows: List[str] = []
    for prototype in prototypes:
        # Default arguments may only appear once, and the definition has them.
        if skip_default_arguments and "=" in prototype.declaration:
            continue
        if line_directives and prototype.line > 0:
            rows.append(f"#line {prototype.line} {quote_cpp_string(prototype.file)}")
        rows.append(prototype.render())
    return "\n".join(rows)


def compose_prototype_section(
    line: int,
    prototypes: Sequence[Prototype],
    *,
    skip_default_arguments: bool = True,
    line_directives: bool = True,
) -> str:
    """Render the prototypes followed by a directive restoring the original line.

    Nothing is rendered without a valid insertion line or when every
    prototype was left out.
    """
    if not prototypes or line < 1:
        return ""
    section = join_prototypes(
        prototypes,
        skip_default_arguments=skip_default_arguments,
        line_directives=line_directives,
    )
    if not section:
        return ""
    if line_directives:
        section += f"\n#line {line} {quote_cpp_string(prototypes[0].file)}"
    return section + "\n"


def add_prototypes(
    source: str,
    prototypes: Sequence[Prototype],
    line: int,
    *,
    line_offset: int = 0,
    skip_default_arguments: bool = True,
    line_directives: bool = True,
) -> str:
    """Insert the prototype section before ``line`` of the main file.

    ``line_offset`` is the number of lines the preprocessed source carries
    before the first line of the main file. The source is returned unchanged
    when nothing has to be inserted.
    """
    source = source.replace("\r\n", "\n")
    rows = source.split("\n")
    insertion_row = line + line_offset - 1
    if not prototypes or line < 1 or insertion_row < 0 or insertion_row >= len(rows):
        logger.debug("Nothing to insert (%d prototypes, line %d)", len(prototypes), line)
        return source

    section = compose_prototype_section(
        line,
        prototypes,
        skip_default_arguments=skip_default_arguments,
        line_directives=line_directives,
    )
    offset = len("\n".join(rows[:insertion_row]))
    if insertion_row:
        offset += 1
    return source[:offset] + section + source[offset:]


__all__ = ["add_prototypes", "compose_prototype_section", "join_prototypes", "quote_cpp_string"]
