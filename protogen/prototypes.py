"""Turning the surviving tags into prototypes and locating where they go."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, Set, Tuple

from .constants import EXTERN, KIND_FUNCTION
from .logging import get_logger
from .models import Prototype, Tag

logger = get_logger("prototypes")


class LineReader(Protocol):
    def read_lines(self, path: str) -> Optional[List[str]]:
        ...


def find_c_linkage_lines(path: str, reader: LineReader) -> Set[int]:
    """Return the 1-based lines of ``path`` that sit in ``extern "C"`` scope.

    Three layouts are recognized::

        extern "C" void foo();

        extern "C" {
            void foo();
        }

        extern "C"
        {
            void foo();
        }

    Comments are kept so line numbers stay aligned with the tags.
    """
    lines = reader.read_lines(path)
    if lines is None:
        return set()

    linked: Set[int] = set()
    extern_decl = _squeeze(EXTERN)
    in_scope = False
    entering_scope = False
    depth = 0
    for number, raw in enumerate(lines, start=1):
        text = _squeeze(raw)
        if not text:
            continue
        # the first non empty line after a bare extern "C" must open the block
        entering_scope = False
        if extern_decl in text:
            in_scope = True
            if len(text) == len(extern_decl):
                entering_scope = True
        if in_scope:
            linked.add(number)
        depth += text.count("{") - text.count("}")
        if depth == 0 and not entering_scope:
            in_scope = False
    return linked


def fix_c_linkage(tags: Sequence[Tag], reader: LineReader) -> List[Tag]:
    """Append the ``extern "C"`` modifier to tags declared in C linkage blocks."""
    linked: Dict[str, Set[int]] = {}
    result: List[Tag] = []
    for tag in tags:
        if tag.source_file not in linked:
            linked[tag.source_file] = find_c_linkage_lines(tag.source_file, reader)
        if tag.line in linked[tag.source_file] and EXTERN not in tag.modifiers:
            tag = tag.with_modifiers(f"{tag.modifiers} {EXTERN}".strip())
        result.append(tag)
    return result


def to_prototypes(tags: Sequence[Tag]) -> List[Prototype]:
    """Return the prototypes of the active tags, in tag order."""
    return [
        Prototype(
            function_name=tag.name,
            file=tag.source_file,
            declaration=tag.declaration,
            modifiers=tag.modifiers,
            line=tag.line,
        )
        for tag in tags
        if not tag.suppressed and tag.declaration.strip()
    ]


def find_insertion_line(tags: Sequence[Tag], main_file: str | Path) -> int:
    """Return the line before which prototypes must be inserted, 0 when unknown.

    Prototypes have to precede both the first function defined in the main
    file and the first place a function is taken as a pointer.
    """
    candidates = [
        line
        for line in (_first_function_line(tags, str(main_file)), _first_function_pointer_use(tags))
        if line != -1
    ]
    return min(candidates) if candidates else 0


def generate_prototypes(
    tags: Sequence[Tag], main_file: str | Path, reader: LineReader
) -> Tuple[List[Prototype], int]:
    """Apply C linkage and return ``(prototypes, insertion_line)``."""
    linked = fix_c_linkage(tags, reader)
    prototypes = to_prototypes(linked)
    line = find_insertion_line(linked, main_file)
    logger.debug("Generated %d prototypes, insertion line %d", len(prototypes), line)
    return prototypes, line


def _first_function_line(tags: Sequence[Tag], main_file: str) -> int:
    for tag in tags:
        if tag.kind == KIND_FUNCTION and not tag.is_scoped and tag.source_file == main_file:
            return tag.line
    return -1


def _first_function_pointer_use(tags: Sequence[Tag]) -> int:
    functions = [tag for tag in tags if tag.kind == KIND_FUNCTION and not tag.suppressed]
    for tag in tags:
        for function in functions:
            if tag.line == function.line:
                continue
            if f"&{function.name}" in tag.code_snippet or f"({function.name})" in tag.code_snippet:
                return tag.line
    return -1


def _squeeze(text: str) -> str:
    return text.replace(" ", "").replace("\t", "")


__all__ = [
    "find_c_linkage_lines",
    "find_insertion_line",
    "fix_c_linkage",
    "generate_prototypes",
    "to_prototypes",
]
