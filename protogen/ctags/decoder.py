"""Decoding of extended ctags output into Tag records."""

from __future__ import annotations

from typing import Dict, List

from ..constants import (
    FIELD_LINE,
    PATTERN_END,
    PATTERN_START,
    TAG_FIELDS,
)
from ..logging import get_logger
from ..models import Tag

logger = get_logger("ctags.decoder")


def decode_tags(output: bytes | str) -> List[Tag]:
    """Decode a full ctags output buffer, one tag per non-blank line."""
    text = output.decode("utf-8", errors="replace") if isinstance(output, bytes) else output
    tags: List[Tag] = []
    for row in text.split("\n"):
        row = row.strip()
        if row:
            tags.append(parse_tag(row))
    logger.debug("Decoded %d tags", len(tags))
    return tags


def parse_tag(row: str) -> Tag:
    """Parse a single tab separated ctags row.

    Field 0 is the symbol name and field 1 the file name. The file names come
    from the gcc line markers of the preprocessed source; gcc escapes
    backslashes there but ctags keeps the escaping, so it is undone here.
    Every later field is either a bare flag or ``key:value``.
    """
    parts = row.split("\t")
    name = parts[0]
    source_file = parts[1].replace("\\\\", "\\") if len(parts) > 1 else ""

    values: Dict[str, str] = {}
    for part in parts[2:]:
        if ":" not in part:
            continue
        key, value = part.split(":", 1)
        attribute = TAG_FIELDS.get(key)
        if attribute is not None:
            values[attribute] = value.strip()

    line = _parse_line(values.pop(TAG_FIELDS[FIELD_LINE], ""), name)
    return_type = values.get("return_type", "")
    signature = values.get("signature", "")

    code = ""
    if PATTERN_START in row and PATTERN_END in row:
        code = row[row.index(PATTERN_START) + len(PATTERN_START) : row.index(PATTERN_END)]

    return Tag(
        name=name,
        source_file=source_file,
        line=line,
        code_snippet=code,
        declaration=f"{return_type} {name}{signature};",
        **values,
    )


def _parse_line(value: str, name: str) -> int:
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        logger.debug("Tag %s has a non numeric line %r, using 0", name, value)
        return 0


__all__ = ["decode_tags", "parse_tag"]
