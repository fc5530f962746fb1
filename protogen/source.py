"""Access to the tagged source files for declarations ctags cannot describe alone."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .constants import DEFAULT_LOOKAHEAD_LINES, DEFAULT_TEMPLATE_LOOKBEHIND_LINES, TEMPLATE
from .logging import get_logger

logger = get_logger("source")


class SourceReader:
    """Reads source lines referenced by tags.

    Every failure (missing file, undecodable content, line out of range) is
    reported as ``None`` so callers can keep their best-effort text.
    """

    def __init__(
        self,
        *,
        template_lookbehind_lines: int = DEFAULT_TEMPLATE_LOOKBEHIND_LINES,
        lookahead_lines: int = DEFAULT_LOOKAHEAD_LINES,
    ) -> None:
        self.template_lookbehind_lines = template_lookbehind_lines
        self.lookahead_lines = lookahead_lines
        self._cache: Dict[str, Optional[List[str]]] = {}

    def read_lines(self, path: str) -> Optional[List[str]]:
        """Return the lines of ``path`` without line terminators."""
        if path in self._cache:
            return self._cache[path]
        lines: Optional[List[str]]
        try:
            lines = Path(path).read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Unable to read %s: %s", path, exc)
            lines = None
        self._cache[path] = lines
        return lines

    def resolve_multiline_declaration(self, path: str, line: int) -> Optional[str]:
        """Rebuild a template declaration whose header sits above the tagged line.

        Walks back from ``line`` to the closest line mentioning ``template``,
        then forward until the parameter list of the function is closed. The
        result is the declaration without body or trailing semicolon, folded
        onto a single line.
        """
        lines = self.read_lines(path)
        if lines is None or line < 1 or line > len(lines):
            return None

        index = line - 1
        start = index
        lowest = max(0, index - self.template_lookbehind_lines)
        while TEMPLATE not in remove_comments(lines[start], False)[0]:
            if start <= lowest:
                logger.debug("No template header found above %s:%d", path, line)
                return None
            start -= 1

        fragments: List[str] = []
        in_comment = False
        last = min(len(lines), index + 1 + self.lookahead_lines)
        for position in range(start, last):
            text, in_comment = remove_comments(lines[position], in_comment)
            text = text.strip()
            if text:
                fragments.append(text)
            if position >= index:
                declaration = _cut_after_parameters(" ".join(fragments))
                if declaration is not None:
                    return declaration
        logger.debug("Declaration at %s:%d is not closed within %d lines", path, line, self.lookahead_lines)
        return None

    def read_code_from(self, path: str, line: int, limit: int | None = None) -> Optional[str]:
        """Join up to ``limit`` comment-free lines from ``line`` until a ``)`` is seen."""
        lines = self.read_lines(path)
        if lines is None or line < 1 or line > len(lines):
            return None
        limit = self.lookahead_lines if limit is None else limit
        code = ""
        in_comment = False
        for text in lines[line - 1 : line - 1 + limit]:
            stripped, in_comment = remove_comments(text, in_comment)
            code += stripped
            if ")" in code:
                break
        return code


def remove_comments(text: str, in_comment: bool) -> Tuple[str, bool]:
    """Strip ``//`` and ``/* */`` comments from one line.

    ``in_comment`` tells whether the line starts inside a block comment; the
    returned flag tells whether the next line does. String literals are not
    taken into account.
    """
    if in_comment:
        end = text.find("*/")
        if end == -1:
            return "", True
        text = text[end + 2 :]

    kept: List[str] = []
    while True:
        line_comment = text.find("//")
        block_comment = text.find("/*")
        if line_comment != -1 and (block_comment == -1 or line_comment < block_comment):
            kept.append(text[:line_comment])
            return "".join(kept), False
        if block_comment == -1:
            kept.append(text)
            return "".join(kept), False
        kept.append(text[:block_comment])
        rest = text[block_comment + 2 :]
        end = rest.find("*/")
        if end == -1:
            return "".join(kept), True
        text = rest[end + 2 :]


def _cut_after_parameters(text: str) -> Optional[str]:
    header_end = _template_header_end(text)
    if header_end == -1:
        return None
    opening = text.find("(", header_end)
    if opening == -1:
        return None
    depth = 0
    for position in range(opening, len(text)):
        char = text[position]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return text[: position + 1].strip()
    return None


def _template_header_end(text: str) -> int:
    keyword = text.find(TEMPLATE)
    opening = text.find("<", keyword)
    if keyword == -1 or opening == -1:
        return -1
    depth = 0
    for position in range(opening, len(text)):
        char = text[position]
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth == 0:
                return position + 1
    return -1


__all__ = ["SourceReader", "remove_comments"]
