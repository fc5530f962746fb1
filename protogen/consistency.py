"""Final check that a synthesized declaration matches the tagged source text.

ctags sometimes reports symbols whose shape does not exist literally in the
source, most often functions generated by macros. Emitting a declaration for
them would break the build, while leaving one out only restores the usual
compiler behaviour, so anything doubtful is suppressed.

Three policies are available:

``strict``
    the declaration, whitespace removed, must appear in the code.
``lenient``
    like ``strict`` but ``name + signature`` alone is enough.
``off``
    nothing is suppressed.
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol

from .constants import (
    CONSISTENCY_POLICIES,
    DEFAULT_CONSISTENCY_POLICY,
    DEFAULT_LOOKAHEAD_LINES,
    TEMPLATE,
)
from .models import Tag
from .source import remove_comments


class CodeReader(Protocol):
    def read_code_from(self, path: str, line: int, limit: int | None = None) -> Optional[str]:
        ...


class PrototypeCodeMismatch:
    """Matches tags whose declaration cannot be found in their source code."""

    name = "prototype-code-mismatch"

    def __init__(
        self,
        reader: CodeReader,
        *,
        policy: str = DEFAULT_CONSISTENCY_POLICY,
        lookahead_lines: int = DEFAULT_LOOKAHEAD_LINES,
    ) -> None:
        if policy not in CONSISTENCY_POLICIES:
            raise ValueError(
                f"Unknown consistency policy '{policy}', expected one of {', '.join(CONSISTENCY_POLICIES)}"
            )
        self.reader = reader
        self.policy = policy
        self.lookahead_lines = lookahead_lines

    def __call__(self, tag: Tag) -> bool:
        if self.policy == "off":
            return False

        code = remove_comments(tag.code_snippet, False)[0]
        if ")" not in code:
            # The parameter list continues on the following source lines.
            continued = self.reader.read_code_from(tag.source_file, tag.line, self.lookahead_lines)
            if continued is not None:
                code = continued
        code = normalize(code)
        if not code:
            return True

        return not any(candidate in code for candidate in self._candidates(tag, code) if candidate)

    def _candidates(self, tag: Tag, code: str) -> Iterator[str]:
        prototype = normalize(tag.declaration)
        yield prototype
        if prototype.startswith(TEMPLATE) and not code.startswith(TEMPLATE):
            yield strip_template_header(prototype)
        if self.policy == "lenient":
            yield normalize(tag.name + tag.signature)


def normalize(text: str) -> str:
    """Remove whitespace and a trailing semicolon."""
    text = "".join(text.split())
    if text.endswith(";"):
        text = text[:-1]
    return text


def strip_template_header(declaration: str) -> str:
    """Drop the leading ``template<...>`` parameter list, if balanced."""
    opening = declaration.find("<")
    if opening == -1:
        return declaration
    depth = 0
    for position in range(opening, len(declaration)):
        char = declaration[position]
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth == 0:
                return declaration[position + 1 :]
    return declaration


__all__ = ["CodeReader", "PrototypeCodeMismatch", "normalize", "strip_template_header"]
