"""Core data models shared across protogen components."""

from dataclasses import dataclass, field, replace
from typing import List


@dataclass(frozen=True)
class Tag:
    """One record decoded from the extended ctags output."""

    name: str
    source_file: str = ""
    kind: str = ""
    line: int = 0
    typeref: str = ""
    signature: str = ""
    return_type: str = ""
    enclosing_class: str = ""
    enclosing_struct: str = ""
    enclosing_namespace: str = ""
    code_snippet: str = ""
    declaration: str = ""
    modifiers: str = ""
    suppressed: bool = False
    suppressed_by: str = ""

    def suppress(self, reason: str) -> "Tag":
        """Return a suppressed copy; an already suppressed tag keeps its first reason."""
        if self.suppressed:
            return self
        return replace(self, suppressed=True, suppressed_by=reason)

    def with_declaration(self, declaration: str) -> "Tag":
        return replace(self, declaration=declaration)

    def with_modifiers(self, modifiers: str) -> "Tag":
        return replace(self, modifiers=modifiers)

    @property
    def is_scoped(self) -> bool:
        return bool(self.enclosing_class or self.enclosing_struct or self.enclosing_namespace)


@dataclass(frozen=True)
class Prototype:
    """Forward declaration ready to be written into the rewritten source."""

    function_name: str
    file: str
    declaration: str
    modifiers: str
    line: int

    def render(self) -> str:
        """Return the declaration prefixed by its modifiers, if any."""
        if self.modifiers:
            return f"{self.modifiers} {self.declaration}"
        return self.declaration


@dataclass
class ParseResult:
    """Outcome of a full prototype generation run."""

    tags: List[Tag]
    prototypes: List[Prototype] = field(default_factory=list)
    insertion_line: int = 0

    @property
    def kept(self) -> List[Tag]:
        return [tag for tag in self.tags if not tag.suppressed]
