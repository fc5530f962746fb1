"""Pipeline turning ctags output into the tags that need a forward declaration."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .config import ProtogenConfig, default_config
from .consistency import PrototypeCodeMismatch
from .ctags import decode_tags
from .filters import UnknownKind, UnsupportedScope, skip_tags_where
from .logging import get_logger
from .models import ParseResult, Tag
from .prototypes import generate_prototypes
from .resolvers import suppress_defined_prototypes, suppress_duplicates
from .source import SourceReader
from .synthesis import synthesize


class CTagsParser:
    """Runs the prototype pipeline over the output of one ctags invocation.

    Stages run in a fixed order: decode, unknown kinds, unsupported scopes,
    declaration synthesis, prototypes already in the source, duplicates and
    finally the code consistency check. Each stage returns a new tag list;
    a suppressed tag stays suppressed.
    """

    def __init__(
        self,
        reader: SourceReader | None = None,
        config: ProtogenConfig | None = None,
    ) -> None:
        self.config = config or default_config()
        self._reader_override = reader
        self.reader: SourceReader = reader or self._build_reader()
        self.tags: List[Tag] = []
        self.main_file: Optional[Path] = None
        self.logger = get_logger("parser")

    def parse(self, ctags_output: bytes | str, main_file: str | Path) -> List[Tag]:
        """Return every decoded tag, suppressed or not, in output order."""
        self.main_file = Path(main_file)
        self.reader = self._reader_override or self._build_reader()

        tags = decode_tags(ctags_output)
        tags = skip_tags_where(tags, UnknownKind(self.config.parser.known_kinds))
        tags = skip_tags_where(tags, UnsupportedScope())
        tags = synthesize(tags, self.reader)
        tags = suppress_defined_prototypes(tags)
        tags = suppress_duplicates(tags)
        tags = skip_tags_where(
            tags,
            PrototypeCodeMismatch(
                self.reader,
                policy=self.config.consistency.policy,
                lookahead_lines=self.config.consistency.lookahead_lines,
            ),
        )

        self.tags = tags
        kept = sum(1 for tag in tags if not tag.suppressed)
        self.logger.info("Kept %d of %d tags for %s", kept, len(tags), self.main_file)
        return tags

    def generate(self, ctags_output: bytes | str, main_file: str | Path) -> ParseResult:
        """Parse and build the prototypes together with their insertion line."""
        tags = self.parse(ctags_output, main_file)
        prototypes, line = generate_prototypes(tags, main_file, self.reader)
        return ParseResult(tags=tags, prototypes=prototypes, insertion_line=line)

    def _build_reader(self) -> SourceReader:
        return SourceReader(
            template_lookbehind_lines=self.config.source.template_lookbehind_lines,
            lookahead_lines=self.config.consistency.lookahead_lines,
        )


__all__ = ["CTagsParser"]
