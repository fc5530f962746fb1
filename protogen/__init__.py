"""Automatic forward declarations for sketch sources from ctags output."""

from .models import ParseResult, Prototype, Tag
from .parser import CTagsParser

__all__ = ["CTagsParser", "ParseResult", "Prototype", "Tag"]
