"""Readers for the output of the ctags source tagging tool."""

from .decoder import decode_tags, parse_tag

__all__ = ["decode_tags", "parse_tag"]
