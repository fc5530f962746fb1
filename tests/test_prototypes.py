"""Tests for protogen.prototypes."""

from __future__ import annotations

from protogen.models import Prototype, Tag
from protogen.prototypes import (
    find_c_linkage_lines,
    find_insertion_line,
    fix_c_linkage,
    generate_prototypes,
    to_prototypes,
)
from protogen.source import SourceReader
from tests._fixtures.sketch_builder import SketchBuilder


def test_c_linkage_lines_cover_all_three_layouts(sketch: SketchBuilder) -> None:
    path = sketch.write(
        "sketch.ino",
        """
        void before() {}
        extern "C" void single();
        extern "C" {
          void block_a();

          void block_b();
        }
        extern "C"
        {
          void detached();
        }
        void after() {}
        """,
    )

    lines = find_c_linkage_lines(path, SourceReader())

    assert lines == {2, 3, 4, 6, 7, 8, 9, 10, 11}


def test_c_linkage_lines_of_missing_file_are_empty(tmp_path) -> None:
    assert find_c_linkage_lines(str(tmp_path / "missing.ino"), SourceReader()) == set()


def test_fix_c_linkage_appends_modifier_once(sketch: SketchBuilder) -> None:
    path = sketch.write(
        "sketch.ino",
        """
        extern "C" {
          static void handler() {}
          void already() {}
        }
        void plain() {}
        """,
    )
    tags = [
        Tag(name="handler", source_file=path, line=2, modifiers="static"),
        Tag(name="already", source_file=path, line=3, modifiers='extern "C"'),
        Tag(name="plain", source_file=path, line=5),
    ]

    result = fix_c_linkage(tags, SourceReader())

    assert [tag.modifiers for tag in result] == ['static extern "C"', 'extern "C"', ""]


def test_to_prototypes_skips_suppressed_and_blank_declarations() -> None:
    tags = [
        Tag(name="a", source_file="s.ino", line=1, declaration="void a();", modifiers="static"),
        Tag(name="b", declaration="void b();").suppress("duplicate"),
        Tag(name="c", declaration="   "),
    ]

    assert to_prototypes(tags) == [
        Prototype(function_name="a", file="s.ino", declaration="void a();", modifiers="static", line=1)
    ]


def test_insertion_line_is_first_function_of_main_file() -> None:
    tags = [
        Tag(name="lib", kind="function", source_file="lib.cpp", line=2),
        Tag(name="member", kind="function", source_file="s.ino", line=4, enclosing_class="Foo"),
        Tag(name="setup", kind="function", source_file="s.ino", line=9),
        Tag(name="loop", kind="function", source_file="s.ino", line=14),
    ]

    assert find_insertion_line(tags, "s.ino") == 9


def test_insertion_line_moves_before_function_pointer_use() -> None:
    tags = [
        Tag(name="handlers", kind="variable", source_file="s.ino", line=3, code_snippet="Handler table[] = { &on_press };"),
        Tag(name="setup", kind="function", source_file="s.ino", line=9, code_snippet="void setup() {"),
        Tag(name="on_press", kind="function", source_file="s.ino", line=20, code_snippet="void on_press() {"),
    ]

    assert find_insertion_line(tags, "s.ino") == 3


def test_insertion_line_detects_parenthesised_function_name() -> None:
    tags = [
        Tag(name="attach", kind="prototype", source_file="s.ino", line=2, code_snippet="Button b(on_press);"),
        Tag(name="on_press", kind="function", source_file="other.cpp", line=7, code_snippet="void on_press() {"),
    ]

    assert find_insertion_line(tags, "s.ino") == 2


def test_insertion_line_defaults_to_zero() -> None:
    assert find_insertion_line([Tag(name="x", kind="variable", line=4)], "s.ino") == 0


def test_generate_prototypes_combines_steps(sketch: SketchBuilder) -> None:
    path = sketch.write(
        "sketch.ino",
        """
        extern "C" void isr() {}
        void setup() {}
        """,
    )
    tags = [
        Tag(name="isr", kind="function", source_file=path, line=1, declaration="void isr();"),
        Tag(name="setup", kind="function", source_file=path, line=2, declaration="void setup();"),
    ]

    prototypes, line = generate_prototypes(tags, path, SourceReader())

    assert line == 1
    assert [prototype.render() for prototype in prototypes] == ['extern "C" void isr();', "void setup();"]
