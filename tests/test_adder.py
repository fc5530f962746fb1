"""Tests for protogen.adder."""

from __future__ import annotations

from protogen.adder import add_prototypes, compose_prototype_section, quote_cpp_string
from protogen.models import Prototype


def _prototype(name: str, line: int, declaration: str | None = None, modifiers: str = "") -> Prototype:
    return Prototype(
        function_name=name,
        file="/tmp/sketch.ino",
        declaration=declaration or f"void {name}();",
        modifiers=modifiers,
        line=line,
    )


def test_quote_cpp_string_escapes_backslashes_and_quotes() -> None:
    assert quote_cpp_string('C:\\sketch "a".ino') == '"C:\\\\sketch \\"a\\".ino"'


def test_compose_prototype_section_emits_line_directives() -> None:
    section = compose_prototype_section(
        3, [_prototype("setup", 3), _prototype("helper", 8, modifiers="static")]
    )

    assert section == (
        '#line 3 "/tmp/sketch.ino"\n'
        "void setup();\n"
        '#line 8 "/tmp/sketch.ino"\n'
        "static void helper();\n"
        '#line 3 "/tmp/sketch.ino"\n'
    )


def test_compose_prototype_section_skips_default_arguments() -> None:
    prototypes = [_prototype("blink", 5, "void blink(int times = 3);"), _prototype("loop", 9)]

    section = compose_prototype_section(5, prototypes)

    assert "blink" not in section
    assert "void loop();" in section

    kept = compose_prototype_section(5, prototypes, skip_default_arguments=False)
    assert "void blink(int times = 3);" in kept


def test_compose_prototype_section_without_directives() -> None:
    section = compose_prototype_section(3, [_prototype("setup", 3)], line_directives=False)

    assert section == "void setup();\n"


def test_compose_prototype_section_is_empty_without_prototypes() -> None:
    assert compose_prototype_section(3, []) == ""


def test_add_prototypes_inserts_before_line() -> None:
    source = "#include <Arduino.h>\r\nint x;\r\nvoid setup() {}\r\n"

    result = add_prototypes(source, [_prototype("setup", 3)], 3)

    assert result == (
        "#include <Arduino.h>\n"
        "int x;\n"
        '#line 3 "/tmp/sketch.ino"\n'
        "void setup();\n"
        '#line 3 "/tmp/sketch.ino"\n'
        "void setup() {}\n"
    )


def test_add_prototypes_applies_line_offset() -> None:
    source = '#line 1 "/tmp/sketch.ino"\nvoid setup() {}\n'

    result = add_prototypes(source, [_prototype("setup", 1)], 1, line_offset=1)

    assert result.startswith('#line 1 "/tmp/sketch.ino"\n#line 1 "/tmp/sketch.ino"\nvoid setup();\n')
    assert result.endswith("void setup() {}\n")


def test_add_prototypes_at_first_line() -> None:
    result = add_prototypes("void setup() {}", [_prototype("setup", 1)], 1, line_directives=False)

    assert result == "void setup();\nvoid setup() {}"


def test_add_prototypes_leaves_source_when_line_is_outside() -> None:
    source = "void setup() {}\n"

    assert add_prototypes(source, [_prototype("setup", 1)], 0) == source
    assert add_prototypes(source, [_prototype("setup", 1)], 40) == source
    assert add_prototypes(source, [], 1) == source


def test_compose_prototype_section_needs_a_valid_insertion_line() -> None:
    assert compose_prototype_section(0, [_prototype("foo", 3)]) == ""


def test_compose_prototype_section_is_empty_when_every_prototype_is_skipped() -> None:
    section = compose_prototype_section(3, [_prototype("f", 3, "void f(int a = 1);")])

    assert section == ""


def test_compose_prototype_section_omits_directive_for_unknown_line() -> None:
    section = compose_prototype_section(3, [_prototype("f", 0)])

    assert section == 'void f();\n#line 3 "/tmp/sketch.ino"\n'


def test_add_prototypes_keeps_source_when_every_prototype_is_skipped() -> None:
    source = "void f(int a = 1) {}\n"

    assert add_prototypes(source, [_prototype("f", 1, "void f(int a = 1);")], 1) == source
