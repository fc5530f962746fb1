"""Tests for protogen.ctags.decoder."""

from __future__ import annotations

from protogen.ctags import decode_tags, parse_tag


def test_parse_tag_reads_known_fields() -> None:
    row = (
        "setup\t/tmp/sketch.ino\t/^void setup() {$/;\"\tkind:function\tline:7"
        "\tsignature:()\treturntype:void"
    )

    tag = parse_tag(row)

    assert tag.name == "setup"
    assert tag.source_file == "/tmp/sketch.ino"
    assert tag.kind == "function"
    assert tag.line == 7
    assert tag.signature == "()"
    assert tag.return_type == "void"
    assert tag.code_snippet == "void setup() {"
    assert tag.declaration == "void setup();"
    assert tag.suppressed is False


def test_parse_tag_reads_scope_and_typeref_fields() -> None:
    row = (
        "method\tsketch.ino\t/^  int method(int a) {$/;\"\tkind:function\tline:4"
        "\tclass:Foo\tstruct:Bar\tnamespace:ns\ttyperef:typename:int"
        "\tsignature:(int a)\treturntype:int"
    )

    tag = parse_tag(row)

    assert tag.enclosing_class == "Foo"
    assert tag.enclosing_struct == "Bar"
    assert tag.enclosing_namespace == "ns"
    assert tag.typeref == "typename:int"
    assert tag.declaration == "int method(int a);"


def test_parse_tag_unescapes_backslashes_in_filename() -> None:
    tag = parse_tag("loop\tC:\\\\sketches\\\\blink.ino\tkind:function\tline:2")

    assert tag.source_file == "C:\\sketches\\blink.ino"


def test_parse_tag_defaults_unparseable_line_to_zero() -> None:
    tag = parse_tag("loop\tsketch.ino\tkind:function\tline:abc\tsignature:()\treturntype:void")

    assert tag.line == 0
    assert tag.kind == "function"
    assert tag.signature == "()"
    assert tag.declaration == "void loop();"


def test_parse_tag_ignores_unknown_keys_and_bare_tokens() -> None:
    tag = parse_tag("loop\tsketch.ino\tf\tkind:function\tend:12\tfile:\tline:2")

    assert tag.kind == "function"
    assert tag.line == 2


def test_parse_tag_trims_values_and_splits_on_first_colon() -> None:
    tag = parse_tag("f\tsketch.ino\tkind: function \ttyperef:typename:unsigned int")

    assert tag.kind == "function"
    assert tag.typeref == "typename:unsigned int"


def test_parse_tag_tolerates_missing_fields() -> None:
    tag = parse_tag("lonely")

    assert tag.name == "lonely"
    assert tag.source_file == ""
    assert tag.kind == ""
    assert tag.line == 0
    assert tag.code_snippet == ""
    assert tag.declaration == " lonely;"


def test_decode_tags_skips_blank_lines_and_keeps_order() -> None:
    output = (
        b"a\tsketch.ino\tkind:function\tline:1\n"
        b"\n"
        b"   \n"
        b"b\tsketch.ino\tkind:prototype\tline:2\n"
        b"c\tsketch.ino\tkind:variable\tline:3\n"
    )

    tags = decode_tags(output)

    assert [tag.name for tag in tags] == ["a", "b", "c"]
    assert [tag.kind for tag in tags] == ["function", "prototype", "variable"]


def test_decode_tags_accepts_text() -> None:
    tags = decode_tags("a\tsketch.ino\tkind:function\tline:1\r\n")

    assert len(tags) == 1
    assert tags[0].line == 1
