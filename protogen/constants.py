"""Recognized ctags kinds, fields and C/C++ keywords."""

from __future__ import annotations

KIND_PROTOTYPE = "prototype"
KIND_FUNCTION = "function"

KNOWN_TAG_KINDS: frozenset[str] = frozenset({KIND_PROTOTYPE, KIND_FUNCTION})

FIELD_KIND = "kind"
FIELD_LINE = "line"
FIELD_TYPEREF = "typeref"
FIELD_SIGNATURE = "signature"
FIELD_RETURNTYPE = "returntype"
FIELD_CLASS = "class"
FIELD_STRUCT = "struct"
FIELD_NAMESPACE = "namespace"

# ctags field name -> Tag attribute
TAG_FIELDS: dict[str, str] = {
    FIELD_KIND: "kind",
    FIELD_LINE: "line",
    FIELD_TYPEREF: "typeref",
    FIELD_SIGNATURE: "signature",
    FIELD_RETURNTYPE: "return_type",
    FIELD_CLASS: "enclosing_class",
    FIELD_STRUCT: "enclosing_struct",
    FIELD_NAMESPACE: "enclosing_namespace",
}

PATTERN_START = "/^"
PATTERN_END = "$/;"

TEMPLATE = "template"
STATIC = "static"
EXTERN = 'extern "C"'

CONSISTENCY_POLICIES: tuple[str, ...] = ("strict", "lenient", "off")
DEFAULT_CONSISTENCY_POLICY = "strict"
DEFAULT_LOOKAHEAD_LINES = 10
DEFAULT_TEMPLATE_LOOKBEHIND_LINES = 20

CONFIG_FILENAME = ".protogen.yml"
