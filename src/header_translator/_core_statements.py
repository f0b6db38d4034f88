from __future__ import annotations

from clang.cindex import CursorKind

from ._core_base import *  # noqa: F401,F403
from ._core_config import *  # noqa: F401,F403
from ._core_locator import entity_source_location
from ._core_model import *  # noqa: F401,F403

_ANONYMOUS_TYPE_RE = re.compile(r"\((?:unnamed|anonymous) (?:(struct|union|enum) )?at .*?:\d+:\d+\)")

METHOD_KINDS = {
    CursorKind.OBJC_INSTANCE_METHOD_DECL: "instance",
    CursorKind.OBJC_CLASS_METHOD_DECL: "class",
}


def type_spelling(value: Any) -> str:
    spelling = normalize_ws(str(value.spelling))
    return _ANONYMOUS_TYPE_RE.sub(lambda m: f"<anonymous {m.group(1) or 'type'}>", spelling)


def is_anonymous(cursor: Any) -> bool:
    if not cursor.spelling:
        return True
    return bool(cursor.is_anonymous())


def collect_arguments(cursor: Any) -> list[dict[str, str]]:
    return [
        {"name": str(arg.spelling), "type": type_spelling(arg.type)}
        for arg in cursor.get_arguments()
    ]


def collect_container_members(cursor: Any, config: TranslationConfig, section: str, container: str) -> dict[str, Any]:
    superclass: str | None = None
    protocols: list[str] = []
    methods: list[dict[str, Any]] = []
    properties: list[dict[str, str]] = []

    for child in cursor.get_children():
        kind = child.kind
        if kind == CursorKind.OBJC_SUPER_CLASS_REF:
            superclass = str(child.spelling)
        elif kind == CursorKind.OBJC_PROTOCOL_REF:
            protocols.append(str(child.spelling))
        elif kind in METHOD_KINDS:
            selector = str(child.spelling)
            if config.is_method_skipped(section, container, selector):
                continue
            methods.append(
                {
                    "selector": selector,
                    "kind": METHOD_KINDS[kind],
                    "result_type": type_spelling(child.result_type),
                    "arguments": collect_arguments(child),
                }
            )
        elif kind == CursorKind.OBJC_PROPERTY_DECL:
            properties.append({"name": str(child.spelling), "type": type_spelling(child.type)})

    return {
        "superclass": superclass,
        "protocols": protocols,
        "methods": methods,
        "properties": properties,
    }


def parse_class(cursor: Any, config: TranslationConfig) -> list[Statement]:
    name = str(cursor.spelling)
    if config.is_skipped("class", name):
        return []
    details = collect_container_members(cursor, config, "class", name)
    return [Statement(kind="class", name=name, details=details, location=entity_source_location(cursor))]


def parse_category(cursor: Any, config: TranslationConfig) -> list[Statement]:
    class_name = ""
    for child in cursor.get_children():
        if child.kind == CursorKind.OBJC_CLASS_REF:
            class_name = str(child.spelling)
            break
    # Category on a class libclang could not resolve.
    if not class_name:
        return []
    if config.is_skipped("class", class_name):
        return []
    details = collect_container_members(cursor, config, "class", class_name)
    details.pop("superclass")
    details["class"] = class_name
    return [
        Statement(
            kind="category",
            name=str(cursor.spelling),
            details=details,
            location=entity_source_location(cursor),
        )
    ]


def parse_protocol(cursor: Any, config: TranslationConfig) -> list[Statement]:
    name = str(cursor.spelling)
    # `@protocol Foo;`
    if not cursor.is_definition():
        return []
    if config.is_skipped("protocol", name):
        return []
    details = collect_container_members(cursor, config, "protocol", name)
    details.pop("superclass")
    return [Statement(kind="protocol", name=name, details=details, location=entity_source_location(cursor))]


def parse_function(cursor: Any, config: TranslationConfig) -> list[Statement]:
    name = str(cursor.spelling)
    if config.is_skipped("fn", name):
        return []
    details = {
        "result_type": type_spelling(cursor.result_type),
        "arguments": collect_arguments(cursor),
        "variadic": bool(cursor.type.is_function_variadic()),
    }
    return [Statement(kind="fn", name=name, details=details, location=entity_source_location(cursor))]


def parse_enum(cursor: Any, config: TranslationConfig) -> list[Statement]:
    name = "" if is_anonymous(cursor) else str(cursor.spelling)
    if name and config.is_skipped("enum", name):
        return []
    constants = [
        {"name": str(child.spelling), "value": int(child.enum_value)}
        for child in cursor.get_children()
        if child.kind == CursorKind.ENUM_CONSTANT_DECL
    ]
    # `enum Foo : NSInteger;`
    if not constants:
        return []
    details = {
        "underlying_type": type_spelling(cursor.enum_type),
        "constants": constants,
    }
    return [Statement(kind="enum", name=name, details=details, location=entity_source_location(cursor))]


def parse_struct(cursor: Any, config: TranslationConfig) -> list[Statement]:
    if not cursor.is_definition() or is_anonymous(cursor):
        return []
    name = str(cursor.spelling)
    if config.is_skipped("struct", name):
        return []
    fields = [
        {"name": str(child.spelling), "type": type_spelling(child.type)}
        for child in cursor.get_children()
        if child.kind == CursorKind.FIELD_DECL
    ]
    return [
        Statement(
            kind="struct",
            name=name,
            details={"fields": fields},
            location=entity_source_location(cursor),
        )
    ]


def parse_typedef(cursor: Any, config: TranslationConfig) -> list[Statement]:
    name = str(cursor.spelling)
    if config.is_skipped("typedef", name):
        return []
    details = {"underlying_type": type_spelling(cursor.underlying_typedef_type)}
    return [Statement(kind="typedef", name=name, details=details, location=entity_source_location(cursor))]


def parse_static(cursor: Any, config: TranslationConfig) -> list[Statement]:
    name = str(cursor.spelling)
    if config.is_skipped("static", name):
        return []
    details = {"type": type_spelling(cursor.type)}
    return [Statement(kind="static", name=name, details=details, location=entity_source_location(cursor))]


STATEMENT_PARSERS = {
    CursorKind.OBJC_INTERFACE_DECL: parse_class,
    CursorKind.OBJC_CATEGORY_DECL: parse_category,
    CursorKind.OBJC_PROTOCOL_DECL: parse_protocol,
    CursorKind.FUNCTION_DECL: parse_function,
    CursorKind.ENUM_DECL: parse_enum,
    CursorKind.STRUCT_DECL: parse_struct,
    CursorKind.TYPEDEF_DECL: parse_typedef,
    CursorKind.VAR_DECL: parse_static,
}


def parse_statements(cursor: Any, config: TranslationConfig) -> list[Statement]:
    parser = STATEMENT_PARSERS.get(cursor.kind)
    if parser is None:
        return []
    return parser(cursor, config)
