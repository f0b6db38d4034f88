from __future__ import annotations

import os
import time

from clang.cindex import Config as ClangConfig
from clang.cindex import Index, TranslationUnit, TranslationUnitLoadError

from ._core_base import *  # noqa: F401,F403

LIBCLANG_ENV_VAR = "HEADER_TRANSLATOR_LIBCLANG"

# CXTranslationUnit_Flags; `clang.cindex` only names some of them.
PARSE_KEEP_GOING = 0x200
PARSE_INCLUDE_ATTRIBUTED_TYPES = 0x1000
PARSE_VISIT_IMPLICIT_ATTRIBUTES = 0x2000
PARSE_RETAIN_EXCLUDED_CONDITIONAL_BLOCKS = 0x8000

DEFAULT_PARSE_OPTIONS = (
    TranslationUnit.PARSE_DETAILED_PROCESSING_RECORD
    | TranslationUnit.PARSE_INCOMPLETE
    | TranslationUnit.PARSE_SKIP_FUNCTION_BODIES
    | PARSE_KEEP_GOING
    | PARSE_INCLUDE_ATTRIBUTED_TYPES
    | PARSE_VISIT_IMPLICIT_ATTRIBUTES
    | PARSE_RETAIN_EXCLUDED_CONDITIONAL_BLOCKS
)

DIAGNOSTIC_SEVERITY_NAMES = {
    0: "ignored",
    1: "note",
    2: "warning",
    3: "error",
    4: "fatal",
}


def configure_libclang(library_file: str | None) -> str | None:
    candidate = library_file or os.environ.get(LIBCLANG_ENV_VAR)
    if not candidate:
        return None
    resolved = Path(os.path.expanduser(os.path.expandvars(candidate)))
    if not resolved.is_file():
        raise ConfigurationError(f"libclang library '{resolved}' does not exist")
    ClangConfig.set_library_file(str(resolved))
    return str(resolved)


def create_index(library_file: str | None = None) -> Index:
    """Index shared by every parse of the run.

    It holds no per-parse state, so one instance is passed to each
    ``parse_translation_unit`` call.
    """
    configure_libclang(library_file)
    return Index.create(excludeDecls=True)


def build_parse_arguments(target_triple: str, sdk: SdkPath) -> list[str]:
    return [
        "-x",
        "objective-c",
        f"--target={target_triple}",
        "-Wall",
        "-Wextra",
        "-fobjc-arc",
        "-fobjc-arc-exceptions",
        "-fobjc-abi-version=2",
        "-fapinotes",
        "-isysroot",
        str(sdk.path),
    ]


def render_entry_header(framework_names: list[str]) -> str:
    lines = [f"#import <{name}/{name}.h>" for name in framework_names]
    return "\n".join(lines) + "\n"


def write_entry_header(directory: Path, framework_names: list[str]) -> Path:
    path = directory / "framework-includes.h"
    write_text(path, render_entry_header(framework_names))
    return path


def summarize_diagnostics(tu: Any) -> dict[str, int]:
    counts: dict[str, int] = {}
    for diagnostic in tu.diagnostics:
        name = DIAGNOSTIC_SEVERITY_NAMES.get(int(diagnostic.severity), "unknown")
        counts[name] = counts.get(name, 0) + 1
    return {name: counts[name] for name in sorted(counts.keys())}


def parse_translation_unit(index: Index, entry_header: Path, target_triple: str, sdk: SdkPath) -> TranslationUnit:
    args = build_parse_arguments(target_triple, sdk)
    start = time.perf_counter()
    try:
        tu = index.parse(str(entry_header), args=args, options=DEFAULT_PARSE_OPTIONS)
    except TranslationUnitLoadError as exc:
        raise ParseError(
            f"libclang could not parse '{entry_header}' for target '{target_triple}' "
            f"with SDK '{sdk.path}': {exc}"
        ) from exc
    elapsed_ms = round((time.perf_counter() - start) * 1000.0, 3)

    counts = summarize_diagnostics(tu)
    rendered = ", ".join(f"{name}={count}" for name, count in counts.items()) or "none"
    print(f"status: initialized translation unit {sdk.platform} ({target_triple}) in {elapsed_ms} ms; diagnostics: {rendered}")
    return tu
