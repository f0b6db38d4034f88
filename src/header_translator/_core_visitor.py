from __future__ import annotations

from typing import Callable

from clang.cindex import CursorKind

from ._core_base import *  # noqa: F401,F403
from ._core_config import *  # noqa: F401,F403
from ._core_locator import identify
from ._core_model import *  # noqa: F401,F403
from ._core_statements import parse_statements

STATE_PREPROCESSING = "preprocessing"
STATE_DECLARATIONS = "declarations"

CATEGORY_INCLUSION = "inclusion"
CATEGORY_MACRO = "macro"
CATEGORY_DECLARATION = "declaration"

ACTION_REGISTER_FILE = "register_file"
ACTION_IGNORE = "ignore"
ACTION_EMIT = "emit"

# Once the first declaration is seen, every entity goes through the grammar;
# preprocessing entities there yield no statements.
DECISION_TABLE: dict[tuple[str, str], str] = {
    (CATEGORY_INCLUSION, STATE_PREPROCESSING): ACTION_REGISTER_FILE,
    (CATEGORY_MACRO, STATE_PREPROCESSING): ACTION_IGNORE,
    (CATEGORY_DECLARATION, STATE_PREPROCESSING): ACTION_EMIT,
    (CATEGORY_INCLUSION, STATE_DECLARATIONS): ACTION_EMIT,
    (CATEGORY_MACRO, STATE_DECLARATIONS): ACTION_EMIT,
    (CATEGORY_DECLARATION, STATE_DECLARATIONS): ACTION_EMIT,
}

StatementParser = Callable[[Any, TranslationConfig], list[Statement]]


def entity_category(entity: Any) -> str:
    kind = entity.kind
    if kind == CursorKind.INCLUSION_DIRECTIVE:
        return CATEGORY_INCLUSION
    if kind in {CursorKind.MACRO_INSTANTIATION, CursorKind.MACRO_DEFINITION}:
        return CATEGORY_MACRO
    return CATEGORY_DECLARATION


def decide(category: str, state: str) -> str:
    try:
        return DECISION_TABLE[(category, state)]
    except KeyError as exc:
        raise TraversalContractError(f"No visitor action for category '{category}' in state '{state}'") from exc


def parse_framework_inclusion(spelling: str, library_name: str) -> str | None:
    """Header stem named by ``#include <Library/Header.h>``.

    Returns ``None`` for inclusions of other frameworks or of plain headers.
    """
    segments = spelling.split("/")
    if segments[0] != library_name:
        return None
    if len(segments) < 2:
        raise TraversalContractError(f"Inclusion '{spelling}' names framework '{library_name}' but no header")
    header = segments[1]
    if not header.endswith(HEADER_SUFFIX):
        raise TraversalContractError(f"Inclusion '{spelling}' does not name a '{HEADER_SUFFIX}' header")
    if len(segments) > 2:
        raise TraversalContractError(f"Invalid inclusion of '{spelling}'")
    return header[: -len(HEADER_SUFFIX)]


class FrameworkVisitor:
    """Routes the top-level entities of one translation unit into libraries.

    A visitor starts in the preprocessing state, where inclusion directives
    announce the files of each framework. The first other entity switches it
    to the declarations state for the rest of the parse. Use a new visitor
    for every parse.
    """

    def __init__(
        self,
        configs: dict[str, TranslationConfig],
        frameworks_root: Path,
        statement_parser: StatementParser = parse_statements,
        label: str = "",
    ) -> None:
        self.configs = configs
        self.frameworks_root = frameworks_root
        self.statement_parser = statement_parser
        self.label = label
        self.state = STATE_PREPROCESSING
        self.libraries: dict[str, Library] = {name: Library() for name in sorted(configs.keys())}

    def visit(self, entity: Any) -> None:
        identity = identify(entity, self.frameworks_root)
        if identity is None:
            return
        library_name, file_name = identity
        config = self.configs.get(library_name)
        if config is None:
            return

        action = decide(entity_category(entity), self.state)
        if action == ACTION_REGISTER_FILE:
            self._register_file(entity, library_name)
        elif action == ACTION_EMIT:
            self._emit(entity, library_name, file_name, config)

    def visit_all(self, entities: Any) -> dict[str, Library]:
        for entity in entities:
            self.visit(entity)
        return self.libraries

    def _register_file(self, entity: Any, library_name: str) -> None:
        included = parse_framework_inclusion(str(entity.spelling), library_name)
        # Inclusions of the umbrella header never get a file of their own.
        if included is None or included == library_name:
            return
        # Headers are often included more than once, even from the same file.
        self.libraries[library_name].ensure_file(included)

    def _emit(self, entity: Any, library_name: str, file_name: str, config: TranslationConfig) -> None:
        if self.state == STATE_PREPROCESSING:
            print(f"status: preprocessed {self.label}...")
            self.state = STATE_DECLARATIONS

        library = self.libraries[library_name]
        target = library.files.get(file_name)
        if target is None:
            raise TraversalContractError(
                f"Declaration in '{library_name}/{file_name}.h' was visited before the header was included "
                f"by the '{library_name}' umbrella header"
            )
        for stmt in self.statement_parser(entity, config):
            target.add_stmt(stmt)


def visit_translation_unit(
    tu: Any,
    configs: dict[str, TranslationConfig],
    frameworks_root: Path,
    statement_parser: StatementParser = parse_statements,
    label: str = "",
) -> dict[str, Library]:
    visitor = FrameworkVisitor(
        configs=configs,
        frameworks_root=frameworks_root,
        statement_parser=statement_parser,
        label=label,
    )
    return visitor.visit_all(tu.cursor.get_children())
