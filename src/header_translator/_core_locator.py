from __future__ import annotations

from ._core_base import *  # noqa: F401,F403
from ._core_model import *  # noqa: F401,F403


def entity_file_path(entity: Any) -> Path | None:
    location = getattr(entity, "location", None)
    if location is None:
        return None
    source_file = getattr(location, "file", None)
    if source_file is None:
        return None
    return Path(str(source_file.name))


def entity_source_location(entity: Any) -> SourceLocation | None:
    path = entity_file_path(entity)
    if path is None:
        return None
    location = entity.location
    return SourceLocation(path=str(path), line=int(location.line), column=int(location.column))


def split_framework_path(path: Path, frameworks_root: Path) -> tuple[str, str] | None:
    try:
        relative = path.relative_to(frameworks_root)
    except ValueError:
        return None

    parts = relative.parts
    if not parts:
        raise TraversalContractError(f"Path '{path}' is the frameworks directory itself, not a framework file")
    container = parts[0]
    if not container.endswith(FRAMEWORK_SUFFIX):
        raise TraversalContractError(
            f"Expected '{container}' in '{path}' to be a '{FRAMEWORK_SUFFIX}' directory"
        )
    library_name = container[: -len(FRAMEWORK_SUFFIX)]
    if not library_name:
        raise TraversalContractError(f"Framework directory in '{path}' has an empty name")
    remaining = parts[1:]
    if not remaining:
        raise TraversalContractError(f"Path '{path}' has no file component below '{container}'")
    file_stem = Path(remaining[-1]).stem
    if not file_stem:
        raise TraversalContractError(f"Path '{path}' has an empty file name")
    return library_name, file_stem


def identify(entity: Any, frameworks_root: Path) -> tuple[str, str] | None:
    """Framework and file stem an entity was declared in.

    Entities outside ``frameworks_root`` (system and runtime headers) give
    ``None``. A path inside it that does not follow the
    ``<Name>.framework/.../<File>.h`` layout raises ``TraversalContractError``.
    """
    path = entity_file_path(entity)
    if path is None:
        return None
    return split_framework_path(path, frameworks_root)
