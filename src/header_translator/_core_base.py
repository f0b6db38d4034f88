from __future__ import annotations

import difflib
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema

TOOL_VERSION = "0.1.0"
CONFIG_FILE_NAME = "translation-config.json"
FRAMEWORKS_SUBDIR = Path("System") / "Library" / "Frameworks"
FRAMEWORK_SUFFIX = ".framework"
HEADER_SUFFIX = ".h"


class HeaderTranslatorError(Exception):
    pass


class ConfigurationError(HeaderTranslatorError):
    pass


class StructuralMismatchError(HeaderTranslatorError):
    pass


class TraversalContractError(HeaderTranslatorError):
    pass


class ParseError(HeaderTranslatorError):
    pass


class OutputError(HeaderTranslatorError):
    pass


@dataclass(frozen=True)
class Platform:
    name: str
    directory_name: str

    @property
    def platform_dir_name(self) -> str:
        return f"{self.directory_name}.platform"

    def __str__(self) -> str:
        return self.name


MACOSX = Platform(name="macosx", directory_name="MacOSX")
IPHONEOS = Platform(name="iphoneos", directory_name="iPhoneOS")
IPHONESIMULATOR = Platform(name="iphonesimulator", directory_name="iPhoneSimulator")
APPLETVOS = Platform(name="appletvos", directory_name="AppleTVOS")
APPLETVSIMULATOR = Platform(name="appletvsimulator", directory_name="AppleTVSimulator")
WATCHOS = Platform(name="watchos", directory_name="WatchOS")
WATCHSIMULATOR = Platform(name="watchsimulator", directory_name="WatchSimulator")
DRIVERKIT = Platform(name="driverkit", directory_name="DriverKit")

PLATFORMS: tuple[Platform, ...] = (
    APPLETVOS,
    APPLETVSIMULATOR,
    DRIVERKIT,
    IPHONEOS,
    IPHONESIMULATOR,
    MACOSX,
    WATCHOS,
    WATCHSIMULATOR,
)
CANONICAL_PLATFORM = MACOSX


def platform_by_name(name: str) -> Platform:
    lowered = name.strip().lower()
    for platform in PLATFORMS:
        if platform.name == lowered or platform.directory_name.lower() == lowered:
            return platform
    known = ", ".join(platform.name for platform in PLATFORMS)
    raise ConfigurationError(f"Unknown platform '{name}'. Known platforms: {known}")


@dataclass(frozen=True)
class SdkPath:
    platform: Platform
    path: Path

    @property
    def frameworks_root(self) -> Path:
        return self.path / FRAMEWORKS_SUBDIR


def normalize_ws(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Unable to read JSON file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in '{path}': {exc}") from exc


def dump_json(value: Any) -> str:
    return json.dumps(value, indent=2, sort_keys=True) + "\n"


def get_schema_path(kind: str) -> Path:
    base = Path(__file__).resolve().parent / "schemas"
    mapping = {
        "translation_config": base / "translation-config.schema.json",
        "output_file": base / "output-file.schema.json",
    }
    if kind not in mapping:
        raise HeaderTranslatorError(f"Unknown schema kind: {kind}")
    return mapping[kind]


def validate_with_jsonschema(
    kind: str,
    payload: Any,
    label: str,
    error_class: type[HeaderTranslatorError] = ConfigurationError,
) -> None:
    schema_path = get_schema_path(kind)
    schema_payload = load_json(schema_path)
    try:
        jsonschema.validate(payload, schema_payload)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(item) for item in exc.absolute_path) or "<root>"
        raise error_class(f"{label} failed JSON schema validation at {location}: {exc.message}") from exc


def read_text_if_exists(path: Path) -> str:
    if not path.exists():
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise HeaderTranslatorError(f"Unable to read file '{path}': {exc}") from exc


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def compute_unified_diff(old_content: str, new_content: str, old_label: str, new_label: str) -> str:
    diff_lines = difflib.unified_diff(
        old_content.replace("\r\n", "\n").splitlines(),
        new_content.replace("\r\n", "\n").splitlines(),
        fromfile=old_label,
        tofile=new_label,
        lineterm="",
    )
    return "\n".join(diff_lines)


def write_artifact_if_changed(*, path: Path, content: str, dry_run: bool) -> tuple[str, str]:
    old_content = read_text_if_exists(path)
    if old_content == content:
        return "unchanged", ""
    diff = compute_unified_diff(old_content, content, f"a/{path}", f"b/{path}")
    if dry_run:
        return "would_write", diff
    write_text(path, content)
    return "updated", diff
