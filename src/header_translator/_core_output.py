from __future__ import annotations

import shlex
import subprocess

from ._core_base import *  # noqa: F401,F403
from ._core_config import *  # noqa: F401,F403
from ._core_model import *  # noqa: F401,F403

INDEX_FILE_NAME = "_index.json"


def build_file_payload(library_name: str, file_name: str, file: File, config: TranslationConfig) -> dict[str, Any]:
    payload = {
        "tool": {"name": "header_translator", "version": TOOL_VERSION},
        "framework": library_name,
        "file": file_name,
        "imports": list(config.imports),
        "statements": [stmt.as_dict() for stmt in file.statements],
    }
    validate_with_jsonschema(
        "output_file",
        payload,
        f"generated file '{library_name}/{file_name}'",
        error_class=OutputError,
    )
    return payload


def build_index_payload(library_name: str, library: Library) -> dict[str, Any]:
    return {
        "framework": library_name,
        "files": {
            name: {"statement_count": len(library.files[name].statements)}
            for name in sorted(library.files.keys())
        },
        "statement_count": library.statement_count(),
    }


def output_library(
    library_name: str,
    library: Library,
    config: TranslationConfig,
    output_path: Path,
    dry_run: bool = False,
) -> dict[str, str]:
    index_stem = INDEX_FILE_NAME[: -len(".json")]
    if index_stem in library.files:
        raise OutputError(
            f"Header '{library_name}/{index_stem}.h' would be written over the framework index '{INDEX_FILE_NAME}'"
        )

    statuses: dict[str, str] = {}
    for file_name in sorted(library.files.keys()):
        payload = build_file_payload(library_name, file_name, library.files[file_name], config)
        path = output_path / f"{file_name}.json"
        status, _ = write_artifact_if_changed(path=path, content=dump_json(payload), dry_run=dry_run)
        statuses[file_name] = status
    index_status, _ = write_artifact_if_changed(
        path=output_path / INDEX_FILE_NAME,
        content=dump_json(build_index_payload(library_name, library)),
        dry_run=dry_run,
    )
    statuses[INDEX_FILE_NAME] = index_status
    return statuses


def render_formatter_command(template: str, output_root: Path) -> list[str]:
    rendered: list[str] = []
    for token in shlex.split(template):
        current = token.replace("{output_root}", str(output_root))
        if current:
            rendered.append(current)
    if not rendered:
        raise ConfigurationError(f"Formatter command '{template}' is empty")
    return rendered


def run_formatter(template: str | None, output_root: Path, dry_run: bool = False) -> dict[str, Any]:
    if not template:
        print("status: formatting skipped (no formatter configured)")
        return {"status": "skipped"}
    command = render_formatter_command(template, output_root)
    display = " ".join(shlex.quote(item) for item in command)
    if dry_run:
        print(f"status: formatting skipped in dry-run mode: {display}")
        return {"status": "skipped", "command": display}

    print("status: formatting")
    try:
        proc = subprocess.run(command, capture_output=True, text=True, check=True)
    except FileNotFoundError as exc:
        raise OutputError(f"Formatter executable not found: command={display}; error={exc}") from exc
    except subprocess.CalledProcessError as exc:
        message = exc.stderr.strip() or exc.stdout.strip() or "unknown formatter error"
        raise OutputError(f"Formatter failed. command={display}; error={message}") from exc
    return {
        "status": "pass",
        "command": display,
        "stdout": proc.stdout.strip(),
    }
