from __future__ import annotations

import tempfile
from typing import Callable

from ._core_base import *  # noqa: F401,F403
from ._core_compare import *  # noqa: F401,F403
from ._core_config import *  # noqa: F401,F403
from ._core_model import *  # noqa: F401,F403
from ._core_output import *  # noqa: F401,F403
from ._core_sdk import *  # noqa: F401,F403
from ._core_session import *  # noqa: F401,F403
from ._core_statements import parse_statements
from ._core_visitor import StatementParser, visit_translation_unit

TranslationUnitParser = Callable[[Any, Path, str, SdkPath], Any]


def parse_sdk(
    *,
    index: Any,
    sdk: SdkPath,
    target_triple: str,
    configs: dict[str, TranslationConfig],
    entry_header: Path,
    parse: TranslationUnitParser = parse_translation_unit,
    statement_parser: StatementParser = parse_statements,
) -> dict[str, Library]:
    tu = parse(index, entry_header, target_triple, sdk)
    return visit_translation_unit(
        tu,
        configs=configs,
        frameworks_root=sdk.frameworks_root,
        statement_parser=statement_parser,
        label=f"{sdk.platform} ({target_triple})",
    )


def translate_platforms(
    *,
    index: Any,
    sdks: list[SdkPath],
    configs: dict[str, TranslationConfig],
    entry_header: Path,
    extra_triples: dict[str, list[str]] | None = None,
    canonical_platform: Platform = CANONICAL_PLATFORM,
    parse: TranslationUnitParser = parse_translation_unit,
    statement_parser: StatementParser = parse_statements,
) -> dict[str, Library]:
    final_result: dict[str, Library] | None = None

    for sdk in sdks:
        triples = resolve_target_triples(sdk.platform, extra_triples)
        if not triples:
            print(f"status: skipping {sdk.platform} (no target triples enabled)")
            continue

        print(f"status: parsing {sdk.platform}...")
        result: dict[str, Library] | None = None
        result_label = ""
        for triple in triples:
            print(f"status:     parsing llvm target {triple!r}...")
            current = parse_sdk(
                index=index,
                sdk=sdk,
                target_triple=triple,
                configs=configs,
                entry_header=entry_header,
                parse=parse,
                statement_parser=statement_parser,
            )
            print(f"status:     done parsing llvm target {triple!r}")

            current_label = f"{sdk.platform} ({triple})"
            if result is None:
                result = current
                result_label = current_label
            else:
                compare_results(result, current, result_label, current_label)

        if sdk.platform == canonical_platform:
            final_result = result
        print(f"status: done parsing {sdk.platform}")

    if final_result is None:
        raise ConfigurationError(
            f"No result for canonical platform '{canonical_platform}'; enable at least one target triple for it"
        )
    return final_result


def write_result(
    *,
    result: dict[str, Library],
    configs: dict[str, TranslationConfig],
    output_root: Path,
    dry_run: bool = False,
) -> dict[str, dict[str, str]]:
    statuses: dict[str, dict[str, str]] = {}
    for library_name in sorted(result.keys()):
        print(f"status: writing framework {library_name}...")
        statuses[library_name] = output_library(
            library_name,
            result[library_name],
            configs[library_name],
            output_root / library_name,
            dry_run=dry_run,
        )
        print(f"status: written framework {library_name}")
    return statuses


def run_pipeline(
    *,
    developer_dir: Path,
    config_root: Path,
    output_root: Path,
    entry_header: Path | None = None,
    library_file: str | None = None,
    triple_overrides: list[str] | None = None,
    formatter: str | None = None,
    dry_run: bool = False,
    index: Any = None,
    parse: TranslationUnitParser = parse_translation_unit,
    statement_parser: StatementParser = parse_statements,
) -> dict[str, Any]:
    print("status: loading configs...")
    configs = load_configs(config_root)
    print(f"status: loaded {len(configs)} configs")

    extra_triples = parse_triple_overrides(triple_overrides)
    sdks = discover_sdks(developer_dir)
    print(f"status: found {len(sdks)} SDKs in {developer_dir}")

    if entry_header is not None and not entry_header.is_file():
        raise ConfigurationError(f"Entry header '{entry_header}' does not exist")

    if index is None:
        index = create_index(library_file)

    with tempfile.TemporaryDirectory(prefix="header-translator-") as temp_dir:
        header = entry_header or write_entry_header(Path(temp_dir), sorted(configs.keys()))
        final_result = translate_platforms(
            index=index,
            sdks=sdks,
            configs=configs,
            entry_header=header,
            extra_triples=extra_triples,
            parse=parse,
            statement_parser=statement_parser,
        )

    statuses = write_result(result=final_result, configs=configs, output_root=output_root, dry_run=dry_run)
    formatting = run_formatter(formatter, output_root, dry_run=dry_run)

    return {
        "configs": sorted(configs.keys()),
        "sdks": {str(sdk.platform): str(sdk.path) for sdk in sdks},
        "libraries": {
            name: {
                "files": len(final_result[name].files),
                "statements": final_result[name].statement_count(),
            }
            for name in sorted(final_result.keys())
        },
        "outputs": statuses,
        "formatting": formatting,
    }
