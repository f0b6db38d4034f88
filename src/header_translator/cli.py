from __future__ import annotations

import argparse
import sys

from .core import HeaderTranslatorError
from .commands import (
    command_list_configs,
    command_list_sdks,
    command_translate,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="header-translator",
        description="Translate SDK framework headers into a per-framework intermediate representation.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    translate = sub.add_parser("translate", help="Parse every enabled SDK/target triple and write the canonical result.")
    translate.add_argument("developer_dir", help="Developer directory containing 'Platforms/<Name>.platform'.")
    translate.add_argument(
        "--config-root",
        default=".",
        help="Directory holding one '<Framework>/translation-config.json' per framework (default: current directory).",
    )
    translate.add_argument("--output-root", help="Output directory (default: <config-root>/generated).")
    translate.add_argument(
        "--entry-header",
        help="Header to parse (default: generated header importing each configured framework's umbrella header).",
    )
    translate.add_argument("--libclang", help="Path to the libclang shared library (or set HEADER_TRANSLATOR_LIBCLANG).")
    translate.add_argument(
        "--triple",
        action="append",
        help="Enable an additional target triple as PLATFORM=TRIPLE (repeatable).",
    )
    translate.add_argument(
        "--formatter",
        help="Command run once over the output tree after writing; '{output_root}' is substituted.",
    )
    translate.add_argument("--dry-run", action="store_true", help="Do not write files or run the formatter.")
    translate.add_argument("--report-json", help="Write a JSON summary of the run to path.")
    translate.set_defaults(func=command_translate)

    list_sdks = sub.add_parser("list-sdks", help="List the SDK found for each platform and its target triples.")
    list_sdks.add_argument("developer_dir", help="Developer directory containing 'Platforms/<Name>.platform'.")
    list_sdks.add_argument(
        "--triple",
        action="append",
        help="Enable an additional target triple as PLATFORM=TRIPLE (repeatable).",
    )
    list_sdks.set_defaults(func=command_list_sdks)

    list_configs = sub.add_parser("list-configs", help="List frameworks that have a translation config.")
    list_configs.add_argument("--config-root", default=".", help="Config root directory (default: current directory).")
    list_configs.set_defaults(func=command_list_configs)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return int(args.func(args))
    except HeaderTranslatorError as exc:
        print(f"header_translator error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
