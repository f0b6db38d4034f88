from __future__ import annotations

import argparse

from ..core import *  # noqa: F401,F403
from .common import resolve_config_root, resolve_output_root


def command_translate(args: argparse.Namespace) -> int:
    config_root = resolve_config_root(args)
    output_root = resolve_output_root(args, config_root)
    entry_header = Path(args.entry_header).resolve() if args.entry_header else None

    report = run_pipeline(
        developer_dir=Path(args.developer_dir).resolve(),
        config_root=config_root,
        output_root=output_root,
        entry_header=entry_header,
        library_file=args.libclang,
        triple_overrides=args.triple,
        formatter=args.formatter,
        dry_run=bool(args.dry_run),
    )

    if args.report_json:
        write_text(Path(args.report_json).resolve(), dump_json(report))
    return 0
