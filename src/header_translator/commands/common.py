from __future__ import annotations

import argparse

from ..core import *  # noqa: F401,F403


def resolve_config_root(args: argparse.Namespace) -> Path:
    return Path(args.config_root).resolve()


def resolve_output_root(args: argparse.Namespace, config_root: Path) -> Path:
    if args.output_root:
        return Path(args.output_root).resolve()
    return config_root / "generated"
