from __future__ import annotations

import argparse

from ..core import *  # noqa: F401,F403
from .common import resolve_config_root


def command_list_sdks(args: argparse.Namespace) -> int:
    sdks = discover_sdks(Path(args.developer_dir).resolve())
    extra_triples = parse_triple_overrides(args.triple)

    for sdk in sdks:
        triples = resolve_target_triples(sdk.platform, extra_triples)
        enabled = ", ".join(triples) if triples else "<none>"
        print(f"{sdk.platform}: {sdk.path}")
        print(f"  enabled triples: {enabled}")
        disabled = [item for item in KNOWN_TARGET_TRIPLES.get(sdk.platform.name, ()) if item not in triples]
        if disabled:
            print(f"  known triples:   {', '.join(disabled)}")
    return 0


def command_list_configs(args: argparse.Namespace) -> int:
    configs = load_configs(resolve_config_root(args))

    for name in sorted(configs.keys()):
        print(name)
    return 0
