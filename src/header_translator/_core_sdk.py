from __future__ import annotations

from ._core_base import *  # noqa: F401,F403

# Platforms mapping to an empty tuple are not parsed.
DEFAULT_TARGET_TRIPLES: dict[str, tuple[str, ...]] = {
    "macosx": (
        "x86_64-apple-macosx10.7.0",
    ),
    "iphoneos": (),
    "iphonesimulator": (),
    "appletvos": (),
    "appletvsimulator": (),
    "watchos": (),
    "watchsimulator": (),
    "driverkit": (),
}

# Triples that were tried against real SDKs; not enabled until divergences are understood.
KNOWN_TARGET_TRIPLES: dict[str, tuple[str, ...]] = {
    "macosx": (
        "x86_64-apple-macosx10.7.0",
        "arm64-apple-macosx11.0.0",
        "i686-apple-macosx10.7.0",
    ),
    "iphoneos": (
        "arm64-apple-ios7.0.0",
        "armv7-apple-ios7.0.0",
        "armv7s-apple-ios",
        "arm64-apple-ios14.0-macabi",
        "x86_64-apple-ios13.0-macabi",
    ),
    "iphonesimulator": (
        "arm64-apple-ios7.0.0-simulator",
        "x86_64-apple-ios7.0.0-simulator",
        "i386-apple-ios7.0.0-simulator",
    ),
    "appletvos": ("arm64-apple-tvos", "x86_64-apple-tvos"),
    "watchos": ("arm64_32-apple-watchos", "armv7k-apple-watchos"),
    "watchsimulator": (
        "arm64-apple-watchos5.0.0-simulator",
        "x86_64-apple-watchos5.0.0-simulator",
    ),
}

SDK_SETTINGS_FILE_NAME = "SDKSettings.json"


def sdk_name_platform(sdk_dir_name: str) -> str:
    """Platform directory name encoded in an SDK directory name.

    ``MacOSX13.1.sdk`` and ``MacOSX.sdk`` both give ``MacOSX``.
    """
    stem = sdk_dir_name[: -len(".sdk")] if sdk_dir_name.endswith(".sdk") else sdk_dir_name
    return re.sub(r"[0-9.]+$", "", stem)


def declared_sdk_platform(sdk_dir: Path) -> str:
    settings_path = sdk_dir / SDK_SETTINGS_FILE_NAME
    if settings_path.is_file():
        settings = load_json(settings_path)
        if not isinstance(settings, dict):
            raise ConfigurationError(f"SDK settings '{settings_path}' must be a JSON object")
        defaults = settings.get("DefaultProperties")
        if isinstance(defaults, dict):
            platform_name = defaults.get("PLATFORM_NAME")
            if isinstance(platform_name, str) and platform_name:
                return platform_name.lower()
    return sdk_name_platform(sdk_dir.name).lower()


def find_sdk_candidates(developer_dir: Path, platform: Platform) -> list[Path]:
    sdks_dir = developer_dir / "Platforms" / platform.platform_dir_name / "Developer" / "SDKs"
    if not sdks_dir.is_dir():
        return []
    candidates: list[Path] = []
    for entry in sorted(sdks_dir.iterdir()):
        if entry.suffix != ".sdk" or entry.is_symlink() or not entry.is_dir():
            continue
        if declared_sdk_platform(entry) != platform.name:
            continue
        candidates.append(entry)
    return candidates


def discover_sdks(developer_dir: Path) -> list[SdkPath]:
    if not developer_dir.is_dir():
        raise ConfigurationError(f"Developer directory '{developer_dir}' does not exist or is not a directory")
    if not (developer_dir / "Platforms").is_dir():
        raise ConfigurationError(f"Developer directory '{developer_dir}' has no 'Platforms' directory")

    sdks: list[SdkPath] = []
    for platform in PLATFORMS:
        candidates = find_sdk_candidates(developer_dir, platform)
        if len(candidates) != 1:
            listed = ", ".join(str(item) for item in candidates) or "<none>"
            raise ConfigurationError(
                f"Expected exactly one SDK for platform '{platform}', found {len(candidates)} "
                f"SDK candidates in '{developer_dir}': {listed}"
            )
        sdks.append(SdkPath(platform=platform, path=candidates[0]))
    return sdks


def parse_triple_overrides(values: list[str] | None) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for raw in values or []:
        platform_name, sep, triple = raw.partition("=")
        if not sep or not platform_name.strip() or not triple.strip():
            raise ConfigurationError(f"Invalid --triple value '{raw}'; expected PLATFORM=TRIPLE")
        platform = platform_by_name(platform_name)
        out.setdefault(platform.name, []).append(triple.strip())
    return out


def resolve_target_triples(platform: Platform, extra_triples: dict[str, list[str]] | None = None) -> list[str]:
    triples: list[str] = []
    for triple in list(DEFAULT_TARGET_TRIPLES.get(platform.name, ())) + list((extra_triples or {}).get(platform.name, [])):
        if triple not in triples:
            triples.append(triple)
    return triples
