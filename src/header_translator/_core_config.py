from __future__ import annotations

from ._core_base import *  # noqa: F401,F403

ITEM_SECTIONS = ("fn", "struct", "enum", "typedef", "static")
CONTAINER_SECTIONS = ("class", "protocol")


@dataclass(frozen=True)
class TranslationConfig:
    name: str
    imports: tuple[str, ...]
    sections: dict[str, dict[str, Any]]

    def item_data(self, section: str, name: str) -> dict[str, Any]:
        entries = self.sections.get(section, {})
        data = entries.get(name)
        return data if isinstance(data, dict) else {}

    def is_skipped(self, section: str, name: str) -> bool:
        return bool(self.item_data(section, name).get("skipped", False))

    def is_method_skipped(self, section: str, container: str, selector: str) -> bool:
        methods = self.item_data(section, container).get("methods")
        if not isinstance(methods, dict):
            return False
        method = methods.get(selector)
        return isinstance(method, dict) and bool(method.get("skipped", False))


def build_translation_config(name: str, payload: Any, label: str) -> TranslationConfig:
    if not isinstance(payload, dict):
        raise ConfigurationError(f"{label} root must be an object")
    validate_with_jsonschema("translation_config", payload, label)

    imports = payload.get("imports")
    sections: dict[str, dict[str, Any]] = {}
    for section in CONTAINER_SECTIONS + ITEM_SECTIONS:
        value = payload.get(section)
        sections[section] = dict(value) if isinstance(value, dict) else {}
    return TranslationConfig(
        name=name,
        imports=tuple(imports) if isinstance(imports, list) else tuple(),
        sections=sections,
    )


def load_translation_config(path: Path, name: str) -> TranslationConfig:
    return build_translation_config(name, load_json(path), f"translation config '{path}'")


def load_configs(config_root: Path) -> dict[str, TranslationConfig]:
    if not config_root.is_dir():
        raise ConfigurationError(f"Config root '{config_root}' does not exist or is not a directory")

    configs: dict[str, TranslationConfig] = {}
    for entry in sorted(config_root.iterdir()):
        if not entry.is_dir():
            continue
        config_path = entry / CONFIG_FILE_NAME
        if not config_path.exists():
            continue
        configs[entry.name] = load_translation_config(config_path, entry.name)
    return configs
