from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import fake_clang  # noqa: F401
import header_translator as ht


def write_config(config_root: Path, name: str, payload: object) -> Path:
    path = config_root / name / ht.CONFIG_FILE_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TranslationConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_root = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_loads_configured_frameworks_only(self) -> None:
        write_config(
            self.config_root,
            "Foundation",
            {
                "imports": ["CoreFoundation"],
                "fn": {"NSLog": {"skipped": True}},
                "class": {"NSObject": {"methods": {"copy": {"skipped": True}}}},
            },
        )
        write_config(self.config_root, "AppKit", {})
        (self.config_root / "Unconfigured").mkdir()
        (self.config_root / "notes.txt").write_text("not a framework\n", encoding="utf-8")

        configs = ht.load_configs(self.config_root)

        self.assertEqual(list(configs.keys()), ["AppKit", "Foundation"])
        foundation = configs["Foundation"]
        self.assertEqual(foundation.name, "Foundation")
        self.assertEqual(foundation.imports, ("CoreFoundation",))
        self.assertEqual(configs["AppKit"].imports, ())

    def test_skip_helpers(self) -> None:
        config = ht.build_translation_config(
            "Foundation",
            {
                "fn": {"NSLog": {"skipped": True}, "NSStringFromClass": {}},
                "class": {"NSObject": {"methods": {"copy": {"skipped": True}, "init": {"skipped": False}}}},
                "protocol": {"NSCopying": {"skipped": True}},
            },
            "test config",
        )
        self.assertTrue(config.is_skipped("fn", "NSLog"))
        self.assertFalse(config.is_skipped("fn", "NSStringFromClass"))
        self.assertFalse(config.is_skipped("fn", "NSUnknown"))
        self.assertTrue(config.is_skipped("protocol", "NSCopying"))
        self.assertTrue(config.is_method_skipped("class", "NSObject", "copy"))
        self.assertFalse(config.is_method_skipped("class", "NSObject", "init"))
        self.assertFalse(config.is_method_skipped("class", "NSString", "copy"))
        self.assertFalse(config.is_skipped("enum", "NSComparisonResult"))

    def test_missing_config_root(self) -> None:
        with self.assertRaises(ht.ConfigurationError):
            ht.load_configs(self.config_root / "missing")

    def test_invalid_json_fails(self) -> None:
        path = self.config_root / "Foundation" / ht.CONFIG_FILE_NAME
        path.parent.mkdir()
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ht.ConfigurationError) as ctx:
            ht.load_configs(self.config_root)
        self.assertIn("Invalid JSON", str(ctx.exception))

    def test_schema_violations_fail(self) -> None:
        payloads = [
            {"unknown": {}},
            {"fn": {"NSLog": {"skipped": "yes"}}},
            {"imports": "CoreFoundation"},
            {"fn": {"NSLog": {"methods": {}}}},
        ]
        for payload in payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(ht.ConfigurationError) as ctx:
                    ht.build_translation_config("Foundation", payload, "translation config 'Foundation'")
                self.assertIn("failed JSON schema validation", str(ctx.exception))

    def test_non_object_root_fails(self) -> None:
        write_config(self.config_root, "Foundation", ["fn"])
        with self.assertRaises(ht.ConfigurationError):
            ht.load_configs(self.config_root)


if __name__ == "__main__":
    unittest.main()
