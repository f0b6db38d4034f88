from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from fake_clang import FakeTranslationUnit, framework_header, function_decl, inclusion, macro_definition
import header_translator as ht
from header_translator.cli import main
from test_sdk import make_developer_dir


class RecordingParser:
    """Stands in for libclang: every parse yields the same small Foo framework."""

    def __init__(self, divergent_prefix: str | None = None) -> None:
        self.divergent_prefix = divergent_prefix
        self.calls: list[tuple[str, str]] = []
        self.entry_headers: list[str] = []

    def __call__(self, index: object, entry_header: Path, target_triple: str, sdk: ht.SdkPath) -> FakeTranslationUnit:
        self.calls.append((sdk.platform.name, target_triple))
        self.entry_headers.append(entry_header.read_text(encoding="utf-8"))
        root = sdk.frameworks_root
        umbrella = framework_header(root, "Foo", "Foo.h")
        bar = framework_header(root, "Foo", "Bar.h")
        children = [
            macro_definition("FOO_EXTERN", bar),
            inclusion("Foo/Bar.h", umbrella),
            inclusion("CoreFoundation/CoreFoundation.h", umbrella),
            function_decl("FooBarCreate", bar, line=3, result_type="int"),
        ]
        if self.divergent_prefix and target_triple.startswith(self.divergent_prefix):
            children.append(function_decl("FooBarArm64Only", bar, line=9))
        return FakeTranslationUnit(children)


class PipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.developer_dir = make_developer_dir(self.root)
        self.config_root = self.root / "configs"
        config_path = self.config_root / "Foo" / ht.CONFIG_FILE_NAME
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"imports": ["CoreFoundation"]}), encoding="utf-8")
        self.output_root = self.root / "generated"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def run_pipeline(self, parser: RecordingParser, **kwargs: object) -> tuple[dict, str]:
        with contextlib.redirect_stdout(io.StringIO()) as stdout:
            report = ht.run_pipeline(
                developer_dir=self.developer_dir,
                config_root=self.config_root,
                output_root=self.output_root,
                index=object(),
                parse=parser,
                **kwargs,
            )
        return report, stdout.getvalue()

    def test_default_run_parses_macosx_only_and_writes_output(self) -> None:
        parser = RecordingParser()
        report, output = self.run_pipeline(parser)

        self.assertEqual(parser.calls, [("macosx", "x86_64-apple-macosx10.7.0")])
        self.assertEqual(parser.entry_headers, ["#import <Foo/Foo.h>\n"])
        self.assertEqual(report["configs"], ["Foo"])
        self.assertEqual(report["libraries"], {"Foo": {"files": 1, "statements": 1}})
        self.assertEqual(report["outputs"]["Foo"], {"Bar": "updated", "_index.json": "updated"})
        self.assertEqual(report["formatting"], {"status": "skipped"})
        self.assertIn("status: skipping iphoneos (no target triples enabled)", output)
        self.assertIn("status: parsing macosx...", output)
        self.assertIn("status: written framework Foo", output)

        payload = json.loads((self.output_root / "Foo" / "Bar.json").read_text(encoding="utf-8"))
        self.assertEqual(payload["imports"], ["CoreFoundation"])
        self.assertEqual(
            payload["statements"][0]["details"],
            {"result_type": "int", "arguments": [], "variadic": False},
        )

    def test_second_run_reports_unchanged(self) -> None:
        self.run_pipeline(RecordingParser())
        report, _ = self.run_pipeline(RecordingParser())
        self.assertEqual(report["outputs"]["Foo"], {"Bar": "unchanged", "_index.json": "unchanged"})

    def test_dry_run_writes_nothing(self) -> None:
        report, _ = self.run_pipeline(RecordingParser(), dry_run=True)
        self.assertEqual(report["outputs"]["Foo"]["Bar"], "would_write")
        self.assertFalse(self.output_root.exists())

    def test_extra_triples_are_compared(self) -> None:
        parser = RecordingParser()
        _, output = self.run_pipeline(
            parser,
            triple_overrides=["macosx=arm64-apple-macosx11.0.0", "iphoneos=arm64-apple-ios7.0.0"],
        )
        self.assertEqual(
            parser.calls,
            [
                ("iphoneos", "arm64-apple-ios7.0.0"),
                ("macosx", "x86_64-apple-macosx10.7.0"),
                ("macosx", "arm64-apple-macosx11.0.0"),
            ],
        )
        self.assertIn("comparing Foo", output)

    def test_divergent_triples_fail(self) -> None:
        parser = RecordingParser(divergent_prefix="arm64")
        with self.assertRaises(ht.StructuralMismatchError) as ctx:
            self.run_pipeline(parser, triple_overrides=["macosx=arm64-apple-macosx11.0.0"])
        self.assertIn("'Foo'", str(ctx.exception))
        self.assertIn("FooBarArm64Only", str(ctx.exception))
        self.assertFalse(self.output_root.exists())

    def test_explicit_entry_header(self) -> None:
        entry_header = self.root / "custom.h"
        entry_header.write_text("#import <Foo/Foo.h>\n#import <Foo/Bar.h>\n", encoding="utf-8")
        parser = RecordingParser()
        self.run_pipeline(parser, entry_header=entry_header)
        self.assertEqual(parser.entry_headers, ["#import <Foo/Foo.h>\n#import <Foo/Bar.h>\n"])

        with self.assertRaises(ht.ConfigurationError):
            self.run_pipeline(RecordingParser(), entry_header=self.root / "missing.h")


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_list_configs(self) -> None:
        for name in ["Foundation", "AppKit"]:
            path = self.root / name / ht.CONFIG_FILE_NAME
            path.parent.mkdir(parents=True)
            path.write_text("{}", encoding="utf-8")
        with contextlib.redirect_stdout(io.StringIO()) as stdout:
            rc = main(["list-configs", "--config-root", str(self.root)])
        self.assertEqual(rc, 0)
        self.assertEqual(stdout.getvalue().splitlines(), ["AppKit", "Foundation"])

    def test_list_sdks(self) -> None:
        developer_dir = make_developer_dir(self.root)
        with contextlib.redirect_stdout(io.StringIO()) as stdout:
            rc = main(["list-sdks", str(developer_dir)])
        self.assertEqual(rc, 0)
        self.assertIn("  enabled triples: x86_64-apple-macosx10.7.0", stdout.getvalue())
        self.assertIn("  enabled triples: <none>", stdout.getvalue())

    def test_errors_exit_with_code_two(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()) as stderr:
            rc = main(["list-configs", "--config-root", str(self.root / "missing")])
        self.assertEqual(rc, 2)
        self.assertIn("header_translator error:", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
