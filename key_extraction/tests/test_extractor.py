"""
Integration tests for extractor.py

Tests the per-source entry point and the file-level helpers.
"""

import os
import tempfile
import unittest
from pathlib import Path
from key_extraction.extractor import (
    ExtractionStats,
    extract_file,
    extract_files,
    extract_from_source,
    filter_new_keys,
    is_supported_source,
)
from key_extraction.models import ExtractionResult

# Sample test sources
SAMPLES = {
    "simple_t": "t('hello.world')",
    "i18next_t": 'i18next.t("greeting.morning")',
    "template_no_expr": "t(`key.with.no.expressions`)",
    "template_with_expr": "t(`key.${variable}`)",
    "jsx_trans_simple": """
    <Trans i18nKey="jsx.simple.key">Simple Text</Trans>
  """,
    "jsx_trans_child_key": """
    <Trans>Text child key</Trans>
  """,
    "jsx_trans_complex_children": """
    <Trans i18nKey="jsx.complex">
      <strong>Bold Text</strong>
    </Trans>
  """,
    "unsupported_arg": "t(42)",
}


class TestExtractFromSource(unittest.TestCase):
    """Test the per-source engine entry point."""

    def test_simple_t(self):
        result = extract_from_source(SAMPLES["simple_t"], "testfile.js")

        self.assertIn("hello.world", result.success)
        self.assertEqual(len(result.warnings), 0)
        self.assertEqual(len(result.errors), 0)

    def test_i18next_t(self):
        result = extract_from_source(SAMPLES["i18next_t"], "testfile.js")
        self.assertIn("greeting.morning", result.success)

    def test_template_without_expressions_warns(self):
        result = extract_from_source(SAMPLES["template_no_expr"], "testfile.js")

        self.assertIn("key.with.no.expressions", result.success)
        self.assertEqual(len(result.warnings), 1)
        self.assertEqual(result.warnings[0].reason, "TemplateLiteral with no expressions")
        self.assertEqual(len(result.errors), 0)

    def test_template_with_expressions_errors(self):
        result = extract_from_source(SAMPLES["template_with_expr"], "testfile.js")

        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].reason, "TemplateLiteral with expressions")
        self.assertEqual(result.success, frozenset())

    def test_trans_with_key(self):
        result = extract_from_source(SAMPLES["jsx_trans_simple"], "testfile.jsx")

        self.assertIn("jsx.simple.key", result.success)
        self.assertEqual(len(result.warnings), 0)
        self.assertEqual(len(result.errors), 0)

    def test_trans_text_child_as_key(self):
        result = extract_from_source(SAMPLES["jsx_trans_child_key"], "testfile.jsx")
        self.assertIn("Text child key", result.success)

    def test_trans_complex_children(self):
        result = extract_from_source(SAMPLES["jsx_trans_complex_children"], "testfile.jsx")

        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].reason, "Complex children in <Trans>")
        self.assertEqual(result.errors[0].key, "jsx.complex")
        self.assertNotIn("jsx.complex", result.success)

    def test_unsupported_argument(self):
        result = extract_from_source(SAMPLES["unsupported_arg"], "testfile.js")

        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].reason, "Unsupported argument type")
        self.assertEqual(result.errors[0].key, "t(42)")
        self.assertEqual(result.errors[0].file_path, "testfile.js")
        self.assertEqual(result.errors[0].line, 1)

    def test_idempotent(self):
        source = ";\n".join(SAMPLES.values())
        first = extract_from_source(source, "all.tsx")
        second = extract_from_source(source, "all.tsx")

        self.assertEqual(first, second)
        self.assertIn("hello.world", first.success)
        self.assertEqual(len(first.errors), 3)

    def test_parse_failure_returns_empty(self):
        with self.assertLogs("key_extraction.extractor", level="ERROR") as logs:
            result = extract_from_source("t('good');\nconst = ;", "broken.js")

        self.assertEqual(result, ExtractionResult.empty())
        self.assertIn("broken.js", logs.output[0])

    def test_lone_surrogate_does_not_raise(self):
        result = extract_from_source("t('a'); // \ud800", "surrogate.js")

        self.assertIsInstance(result, ExtractionResult)
        self.assertEqual(result.errors, ())

    def test_source_must_be_str(self):
        with self.assertRaises(TypeError):
            extract_from_source(b"t('a')", "bytes.js")

    def test_typescript_source(self):
        source = """
type Props = { id: number };
enum Mode { A, B }
export default function View<T extends object>(props: Props & T): string {
  const label = t('view.label') as string;
  return i18next.t('view.title') ?? label;
}
"""
        result = extract_from_source(source, "view.ts")

        self.assertIn("view.label", result.success)
        self.assertEqual(result.errors, ())


class TestIsSupportedSource(unittest.TestCase):
    """Test source extension filtering."""

    def test_supported(self):
        for name in ("a.ts", "a.tsx", "a.js", "dir/a.jsx"):
            self.assertTrue(is_supported_source(name), name)

    def test_unsupported(self):
        for name in ("a.json", "a.d", "a.mjs", "README"):
            self.assertFalse(is_supported_source(name), name)


class TestExtractFile(unittest.TestCase):
    """Test extracting from a single file."""

    def setUp(self):
        """Set up test fixtures path."""
        self.fixtures_dir = Path(__file__).parent / "fixtures"

    def test_component_fixture(self):
        result = extract_file(str(self.fixtures_dir / "Greeting.tsx"))

        self.assertEqual(
            result.success,
            frozenset({
                "greeting.title",
                "greeting.subtitle",
                "greeting.plain",
                "greeting.body",
                "Inline key text",
            }),
        )
        self.assertEqual([(w.key, w.line) for w in result.warnings], [("greeting.plain", 17)])
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].key, "t(`greeting.${name}`)")
        self.assertEqual(result.errors[0].line, 21)

    def test_default_label_is_absolute_path(self):
        result = extract_file(str(self.fixtures_dir / "menu.js"))

        self.assertEqual(result.errors[0].file_path, os.path.abspath(self.fixtures_dir / "menu.js"))

    def test_custom_label(self):
        result = extract_file(str(self.fixtures_dir / "menu.js"), label="menu.js")
        self.assertEqual(result.errors[0].file_path, "menu.js")

    def test_broken_fixture_is_skipped(self):
        with self.assertLogs("key_extraction.extractor", level="ERROR"):
            result = extract_file(str(self.fixtures_dir / "broken.jsx"))

        self.assertEqual(result, ExtractionResult.empty())

    def test_extract_nonexistent_file(self):
        with self.assertRaises(FileNotFoundError):
            extract_file("/nonexistent/file.ts")

    def test_extract_unsupported_file(self):
        with tempfile.NamedTemporaryFile(suffix=".txt", delete=False) as f:
            temp_path = f.name

        try:
            with self.assertRaises(ValueError):
                extract_file(temp_path)
        finally:
            os.unlink(temp_path)


class TestExtractFiles(unittest.TestCase):
    """Test multi-file extraction and merging."""

    def setUp(self):
        self.fixtures_dir = Path(__file__).parent / "fixtures"
        self.paths = [
            str(self.fixtures_dir / "Greeting.tsx"),
            str(self.fixtures_dir / "menu.js"),
            str(self.fixtures_dir / "broken.jsx"),
        ]

    def test_merge(self):
        result, stats = extract_files(self.paths)

        self.assertIn("greeting.title", result.success)
        self.assertIn("menu.open", result.success)
        self.assertEqual(len(result.success), 7)
        self.assertEqual(len(result.warnings), 1)
        # Errors keep file order: the component first, then the menu
        self.assertEqual(
            [e.reason for e in result.errors],
            ["TemplateLiteral with expressions", "Unsupported argument type"],
        )
        self.assertEqual(stats.files_processed, 3)
        self.assertEqual(stats.files_failed, 0)
        self.assertEqual(stats.keys_extracted, 7)

    def test_missing_file_counted(self):
        result, stats = extract_files(self.paths[:1] + ["/nonexistent/a.ts"])

        self.assertEqual(stats.files_processed, 1)
        self.assertEqual(stats.files_failed, 1)
        self.assertIn("greeting.body", result.success)

    def test_stop_on_error(self):
        with self.assertRaises(FileNotFoundError):
            extract_files(["/nonexistent/a.ts"], continue_on_error=False)

    def test_empty_input(self):
        result, stats = extract_files([])

        self.assertEqual(result, ExtractionResult.empty())
        self.assertEqual(stats.files_processed, 0)


class TestExtractionStats(unittest.TestCase):
    """Test ExtractionStats class."""

    def test_creation(self):
        stats = ExtractionStats()
        self.assertEqual(stats.to_dict(), {
            "files_processed": 0,
            "files_failed": 0,
            "keys_extracted": 0,
            "warnings": 0,
            "errors": 0,
        })

    def test_str_representation(self):
        stats = ExtractionStats()
        stats.files_processed = 3
        self.assertIn("processed=3", str(stats))


class TestFilterNewKeys(unittest.TestCase):
    """Test filtering against previously known keys."""

    def test_filter(self):
        self.assertEqual(filter_new_keys({"b", "a", "c"}, ["b"]), ["a", "c"])

    def test_nothing_known(self):
        self.assertEqual(filter_new_keys(["z", "y", "z"], []), ["y", "z"])


if __name__ == "__main__":
    unittest.main()
