"""
Integration tests for extractor.py

Tests target resolution, file discovery and import map extraction.
"""

import os
import tempfile
import unittest
from pathlib import Path

from core.errors import GoSyntaxError, TargetError
from extraction.extractor import (
    ExtractionStats,
    discover_go_files,
    extract_file,
    extract_import_map,
    find_files,
    split_target,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestExtractionStats(unittest.TestCase):

    def test_creation(self):
        stats = ExtractionStats()
        self.assertEqual(stats.to_dict(), {
            "files_processed": 0,
            "structs_extracted": 0,
            "fields_extracted": 0,
        })

    def test_str_representation(self):
        stats = ExtractionStats()
        stats.files_processed = 3
        self.assertIn("processed=3", str(stats))


class TestSplitTarget(unittest.TestCase):

    def test_valid_target(self):
        self.assertEqual(
            split_target("github.com/acme/models=./models"),
            ("github.com/acme/models", "./models"),
        )

    def test_empty_import_path(self):
        self.assertEqual(split_target("=tables.go"), ("", "tables.go"))

    def test_malformed_targets(self):
        for target in ("tables.go", "a=b=c"):
            with self.subTest(target=target):
                with self.assertRaises(TargetError):
                    split_target(target)


class TestDiscoverGoFiles(unittest.TestCase):

    def test_skips_hidden_and_non_go(self):
        files = discover_go_files(str(FIXTURES_DIR / "models"))

        self.assertEqual(
            [os.path.basename(f) for f in files],
            ["post.go", "types.go"],
        )

    def test_enters_hidden_directories(self):
        files = discover_go_files(str(FIXTURES_DIR / "accounts"))

        self.assertEqual(
            files,
            [
                str(FIXTURES_DIR / "accounts" / ".cache" / "stale.go"),
                str(FIXTURES_DIR / "accounts" / "account.go"),
            ],
        )

    def test_recurses_and_sorts(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            os.makedirs(os.path.join(tmpdir, "sub"))
            for rel in ("b.go", "a.go", os.path.join("sub", "c.go")):
                with open(os.path.join(tmpdir, rel), "w") as f:
                    f.write("package p\n")

            files = discover_go_files(tmpdir)

            self.assertEqual(files, sorted(files))
            self.assertEqual(len(files), 3)


class TestFindFiles(unittest.TestCase):

    def test_no_targets(self):
        with self.assertRaises(TargetError):
            find_files([])

    def test_missing_path(self):
        with self.assertRaises(TargetError):
            find_files(["acme/models=/definitely/missing.go"])

    def test_malformed_target(self):
        with self.assertRaises(TargetError):
            find_files([str(FIXTURES_DIR / "models" / "post.go")])

    def test_file_and_directory_targets(self):
        post = str(FIXTURES_DIR / "models" / "post.go")
        import_map = find_files([
            f"acme/models={FIXTURES_DIR / 'models'}",
            f"acme/models={post}",
            f"acme/accounts={FIXTURES_DIR / 'accounts'}",
        ])

        self.assertEqual(list(import_map), ["acme/models", "acme/accounts"])
        models = import_map["acme/models"]
        # the explicit file duplicates one found by the directory walk
        self.assertEqual(models, [post, str(FIXTURES_DIR / "models" / "types.go")])
        self.assertEqual(len(import_map["acme/accounts"]), 2)

    def test_duplicate_file_targets_deduplicated(self):
        post = str(FIXTURES_DIR / "models" / "post.go")
        import_map = find_files([f"={post}", f"={post}"])

        self.assertEqual(import_map, {"": [post]})


class TestExtractFile(unittest.TestCase):

    def test_extract_with_namespace(self):
        structs = extract_file(
            str(FIXTURES_DIR / "accounts" / "account.go"),
            namespace="github.com/acme/bank/accounts",
        )

        self.assertEqual(len(structs), 1)
        self.assertEqual(structs[0].qualified_name, "accounts.Account")
        self.assertEqual(
            [(f.name, f.type) for f in structs[0].fields],
            [("ID", "int64"), ("Opened", "time.Time"), ("Balance", "float64")],
        )

    def test_syntax_error_is_fatal(self):
        path = str(FIXTURES_DIR / "broken_syntax.go")
        with self.assertRaises(GoSyntaxError) as ctx:
            extract_file(path)
        self.assertEqual(ctx.exception.file_path, path)
        self.assertGreater(ctx.exception.error_count, 0)
        self.assertIn(path, str(ctx.exception))

    def test_nonexistent_file(self):
        with self.assertRaises(FileNotFoundError):
            extract_file("/nonexistent/file.go")

    def _write_go(self, tmpdir, source):
        path = os.path.join(tmpdir, "tables.go")
        with open(path, "wb") as f:
            f.write(source)
        return path

    def test_missing_package_clause_is_fatal(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write_go(tmpdir, b"type A struct {\n\tX int\n}\n")

            with self.assertRaises(GoSyntaxError) as ctx:
                extract_file(path)

            self.assertEqual(ctx.exception.file_path, path)
            self.assertIn("package", str(ctx.exception))

    def test_empty_file_is_fatal(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write_go(tmpdir, b"")

            with self.assertRaises(GoSyntaxError):
                extract_file(path)

    def test_comments_may_precede_package_clause(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write_go(
                tmpdir,
                b"// Package p holds tables.\npackage p\n\ntype A struct {\n\tX int\n}\n",
            )

            structs = extract_file(path)

            self.assertEqual([s.name for s in structs], ["A"])

    def test_syntax_error_logged_once(self):
        path = str(FIXTURES_DIR / "broken_syntax.go")
        with self.assertLogs("extraction", level="WARNING") as logs:
            with self.assertRaises(GoSyntaxError):
                extract_file(path)

        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].levelname, "ERROR")


class TestExtractImportMap(unittest.TestCase):

    def test_discovery_order_is_preserved(self):
        import_map = {
            "acme/models": [
                str(FIXTURES_DIR / "models" / "post.go"),
                str(FIXTURES_DIR / "models" / "types.go"),
            ],
            "acme/accounts": [str(FIXTURES_DIR / "accounts" / "account.go")],
        }
        stats = ExtractionStats()

        structs = extract_import_map(import_map, stats=stats)

        self.assertEqual(
            [s.qualified_name for s in structs],
            [
                "models.Post",
                "models.Comment",
                "models.User",
                "models.Tag",
                "models.Label",
                "accounts.Account",
            ],
        )
        self.assertEqual(stats.files_processed, 3)
        self.assertEqual(stats.structs_extracted, 6)
        self.assertEqual(stats.fields_extracted, sum(len(s.fields) for s in structs))

    def test_whitelist_applies_to_every_file(self):
        import_map = {
            "acme/models": [str(FIXTURES_DIR / "models" / "post.go")],
            "acme/accounts": [str(FIXTURES_DIR / "accounts" / "account.go")],
        }

        structs = extract_import_map(import_map, whitelist="User,Account")

        self.assertEqual([s.name for s in structs], ["User", "Account"])

    def test_syntax_error_aborts_run(self):
        import_map = {
            "": [
                str(FIXTURES_DIR / "broken_syntax.go"),
                str(FIXTURES_DIR / "field_types.go"),
            ],
        }
        with self.assertRaises(GoSyntaxError):
            extract_import_map(import_map)


if __name__ == "__main__":
    unittest.main()
