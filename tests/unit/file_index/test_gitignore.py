"""Tests for git-ignore aware scanning."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from contextera.file_index import scan
from contextera.gitignore import IgnoredPaths, load_ignored_paths, parse_ignored_listing


def _init_repo(root: Path) -> None:
    subprocess.run(["git", "init", "-q", str(root)], check=True)
    (root / ".gitignore").write_text("build/\n*.log\n", encoding="utf-8")
    (root / "build").mkdir()
    (root / "build" / "out.bin").write_bytes(b"\x00")
    (root / "debug.log").write_text("noise\n", encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "app.py").write_text("x = 1\n", encoding="utf-8")
    (root / "src" / "trace.log").write_text("noise\n", encoding="utf-8")


@unittest.skipIf(shutil.which("git") is None, "git not available")
class GitIgnoreScanTests(unittest.TestCase):
    def test_skip_gitignored_drops_ignored_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _init_repo(root)

            names = {entry.name for entry in scan(root, show_hidden=False, skip_gitignored=True)}
            everything = {entry.name for entry in scan(root, show_hidden=False)}

            self.assertEqual(names, {"src", "app.py"})
            self.assertEqual(everything, {"build", "out.bin", "debug.log", "src", "app.py", "trace.log"})

    def test_scanning_a_repository_subfolder_uses_paths_relative_to_it(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            repo = Path(tmp).resolve()
            _init_repo(repo)

            names = {entry.name for entry in scan(repo / "src", skip_gitignored=True)}

            self.assertEqual(names, {"app.py"})

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unavailable")
    def test_self_referencing_symlink_does_not_abort_filtered_scan(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            subprocess.run(["git", "init", "-q", str(root)], check=True)
            (root / "ok.txt").write_text("ok\n", encoding="utf-8")
            try:
                os.symlink(root / "loop", root / "loop")
            except OSError:
                self.skipTest("cannot create symlinks")

            names = {entry.name for entry in scan(root, show_hidden=False, skip_gitignored=True)}

            self.assertEqual(names, {"ok.txt"})

    def test_listing_is_none_outside_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            ignored = load_ignored_paths(root)
            if ignored is not None:
                self.skipTest("temporary directory is inside a git work tree")
            self.assertIsNone(ignored)
            self.assertEqual(scan(root, skip_gitignored=True), [])


class IgnoredPathsTests(unittest.TestCase):
    def test_parse_splits_files_and_directories(self) -> None:
        ignored = parse_ignored_listing(b"build/\x00debug.log\x00src/trace.log\x00\x00")

        self.assertEqual(ignored.directories, frozenset({"build"}))
        self.assertEqual(ignored.files, frozenset({"debug.log", "src/trace.log"}))

    def test_ignored_directory_covers_descendants(self) -> None:
        ignored = IgnoredPaths(files=frozenset({"a.log"}), directories=frozenset({"build", "web/dist"}))

        self.assertTrue(ignored.is_ignored("a.log"))
        self.assertTrue(ignored.is_ignored("build"))
        self.assertTrue(ignored.is_ignored("build/deep/x.o"))
        self.assertTrue(ignored.is_ignored("web/dist/app.js"))
        self.assertFalse(ignored.is_ignored("web"))
        self.assertFalse(ignored.is_ignored("buildx"))
        self.assertFalse(ignored.is_ignored("src/a.log"))


if __name__ == "__main__":
    unittest.main()
