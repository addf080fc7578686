"""Unit tests for the operating-system file system adapter.

Tests OSFileSystem and OSDirEntry against a real temporary directory,
and the walker on top of them.
"""

import unittest
import tempfile
import os
import stat
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from fswalk import OSFileSystem, WalkRecorder, CollectErrorsPolicy, walk, walk_dir


def _can_symlink(base: Path) -> bool:
    link = base / ".link-check"
    try:
        os.symlink(str(base), str(link), target_is_directory=True)
    except (OSError, NotImplementedError):
        return False
    link.unlink()
    return True


class TestOSFileSystem(unittest.TestCase):
    """Test OSFileSystem functionality."""

    def setUp(self):
        """Create a test directory structure.

        Structure:
        test_dir/
          file1.txt
          .hidden.txt
          subdir1/
            file3.txt
            subdir2/
              file4.txt
          emptydir/
        """
        self.test_dir = tempfile.mkdtemp()
        self.test_path = Path(self.test_dir)

        (self.test_path / "file1.txt").write_text("content1")
        (self.test_path / ".hidden.txt").write_text("hidden")

        (self.test_path / "subdir1").mkdir()
        (self.test_path / "subdir1" / "file3.txt").write_text("content3")

        (self.test_path / "subdir1" / "subdir2").mkdir()
        (self.test_path / "subdir1" / "subdir2" / "file4.txt").write_text("content4")

        (self.test_path / "emptydir").mkdir()

        self.fs = OSFileSystem()

    def tearDown(self):
        """Clean up test directory."""
        import shutil
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_stat_directory(self):
        info = self.fs.stat(self.test_dir)
        self.assertTrue(info.is_dir)
        self.assertEqual(info.name, self.test_path.name)
        self.assertEqual(info.type(), stat.S_IFDIR)

    def test_stat_trailing_separator(self):
        info = self.fs.stat(self.test_dir + os.sep)
        self.assertEqual(info.name, self.test_path.name)

    def test_stat_file(self):
        info = self.fs.stat(str(self.test_path / "file1.txt"))
        self.assertFalse(info.is_dir)
        self.assertEqual(info.size, len("content1"))
        self.assertIsNotNone(info.mtime)

    def test_stat_missing(self):
        with self.assertRaises(FileNotFoundError):
            self.fs.stat(str(self.test_path / "missing"))

    def test_read_dir_sorted(self):
        names = [entry.name for entry in self.fs.read_dir(self.test_dir)]
        self.assertEqual(names, [".hidden.txt", "emptydir", "file1.txt", "subdir1"])

    def test_read_dir_entry_types(self):
        entries = {entry.name: entry for entry in self.fs.read_dir(self.test_dir)}
        self.assertTrue(entries["subdir1"].is_dir())
        self.assertFalse(entries["file1.txt"].is_dir())
        self.assertEqual(entries["subdir1"].type(), stat.S_IFDIR)
        self.assertEqual(entries["file1.txt"].type(), stat.S_IFREG)
        self.assertEqual(entries["file1.txt"].info().size, len("content1"))

    def test_read_dir_on_file(self):
        with self.assertRaises(OSError):
            self.fs.read_dir(str(self.test_path / "file1.txt"))

    def test_join_uses_os_sep(self):
        self.assertEqual(self.fs.join("a", "b"), "a" + os.sep + "b")

    def test_walk_order(self):
        recorder = WalkRecorder()
        walk_dir(self.fs, self.test_dir, recorder.visit, recorder.done)

        rel = [os.path.relpath(path, self.test_dir) for path in recorder.pre]
        self.assertEqual(rel, [
            ".",
            ".hidden.txt",
            "emptydir",
            "file1.txt",
            "subdir1",
            os.path.join("subdir1", "file3.txt"),
            os.path.join("subdir1", "subdir2"),
            os.path.join("subdir1", "subdir2", "file4.txt"),
        ])

        post = [os.path.relpath(path, self.test_dir) for path in recorder.post]
        self.assertEqual(post, [
            "emptydir",
            os.path.join("subdir1", "subdir2"),
            "subdir1",
            ".",
        ])

    @unittest.skipIf(os.name == "nt", "names are UTF-16 on Windows")
    def test_undecodable_names_in_byte_order(self):
        base = self.test_path / "raw"
        base.mkdir()
        raw_base = os.fsencode(str(base))
        try:
            for raw_name in (b"\xff", "\ue000".encode("utf-8"), b"a"):
                with open(os.path.join(raw_base, raw_name), "wb"):
                    pass
        except (OSError, UnicodeError):
            self.skipTest("file system rejects non UTF-8 names")

        listed = [os.fsencode(entry.name) for entry in self.fs.read_dir(str(base))]
        self.assertEqual(listed, sorted(listed))

        recorder = WalkRecorder()
        walk_dir(self.fs, str(base), recorder.visit, recorder.done)

        visited = [os.fsencode(os.path.basename(path)) for path in recorder.pre[1:]]
        self.assertEqual(visited, [b"a", b"\xee\x80\x80", b"\xff"])

    def test_paths_are_joined_from_root(self):
        recorder = WalkRecorder()
        walk_dir(self.fs, self.test_dir, recorder.visit)

        self.assertIn(os.path.join(self.test_dir, "subdir1", "file3.txt"), recorder.pre)

    def test_walk_accepts_pathlike(self):
        recorder = WalkRecorder()
        walk(self.test_path / "subdir1", recorder.visit, recorder.done)

        self.assertEqual(len(recorder.pre), 4)
        self.assertEqual(recorder.post[-1], str(self.test_path / "subdir1"))

    def test_missing_root_reported_to_visitor(self):
        calls = []

        def visit(path, entry, err):
            calls.append((path, entry, type(err)))

        missing = str(self.test_path / "missing")
        walk(missing, visit)

        self.assertEqual(calls, [(missing, None, FileNotFoundError)])

    @unittest.skipIf(os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
                     "permission bits not enforced")
    def test_unreadable_directory(self):
        locked = self.test_path / "subdir1" / "subdir2"
        os.chmod(locked, 0)
        try:
            policy = CollectErrorsPolicy()
            recorder = WalkRecorder(policy=policy)
            walk_dir(self.fs, self.test_dir, recorder.visit, recorder.done)
        finally:
            os.chmod(locked, 0o755)

        self.assertEqual(recorder.errors[0][0], str(locked))
        self.assertIsInstance(recorder.errors[0][1], PermissionError)
        self.assertIn(str(locked), recorder.post)
        self.assertNotIn(str(locked / "file4.txt"), recorder.pre)


class TestSymlinks(unittest.TestCase):
    """Symbolic link handling."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.test_path = Path(self.test_dir)
        (self.test_path / "real").mkdir()
        (self.test_path / "real" / "inner.txt").write_text("inner")
        if not _can_symlink(self.test_path):
            self.skipTest("symlinks not supported")
        os.symlink(str(self.test_path / "real"), str(self.test_path / "link"),
                   target_is_directory=True)
        self.fs = OSFileSystem()

    def tearDown(self):
        import shutil
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_nested_link_not_followed(self):
        entries = {entry.name: entry for entry in self.fs.read_dir(self.test_dir)}
        self.assertFalse(entries["link"].is_dir())
        self.assertEqual(entries["link"].type(), stat.S_IFLNK)
        self.assertTrue(stat.S_ISLNK(entries["link"].info().mode))

        recorder = WalkRecorder()
        walk_dir(self.fs, self.test_dir, recorder.visit, recorder.done)

        self.assertIn(str(self.test_path / "link"), recorder.pre)
        self.assertNotIn(str(self.test_path / "link" / "inner.txt"), recorder.pre)

    def test_root_link_followed(self):
        root = str(self.test_path / "link")
        recorder = WalkRecorder()
        walk_dir(self.fs, root, recorder.visit, recorder.done)

        self.assertEqual(recorder.pre, [root, os.path.join(root, "inner.txt")])
        self.assertEqual(recorder.post, [root])


if __name__ == "__main__":
    unittest.main()
