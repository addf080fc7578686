"""Tests for entry and skip signal primitives."""

import stat

from fswalk import SKIP_DIR, FileInfo, SkipDir, StatDirEntry, is_skip


def test_stat_dir_entry_mirrors_info():
    info = FileInfo(name="docs", is_dir=True, mode=stat.S_IFDIR | 0o755)
    entry = StatDirEntry(info)

    assert entry.name == "docs"
    assert entry.is_dir()
    assert entry.type() == stat.S_IFDIR
    assert entry.info() is info
    assert repr(entry) == "StatDirEntry('docs', dir)"


def test_file_info_type_strips_permissions():
    info = FileInfo(name="a", is_dir=False, mode=stat.S_IFREG | 0o600)
    assert info.type() == stat.S_IFREG


def test_skip_signal_identity():
    assert is_skip(SKIP_DIR)
    assert is_skip(SkipDir("custom reason"))
    assert not is_skip(Exception(str(SKIP_DIR)))
    assert not is_skip(None)
