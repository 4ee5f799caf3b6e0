"""
Tests for DirectoryMatcher and MatchScanner

Recursive expansion, deduplication and extension matching.
"""

import os

import pytest

from copynotice.core.exceptions import TraversalError
from copynotice.core.models import DirectoryPair, FileTask
from copynotice.traversal import DirectoryMatcher, MatchScanner


class RecordingRewriter:
    """Stands in for NoticeRewriter; returns a scripted result per file"""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def rewrite(self, pair, filename, policy):
        self.calls.append((pair, filename))
        return self.results.get(filename, True)


def test_expand_without_recurse(source_tree, tmp_path, console):
    """No recursion means no discovered pairs"""
    pair = DirectoryPair(str(source_tree), str(tmp_path / "out"))
    assert DirectoryMatcher(console).expand(pair, recurse=False) == []
    assert "Target directory" in console.output.getvalue()


def test_expand_mirrors_subdirectories(source_tree, tmp_path, console):
    """Every non-hidden subdirectory is found once, mirrored under the destination"""
    out = tmp_path / "out"
    pair = DirectoryPair(str(source_tree), str(out))

    discovered = DirectoryMatcher(console).expand(pair, recurse=True)

    expected = {
        DirectoryPair(str(source_tree / "B"), str(out / "B")),
        DirectoryPair(str(source_tree / "B" / "D"), str(out / "B" / "D")),
        DirectoryPair(str(source_tree / "C"), str(out / "C")),
    }
    assert len(discovered) == 3
    assert set(discovered) == expected


def test_expand_is_preorder(source_tree, tmp_path, console):
    """A directory is emitted before its own subdirectories"""
    pair = DirectoryPair(str(source_tree), str(tmp_path / "out"))
    sources = [p.source for p in DirectoryMatcher(console).expand(pair, recurse=True)]

    assert sources.index(str(source_tree / "B")) < sources.index(str(source_tree / "B" / "D"))


def test_expand_skips_hidden_directories(source_tree, tmp_path, console):
    pair = DirectoryPair(str(source_tree), str(tmp_path / "out"))
    sources = [p.source for p in DirectoryMatcher(console).expand(pair, recurse=True)]

    assert not any(".hidden" in source for source in sources)


def test_expand_from_working_directory(source_tree, tmp_path, console, monkeypatch):
    """An empty source means the working directory and yields relative pairs"""
    monkeypatch.chdir(source_tree / "B")
    pair = DirectoryPair("", str(tmp_path / "out"))

    discovered = DirectoryMatcher(console).expand(pair, recurse=True)
    assert discovered == [DirectoryPair("D", os.path.join(str(tmp_path / "out"), "D"))]


def test_expand_missing_directory(tmp_path, console):
    """A directory that cannot be listed is fatal"""
    pair = DirectoryPair(str(tmp_path / "missing"), str(tmp_path / "out"))

    with pytest.raises(TraversalError):
        DirectoryMatcher(console).expand(pair, recurse=True)


def _symlink_or_skip(target, link):
    try:
        os.symlink(target, link, target_is_directory=True)
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"symlinks unavailable: {e}")


def test_expand_does_not_follow_directory_symlinks(source_tree, tmp_path, console):
    """A link back to an ancestor ends the walk instead of looping"""
    _symlink_or_skip(source_tree, source_tree / "B" / "loop")
    pair = DirectoryPair(str(source_tree), str(tmp_path / "out"))

    sources = [p.source for p in DirectoryMatcher(console).expand(pair, recurse=True)]

    assert len(sources) == 3
    assert not any("loop" in source for source in sources)


def test_expand_skips_symlink_to_outside_directory(source_tree, tmp_path, console):
    elsewhere = tmp_path / "elsewhere"
    (elsewhere / "deep").mkdir(parents=True)
    _symlink_or_skip(elsewhere, source_tree / "C" / "linked")
    pair = DirectoryPair(str(source_tree), str(tmp_path / "out"))

    sources = [p.source for p in DirectoryMatcher(console).expand(pair, recurse=True)]

    assert str(source_tree / "C" / "linked") not in sources


def test_find_reports_unreadable_entry(pair, dirs, console):
    """An entry that cannot be inspected aborts the search with TraversalError"""
    src, _ = dirs
    try:
        os.symlink("self.h", src / "self.h")
    except (OSError, NotImplementedError) as e:
        pytest.skip(f"symlinks unavailable: {e}")

    with pytest.raises(TraversalError, match="Could not search"):
        MatchScanner(console).find(pair, "h")


def test_merge_drops_already_targeted(source_tree, tmp_path, console):
    """Discovered pairs whose source is already configured are reported and dropped"""
    out = tmp_path / "out"
    configured = [
        DirectoryPair(str(source_tree), str(out)),
        DirectoryPair(str(source_tree / "C"), str(tmp_path / "elsewhere")),
    ]

    merged = DirectoryMatcher(console).resolve(configured, recurse=True)

    sources = [p.source for p in merged]
    assert sources[:2] == [str(source_tree), str(source_tree / "C")]
    assert sorted(sources[2:]) == sorted([str(source_tree / "B"), str(source_tree / "B" / "D")])
    # The configured pair for C wins over the discovered one
    assert merged[1].destination == str(tmp_path / "elsewhere")
    assert f"\"{source_tree / 'C'}\" is already targeted" in console.output.getvalue()


def test_merge_drops_duplicate_discoveries(source_tree, tmp_path, console):
    """Overlapping configured roots do not produce the same source twice"""
    configured = [
        DirectoryPair(str(source_tree), str(tmp_path / "out1")),
        DirectoryPair(str(source_tree / "B"), str(tmp_path / "out2")),
    ]

    merged = DirectoryMatcher(console).resolve(configured, recurse=True)
    sources = [p.source for p in merged]
    assert len(sources) == len(set(sources))
    assert sources.count(str(source_tree / "B" / "D")) == 1


def test_find_matches_extension(pair, dirs, console):
    """Only files ending in .<ext> match; hidden files and directories are skipped"""
    src, _ = dirs
    (src / "a.h").write_bytes(b"a")
    (src / "b.h").write_bytes(b"b")
    (src / "c.c").write_bytes(b"c")
    (src / ".d.h").write_bytes(b"d")
    (src / "e.h").mkdir()

    found = MatchScanner(console).find(pair, "h")
    assert sorted(found) == ["a.h", "b.h"]


def test_find_no_matches(pair, console):
    """No matching files is not an error"""
    assert MatchScanner(console).find(pair, "h") == []


def test_find_missing_directory(tmp_path, console):
    pair = DirectoryPair(str(tmp_path / "missing"), str(tmp_path / "out"))
    with pytest.raises(TraversalError, match="Could not search"):
        MatchScanner(console).find(pair, "h")


def test_tasks_carry_extension(pair, dirs, console):
    src, _ = dirs
    (src / "a.h").write_bytes(b"a")

    tasks = MatchScanner(console).tasks(pair, "h")
    assert tasks == [FileTask(pair, "a.h", "h")]
    assert tasks[0].source_path == str(src / "a.h")


def test_process_counts_created_files(pair, dirs, console, policy):
    """The count only includes files the rewriter produced"""
    src, _ = dirs
    for name in ("a.h", "b.h", "c.h"):
        (src / name).write_bytes(b"x")
    rewriter = RecordingRewriter(results={"b.h": False})

    created = MatchScanner(console).process(pair, "h", rewriter, policy)

    assert created == 2
    assert sorted(name for _, name in rewriter.calls) == ["a.h", "b.h", "c.h"]
    assert "Created 2 file(s)" in console.output.getvalue()


def test_process_reports_no_targets(pair, console, policy):
    rewriter = RecordingRewriter()

    assert MatchScanner(console).process(pair, "h", rewriter, policy) == 0
    assert rewriter.calls == []
    assert "Could not find a target file" in console.output.getvalue()


def test_process_verbose_names_target(pair, console, policy):
    MatchScanner(console, verbose=True).process(pair, "h", RecordingRewriter(), policy)
    assert f"Executing for target: \"{pair.pattern('h')}\"" in console.output.getvalue()
