"""
Shared Test Fixtures

Temporary source/destination trees and a console with scripted input.
"""

import io

import pytest

from copynotice.console import Console
from copynotice.core.models import DirectoryPair, OverwritePolicy


def _make_console(answers: str = "") -> Console:
    return Console(output=io.StringIO(), input=io.StringIO(answers), use_color=False)


@pytest.fixture
def make_console():
    """Factory for consoles writing to a buffer and answering prompts from `answers`"""
    return _make_console


@pytest.fixture
def console():
    return _make_console()


@pytest.fixture
def policy():
    return OverwritePolicy()


@pytest.fixture
def dirs(tmp_path):
    """Empty src/ and out/ directories under tmp_path"""
    src = tmp_path / "src"
    out = tmp_path / "out"
    src.mkdir()
    out.mkdir()
    return src, out


@pytest.fixture
def pair(dirs):
    src, out = dirs
    return DirectoryPair(source=str(src), destination=str(out))


@pytest.fixture
def source_tree(tmp_path):
    """
    src/
        a.h
        B/  b.h
            D/  d.h
        C/  c.h
        .hidden/  h.h
    """
    src = tmp_path / "src"
    (src / "B" / "D").mkdir(parents=True)
    (src / "C").mkdir()
    (src / ".hidden").mkdir()
    (src / "a.h").write_bytes(b"int a;\r\n")
    (src / "B" / "b.h").write_bytes(b"int b;\r\n")
    (src / "B" / "D" / "d.h").write_bytes(b"int d;\r\n")
    (src / "C" / "c.h").write_bytes(b"int c;\r\n")
    (src / ".hidden" / "h.h").write_bytes(b"int h;\r\n")
    return src
