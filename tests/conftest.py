"""Shared fixtures: temporary trees and fake encoder binaries."""

import os
import stat
import sys
import time
from pathlib import Path

import pytest

from audiomirror.encoders import EncodeResult, Encoder
from audiomirror.formats import OutputFormat

# Writes a small file to the -o target. Exits 3 after writing (leaving a
# partial file) when the source path contains $FAKE_ENCODER_FAIL.
FAKE_OGGENC = """#!/bin/sh
out=""
src=""
while [ $# -gt 0 ]; do
  case "$1" in
    -o) out="$2"; shift ;;
    -*) ;;
    *) src="$1" ;;
  esac
  shift
done
if [ -n "$FAKE_ENCODER_LOG" ]; then echo "$src" >> "$FAKE_ENCODER_LOG"; fi
printf 'ogg:%s\\n' "$src" > "$out"
if [ -n "$FAKE_ENCODER_FAIL" ]; then
  case "$src" in *"$FAKE_ENCODER_FAIL"*) exit 3 ;; esac
fi
exit 0
"""

# Decodes by copying the last argument to stdout.
FAKE_FLAC = """#!/bin/sh
for arg in "$@"; do last="$arg"; done
cat "$last"
"""

# Copies stdin to the argument following "-", logging its arguments.
FAKE_LAME = """#!/bin/sh
out=""
prev=""
for arg in "$@"; do
  if [ "$prev" = "-" ] && [ -z "$out" ]; then out="$arg"; fi
  prev="$arg"
done
if [ -n "$FAKE_ENCODER_LOG" ]; then printf '%s\\n' "$@" >> "$FAKE_ENCODER_LOG"; fi
cat > "$out"
"""

requires_posix_shell = pytest.mark.skipif(
    sys.platform == "win32", reason="fake encoders are POSIX shell scripts"
)


def _write_script(path: Path, content: str) -> None:
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.fixture(autouse=True)
def plain_terminal(monkeypatch):
    """Keep rich from forcing colour or terminal mode via the environment."""
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_bin(tmp_path, monkeypatch):
    """Put fake oggenc, flac and lame first on PATH."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    _write_script(bin_dir / "oggenc", FAKE_OGGENC)
    _write_script(bin_dir / "flac", FAKE_FLAC)
    _write_script(bin_dir / "lame", FAKE_LAME)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.delenv("FAKE_ENCODER_FAIL", raising=False)
    monkeypatch.delenv("FAKE_ENCODER_LOG", raising=False)
    return bin_dir


@pytest.fixture
def empty_path(tmp_path, monkeypatch):
    """Make PATH contain only an empty directory."""
    empty = tmp_path / "empty-bin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    return empty


@pytest.fixture
def source(tmp_path):
    """Empty source root."""
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def dest(tmp_path):
    """Empty destination root."""
    path = tmp_path / "dest"
    path.mkdir()
    return path


@pytest.fixture
def lockfile(tmp_path):
    """Lockfile path inside the test directory."""
    return tmp_path / "audiomirror.lock"


def make_file(root: Path, relative_path: str, content: str = "data", age: float = 100):
    """Create a file under root with an mtime ``age`` seconds in the past."""
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    then = time.time() - age
    os.utime(path, (then, then))
    return path


def touch(path: Path, offset: float = 0) -> None:
    """Set a file's mtime to now plus offset seconds."""
    moment = time.time() + offset
    os.utime(path, (moment, moment))


class FakeEncoder(Encoder):
    """In-process encoder that writes the target without any subprocess.

    Sources whose name contains ``fail_on`` produce a partial file and a
    non-zero result.
    """

    output_format = OutputFormat.VORBIS

    def __init__(self, fail_on=None, returncode=1):
        super().__init__(())
        self.fail_on = fail_on
        self.returncode = returncode
        self.calls = []

    def _run(self, source, target):
        self.calls.append((source, target))
        target.write_text(f"encoded {source.name}")
        if self.fail_on and self.fail_on in source.name:
            return EncodeResult(self.returncode)
        return EncodeResult(0)


@pytest.fixture
def fake_encoder():
    """Encoder double that never fails."""
    return FakeEncoder()
