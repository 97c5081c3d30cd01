"""Tests for the command handlers."""

import io
import os
import shutil
import sys
import tempfile
from unittest import mock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tokentrim.commands import run_diff, run_diff_stdin, run_find, run_grep


class TestRunDiff:
    def setup_method(self):
        self.tmp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _write(self, name, content, mode="w"):
        path = os.path.join(self.tmp_dir, name)
        with open(path, mode) as f:
            f.write(content)
        return path

    def test_identical_files(self, capsys):
        a = self._write("a.txt", "one\ntwo\n")
        b = self._write("b.txt", "one\ntwo\n")
        run_diff(a, b)
        assert capsys.readouterr().out == "✅ Files are identical\n"

    def test_changed_files(self, capsys):
        a = self._write("a.txt", "a\nb\nc\n")
        b = self._write("b.txt", "a\nx\nc\n")
        run_diff(a, b)
        out = capsys.readouterr().out
        assert f"📊 {a} → {b}" in out
        assert "+1 added, -1 removed, ~0 modified" in out
        assert "-   2 b" in out
        assert "+   2 x" in out

    def test_missing_file_propagates(self):
        a = self._write("a.txt", "a\n")
        with pytest.raises(FileNotFoundError):
            run_diff(a, os.path.join(self.tmp_dir, "missing.txt"))

    def test_invalid_utf8_propagates(self):
        a = self._write("a.txt", "a\n")
        b = self._write("b.bin", b"\xff\xfe\x00bad", mode="wb")
        with pytest.raises(UnicodeDecodeError):
            run_diff(a, b)

    def test_stdin(self, capsys):
        stream = io.StringIO("--- a/f.txt\n+++ b/f.txt\n-old\n+new\n")
        run_diff_stdin(stream=stream)
        assert capsys.readouterr().out == "📄 f.txt (+1 -1)\n  -old\n  +new\n"


class TestRunFind:
    def test_prints_summary(self, capsys):
        with mock.patch(
            "tokentrim.commands.run_first_available", return_value="src/a.py\nsrc/b.md\n"
        ) as run:
            run_find("*", "src", max_results=10)
        assert run.call_args[0][0][-1] == ["find", "src", "-name", "*", "-type", "f"]
        out = capsys.readouterr().out
        assert "📁 Found 2 files in 1 directories:" in out
        assert "src/ (2)" in out

    def test_tool_failure_propagates(self):
        with mock.patch(
            "tokentrim.commands.run_first_available", side_effect=FileNotFoundError("find")
        ):
            with pytest.raises(FileNotFoundError):
                run_find("*.py")


class TestRunGrep:
    def test_prints_summary(self, capsys):
        with mock.patch(
            "tokentrim.commands.run_first_available", return_value="a.py:3:    needle()\n"
        ):
            run_grep("needle", ".", max_line_len=80, max_results=10)
        out = capsys.readouterr().out
        assert "🔍 1 matches in 1 files:" in out
        assert "     3: needle()" in out

    def test_no_matches(self, capsys):
        with mock.patch("tokentrim.commands.run_first_available", return_value=""):
            run_grep("needle")
        assert capsys.readouterr().out == "No matches for 'needle'\n"


class TestLineBreaks:
    def setup_method(self):
        self.tmp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _write(self, name, content):
        path = os.path.join(self.tmp_dir, name)
        with open(path, "w", newline="") as f:
            f.write(content)
        return path

    def test_form_feed_keeps_line_numbers(self, capsys):
        a = self._write("a.txt", "x\x0cy\nline2\nline3\n")
        b = self._write("b.txt", "x\x0cy\nline2\nCHANGED_ZZZ\n")
        run_diff(a, b)
        out = capsys.readouterr().out
        assert "-   3 line3" in out
        assert "+   3 CHANGED_ZZZ" in out
        assert "   4 " not in out

    def test_lone_carriage_return_is_not_a_break(self, capsys):
        a = self._write("a.txt", "a\rb\nsame\n")
        b = self._write("b.txt", "a\rb\nSAME!\n")
        run_diff(a, b)
        out = capsys.readouterr().out
        assert "   2 " in out
        assert "   3 " not in out

    def test_crlf_files_match_lf_files(self, capsys):
        a = self._write("a.txt", "one\r\ntwo\r\n")
        b = self._write("b.txt", "one\ntwo\n")
        run_diff(a, b)
        assert capsys.readouterr().out == "✅ Files are identical\n"

    def test_stdin_bytes_keep_form_feed_in_line(self, capsys):
        raw = io.TextIOWrapper(io.BytesIO(b"+++ b/f.c\n+int a;\x0c-- x\n+b\rc\n"), encoding="utf-8")
        with mock.patch("tokentrim.commands.sys.stdin", raw):
            run_diff_stdin()
        out = capsys.readouterr().out
        assert out.startswith("📄 f.c (+2 -0)\n")
