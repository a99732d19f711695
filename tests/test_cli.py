"""
Tests for strscan.cli
=====================
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from strscan.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "sample.bin"
    path.write_bytes(b"\x00\x01Hello\x00World!\x02cat dog\xffab")
    return path


def lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line]


class TestCli:
    def test_default_json(self, runner, sample):
        result = runner.invoke(main, ["-i", str(sample)])
        assert result.exit_code == 0, result.output
        assert [json.loads(l)["string"] for l in lines(result.output)] == ["Hello", "World"]

    def test_length_and_min(self, runner, sample):
        result = runner.invoke(main, ["-i", str(sample), "-m", "3", "--length"])
        assert result.exit_code == 0, result.output
        records = [json.loads(l) for l in lines(result.output)]
        assert records[0] == {"length": 5, "string": "Hello"}
        assert [r["string"] for r in records] == ["Hello", "World", "cat", "dog"]

    def test_special_and_whitespace(self, runner, sample):
        result = runner.invoke(main, ["-i", str(sample), "--special", "--whitespace"])
        assert result.exit_code == 0, result.output
        assert [json.loads(l)["string"] for l in lines(result.output)] == [
            "Hello", "World!", "cat dog",
        ]

    def test_regex(self, runner, sample):
        result = runner.invoke(main, ["-i", str(sample), "-m", "1", "-r", "^c", "-f", "literal"])
        assert result.exit_code == 0, result.output
        assert lines(result.output) == ["cat"]

    def test_split(self, runner, sample):
        result = runner.invoke(main, ["-i", str(sample), "-m", "1", "-S", "2", "-f", "literal"])
        assert result.exit_code == 0, result.output
        assert lines(result.output)[:3] == ["He", "ll", "o"]

    def test_invalid_regex_is_usage_error(self, runner, sample):
        result = runner.invoke(main, ["-i", str(sample), "-r", "(oops"])
        assert result.exit_code == 2

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(main, ["-i", str(tmp_path / "nope.bin")])
        assert result.exit_code == 1

    def test_input_required(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 2

    def test_stdin(self, runner):
        result = runner.invoke(main, ["-i", "-", "-f", "literal"], input=b"\x00\x00binary\x00")
        assert result.exit_code == 0, result.output
        assert lines(result.output) == ["binary"]

    def test_output_file(self, runner, sample, tmp_path):
        out = tmp_path / "out.csv"
        result = runner.invoke(main, ["-i", str(sample), "-o", str(out), "-f", "csv"])
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8").splitlines() == ["string,length", "Hello,", "World,"]

    def test_unwritable_output(self, runner, sample, tmp_path):
        out = tmp_path / "nodir" / "out.json"
        result = runner.invoke(main, ["-i", str(sample), "-o", str(out)])
        assert result.exit_code == 1
        assert "unable to write output" in result.output
