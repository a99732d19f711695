"""
Tests for strscan.export
========================
"""

from __future__ import annotations

import io
import json

from strscan.config import OutputFormat
from strscan.engine import ScanResult
from strscan.export import export_results, render_json, render_literal, write_results


class TestRenderJson:
    def test_string_only(self):
        assert render_json(ScanResult("Hello")) == '{"string": "Hello"}'

    def test_length_first(self):
        assert render_json(ScanResult("Hello", length=5)) == '{"length": 5, "string": "Hello"}'

    def test_offset_when_requested(self):
        record = json.loads(render_json(ScanResult("Hi", offset=16), include_offsets=True))
        assert record == {"string": "Hi", "offset": 16}

    def test_escapes_quotes(self):
        record = json.loads(render_json(ScanResult('say "hi"')))
        assert record["string"] == 'say "hi"'


class TestRenderLiteral:
    def test_plain(self):
        assert render_literal(ScanResult("hello")) == "hello"

    def test_with_length(self):
        assert render_literal(ScanResult("hello", length=5)) == "5, hello"

    def test_with_offset(self):
        assert render_literal(ScanResult("hello", offset=0x1A0), include_offsets=True) == (
            "@0x000001A0  hello"
        )


class TestWriteResults:
    results = [ScanResult("alpha", length=5, offset=0), ScanResult("beta", length=4, offset=9)]

    def test_json_lines(self):
        buf = io.StringIO()
        count = write_results(self.results, buf, OutputFormat.JSON)
        lines = buf.getvalue().splitlines()
        assert count == 2
        assert [json.loads(line)["string"] for line in lines] == ["alpha", "beta"]
        assert buf.getvalue().endswith("\n")

    def test_literal(self):
        buf = io.StringIO()
        write_results(self.results, buf, OutputFormat.LITERAL)
        assert buf.getvalue() == "5, alpha\n4, beta\n"

    def test_csv(self):
        buf = io.StringIO()
        write_results(self.results, buf, OutputFormat.CSV, include_offsets=True)
        assert buf.getvalue().splitlines() == [
            "string,length,offset",
            "alpha,5,0x00000000",
            "beta,4,0x00000009",
        ]

    def test_empty(self):
        buf = io.StringIO()
        assert write_results([], buf, OutputFormat.JSON) == 0
        assert buf.getvalue() == ""


class TestExportResults:
    def test_writes_file(self, tmp_path):
        path = tmp_path / "out.jsonl"
        count = export_results([ScanResult("alpha")], path, OutputFormat.JSON)
        assert count == 1
        assert path.read_text(encoding="utf-8") == '{"string": "alpha"}\n'
