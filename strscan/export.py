"""
strscan.export
==============
Writers for scan results: newline-delimited JSON, literal text and CSV.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, TextIO

from strscan.config import OutputFormat
from strscan.engine import ScanResult

logger = logging.getLogger(__name__)


def render_json(result: ScanResult, include_offsets: bool = False) -> str:
    """One compact JSON object: ``{"length": 5, "string": "Hello"}``."""
    return json.dumps(result.to_dict(include_offsets), ensure_ascii=False)


def render_literal(result: ScanResult, include_offsets: bool = False) -> str:
    if include_offsets and result.offset >= 0:
        return f"@0x{result.offset:08X}  {result}"
    return str(result)


def _write_csv(results: Iterable[ScanResult], stream: TextIO, include_offsets: bool) -> int:
    writer = csv.writer(stream, lineterminator="\n")
    header = ["string", "length"]
    if include_offsets:
        header.append("offset")
    writer.writerow(header)
    count = 0
    for r in results:
        row = [r.value, "" if r.length is None else r.length]
        if include_offsets:
            row.append(f"0x{r.offset:08X}" if r.offset >= 0 else "")
        writer.writerow(row)
        count += 1
    return count


def write_results(
    results: Iterable[ScanResult],
    stream: TextIO,
    fmt: OutputFormat = OutputFormat.JSON,
    include_offsets: bool = False,
) -> int:
    """Write *results* to *stream*, one record per line.  Returns the count written."""
    if fmt is OutputFormat.CSV:
        return _write_csv(results, stream, include_offsets)

    render = render_json if fmt is OutputFormat.JSON else render_literal
    count = 0
    for r in results:
        stream.write(render(r, include_offsets))
        stream.write("\n")
        count += 1
    return count


def export_results(
    results: list[ScanResult],
    path: Path,
    fmt: OutputFormat = OutputFormat.JSON,
    include_offsets: bool = False,
) -> int:
    """Write *results* to the file at *path* (UTF-8)."""
    path = Path(path)
    with path.open("w", encoding="utf-8", newline="") as fh:
        count = write_results(results, fh, fmt, include_offsets)
    logger.info("Exported %d results → %s (%s)", count, path, fmt.value)
    return count
