"""
strscan.engine
==============
Core string extraction engine.
Everything here works on an in-memory byte buffer and is completely
decoupled from argument parsing and output formatting.

How a scan works
----------------
The whole input is drained into one ``bytes`` buffer when the engine is
built.  A single cursor then walks it left to right:

1.  **Classification** — each byte is accepted or rejected by a fixed
    chain of rules (first match wins)::

        ASCII letter / digit           always
        ASCII punctuation              if special
        space, TAB, VT                 if whitespace_include
        LF, CR                         if line_include

2.  **Run extraction** — rejected bytes are skipped, then accepted bytes
    are accumulated until a rejected byte, the end of the buffer, the
    ``split`` cap or the window maximum is reached, whichever comes first.
    Runs shorter than the window minimum are discarded.  The cursor never
    moves backwards.

3.  **Conversion** — every surviving run becomes a :class:`ScanResult`.

4.  **Filtering** — once the buffer is exhausted, an optional pattern
    keeps only the matching results, preserving order.
"""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Union

from strscan.config import DEFAULT_CONFIG, ScanConfig

logger = logging.getLogger(__name__)

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO]


# ---------------------------------------------------------------------------
# Byte classes
# ---------------------------------------------------------------------------

_ALNUM       = frozenset((string.ascii_letters + string.digits).encode("ascii"))
_PUNCTUATION = frozenset(string.punctuation.encode("ascii"))
_WHITESPACE  = frozenset({0x20, 0x09, 0x0B})   # space, TAB, VT
_LINE        = frozenset({0x0A, 0x0D})         # LF, CR


def classify(byte: int, config: ScanConfig) -> bool:
    """Return True if *byte* may be part of a run under *config*."""
    if byte in _ALNUM:
        return True
    if byte in _PUNCTUATION:
        return config.special
    if byte in _WHITESPACE:
        return config.whitespace_include
    if byte in _LINE:
        return config.line_include
    return False


def _accept_table(config: ScanConfig) -> tuple[bool, ...]:
    return tuple(classify(b, config) for b in range(256))


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Run:
    """A candidate run: the accepted bytes and where they started."""
    data:   bytes
    offset: int = -1


@dataclass(slots=True)
class ScanResult:
    """A single extracted string."""
    value:  str
    length: int | None = None
    offset: int        = -1

    def __str__(self) -> str:
        if self.length is not None:
            return f"{self.length}, {self.value}"
        return self.value

    def to_dict(self, include_offsets: bool = False) -> dict:
        record: dict = {}
        if self.length is not None:
            record["length"] = self.length
        record["string"] = self.value
        if include_offsets and self.offset >= 0:
            record["offset"] = self.offset
        return record


def filter_results(results: Iterable[ScanResult], pattern: re.Pattern) -> list[ScanResult]:
    """Keep the results whose value matches *pattern* anywhere, in order."""
    return [r for r in results if pattern.search(r.value)]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def _drain(source: ByteSource) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    data = source.read()
    if data is None:
        raise OSError("source returned no data; non-blocking streams are not supported")
    if isinstance(data, str):
        raise TypeError("source must be opened in binary mode")
    return bytes(data)


class ScanEngine:
    """
    Single-use extractor over one fully buffered input.

    Usage::

        engine = ScanEngine(fh, ScanConfig(window_min_size=6))
        for result in engine.extract_all():
            print(result.value)

    Read errors from *source* propagate out of the constructor.
    """

    def __init__(self, source: ByteSource, config: ScanConfig | None = None) -> None:
        self._buffer:  bytes             = _drain(source)
        self._cursor:  int               = 0
        self._results: list[ScanResult]  = []
        self._done:    bool              = False
        self.config:   ScanConfig        = DEFAULT_CONFIG
        self._accept:  tuple[bool, ...]  = ()
        self.configure(config or DEFAULT_CONFIG)
        logger.debug("Buffered %d bytes for scanning", len(self._buffer))

    @classmethod
    def from_path(cls, path: Path | str, config: ScanConfig | None = None) -> "ScanEngine":
        with Path(path).open("rb") as fh:
            return cls(fh, config)

    def configure(self, config: ScanConfig) -> None:
        """Install *config*.  Only allowed before scanning has started."""
        if self._cursor or self._done:
            raise RuntimeError("cannot reconfigure an engine after scanning has started")
        self.config = config
        self._accept = _accept_table(config)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._buffer)

    @property
    def current_byte(self) -> int:
        """Byte under the cursor; 0 once the buffer is exhausted."""
        if self.exhausted:
            return 0
        return self._buffer[self._cursor]

    @property
    def results(self) -> tuple[ScanResult, ...]:
        return tuple(self._results)

    # ------------------------------------------------------------------
    # Algorithms
    # ------------------------------------------------------------------

    def classify(self, byte: int | None = None) -> bool:
        """Classify *byte*, or the byte under the cursor when omitted."""
        if byte is None:
            if self.exhausted:
                return False
            byte = self.current_byte
        if not 0 <= byte < 256:
            return False
        return self._accept[byte]

    def read_run(self) -> Run | None:
        """
        Consume the next run from the buffer.

        Returns None when no run is available for this call, either because
        the buffer ran out or because the run fell below the window minimum.
        The cursor has advanced in both cases.
        """
        buf    = self._buffer
        size   = len(buf)
        accept = self._accept
        pos    = self._cursor

        while pos < size and not accept[buf[pos]]:
            pos += 1
        if pos >= size:
            self._cursor = pos
            return None

        start = pos
        caps  = [c for c in (self.config.split, self.config.effective_max()) if c]
        limit = min(size, start + min(caps)) if caps else size

        while pos < limit and accept[buf[pos]]:
            pos += 1
        self._cursor = pos

        if pos - start < self.config.window_min_size:
            return None
        return Run(data=buf[start:pos], offset=start)

    def to_result(self, run: Run) -> ScanResult | None:
        """Turn *run* into a result, or None if it is not a printable ASCII string."""
        if b"\x00" in run.data:
            logger.debug("Dropping run at offset %d: embedded NUL", run.offset)
            return None
        try:
            value = run.data.decode("ascii")
        except UnicodeDecodeError:
            logger.debug("Dropping run at offset %d: not ASCII", run.offset)
            return None
        return ScanResult(
            value  = value,
            length = len(run.data) if self.config.length else None,
            offset = run.offset,
        )

    def apply_filter(self) -> int:
        """Apply the configured pattern to the results.  Returns how many were dropped."""
        pattern = self.config.pattern
        if pattern is None:
            return 0
        before = len(self._results)
        self._results = filter_results(self._results, pattern)
        dropped = before - len(self._results)
        logger.debug("Pattern %r dropped %d of %d results", pattern.pattern, dropped, before)
        return dropped

    def extract_all(self) -> list[ScanResult]:
        """
        Scan the whole buffer and return the (filtered) results in scan order.

        The engine is single-use: later calls return the same results
        without rescanning.
        """
        if self._done:
            return list(self._results)

        while not self.exhausted:
            run = self.read_run()
            if run is None:
                continue
            result = self.to_result(run)
            if result is not None:
                self._results.append(result)

        self._done = True
        logger.debug("Scan found %d candidate strings", len(self._results))
        self.apply_filter()
        return list(self._results)


def extract_strings(source: ByteSource, config: ScanConfig | None = None) -> list[ScanResult]:
    """One-shot helper: buffer *source*, scan it and return the results."""
    return ScanEngine(source, config).extract_all()
