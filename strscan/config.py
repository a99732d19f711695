"""
strscan.config
==============
Scanning policy for the extraction engine.

A :class:`ScanConfig` is built once, either from :data:`DEFAULT_CONFIG` or
from a partial set of overrides (:class:`ScanOptions`, usually filled in by
the command line), and is never mutated afterwards.

Pattern policy
--------------
An invalid ``regex`` does **not** abort construction through
:meth:`ScanConfig.from_options`: the pattern is dropped, a warning is logged,
and the resulting config behaves exactly like one without a pattern.  Callers
that want a hard failure pass ``strict=True`` and get a :class:`ConfigError`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields, replace
from enum import Enum

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a scanning policy cannot be built."""


# ---------------------------------------------------------------------------
# Output formats
# ---------------------------------------------------------------------------

class OutputFormat(Enum):
    JSON    = "json"
    LITERAL = "literal"
    CSV     = "csv"

    @classmethod
    def parse(cls, name: str | None) -> "OutputFormat":
        """Case-insensitive lookup; unknown names fall back to LITERAL."""
        if not name:
            return cls.LITERAL
        try:
            return cls(name.strip().lower())
        except ValueError:
            logger.warning("Unknown output format %r, using literal", name)
            return cls.LITERAL


FORMAT_NAMES = [f.value for f in OutputFormat]


# ---------------------------------------------------------------------------
# Policy record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanConfig:
    """Immutable scanning policy."""
    window_min_size:    int                = 4
    window_max_size:    int                = 0       # 0 = unbounded
    special:            bool               = False
    whitespace_include: bool               = False
    line_include:       bool               = False
    split:              int                = 0       # 0 = no splitting
    length:             bool               = False
    pattern:            re.Pattern | None  = None
    output_format:      OutputFormat       = OutputFormat.LITERAL
    include_offsets:    bool               = False

    def __post_init__(self) -> None:
        for name in ("window_min_size", "window_max_size", "split"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigError(f"{name} must be >= 0, got {value}")
        if self.pattern is not None and not isinstance(self.pattern, re.Pattern):
            raise ConfigError(
                f"pattern must be a compiled re.Pattern or None, got {type(self.pattern).__name__}"
            )

    # ------------------------------------------------------------------

    def effective_max(self) -> int:
        """
        The run-length cap the engine actually applies.

        A nonzero maximum below the minimum would reject every run, so it
        is treated as unbounded instead.
        """
        if self.window_max_size and self.window_max_size >= self.window_min_size:
            return self.window_max_size
        return 0

    def with_pattern(self, regex: str | None, *, strict: bool = False) -> "ScanConfig":
        """
        Return a copy holding *regex* compiled, or no pattern at all.

        With ``strict=False`` a bad expression is logged and ignored.
        """
        if regex is None:
            return replace(self, pattern=None)
        try:
            compiled = re.compile(regex)
        except re.error as exc:
            if strict:
                raise ConfigError(f"unable to compile pattern {regex!r}: {exc}") from exc
            logger.warning("Ignoring invalid pattern %r: %s", regex, exc)
            return replace(self, pattern=None)
        return replace(self, pattern=compiled)

    @classmethod
    def from_options(cls, options: "ScanOptions", *, strict: bool = False) -> "ScanConfig":
        """Build a config from *options*; unspecified fields keep their defaults."""
        base = DEFAULT_CONFIG
        overrides = {
            "window_min_size":    options.min,
            "window_max_size":    options.max,
            "special":            options.special,
            "whitespace_include": options.whitespace,
            "line_include":       options.line,
            "split":              options.split,
            "length":             options.length,
            "include_offsets":    options.offsets,
        }
        values = {k: v for k, v in overrides.items() if v is not None}
        if options.output_format is not None:
            values["output_format"] = (
                options.output_format
                if isinstance(options.output_format, OutputFormat)
                else OutputFormat.parse(options.output_format)
            )
        conf = replace(base, **values)
        if options.regex is not None:
            conf = conf.with_pattern(options.regex, strict=strict)
        logger.debug("Scan config: %s", conf.describe())
        return conf

    def describe(self) -> str:
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "pattern":
                value = value.pattern if value is not None else None
            elif f.name == "output_format":
                value = value.value
            parts.append(f"{f.name}={value}")
        return ", ".join(parts)


DEFAULT_CONFIG = ScanConfig()


@dataclass
class ScanOptions:
    """User-supplied overrides.  ``None`` means "keep the default"."""
    min:           int | None  = None
    max:           int | None  = None
    special:       bool | None = None
    whitespace:    bool | None = None
    line:          bool | None = None
    split:         int | None  = None
    length:        bool | None = None
    regex:         str | None  = None
    output_format: str | OutputFormat | None = None
    offsets:       bool | None = None
