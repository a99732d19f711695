"""CLI entry point for strscan."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from strscan import __version__
from strscan.config import FORMAT_NAMES, ConfigError, ScanConfig, ScanOptions
from strscan.engine import ScanEngine
from strscan.export import export_results, write_results

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _load(source: str, config: ScanConfig) -> ScanEngine:
    if source == "-":
        return ScanEngine(click.get_binary_stream("stdin"), config)
    return ScanEngine.from_path(Path(source), config)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--in",
    "-i",
    "input_path",
    type=click.Path(dir_okay=False, allow_dash=True),
    required=True,
    help="Input file to extract strings from ('-' reads stdin)",
)
@click.option(
    "--out",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: stdout)",
)
@click.option(
    "--min",
    "-m",
    "min_size",
    type=click.IntRange(min=0),
    default=4,
    show_default=True,
    help="Minimum string length",
)
@click.option(
    "--max",
    "-M",
    "max_size",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Maximum string length, 0 means not limited",
)
@click.option("--special/--no-special", "-s", default=None, help="Include ASCII punctuation")
@click.option(
    "--whitespace/--no-whitespace", "-w", default=None, help="Include space, TAB and VT"
)
@click.option("--line/--no-line", "-n", default=None, help="Include LF and CR")
@click.option(
    "--split",
    "-S",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Cut strings into pieces of at most this many bytes, 0 means no splitting",
)
@click.option("--length/--no-length", "-l", default=None, help="Write the length of each string")
@click.option("--regex", "-r", default=None, help="Only keep strings matching this pattern")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_NAMES, case_sensitive=False),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option("--offsets", is_flag=True, help="Include the byte offset of each string")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level",
)
@click.version_option(__version__, prog_name="strscan")
def main(
    input_path: str,
    output_path: Optional[Path],
    min_size: int,
    max_size: int,
    special: Optional[bool],
    whitespace: Optional[bool],
    line: Optional[bool],
    split: int,
    length: Optional[bool],
    regex: Optional[str],
    output_format: str,
    offsets: bool,
    log_level: str,
) -> None:
    """
    Extract printable ASCII strings from a binary file.

    Each string is written on its own line, as a JSON object by default.
    """
    _setup_logging(log_level)

    options = ScanOptions(
        min=min_size,
        max=max_size,
        special=special,
        whitespace=whitespace,
        line=line,
        split=split,
        length=length,
        regex=regex,
        output_format=output_format,
        offsets=offsets,
    )
    try:
        config = ScanConfig.from_options(options, strict=True)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="'--regex'") from e

    try:
        engine = _load(input_path, config)
    except OSError as e:
        click.echo(f"unable to read {input_path}: {e}", err=True)
        sys.exit(1)

    results = engine.extract_all()
    logger.info("%d strings", len(results))

    fmt = config.output_format
    try:
        if output_path is None:
            write_results(results, sys.stdout, fmt, config.include_offsets)
        else:
            export_results(results, output_path, fmt, config.include_offsets)
    except OSError as e:
        click.echo(f"unable to write output: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
