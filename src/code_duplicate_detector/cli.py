# Code Duplicate Detector - Find duplicate code blocks and suggest refactoring
# Copyright (C) 2025  Jonathan Louis
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
CLI entry point for code-duplicate-detector.

Usage:
    cdd <path> [options]
    cdd --help
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import DetectorConfig, load_config
from .detector import detect_duplicate_code
from .reporter import report_duplications, OutputFormat


# Extension to output format mapping for -o FILE.EXT
EXTENSION_FORMAT_MAP = {
    '.md': 'markdown',
    '.json': 'json',
    '.txt': 'text',
}


def merge_config_with_cli(
    config: dict,
    cli_value,
    config_key: str,
    default_value,
):
    """
    Merge config file value with CLI value.

    If CLI value differs from default, use CLI (user explicitly set it).
    Otherwise, use config value if present, else use default.
    """
    if cli_value != default_value:
        return cli_value

    return config.get(config_key, default_value)


def print_progress(current: int, total: int, message: str, width: int = 30):
    """Print a progress bar with message."""
    if total == 0:
        pct = 100
    else:
        pct = int(current / total * 100)
    filled = int(width * current / max(total, 1))
    bar = "=" * filled + ">" + " " * (width - filled - 1) if filled < width else "=" * width
    # Use \r to overwrite line, \033[K to clear to end of line
    click.echo(f"\r   [{bar}] {current}/{total} {message} ({pct}%)\033[K", nl=False, err=True)
    if current >= total:
        click.echo(err=True)  # newline when complete


@click.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, dir_okay=True))
@click.option(
    "-t", "--threshold",
    type=float,
    default=0.80,
    help="Similarity threshold 0.0-1.0 (default: 0.80)"
)
@click.option(
    "--min-lines",
    type=int,
    default=5,
    help="Minimum lines per block (default: 5)"
)
@click.option(
    "-p", "--project-type",
    "project_types",
    multiple=True,
    help="Project type used to pick extensions: javascript, typescript, python, java (repeatable)"
)
@click.option(
    "-x", "--ext",
    "extensions",
    multiple=True,
    help="File extension to scan, e.g. .js (repeatable, overrides --project-type)"
)
@click.option(
    "-e", "--exclude",
    multiple=True,
    help="Glob patterns to exclude, relative to PATH (repeatable)"
)
@click.option(
    "--grouping",
    type=click.Choice(["anchor", "transitive"]),
    default="anchor",
    help="anchor: greedy grouping around the first block (default); transitive: connected components"
)
@click.option(
    "-o", "--output",
    type=str,
    default=None,
    help="Also export the report (e.g., report.md, data.json, report.txt)"
)
@click.option(
    "--no-report",
    is_flag=True,
    help="Do not write .cdd/reports/duplicate-code-report.txt"
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print the structured result as JSON"
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Accepted for parity with the other maintenance tasks; detection never modifies sources"
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show progress and log pipeline stages"
)
@click.version_option(version=__version__)
def main(
    path: str,
    threshold: float,
    min_lines: int,
    project_types: tuple,
    extensions: tuple,
    exclude: tuple,
    grouping: str,
    output: Optional[str],
    no_report: bool,
    as_json: bool,
    dry_run: bool,
    verbose: bool,
):
    """
    Find duplicated code blocks and suggest refactoring.

    PATH is the root directory to analyze.

    Examples:

      # Analyze a JavaScript project
      cdd ./src

      # TypeScript and Python sources, stricter matching
      cdd . -p typescript -p python --threshold 0.9

      # Export a markdown report as well
      cdd . -o duplicates.md
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root_path = Path(path).resolve()

    # Load config file and merge with CLI args
    file_config = load_config(root_path)

    # Config values override defaults, but explicit CLI args override config
    threshold = merge_config_with_cli(file_config, threshold, "similarity_threshold", 0.80)
    min_lines = merge_config_with_cli(file_config, min_lines, "min_block_size", 5)
    grouping = merge_config_with_cli(file_config, grouping, "grouping", "anchor")

    # Lists (or a single string) in config, tuples from CLI; DetectorConfig normalizes both
    if not extensions and "extensions" in file_config:
        extensions = file_config["extensions"]
    if not exclude and "exclude_patterns" in file_config:
        exclude = file_config["exclude_patterns"]

    write_report = not no_report and file_config.get("write_report", True)

    if verbose and file_config:
        click.echo("📝 Loaded config from .cddrc/.cdd.toml", err=True)

    try:
        config = DetectorConfig(
            extensions=extensions,
            exclude_patterns=exclude,
            min_block_size=min_lines,
            similarity_threshold=threshold,
            grouping=grouping,
            write_report=write_report,
            report_dir=file_config.get("report_dir", DetectorConfig.report_dir),
            dry_run=dry_run,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    if output:
        ext = Path(output).suffix.lower()
        if ext not in EXTENSION_FORMAT_MAP:
            valid_exts = ', '.join(EXTENSION_FORMAT_MAP.keys())
            click.echo(f"❌ Invalid output extension '{ext}'. Valid: {valid_exts}", err=True)
            sys.exit(1)

    if not as_json:
        click.echo(f"🔍 Analyzing: {root_path}")

    result = detect_duplicate_code(
        root_path,
        config=config,
        project_types=project_types,
        on_progress=print_progress if verbose else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        metrics = result.metrics
        click.echo(f"   Scanned {result.files_scanned} files, {result.blocks_extracted} blocks")
        click.echo(f"   Duplicate blocks: {metrics.duplicate_blocks}")
        click.echo(f"   Affected files: {metrics.affected_files}")
        click.echo(f"   Potential lines reduced: {metrics.potential_lines_reduced}")
        click.echo(f"   Severity: {metrics.severity.value}")
        if result.report_path:
            click.echo(f"   ✅ Report written to: {result.report_path}")
        elif write_report:
            click.echo("   ⚠️  Report could not be written")

    if not result.success:
        click.echo(f"❌ Duplicate code detection failed: {result.error}", err=True)
        sys.exit(1)

    if output:
        output_path = Path(output)
        output_format = OutputFormat(EXTENSION_FORMAT_MAP[output_path.suffix.lower()])
        report = report_duplications(
            clusters=result.duplications,
            root_path=root_path,
            files_scanned=result.files_scanned,
            threshold=threshold,
            output_format=output_format,
            metrics=result.metrics,
        )
        try:
            output_path.write_text(report, encoding="utf-8")
        except OSError as e:
            click.echo(f"❌ Could not write {output_path}: {e}", err=True)
            sys.exit(1)
        if not as_json:
            click.echo(f"   ✅ Report exported to: {output_path}")


# Entry point alias for pyproject.toml
cli = main


if __name__ == "__main__":
    main()
