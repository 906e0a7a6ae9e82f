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
Duplicate code detection entry point.

Runs the whole pipeline (collect, extract, cluster, measure, report)
over one project directory. The detector only reads source files; the
one thing it writes is the text report under the tool state directory.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional, Union
import logging
import os

from .config import DetectorConfig
from .models import AnalysisResult
from .indexer import find_source_files, index_codebase
from .clusterer import find_duplications
from .metrics import compute_metrics
from .reporter import report_duplications, OutputFormat
from .languages import extensions_for_project_types


logger = logging.getLogger(__name__)


def detect_duplicate_code(
    project_path: Union[str, "os.PathLike[str]"],
    config: Optional[DetectorConfig] = None,
    project_types: Optional[Iterable[str]] = None,
    on_progress: Optional[Callable[[int, int, str], None]] = None,
) -> AnalysisResult:
    """
    Detect duplicated code across a project and suggest refactoring.

    Args:
        project_path: Root directory of the project
        config: Detector options (defaults if omitted)
        project_types: Detected project types, used to pick extensions
            when config.extensions is empty
        on_progress: Optional callback(current, total, message)

    Returns:
        AnalysisResult. Environmental failures come back as
        success=False with an error message.

    Raises:
        TypeError: project_path is not a str or path-like object
    """
    if not isinstance(project_path, (str, os.PathLike)):
        raise TypeError(
            f"Project path must be a string or path, got {type(project_path).__name__}"
        )

    config = config or DetectorConfig()
    logger.info("Analyzing code for duplications...")

    try:
        root_path = Path(project_path).resolve()
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root_path}")

        extensions = list(config.extensions) or extensions_for_project_types(project_types)
        if not extensions:
            logger.warning("No supported file types found for duplicate code detection")

        source_files = find_source_files(
            root_path, extensions, exclude_patterns=list(config.exclude_patterns)
        )
        logger.info(f"Found {len(source_files)} source files to analyze")

        blocks = index_codebase(
            source_files,
            min_block_size=config.min_block_size,
            on_progress=on_progress,
        )
        logger.info(f"Found {len(blocks)} code blocks to analyze")

        clusters = find_duplications(
            blocks,
            threshold=config.similarity_threshold,
            grouping=config.grouping,
        )
        logger.info(f"Found {len(clusters)} duplicate code blocks")

        metrics = compute_metrics(clusters)
        report_text = report_duplications(
            clusters,
            root_path,
            files_scanned=len(source_files),
            threshold=config.similarity_threshold,
            output_format=OutputFormat.TEXT,
            metrics=metrics,
        )

    except Exception as e:
        logger.error(f"Error detecting duplicate code: {e}")
        return AnalysisResult(success=False, error=str(e), dry_run=config.dry_run)

    report_path = None
    if config.write_report:
        report_path = write_report(config.report_path(root_path), report_text)

    return AnalysisResult(
        success=True,
        metrics=metrics,
        duplications=clusters,
        report_path=report_path,
        files_scanned=len(source_files),
        blocks_extracted=len(blocks),
        report_text=report_text,
        dry_run=config.dry_run,
    )


def write_report(report_path: Path, report_text: str) -> Optional[Path]:
    """Write the report, returning its path, or None if it could not be written."""
    try:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(report_text, encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not write duplicate code report to {report_path}: {e}")
        return None

    logger.info(f"Duplicate code report saved to {report_path}")
    return report_path
