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
Report generator - formats duplication results for output.

Supports text, markdown, and json output formats. The text format is
the one written to the project's report file.
"""

from typing import List, Optional
from pathlib import Path
from enum import Enum
import json
import os
from datetime import datetime

from .models import CodeBlock, DuplicationCluster, DuplicationMetrics
from .metrics import compute_metrics, recommendations_for


NO_DUPLICATES_MESSAGE = "No duplicate code blocks found."


class OutputFormat(Enum):
    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"


def report_duplications(
    clusters: List[DuplicationCluster],
    root_path: Path,
    files_scanned: int = 0,
    threshold: float = 0.8,
    output_format: OutputFormat = OutputFormat.TEXT,
    metrics: Optional[DuplicationMetrics] = None,
) -> str:
    """
    Generate a report of duplicate code clusters.

    Args:
        clusters: List of DuplicationCluster objects
        root_path: Project root (locations are shown relative to it)
        files_scanned: Number of source files analyzed
        threshold: Similarity threshold used
        output_format: Desired output format
        metrics: Precomputed metrics (computed from clusters if omitted)

    Returns:
        Formatted report string
    """
    if metrics is None:
        metrics = compute_metrics(clusters)

    if output_format == OutputFormat.TEXT:
        return _format_text(clusters, root_path, files_scanned, metrics)
    elif output_format == OutputFormat.MARKDOWN:
        return _format_markdown(clusters, root_path, files_scanned, threshold, metrics)
    elif output_format == OutputFormat.JSON:
        return _format_json(clusters, root_path, files_scanned, threshold, metrics)
    else:
        raise ValueError(f"Unknown format: {output_format}")


def relative_path(block: CodeBlock, root_path: Path) -> str:
    """Block file path relative to the project root."""
    try:
        return os.path.relpath(block.file_path, root_path)
    except ValueError:
        # Different drive on Windows
        return str(block.file_path)


def relative_location(block: CodeBlock, root_path: Path) -> str:
    return f"{relative_path(block, root_path)} (lines {block.start_line}-{block.end_line})"


def _format_text(
    clusters: List[DuplicationCluster],
    root_path: Path,
    files_scanned: int,
    metrics: DuplicationMetrics,
) -> str:
    """Plain text format, as written to the report file."""
    lines = []

    lines.append("━━━ Duplicate Code Detection Report ━━━")
    lines.append("")

    if not clusters:
        lines.append(NO_DUPLICATES_MESSAGE)
        lines.append("")
    else:
        lines.append(
            f"Found {len(clusters)} duplicate code blocks across {files_scanned} files."
        )
        lines.append("")

        for index, cluster in enumerate(clusters, start=1):
            lines.append(f"Duplication #{index}:")
            lines.append(f"  Similarity: {cluster.similarity:.0%}")
            lines.append(f"  Instances: {cluster.size}")
            lines.append(f"  Average Lines: {cluster.avg_lines}")
            lines.append(f"  Potential Lines Reduced: {cluster.potential_lines_reduced}")
            lines.append("  Locations:")
            for idx, block in enumerate(cluster.instances, start=1):
                lines.append(f"    {idx}. {relative_location(block, root_path)}")
            lines.append(f"  Suggestion: {cluster.suggestion}")
            lines.append("")

    lines.append("━━━ Summary ━━━")
    lines.append(f"Total Duplicate Blocks: {metrics.duplicate_blocks}")
    lines.append(f"Affected Files: {metrics.affected_files}")
    lines.append(f"Potential Lines Reduced: {metrics.potential_lines_reduced}")
    lines.append("")

    lines.append("━━━ Recommendations ━━━")
    lines.extend(recommendations_for(metrics.severity))

    return "\n".join(lines) + "\n"


def _format_markdown(
    clusters: List[DuplicationCluster],
    root_path: Path,
    files_scanned: int,
    threshold: float,
    metrics: DuplicationMetrics,
) -> str:
    """Markdown format for documentation."""
    lines = []

    lines.append("# Duplicate Code Report")
    lines.append("")
    lines.append(f"**Path:** `{root_path}`  ")
    lines.append(f"**Threshold:** {threshold:.0%}  ")
    lines.append(f"**Files Scanned:** {files_scanned}  ")
    lines.append(f"**Duplicate Blocks:** {metrics.duplicate_blocks}  ")
    lines.append(f"**Affected Files:** {metrics.affected_files}  ")
    lines.append(f"**Potential Lines Reduced:** {metrics.potential_lines_reduced}  ")
    lines.append(f"**Severity:** {metrics.severity.value}")
    lines.append("")

    if not clusters:
        lines.append(NO_DUPLICATES_MESSAGE)
        lines.append("")

    for index, cluster in enumerate(clusters, start=1):
        lines.append(f"## Duplication {index}: {cluster.similarity:.0%} Similarity")
        lines.append("")
        lines.append(
            f"**{cluster.size} instances**, ~{cluster.avg_lines} lines each, "
            f"{cluster.potential_lines_reduced} lines could be removed"
        )
        lines.append("")
        lines.append("| File | Lines |")
        lines.append("|------|-------|")
        for block in cluster.instances:
            lines.append(f"| `{relative_path(block, root_path)}` | {block.start_line}-{block.end_line} |")
        lines.append("")
        lines.append(f"**Suggestion:** {cluster.suggestion}")
        lines.append("")

        anchor = cluster.anchor
        lines.append(f"```{anchor.language}")
        code_lines = anchor.content.split("\n")[:20]
        lines.append("\n".join(code_lines))
        if len(anchor.content.split("\n")) > 20:
            lines.append("// ... (truncated)")
        lines.append("```")
        lines.append("")
        lines.append("---")
        lines.append("")

    lines.append("## Recommendations")
    lines.append("")
    for rec in recommendations_for(metrics.severity):
        lines.append(f"- {rec}")
    lines.append("")

    return "\n".join(lines)


def _format_json(
    clusters: List[DuplicationCluster],
    root_path: Path,
    files_scanned: int,
    threshold: float,
    metrics: DuplicationMetrics,
) -> str:
    """JSON format for programmatic use."""
    data = {
        "meta": {
            "path": str(root_path),
            "threshold": threshold,
            "files_scanned": files_scanned,
            "severity": metrics.severity.value,
            "timestamp": datetime.now().isoformat(),
        },
        "metrics": metrics.to_dict(),
        "duplications": [],
    }

    for cluster in clusters:
        cluster_data = cluster.to_dict()
        cluster_data["similarity"] = round(cluster.similarity, 4)
        cluster_data["instances"] = [
            {
                "file": relative_path(block, root_path),
                "start_line": block.start_line,
                "end_line": block.end_line,
                "preview": block.preview(80),
            }
            for block in cluster.instances
        ]
        data["duplications"].append(cluster_data)

    return json.dumps(data, indent=2)
