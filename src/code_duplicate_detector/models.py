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
Data models for code-duplicate-detector.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from pathlib import Path


@dataclass(frozen=True)
class CodeBlock:
    """A candidate region of code extracted from a source file."""

    file_path: Path          # Absolute path of the source file
    start_line: int          # Starting line number (1-indexed)
    end_line: int            # Ending line number (inclusive)
    content: str             # Trimmed code lines joined by newlines
    language: str = "generic"
    block_type: str = "indent"  # "function" or "indent"

    @property
    def line_count(self) -> int:
        """Number of lines spanned by this block."""
        return self.end_line - self.start_line + 1

    @property
    def location(self) -> str:
        """Human-readable location string."""
        return f"{self.file_path}:{self.start_line}-{self.end_line}"

    def overlaps(self, other: "CodeBlock") -> bool:
        """True if both blocks live in the same file and share a line."""
        if self.file_path != other.file_path:
            return False
        return self.start_line <= other.end_line and other.start_line <= self.end_line

    def preview(self, max_chars: int = 60) -> str:
        """Short preview of the content."""
        first_line = self.content.split('\n')[0].strip()
        if len(first_line) > max_chars:
            return first_line[:max_chars-3] + "..."
        return first_line

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": str(self.file_path),
            "start_line": self.start_line,
            "end_line": self.end_line,
            "content": self.content,
        }


@dataclass
class DuplicationCluster:
    """A group of blocks judged duplicates of their anchor (first instance)."""

    instances: List[CodeBlock]
    similarity: float        # Mean anchor-to-member similarity

    @property
    def anchor(self) -> CodeBlock:
        return self.instances[0]

    @property
    def size(self) -> int:
        """Number of instances in this cluster."""
        return len(self.instances)

    @property
    def files(self) -> List[Path]:
        """Unique files in this cluster, in first-seen order."""
        return list(dict.fromkeys(b.file_path for b in self.instances))

    @property
    def avg_lines(self) -> int:
        """Mean instance line count, rounded down."""
        return sum(b.line_count for b in self.instances) // len(self.instances)

    @property
    def potential_lines_reduced(self) -> int:
        """Lines saved if all but one instance were replaced by a shared helper."""
        return self.avg_lines * (len(self.instances) - 1)

    @property
    def suggestion(self) -> str:
        from .metrics import suggest_refactoring
        return suggest_refactoring(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "similarity": self.similarity,
            "instances": [b.to_dict() for b in self.instances],
            "avg_lines": self.avg_lines,
            "potential_lines_reduced": self.potential_lines_reduced,
            "suggestion": self.suggestion,
        }


@dataclass
class DuplicationMetrics:
    """Aggregate counts over all clusters of one run."""

    duplicate_blocks: int = 0
    affected_files: int = 0
    potential_lines_reduced: int = 0

    @property
    def severity(self):
        from .metrics import classify_severity
        return classify_severity(self.potential_lines_reduced)

    def to_dict(self) -> Dict[str, int]:
        return {
            "duplicate_blocks": self.duplicate_blocks,
            "affected_files": self.affected_files,
            "potential_lines_reduced": self.potential_lines_reduced,
        }


@dataclass
class AnalysisResult:
    """Outcome of one detector run."""

    success: bool
    metrics: DuplicationMetrics = field(default_factory=DuplicationMetrics)
    duplications: List[DuplicationCluster] = field(default_factory=list)
    report_path: Optional[Path] = None
    error: Optional[str] = None
    files_scanned: int = 0
    blocks_extracted: int = 0
    report_text: str = ""
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Structured result, suitable for embedding in a larger report."""
        if not self.success:
            return {"success": False, "error": self.error}

        return {
            "success": True,
            "metrics": self.metrics.to_dict(),
            "duplications": [c.to_dict() for c in self.duplications],
            "report_path": str(self.report_path) if self.report_path else None,
        }
