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
Code Duplicate Detector - Find near-duplicate code blocks and suggest refactoring.

Extracts candidate blocks with brace and indentation heuristics,
compares them after normalization, groups duplicates and reports
severity and estimated line savings.

Read-only: source files are never modified.
"""

__version__ = "0.1.0"

from .indexer import find_source_files, index_codebase
from .normalizer import normalize_content
from .similarity import compare_blocks
from .clusterer import find_duplications
from .metrics import compute_metrics, classify_severity, suggest_refactoring, Severity
from .reporter import report_duplications, OutputFormat
from .detector import detect_duplicate_code
from .config import DetectorConfig, load_config, find_config_file
from .models import CodeBlock, DuplicationCluster, DuplicationMetrics, AnalysisResult

__all__ = [
    "__version__",
    "find_source_files",
    "index_codebase",
    "normalize_content",
    "compare_blocks",
    "find_duplications",
    "compute_metrics",
    "classify_severity",
    "suggest_refactoring",
    "Severity",
    "report_duplications",
    "OutputFormat",
    "detect_duplicate_code",
    "DetectorConfig",
    "load_config",
    "find_config_file",
    "CodeBlock",
    "DuplicationCluster",
    "DuplicationMetrics",
    "AnalysisResult",
]
