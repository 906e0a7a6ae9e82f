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
Duplication metrics, severity classification and refactoring suggestions.
"""

from enum import Enum
from typing import List, Sequence

from .models import DuplicationCluster, DuplicationMetrics


class Severity(Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"
    NONE = "none"


# Recommendation block printed for each severity
RECOMMENDATIONS = {
    Severity.HIGH: [
        "⚠️ HIGH DUPLICATION: Your codebase has significant code duplication.",
        "Consider implementing the following refactoring strategies:",
        "1. Extract utility functions for common operations",
        "2. Create base classes or mixins for shared functionality",
        "3. Implement a more modular architecture",
    ],
    Severity.MODERATE: [
        "⚠️ MODERATE DUPLICATION: Your codebase has some code duplication.",
        "Consider implementing the following refactoring strategies:",
        "1. Extract shared code into helper functions",
        "2. Use composition to share behavior between components",
    ],
    Severity.LOW: [
        "⚠️ LOW DUPLICATION: Your codebase has minor code duplication.",
        "Consider reviewing the identified duplications and refactoring as needed.",
    ],
    Severity.NONE: [
        "✓ NO DUPLICATION: Your codebase has no significant code duplication.",
    ],
}

SUGGEST_SHARED_UTILITY = "Consider extracting this code into a shared utility function."
SUGGEST_PARAMETERIZED = "Extract this code into a parameterized function to avoid duplication."
SUGGEST_REVIEW = "Review these similar code blocks for potential refactoring."


def classify_severity(potential_lines_reduced: int) -> Severity:
    """Severity from the total number of lines extraction could save."""
    if potential_lines_reduced > 100:
        return Severity.HIGH
    if potential_lines_reduced > 50:
        return Severity.MODERATE
    if potential_lines_reduced > 0:
        return Severity.LOW
    return Severity.NONE


def recommendations_for(severity: Severity) -> List[str]:
    return list(RECOMMENDATIONS[severity])


def suggest_refactoring(cluster: DuplicationCluster) -> str:
    """Fixed decision table: instance count first, then similarity."""
    if cluster.size >= 3:
        return SUGGEST_SHARED_UTILITY
    if cluster.similarity >= 0.9:
        return SUGGEST_PARAMETERIZED
    return SUGGEST_REVIEW


def compute_metrics(clusters: Sequence[DuplicationCluster]) -> DuplicationMetrics:
    """Aggregate cluster count, distinct files and line savings."""
    affected = {path for cluster in clusters for path in cluster.files}
    return DuplicationMetrics(
        duplicate_blocks=len(clusters),
        affected_files=len(affected),
        potential_lines_reduced=sum(c.potential_lines_reduced for c in clusters),
    )
