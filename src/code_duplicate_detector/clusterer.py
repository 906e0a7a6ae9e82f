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
Duplicate clusterer - groups similar code blocks.

The default "anchor" grouping is greedy: each unclaimed block, in
extraction order, claims every later unclaimed block that scores at
least the threshold against it. Members are only guaranteed similar to
the anchor, not to each other.

"transitive" grouping instead takes connected components of the
thresholded similarity graph (single-linkage agglomerative clustering
over a precomputed distance matrix).
"""

import logging
from typing import List, Sequence

import numpy as np
from sklearn.cluster import AgglomerativeClustering

from .models import CodeBlock, DuplicationCluster
from .similarity import compare_blocks


logger = logging.getLogger(__name__)

GROUPING_MODES = ("anchor", "transitive")

# Pairs whose line counts differ by more than this share of the larger
# block are never scored
MAX_SIZE_DIFFERENCE = 0.2


def sizes_compatible(block_a: CodeBlock, block_b: CodeBlock) -> bool:
    """Cheap pre-filter run before the similarity computation."""
    lines_a, lines_b = block_a.line_count, block_b.line_count
    return abs(lines_a - lines_b) <= MAX_SIZE_DIFFERENCE * max(lines_a, lines_b)


def find_duplications(
    blocks: Sequence[CodeBlock],
    threshold: float = 0.8,
    grouping: str = "anchor",
) -> List[DuplicationCluster]:
    """
    Group duplicate blocks into clusters.

    Args:
        blocks: All extracted blocks, in extraction order
        threshold: Minimum similarity (inclusive) to count as a duplicate
        grouping: "anchor" (greedy, default) or "transitive"

    Returns:
        List of DuplicationCluster objects, largest first, then most similar
    """
    if grouping not in GROUPING_MODES:
        raise ValueError(f"Unknown grouping: {grouping}")

    if len(blocks) < 2:
        return []

    if grouping == "transitive":
        clusters = _group_transitive(blocks, threshold)
    else:
        clusters = _group_by_anchor(blocks, threshold)

    logger.debug(f"Grouped {len(blocks)} blocks into {len(clusters)} clusters ({grouping})")

    # Stable sort: ties keep extraction order
    clusters.sort(key=lambda c: (-c.size, -c.similarity))
    return clusters


def _group_by_anchor(blocks: Sequence[CodeBlock], threshold: float) -> List[DuplicationCluster]:
    """Greedy, first-found grouping around anchor blocks."""
    clusters = []
    claimed = set()

    for i, anchor in enumerate(blocks):
        if i in claimed:
            continue

        instances = [anchor]
        scores = []
        matched = []

        for j in range(i + 1, len(blocks)):
            if j in claimed:
                continue

            candidate = blocks[j]
            if not sizes_compatible(anchor, candidate):
                continue

            # A region never duplicates one it overlaps
            if any(candidate.overlaps(member) for member in instances):
                continue

            score = compare_blocks(anchor, candidate)
            if score >= threshold:
                instances.append(candidate)
                scores.append(score)
                matched.append(j)

        if matched:
            claimed.add(i)
            claimed.update(matched)
            logger.debug(f"Anchor {anchor.location} claimed {len(matched)} duplicates")
            clusters.append(DuplicationCluster(
                instances=instances,
                similarity=float(np.mean(scores)),
            ))

    return clusters


def _group_transitive(blocks: Sequence[CodeBlock], threshold: float) -> List[DuplicationCluster]:
    """Connected components of the graph linking pairs at or above threshold."""
    n = len(blocks)

    # Binary distances keep the threshold comparison exact: 0 = linked
    distances = np.ones((n, n))
    np.fill_diagonal(distances, 0.0)

    for i in range(n):
        for j in range(i + 1, n):
            if not sizes_compatible(blocks[i], blocks[j]):
                continue
            if compare_blocks(blocks[i], blocks[j]) >= threshold:
                distances[i, j] = distances[j, i] = 0.0

    clustering = AgglomerativeClustering(
        n_clusters=None,
        distance_threshold=0.5,
        metric="precomputed",
        linkage="single",
    )
    labels = clustering.fit_predict(distances)

    # Group block indices by label, in extraction order
    components: dict[int, List[int]] = {}
    for idx, label in enumerate(labels):
        components.setdefault(int(label), []).append(idx)

    clusters = []
    for indices in sorted(components.values(), key=lambda members: members[0]):
        instances: List[CodeBlock] = []
        for idx in indices:
            if any(blocks[idx].overlaps(member) for member in instances):
                continue
            instances.append(blocks[idx])

        if len(instances) < 2:
            continue

        anchor = instances[0]
        scores = [compare_blocks(anchor, member) for member in instances[1:]]
        clusters.append(DuplicationCluster(
            instances=instances,
            similarity=float(np.mean(scores)),
        ))

    return clusters
