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
Pairwise block similarity.

Bag-of-words Jaccard index over normalized tokens: order and
repetition are ignored, so reordered statements still match.
"""

from typing import Set

from .models import CodeBlock
from .normalizer import normalize_content, tokenize


def jaccard_similarity(tokens_a: Set[str], tokens_b: Set[str]) -> float:
    """Intersection size over union size; 1.0 for two empty sets."""
    union = tokens_a | tokens_b
    if not union:
        return 1.0
    return len(tokens_a & tokens_b) / len(union)


def compare_blocks(block_a: CodeBlock, block_b: CodeBlock) -> float:
    """
    Similarity of two blocks in [0, 1].

    Overlapping regions of the same file score 0. Blocks whose
    normalized text is identical score 1.
    """
    if block_a.overlaps(block_b):
        return 0.0

    content_a = normalize_content(block_a.content)
    content_b = normalize_content(block_b.content)

    if content_a == content_b:
        return 1.0

    return jaccard_similarity(tokenize(content_a), tokenize(content_b))
