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
Generic brace-counting extractor.

Used directly for unknown languages, and as the base for the
brace-delimited languages (JavaScript, Java).
"""

import re
from typing import List, Pattern, Tuple
from pathlib import Path

from .base import BlockExtractor, is_skippable
from ..models import CodeBlock


# JavaScript-flavoured shapes; also the fallback for unknown languages
DEFAULT_FUNCTION_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"function "),
    re.compile(r"^\s*[a-zA-Z0-9_$]+\s*\([^)]*\)\s*{"),     # name(args) {
    re.compile(r"^\s*\([^)]*\)\s*=>\s*{"),                 # (args) => {
    re.compile(r"^\s*[a-zA-Z0-9_$]+\s*:\s*function"),      # name: function
)


class BraceBlockExtractor(BlockExtractor):
    """
    Finds function bodies by matching a declaration shape, then counting
    braces until the depth returns to zero.

    Unbalanced braces leave the scan open until the end of the file; the
    unfinished block is never emitted.
    """

    function_patterns: Tuple[Pattern[str], ...] = DEFAULT_FUNCTION_PATTERNS

    def is_function_start(self, line: str) -> bool:
        return any(p.search(line) for p in self.function_patterns)

    def scan_functions(
        self,
        lines: List[str],
        file_path: Path,
        language: str,
        min_block_size: int,
    ) -> List[CodeBlock]:
        """Brace-balanced function blocks."""
        blocks = []
        in_function = False
        start = 0
        depth = 0
        current: List[str] = []

        for i, raw in enumerate(lines):
            line = raw.strip()
            if is_skippable(line):
                continue

            if not in_function and self.is_function_start(line):
                in_function = True
                start = i
                current = [line]
                depth = line.count("{") - line.count("}")
                continue

            if in_function:
                current.append(line)
                depth += line.count("{") - line.count("}")

                if depth == 0:
                    in_function = False
                    if len(current) >= min_block_size:
                        blocks.append(self._make_block(
                            file_path, start + 1, i + 1, current, language, "function"
                        ))
                    current = []

        return blocks


class GenericExtractor(BraceBlockExtractor):
    """Fallback extractor for extensions without a dedicated one."""
