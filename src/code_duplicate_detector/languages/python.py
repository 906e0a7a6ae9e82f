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
Python block extractor.

Python has no braces to count, so a function or class body is the run
of lines indented deeper than its header.
"""

import re
from typing import List
from pathlib import Path

from .base import BlockExtractor, is_skippable, leading_width
from ..models import CodeBlock


_HEADER = re.compile(r"^\s*(?:async\s+)?(?:def|class)\s+\w+")


class PythonExtractor(BlockExtractor):
    """Indentation-bounded extractor for Python functions and classes."""

    def scan_functions(
        self,
        lines: List[str],
        file_path: Path,
        language: str,
        min_block_size: int,
    ) -> List[CodeBlock]:
        """Blocks from a def/class header to the last line of its body."""
        blocks = []
        current: List[str] = []
        header_indent = -1
        start = 0
        last = 0

        def close():
            if len(current) >= min_block_size:
                blocks.append(self._make_block(
                    file_path, start + 1, last + 1, current, language, "function"
                ))

        for i, raw in enumerate(lines):
            line = raw.strip()
            if is_skippable(line):
                continue

            indent = leading_width(raw)

            if header_indent != -1:
                if indent > header_indent:
                    current.append(line)
                    last = i
                    continue
                close()
                header_indent = -1
                current = []

            if _HEADER.match(raw):
                header_indent = indent
                start = last = i
                current = [line]

        if header_indent != -1:
            close()

        return blocks
