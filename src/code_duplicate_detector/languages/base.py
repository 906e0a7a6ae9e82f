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
Base block extractor interface.

Every extractor runs two independent scans over the same content:
a language-specific function-boundary scan, and the shared
indentation-run scan implemented here. Blocks from the two scans may
overlap; that is expected.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple
from pathlib import Path

from ..models import CodeBlock


# Line prefixes treated as comments by both scans
COMMENT_PREFIXES: Tuple[str, ...] = ("//", "#", "/*")


def is_skippable(stripped_line: str) -> bool:
    """Blank and comment lines keep their line numbers but are never block content."""
    return stripped_line == "" or stripped_line.startswith(COMMENT_PREFIXES)


def leading_width(line: str) -> int:
    """Count of leading whitespace characters."""
    return len(line) - len(line.lstrip())


class BlockExtractor(ABC):
    """Abstract base class for language-specific block extractors."""

    def extract(
        self,
        content: str,
        file_path: Path,
        language: str,
        min_block_size: int = 5,
    ) -> List[CodeBlock]:
        """
        Extract candidate blocks from file content.

        Args:
            content: Full file content
            file_path: Path of the file the content came from
            language: Detected language
            min_block_size: Minimum lines per block

        Returns:
            Function blocks followed by indentation blocks. A block whose
            line range repeats one already emitted for this file is dropped.
        """
        lines = content.splitlines()
        blocks = self.scan_functions(lines, file_path, language, min_block_size)
        blocks += self.scan_indentation(lines, file_path, language, min_block_size)

        seen = set()
        unique = []
        for block in blocks:
            key = (block.start_line, block.end_line)
            if key in seen:
                continue
            seen.add(key)
            unique.append(block)
        return unique

    @abstractmethod
    def scan_functions(
        self,
        lines: List[str],
        file_path: Path,
        language: str,
        min_block_size: int,
    ) -> List[CodeBlock]:
        """Find function bodies using a language-specific heuristic."""
        pass

    def scan_indentation(
        self,
        lines: List[str],
        file_path: Path,
        language: str,
        min_block_size: int,
    ) -> List[CodeBlock]:
        """
        Group consecutive code lines into runs by indentation.

        A run starts at the first code line and again whenever indentation
        drops below the level the current run started at. Deeper or equal
        lines extend the run.
        """
        blocks = []
        current: List[str] = []
        level = -1
        start = 0

        for i, line in enumerate(lines):
            stripped = line.strip()
            if is_skippable(stripped):
                continue

            indent = leading_width(line)

            if level == -1:
                level, start, current = indent, i, [stripped]
            elif indent < level:
                if len(current) >= min_block_size:
                    blocks.append(self._make_block(
                        file_path, start + 1, i, current, language, "indent"
                    ))
                level, start, current = indent, i, [stripped]
            else:
                current.append(stripped)

        if len(current) >= min_block_size:
            blocks.append(self._make_block(
                file_path, start + 1, len(lines), current, language, "indent"
            ))

        return blocks

    def _make_block(
        self,
        file_path: Path,
        start_line: int,
        end_line: int,
        block_lines: List[str],
        language: str,
        block_type: str,
    ) -> CodeBlock:
        return CodeBlock(
            file_path=file_path,
            start_line=start_line,
            end_line=end_line,
            content="\n".join(block_lines),
            language=language,
            block_type=block_type,
        )
