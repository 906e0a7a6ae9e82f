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
Java block extractor.

Extracts method and constructor bodies.
"""

import re

from .generic import BraceBlockExtractor


# Modifiers, then return type (generics/arrays allowed), then name(args)
_METHOD = re.compile(
    r"^\s*(?:(?:public|protected|private|static|final|abstract|synchronized|native|default)\s+)*"
    r"(?:<[^>]+>\s+)?"
    r"[\w.<>\[\],?]+\s+\w+\s*\([^)]*\)\s*"
    r"(?:throws\s+[\w.,\s]+)?{"
)

# public OrderService(Repository repo) {
_CONSTRUCTOR = re.compile(
    r"^\s*(?:public|protected|private)\s+[A-Z]\w*\s*\([^)]*\)\s*(?:throws\s+[\w.,\s]+)?{"
)

_CONTROL = re.compile(r"^\s*(?:if|for|while|switch|catch|synchronized|try|else|do)\b")


class JavaExtractor(BraceBlockExtractor):
    """Brace-counting extractor for Java methods."""

    function_patterns = (_METHOD, _CONSTRUCTOR)

    def is_function_start(self, line: str) -> bool:
        if _CONTROL.match(line):
            return False
        return super().is_function_start(line)
