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
JavaScript/TypeScript block extractor.

Recognizes function declarations, method shorthand, arrow functions
(bare and assigned), and object methods.
"""

import re

from .generic import BraceBlockExtractor, DEFAULT_FUNCTION_PATTERNS


class JavaScriptExtractor(BraceBlockExtractor):
    """Brace-counting extractor for JavaScript and TypeScript."""

    function_patterns = DEFAULT_FUNCTION_PATTERNS + (
        # const handler = async (req, res) => {
        re.compile(
            r"^\s*(?:export\s+)?(?:const|let|var)\s+[a-zA-Z0-9_$]+\s*=\s*"
            r"(?:async\s*)?\([^)]*\)\s*=>\s*{"
        ),
        # async load(id) {   static create() {
        re.compile(r"^\s*(?:(?:async|static|get|set)\s+)+[a-zA-Z0-9_$]+\s*\([^)]*\)\s*{"),
    )
