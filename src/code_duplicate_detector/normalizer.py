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
Text normalization for block comparison.

Maps a block's text to a canonical form so that whitespace, literal
values and identifier names do not affect comparison. The canonical
text is only ever compared, never written back.

The steps run in a fixed order. Whitespace is collapsed first, so a
line comment removes everything after it in the block. Only the first
string literal is masked.
"""

import re
from functools import lru_cache


STRING_PLACEHOLDER = '"STRING"'
NUMBER_PLACEHOLDER = "0"

# Kept verbatim by the identifier pass
KEYWORDS = frozenset({
    "if", "for", "while", "switch", "return", "function",
    "class", "import", "export", "var",
})

# Bucket names map to themselves so normalizing twice is a no-op
BUCKETS = frozenset({"accessor", "eventHandler", "booleanVar", "identifier"})

_WHITESPACE = re.compile(r"\s+")
_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_STRING = re.compile(r"['\"].*?['\"]")
_NUMBER = re.compile(r"[0-9]+")
_DECLARATION = re.compile(r"\b(?:var|let|const)\b", re.ASCII)
_IDENTIFIER = re.compile(r"\b[a-zA-Z_][a-zA-Z0-9_]*\b", re.ASCII)


def classify_identifier(name: str) -> str:
    """Coarse semantic bucket for an identifier, sniffed from its name."""
    if name in KEYWORDS or name in BUCKETS:
        return name
    if name.startswith(("get", "set")):
        return "accessor"
    if name.startswith("on") or name.endswith(("Handler", "Listener")):
        return "eventHandler"
    if name.startswith(("is", "has", "should")):
        return "booleanVar"
    return "identifier"


@lru_cache(maxsize=8192)
def normalize_content(content: str) -> str:
    """
    Canonicalize block text for comparison.

    Steps, in order:
        1. collapse whitespace runs to one space
        2. strip line and block comments
        3. mask the first quoted string literal
        4. replace numeric literals with 0
        5. map var/let/const to var
        6. re-tag identifiers into accessor, eventHandler, booleanVar
           or identifier buckets, keeping keywords

    Example:
        normalize_content("const isValid = getUser(42);")
        # 'var booleanVar = accessor(0);'
    """
    text = _WHITESPACE.sub(" ", content)
    text = _LINE_COMMENT.sub("", text)
    text = _BLOCK_COMMENT.sub("", text)
    text = _STRING.sub(STRING_PLACEHOLDER, text, count=1)
    text = _NUMBER.sub(NUMBER_PLACEHOLDER, text)
    text = _DECLARATION.sub("var", text)
    text = _IDENTIFIER.sub(lambda m: classify_identifier(m.group(0)), text)

    # Comment removal can leave doubled spaces behind
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(normalized: str) -> set:
    """Unique whitespace-separated tokens of normalized text."""
    return set(normalized.split())
