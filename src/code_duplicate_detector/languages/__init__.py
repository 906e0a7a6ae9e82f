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
Language-specific block extraction.

Heuristic (brace and indentation) extractors, selected per file
extension. A different extractor can be registered for a language
without touching the scorer or clusterer.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from .base import BlockExtractor
from .generic import BraceBlockExtractor, GenericExtractor
from .java import JavaExtractor
from .javascript import JavaScriptExtractor
from .python import PythonExtractor


# Language registry - maps language name to extractor class
_EXTRACTOR_REGISTRY: dict[str, type[BlockExtractor]] = {
    "javascript": JavaScriptExtractor,
    "typescript": JavaScriptExtractor,
    "java": JavaExtractor,
    "python": PythonExtractor,
}

# Extension to language mapping
EXTENSION_MAP = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".java": "java",
    ".py": "python",
}

# Used when no project type yields any extension
DEFAULT_EXTENSIONS = (".js", ".jsx")

# Project type to extensions, as reported by the host project detector
_PROJECT_TYPE_EXTENSIONS = {
    "javascript": (".js", ".jsx"),
    "typescript": (".js", ".jsx", ".ts", ".tsx"),
    "python": (".py",),
    "java": (".java",),
}


def register_extractor(language: str, extractor_class: type[BlockExtractor]) -> None:
    """Register an extractor for a language."""
    _EXTRACTOR_REGISTRY[language.lower()] = extractor_class


def get_extractor(language: Optional[str]) -> BlockExtractor:
    """
    Get an extractor instance for the given language.

    Falls back to the generic brace extractor if no specific one exists.
    """
    if language and language.lower() in _EXTRACTOR_REGISTRY:
        return _EXTRACTOR_REGISTRY[language.lower()]()
    return GenericExtractor()


def detect_language(file_path: Path) -> Optional[str]:
    """Detect language from file extension."""
    return EXTENSION_MAP.get(file_path.suffix.lower())


def extensions_for_project_types(project_types: Optional[Iterable[str]]) -> List[str]:
    """
    Map detected project types to the file extensions worth scanning.

    Empty input, or a "generic"/"unknown" type, includes the default
    JavaScript set. Types without a known mapping contribute nothing.
    """
    types = [t.lower() for t in (project_types or [])]
    extensions: List[str] = []

    if not types or "generic" in types or "unknown" in types:
        extensions.extend(DEFAULT_EXTENSIONS)

    for project_type in types:
        extensions.extend(_PROJECT_TYPE_EXTENSIONS.get(project_type, ()))

    return list(dict.fromkeys(extensions))


__all__ = [
    "BlockExtractor",
    "BraceBlockExtractor",
    "GenericExtractor",
    "JavaExtractor",
    "JavaScriptExtractor",
    "PythonExtractor",
    "DEFAULT_EXTENSIONS",
    "EXTENSION_MAP",
    "register_extractor",
    "get_extractor",
    "detect_language",
    "extensions_for_project_types",
]
