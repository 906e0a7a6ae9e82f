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
Code indexer - collects source files and extracts candidate blocks.

Files are read one at a time, in sorted path order, so repeated runs
over an unchanged tree produce the same blocks in the same order.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional
import fnmatch
import logging
import os

from .config import STATE_DIR
from .models import CodeBlock
from .languages import get_extractor, detect_language


logger = logging.getLogger(__name__)

# Directory names never descended into
EXCLUDED_DIRS = frozenset({
    "node_modules",
    ".git",
    "dist",
    "build",
    STATE_DIR,
})


def _is_excluded_dir(name: str) -> bool:
    return name in EXCLUDED_DIRS or name.startswith("__pycache__")


def find_source_files(
    root_path: Path,
    extensions: Iterable[str],
    exclude_patterns: Optional[List[str]] = None,
) -> List[Path]:
    """
    Find all files under root_path whose name ends with one of extensions.

    Symlinked directories are not followed. Unreadable directories are
    logged and skipped.

    Args:
        root_path: Root directory to scan
        extensions: File name suffixes to include (e.g. ".js")
        exclude_patterns: Glob patterns matched against the root-relative path

    Returns:
        Sorted list of absolute file paths (empty if nothing matches)
    """
    suffixes = tuple(extensions)
    if not suffixes:
        return []

    root_path = Path(root_path).resolve()
    exclude_patterns = exclude_patterns or []
    source_files = []

    def on_error(error: OSError):
        logger.warning(f"Skipping {error.filename}: {error.strerror or error}")

    for dirpath, dirnames, filenames in os.walk(root_path, onerror=on_error):
        # Prune in place so os.walk never enters excluded directories
        dirnames[:] = sorted(d for d in dirnames if not _is_excluded_dir(d))

        for name in sorted(filenames):
            if not name.endswith(suffixes):
                continue

            file_path = Path(dirpath) / name
            rel_path = file_path.relative_to(root_path).as_posix()
            if any(fnmatch.fnmatch(rel_path, pat) for pat in exclude_patterns):
                continue

            source_files.append(file_path)

    return source_files


def extract_blocks(file_path: Path, min_block_size: int = 5) -> List[CodeBlock]:
    """Read one file and extract its blocks. Read errors propagate."""
    language = detect_language(file_path) or "generic"
    content = file_path.read_text(encoding="utf-8", errors="replace")

    extractor = get_extractor(language)
    return extractor.extract(
        content=content,
        file_path=file_path,
        language=language,
        min_block_size=min_block_size,
    )


def index_codebase(
    source_files: List[Path],
    min_block_size: int = 5,
    on_progress: Optional[Callable[[int, int, str], None]] = None,
) -> List[CodeBlock]:
    """
    Extract blocks from every file, in order.

    A file that cannot be read is logged and left out; the rest of the
    files are still processed.

    Args:
        source_files: Files to process (see find_source_files)
        min_block_size: Minimum lines per block
        on_progress: Optional callback(current, total, message)

    Returns:
        List of CodeBlock objects in extraction order
    """
    all_blocks: List[CodeBlock] = []
    total = len(source_files)

    for processed, file_path in enumerate(source_files, start=1):
        try:
            all_blocks.extend(extract_blocks(file_path, min_block_size))
        except OSError as e:
            logger.error(f"Error processing file {file_path}: {e}")

        if on_progress:
            on_progress(processed, total, "files")

    return all_blocks
