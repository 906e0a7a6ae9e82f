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
Detector configuration.

`DetectorConfig` is built by the caller and passed in explicitly.
Project defaults can live in .cddrc or .cdd.toml in the analyzed
directory or any parent.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Dict, Any, Tuple

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # type: ignore
    except ImportError:
        tomllib = None  # type: ignore


# Tool state directory, skipped by the file collector
STATE_DIR = ".cdd"
REPORT_FILENAME = "duplicate-code-report.txt"


def _string_tuple(name: str, value) -> Tuple[str, ...]:
    """A single string counts as one entry, not as a sequence of characters."""
    if isinstance(value, str):
        value = (value,)
    try:
        items = tuple(value)
    except TypeError:
        raise ValueError(f"{name} must be a string or a list of strings, got {value!r}")
    if not all(isinstance(item, str) for item in items):
        raise ValueError(f"{name} must contain only strings, got {value!r}")
    return items


@dataclass
class DetectorConfig:
    """Options for one detector run."""

    extensions: Tuple[str, ...] = ()        # Empty = derive from project types
    exclude_patterns: Tuple[str, ...] = ()
    min_block_size: int = 5
    similarity_threshold: float = 0.8
    grouping: str = "anchor"
    write_report: bool = True
    report_dir: str = f"{STATE_DIR}/reports"
    dry_run: bool = False

    def __post_init__(self):
        self.extensions = _string_tuple("extensions", self.extensions)
        self.exclude_patterns = _string_tuple("exclude_patterns", self.exclude_patterns)

        if (
            isinstance(self.min_block_size, bool)
            or not isinstance(self.min_block_size, int)
            or self.min_block_size < 1
        ):
            raise ValueError(f"min_block_size must be a positive integer, got {self.min_block_size!r}")
        if (
            isinstance(self.similarity_threshold, bool)
            or not isinstance(self.similarity_threshold, (int, float))
            or not 0.0 <= self.similarity_threshold <= 1.0
        ):
            raise ValueError(
                f"similarity_threshold must be between 0 and 1, got {self.similarity_threshold!r}"
            )
        if self.grouping not in ("anchor", "transitive"):
            raise ValueError(f"grouping must be 'anchor' or 'transitive', got {self.grouping!r}")
        if not isinstance(self.report_dir, str) or not self.report_dir:
            raise ValueError(f"report_dir must be a non-empty path string, got {self.report_dir!r}")

    @classmethod
    def from_mapping(cls, values: Dict[str, Any]) -> "DetectorConfig":
        """Build from a config-file table, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})

    def report_path(self, root_path: Path) -> Path:
        return root_path / self.report_dir / REPORT_FILENAME


def find_config_file(start_path: Path) -> Optional[Path]:
    """
    Search for .cddrc or .cdd.toml in start_path and parent directories.

    Searches up to the root directory or until a config file is found.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    config_names = [".cddrc", ".cdd.toml"]

    # Start from the given path and walk up to root
    current = start_path.resolve()

    while True:
        for name in config_names:
            config_path = current / name
            if config_path.is_file():
                return config_path

        parent = current.parent

        # Stop if we've reached the root
        if parent == current:
            break

        current = parent

    return None


def load_config(path: Path) -> Dict[str, Any]:
    """
    Load configuration from a .cddrc or .cdd.toml file.

    Searches for config file starting from the given path and walking up
    parent directories. Returns empty dict if no config file is found.

    Args:
        path: Directory to start searching from

    Returns:
        Dictionary of configuration values from [cdd] section,
        or empty dict if no config file found

    Example config file (.cddrc or .cdd.toml):
        [cdd]
        similarity_threshold = 0.85
        min_block_size = 8
        extensions = [".js", ".ts"]
        exclude_patterns = ["tests/*", "vendor/*"]
        grouping = "anchor"
        write_report = true
    """
    if tomllib is None:
        # TOML library not available, silently return empty config
        return {}

    config_path = find_config_file(path)

    if config_path is None:
        return {}

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return data.get("cdd", {})

    except (OSError, tomllib.TOMLDecodeError):
        # File unreadable or invalid TOML - return empty config
        return {}
