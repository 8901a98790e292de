"""File filtering logic for capsule-packer.

This module defines the `SourceFileFilter` class that decides which files in a
project folder are listed as source files: the suffix must be one of the
configured extensions, the name must not match an exclude pattern, and, when
search terms are given, the name must contain one of them.
"""

import fnmatch
from pathlib import Path

from capsule_packer.config import Config


class SourceFileFilter:
    """Selects source files directly inside a project folder.

    Attributes:
        root_path (Path): Project folder.
        config (Config): Configuration with extension and name rules.
        include_extensions (set[str]): Lower-cased suffixes to include.
        exclude_patterns (list[str]): Glob patterns matched against file names.
        search_terms (list[str]): Optional keyword filters for file names.
    """

    def __init__(self, root_path: Path, config: Config):
        self.root_path = root_path
        self.config = config
        self.include_extensions = {ext.lower() for ext in config.source_extensions}
        self.exclude_patterns = config.exclude_patterns or []
        self.search_terms = config.search_terms or []

    def should_include_by_search_terms(self, path: Path) -> bool:
        """Check if a file name contains one of the search terms.

        Args:
            path (Path): Path to the file.

        Returns:
            bool: True when there are no search terms or one of them matches.
        """
        if not self.search_terms:
            return True
        path_name = path.name.lower()
        return any(term.lower() in path_name for term in self.search_terms)

    def should_include(self, path: Path) -> bool:
        """Check if a path should be listed as a source file.

        Args:
            path (Path): Candidate path.

        Returns:
            bool: True if the path is a matching regular file.
        """
        if not path.is_file():
            return False
        if path.suffix.lower() not in self.include_extensions:
            return False
        if self._matches_patterns(path, self.exclude_patterns):
            return False
        return self.should_include_by_search_terms(path)

    def collect(self) -> list[Path]:
        """Return matching files directly inside the root folder, sorted by name.

        Subdirectories are not scanned.
        """
        try:
            candidates = list(self.root_path.iterdir())
        except (PermissionError, OSError):
            return []
        return sorted((p for p in candidates if self.should_include(p)), key=lambda p: p.name)

    def _matches_patterns(self, path: Path, patterns: list[str]) -> bool:
        return any(fnmatch.fnmatch(path.name, pattern) for pattern in patterns)
