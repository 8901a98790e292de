"""Markdown formatting of staged bundles.

This module turns the staged files of a session into a single Markdown
document: a title, the number of files, then one fenced code block per file
in staging order.
"""

from collections.abc import Mapping
from pathlib import PurePath

from capsule_packer.config import DEFAULT_FENCE_LANGUAGE

BUNDLE_TITLE = "# Project bundle for AI"
SEPARATOR = "---"


class BundleFormatter:
    """Formats staged files as a Markdown bundle.

    Attributes:
        fence_language (str): Fence tag for files whose suffix is not recognised.
    """

    def __init__(self, fence_language: str = DEFAULT_FENCE_LANGUAGE):
        self.fence_language = fence_language

    def format_header(self, file_count: int) -> str:
        """Format the bundle title and file count.

        Args:
            file_count (int): Number of staged files.

        Returns:
            str: Header lines followed by a blank line.
        """
        return f"{BUNDLE_TITLE}\n**Total files:** {file_count}\n\n"

    def format_file(self, file_name: str, content: str) -> str:
        """Format one staged file as a section with a fenced code block.

        The content is emitted verbatim, without escaping or truncation.

        Args:
            file_name (str): Name the file was staged under.
            content (str): Staged text.

        Returns:
            str: Markdown section ending with a separator line.
        """
        lang = self._get_language_ext(file_name)
        return f"## File: `{file_name}`\n```{lang}\n{content}\n```\n{SEPARATOR}\n"

    def build_document(self, staged_files: Mapping[str, str]) -> str:
        """Build the Markdown document for a set of staged files.

        Args:
            staged_files (Mapping[str, str]): File names mapped to staged text,
                in the order they should appear.

        Returns:
            str: The document, or an empty string when nothing is staged.
        """
        if not staged_files:
            return ""
        parts = [self.format_header(len(staged_files))]
        parts.extend(self.format_file(name, content) for name, content in staged_files.items())
        return "".join(parts)

    def _get_language_ext(self, file_name: str) -> str:
        """Determine the syntax-highlight tag for a code fence."""
        suffix = PurePath(file_name).suffix.lower()
        ext_map = {
            ".cs": "csharp",
            ".csx": "csharp",
            ".xaml": "xml",
            ".axaml": "xml",
            ".csproj": "xml",
            ".json": "json",
        }
        return ext_map.get(suffix, self.fence_language)


def build_document(
    staged_files: Mapping[str, str], fence_language: str = DEFAULT_FENCE_LANGUAGE
) -> str:
    """Build a Markdown bundle with a default formatter."""
    return BundleFormatter(fence_language).build_document(staged_files)
