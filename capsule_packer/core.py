"""Core session logic for packing redacted code.

This module defines the `ProjectSession` class, which holds the state of one
opened project folder: the file currently shown, its parsed tree, the names
the user chose to hide, and the bundle of staged snapshots. Redaction and
Markdown formatting are delegated to pure functions; the session only keeps
state and wires user actions to them.

Bundles are meant to be pasted into LLM chats, so the exported snapshot also
carries an approximate token count.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tiktoken

from capsule_packer.config import PLACEHOLDER_FILE_NAME, PLACEHOLDER_SOURCE, Config
from capsule_packer.filters import SourceFileFilter
from capsule_packer.formatters import BundleFormatter
from capsule_packer.parsing import ParsedSource, SourceOutline, build_outline, parse_source
from capsule_packer.redactor import redact
from capsule_packer.utils import copy_to_clipboard, read_source_text, short_path


@dataclass
class HiddenNames:
    """Names of classes and methods hidden in the open file.

    Matching is by identifier only: hiding a method name hides every method
    with that name in the file.
    """

    classes: set[str] = field(default_factory=set)
    methods: set[str] = field(default_factory=set)

    def clear(self) -> None:
        self.classes.clear()
        self.methods.clear()


@dataclass
class Snapshot:
    """Represents an exported bundle.

    Attributes:
        content (str): Markdown document.
        file_count (int): Number of staged files in the document.
        token_count (int): Approximate number of tokens in the document.
        metadata (dict[str, Any]): Project name and staged file names.
    """

    content: str
    file_count: int
    token_count: int
    metadata: dict[str, Any] = field(default_factory=dict)


class ProjectSession:
    """State and actions of one opened project folder.

    Attributes:
        folder_path (Path): Folder the session was opened on.
        config (Config): Session configuration.
        hidden (HiddenNames): Names hidden in the current file.
        staged (dict[str, str]): Staged snapshots in staging order.
        current_file (str | None): Name of the file currently shown.
        parsed (ParsedSource | None): Tree of the current file's original text.
        displayed_text (str): Current file rendered with the hidden names applied.
    """

    def __init__(self, folder_path: Path, config: Config | None = None):
        self.folder_path = Path(folder_path)
        self.config = config or Config()
        self.filter = SourceFileFilter(self.folder_path, self.config)
        self.formatter = BundleFormatter(self.config.fence_language)
        self.hidden = HiddenNames()
        self.staged: dict[str, str] = {}
        self.current_file: str | None = None
        self.parsed: ParsedSource | None = None
        self.displayed_text = ""
        self._tokenizer = None
        self._tokenizer_failed = False

    @property
    def short_path(self) -> str:
        """Abbreviated folder path, including the current file once one is open."""
        return short_path(self.folder_path, self.current_file)

    def list_files(self) -> list[str]:
        """List source file names in the folder.

        A folder that does not exist yields a single placeholder entry.

        Returns:
            list[str]: File names, sorted.
        """
        if not self.folder_path.is_dir():
            return [PLACEHOLDER_FILE_NAME]
        return [path.name for path in self.filter.collect()]

    def open_file(self, file_name: str) -> str:
        """Open a file, resetting the hidden names.

        A file that cannot be found is replaced by placeholder source text.

        Args:
            file_name (str): Name of a file in the project folder.

        Returns:
            str: The displayed text (the unredacted source).
        """
        self.current_file = file_name
        self.hidden.clear()
        text = read_source_text(self.folder_path / file_name, PLACEHOLDER_SOURCE)
        self.parsed = parse_source(text)
        return self.refresh()

    def refresh(self) -> str:
        """Re-render the current file from its original tree."""
        if self.parsed is None:
            return self.displayed_text
        self.displayed_text = redact(self.parsed, self.hidden.classes, self.hidden.methods)
        return self.displayed_text

    def set_class_hidden(self, name: str, hidden: bool) -> str:
        """Hide or show a class and re-render.

        Args:
            name (str): Class identifier.
            hidden (bool): True to collapse the class, False to show it again.

        Returns:
            str: The new displayed text.
        """
        if self.parsed is None:
            return self.displayed_text
        if hidden:
            self.hidden.classes.add(name)
        else:
            self.hidden.classes.discard(name)
        return self.refresh()

    def set_method_hidden(self, name: str, hidden: bool) -> str:
        """Hide or show every method with the given name and re-render.

        Args:
            name (str): Method identifier.
            hidden (bool): True to hide the body, False to show it again.

        Returns:
            str: The new displayed text.
        """
        if self.parsed is None:
            return self.displayed_text
        if hidden:
            self.hidden.methods.add(name)
        else:
            self.hidden.methods.discard(name)
        return self.refresh()

    def outline(self) -> SourceOutline | None:
        """Return the class/method outline of the current file."""
        if self.parsed is None:
            return None
        return build_outline(self.parsed)

    def stage(self) -> bool:
        """Stage the displayed text of the current file.

        Returns:
            bool: False if no file is open or the displayed text is empty.
        """
        if not self.displayed_text or self.current_file is None:
            return False
        self.stage_text(self.current_file, self.displayed_text)
        return True

    def stage_text(self, file_name: str, text: str) -> None:
        """Stage a snapshot under a file name, replacing any earlier one."""
        self.staged[file_name] = text

    def build_snapshot(self) -> Snapshot | None:
        """Build the Markdown bundle of all staged files.

        Returns:
            Snapshot | None: None when nothing is staged.
        """
        content = self.formatter.build_document(self.staged)
        if not content:
            return None
        return Snapshot(
            content=content,
            file_count=len(self.staged),
            token_count=self._count_tokens(content),
            metadata={"project": self.folder_path.name, "files": list(self.staged)},
        )

    def save(self, output_path: Path | None = None) -> Path | None:
        """Write the bundle to disk, overwriting any existing file.

        Args:
            output_path (Path | None): Destination; defaults to the configured
                output name inside the project folder.

        Returns:
            Path | None: Path written, or None if nothing was staged or the
            project folder does not exist.
        """
        snapshot = self.build_snapshot()
        if snapshot is None:
            return None
        if output_path is None:
            if not self.folder_path.is_dir():
                return None
            output_path = self.folder_path / self.config.output_name
        output_path = Path(output_path)
        output_path.write_text(snapshot.content, encoding="utf-8")
        return output_path

    def copy(self) -> bool:
        """Copy the bundle to the system clipboard.

        Returns:
            bool: True if something was staged and the clipboard accepted it.
        """
        snapshot = self.build_snapshot()
        if snapshot is None:
            return False
        return copy_to_clipboard(snapshot.content)

    def _count_tokens(self, text: str) -> int:
        """Return approximate token count for text using tokenizer."""
        if not self.config.count_tokens or self._tokenizer_failed:
            return len(text) // 4
        if self._tokenizer is None:
            try:
                self._tokenizer = tiktoken.get_encoding(self.config.model_encoding)
            except (OSError, ValueError):
                # Encoding files are downloaded on first use.
                self._tokenizer_failed = True
                return len(text) // 4
        return len(self._tokenizer.encode(text))
