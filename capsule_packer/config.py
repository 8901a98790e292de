"""Configuration for capsule-packer.

This module defines the configuration structure that controls which files in a
project folder are offered for packing, how the exported bundle is named and
how its size is estimated. Configuration is read-only: it may be loaded from a
JSON file but is never written back.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_SOURCE_EXTENSIONS = [".cs"]
DEFAULT_OUTPUT_NAME = "AiContextMulti.md"
DEFAULT_FENCE_LANGUAGE = "csharp"
DEFAULT_MODEL_ENCODING = "o200k_base"

# Substitutes used when the folder or a file cannot be found on disk.
PLACEHOLDER_FILE_NAME = "FakeFile.cs"
PLACEHOLDER_SOURCE = "public class Fake { void Test() {} }"


@dataclass
class Config:
    """Configuration for a packing session.

    Attributes:
        source_extensions (list[str]): File suffixes listed as source files.
        exclude_patterns (list[str]): Glob patterns for file names to skip.
        search_terms (list[str]): Only list files whose name contains one of these.
        output_name (str): Name of the Markdown file written into the project folder.
        fence_language (str): Code fence tag for files with an unknown suffix.
        model_encoding (str): Tokenizer encoding used for token estimates.
        count_tokens (bool): Whether to count tokens with the tokenizer.
    """

    source_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCE_EXTENSIONS))
    exclude_patterns: list[str] = field(default_factory=list)
    search_terms: list[str] = field(default_factory=list)
    output_name: str = DEFAULT_OUTPUT_NAME
    fence_language: str = DEFAULT_FENCE_LANGUAGE
    model_encoding: str = DEFAULT_MODEL_ENCODING
    count_tokens: bool = True

    @classmethod
    def from_file(cls, path: str | Path | None) -> "Config":
        """Load configuration from a JSON file.

        If no path is provided, attempts to load from default locations:
        - `capsule.json` in current directory
        - `~/.config/capsule-packer/config.json`

        Args:
            path (str | Path | None): Path to JSON config file, or None for auto-search.

        Returns:
            Config: A configuration instance.
        """
        if not path:
            for default_path in default_config_paths():
                if default_path.exists():
                    path = default_path
                    break
            else:
                return cls()

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        defaults = cls()
        return cls(
            source_extensions=data.get("extensions", defaults.source_extensions),
            exclude_patterns=data.get("exclude", []),
            search_terms=data.get("search_terms", []),
            output_name=data.get("output_name", defaults.output_name),
            fence_language=data.get("fence_language", defaults.fence_language),
            model_encoding=data.get("model_encoding", defaults.model_encoding),
            count_tokens=data.get("count_tokens", defaults.count_tokens),
        )

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary using the file keys.

        Returns:
            dict: Dictionary representation of configuration.
        """
        return {
            "extensions": self.source_extensions,
            "exclude": self.exclude_patterns,
            "search_terms": self.search_terms,
            "output_name": self.output_name,
            "fence_language": self.fence_language,
            "model_encoding": self.model_encoding,
            "count_tokens": self.count_tokens,
        }

    def update(self, updates: dict[str, Any]) -> None:
        """Update configuration fields, skipping None values.

        Args:
            updates (dict[str, Any]): Attribute names mapped to new values.
        """
        for key, value in updates.items():
            if hasattr(self, key) and value is not None:
                setattr(self, key, value)


def default_config_paths() -> list[Path]:
    """Locations searched for a config file, in priority order."""
    return [
        Path.cwd() / "capsule.json",
        Path.home() / ".config" / "capsule-packer" / "config.json",
    ]
