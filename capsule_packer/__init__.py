"""
capsule-packer - Pack selectively redacted C# code for LLMs.
Browse a folder of C# sources, hide the classes and methods that do not
matter, and export the rest as one Markdown document.
"""

__version__ = "0.1.0"

from capsule_packer.config import Config
from capsule_packer.core import ProjectSession, Snapshot
from capsule_packer.formatters import build_document
from capsule_packer.parsing import ParsedSource, parse_source
from capsule_packer.redactor import redact

__all__ = [
    "Config",
    "ParsedSource",
    "ProjectSession",
    "Snapshot",
    "build_document",
    "parse_source",
    "redact",
]
