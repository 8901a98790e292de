"""Utility functions for capsule-packer."""

import platform
import shutil
import subprocess
from pathlib import Path


def _copy_mac(text: str) -> bool:
    """Copy text to clipboard on macOS using pbcopy."""
    pbcopy = shutil.which("pbcopy")
    if not pbcopy:
        return False
    result = subprocess.run([pbcopy], input=text.encode("utf-8"), check=False)  # noqa: S603
    return result.returncode == 0


def _copy_linux(text: str) -> bool:
    """Copy text to clipboard on Linux using wl-copy, xclip or xsel."""
    for cmd in [["wl-copy"], ["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]]:
        binary = shutil.which(cmd[0])
        if not binary:
            continue
        result = subprocess.run([binary] + cmd[1:], input=text.encode("utf-8"), check=False)  # noqa: S603
        if result.returncode == 0:
            return True
    return False


def _copy_windows(text: str) -> bool:
    """Copy text to clipboard on Windows using clip."""
    clip = shutil.which("clip")
    if not clip:
        return False
    # clip.exe reads the console code page unless given UTF-16 with a BOM.
    result = subprocess.run([clip], input=text.encode("utf-16"), check=False)  # noqa: S603
    return result.returncode == 0


def copy_to_clipboard(text: str) -> bool:
    """
    Copy text to system clipboard.
    Returns True if successful, False otherwise.
    """
    try:
        system = platform.system()
        if system == "Darwin":
            return _copy_mac(text)
        if system == "Linux":
            return _copy_linux(text)
        if system == "Windows":
            return _copy_windows(text)
        return False
    except (OSError, subprocess.SubprocessError):
        return False


def read_source_text(path: Path, placeholder: str) -> str:
    """Read a source file, or return `placeholder` if it does not exist.

    A UTF-8 byte order mark is stripped; undecodable bytes are replaced.
    """
    if not path.is_file():
        return placeholder
    return path.read_text(encoding="utf-8-sig", errors="replace")


def short_path(folder: Path, file_name: str | None = None) -> str:
    """Abbreviate a folder (and optionally a file in it) for display."""
    base = f".../{folder.name}"
    if file_name:
        return f"{base}/{file_name}"
    return base


def format_size(num_bytes: float) -> str:
    """Format byte size in human-readable format."""
    for unit in ["B", "KB", "MB", "GB"]:
        if num_bytes < 1024.0:
            return f"{num_bytes:.1f} {unit}"
        num_bytes /= 1024.0
    return f"{num_bytes:.1f} TB"
