import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from capsule_packer.utils import copy_to_clipboard, format_size, read_source_text, short_path


@patch("shutil.which")
@patch("subprocess.run")
@patch("platform.system")
def test_copy_to_clipboard_macos(mock_system, mock_run, mock_which):
    mock_system.return_value = "Darwin"
    mock_which.return_value = "/usr/bin/pbcopy"
    mock_run.return_value = MagicMock(returncode=0)

    result = copy_to_clipboard("test text")
    assert result is True
    mock_run.assert_called_once_with(
        ["/usr/bin/pbcopy"], input="test text".encode("utf-8"), check=False
    )


@patch("shutil.which")
@patch("subprocess.run")
@patch("platform.system", return_value="Linux")
def test_copy_to_clipboard_linux_prefers_wayland(mock_system, mock_run, mock_which):
    mock_which.side_effect = lambda cmd: "/usr/bin/" + cmd
    mock_run.return_value = MagicMock(returncode=0)

    assert copy_to_clipboard("test text") is True
    mock_run.assert_called_once_with(["/usr/bin/wl-copy"], input=b"test text", check=False)


@patch("shutil.which")
@patch("subprocess.run")
@patch("platform.system", return_value="Linux")
def test_copy_to_clipboard_linux_xsel_fallback(mock_system, mock_run, mock_which):
    mock_which.side_effect = lambda cmd: "/usr/bin/xsel" if cmd == "xsel" else None
    mock_run.return_value = MagicMock(returncode=0)

    assert copy_to_clipboard("test text") is True
    mock_run.assert_called_with(
        ["/usr/bin/xsel", "--clipboard", "--input"], input=b"test text", check=False
    )


@patch("shutil.which", return_value=None)
@patch("platform.system", return_value="Linux")
def test_copy_to_clipboard_linux_without_tools(mock_system, mock_which):
    assert copy_to_clipboard("test text") is False


@patch("shutil.which")
@patch("subprocess.run")
@patch("platform.system", return_value="Windows")
def test_copy_to_clipboard_windows(mock_system, mock_run, mock_which):
    mock_which.return_value = "C:\\Windows\\System32\\clip.exe"
    mock_run.return_value = MagicMock(returncode=0)

    assert copy_to_clipboard("tëst") is True
    mock_run.assert_called_once_with(
        ["C:\\Windows\\System32\\clip.exe"], input="tëst".encode("utf-16"), check=False
    )


@patch("platform.system", return_value="Plan9")
def test_copy_to_clipboard_unknown_platform(mock_system):
    assert copy_to_clipboard("test text") is False


@patch("shutil.which", return_value="/usr/bin/pbcopy")
@patch("subprocess.run", side_effect=subprocess.SubprocessError("broken"))
@patch("platform.system", return_value="Darwin")
def test_copy_to_clipboard_subprocess_error(mock_system, mock_run, mock_which):
    assert copy_to_clipboard("test text") is False


def test_read_source_text(tmp_path):
    source = tmp_path / "A.cs"
    source.write_text("class A {}", encoding="utf-8")
    assert read_source_text(source, "fallback") == "class A {}"
    assert read_source_text(tmp_path / "Missing.cs", "fallback") == "fallback"
    assert read_source_text(tmp_path, "fallback") == "fallback"


def test_read_source_text_replaces_bad_bytes(tmp_path):
    source = tmp_path / "Latin.cs"
    source.write_bytes(b"// caf\xe9\nclass A {}")
    assert read_source_text(source, "") == "// caf\ufffd\nclass A {}"


def test_short_path():
    assert short_path(Path("/home/me/Shop")) == ".../Shop"
    assert short_path(Path("/home/me/Shop"), "Cart.cs") == ".../Shop/Cart.cs"


def test_format_size():
    assert format_size(512) == "512.0 B"
    assert format_size(2048) == "2.0 KB"
