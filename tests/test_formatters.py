"""Tests for Markdown bundle formatting."""

import pytest

from capsule_packer.formatters import BUNDLE_TITLE, BundleFormatter, build_document


def test_empty_bundle_is_empty():
    assert build_document({}) == ""


def test_two_files_in_staging_order():
    document = build_document({"A.cs": "x", "B.cs": "y"})
    assert document == (
        "# Project bundle for AI\n"
        "**Total files:** 2\n"
        "\n"
        "## File: `A.cs`\n"
        "```csharp\n"
        "x\n"
        "```\n"
        "---\n"
        "## File: `B.cs`\n"
        "```csharp\n"
        "y\n"
        "```\n"
        "---\n"
    )


def test_order_follows_insertion_not_name():
    staged = {}
    staged["Zeta.cs"] = "z"
    staged["Alpha.cs"] = "a"
    document = build_document(staged)
    assert document.index("Zeta.cs") < document.index("Alpha.cs")


def test_content_is_verbatim():
    content = "/* ``` */\nclass A { string s = \"# not a heading\"; }\n\n"
    document = build_document({"A.cs": content})
    assert f"```csharp\n{content}\n```\n" in document


def test_format_header():
    formatter = BundleFormatter()
    assert formatter.format_header(3) == f"{BUNDLE_TITLE}\n**Total files:** 3\n\n"


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("Program.cs", "csharp"),
        ("Script.CSX", "csharp"),
        ("MainWindow.axaml", "xml"),
        ("App.csproj", "xml"),
        ("appsettings.json", "json"),
        ("notes", "csharp"),
    ],
)
def test_language_tag_by_suffix(file_name, expected):
    formatter = BundleFormatter()
    assert formatter._get_language_ext(file_name) == expected


def test_custom_fence_language_for_unknown_suffix():
    document = build_document({"build.cake": "Task(\"Default\");"}, fence_language="cake")
    assert "```cake\n" in document
