"""Tests for source file filtering."""

import pytest

from capsule_packer.config import Config
from capsule_packer.filters import SourceFileFilter


@pytest.fixture
def temp_project(tmp_path):
    """Create a project folder with mixed file types."""
    root = tmp_path / "proj"
    root.mkdir()
    (root / "Program.cs").write_text("class Program {}")
    (root / "Upper.CS").write_text("class Upper {}")
    (root / "MainWindow.Designer.cs").write_text("partial class MainWindow {}")
    (root / "App.axaml").write_text("<Application/>")
    (root / "notes.txt").write_text("todo")
    (root / "Folder.cs").mkdir()
    (root / "Models").mkdir()
    (root / "Models" / "User.cs").write_text("class User {}")
    return root


def test_default_extension_filter(temp_project):
    file_filter = SourceFileFilter(temp_project, Config())
    names = [p.name for p in file_filter.collect()]
    assert names == ["MainWindow.Designer.cs", "Program.cs", "Upper.CS"]


def test_directories_are_never_included(temp_project):
    file_filter = SourceFileFilter(temp_project, Config())
    assert not file_filter.should_include(temp_project / "Folder.cs")
    assert not file_filter.should_include(temp_project / "Models")


def test_subdirectories_are_not_scanned(temp_project):
    file_filter = SourceFileFilter(temp_project, Config())
    assert "User.cs" not in [p.name for p in file_filter.collect()]


def test_exclude_patterns(temp_project):
    config = Config(exclude_patterns=["*.Designer.cs"])
    file_filter = SourceFileFilter(temp_project, config)
    assert not file_filter.should_include(temp_project / "MainWindow.Designer.cs")
    assert file_filter.should_include(temp_project / "Program.cs")


def test_search_terms(temp_project):
    config = Config(search_terms=["prog"])
    file_filter = SourceFileFilter(temp_project, config)
    assert [p.name for p in file_filter.collect()] == ["Program.cs"]


def test_custom_extensions(temp_project):
    config = Config(source_extensions=[".cs", ".axaml"])
    file_filter = SourceFileFilter(temp_project, config)
    assert "App.axaml" in [p.name for p in file_filter.collect()]


def test_missing_root_collects_nothing(tmp_path):
    file_filter = SourceFileFilter(tmp_path / "nowhere", Config())
    assert file_filter.collect() == []
