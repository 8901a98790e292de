"""Tests for configuration loading."""

import json

import pytest

from capsule_packer.config import (
    DEFAULT_OUTPUT_NAME,
    DEFAULT_SOURCE_EXTENSIONS,
    Config,
    default_config_paths,
)


def test_config_defaults():
    """Test default configuration values."""
    config = Config()
    assert config.source_extensions == [".cs"]
    assert config.exclude_patterns == []
    assert config.search_terms == []
    assert config.output_name == "AiContextMulti.md"
    assert config.fence_language == "csharp"
    assert config.model_encoding == "o200k_base"
    assert config.count_tokens is True


def test_default_extensions_are_not_shared():
    config = Config()
    config.source_extensions.append(".csx")
    assert DEFAULT_SOURCE_EXTENSIONS == [".cs"]
    assert Config().source_extensions == [".cs"]


def test_config_from_file(tmp_path):
    """Test loading configuration from file."""
    data = {
        "extensions": [".cs", ".csx"],
        "exclude": ["*.Designer.cs"],
        "search_terms": ["Service"],
        "output_name": "Bundle.md",
        "fence_language": "cs",
        "model_encoding": "cl100k_base",
        "count_tokens": False,
    }
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text(json.dumps(data))

    cfg = Config.from_file(cfg_path)

    assert cfg.source_extensions == [".cs", ".csx"]
    assert cfg.exclude_patterns == ["*.Designer.cs"]
    assert cfg.search_terms == ["Service"]
    assert cfg.output_name == "Bundle.md"
    assert cfg.fence_language == "cs"
    assert cfg.model_encoding == "cl100k_base"
    assert cfg.count_tokens is False
    assert cfg.to_dict() == data


def test_partial_file_keeps_defaults(tmp_path):
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text(json.dumps({"exclude": ["Old*.cs"]}))
    cfg = Config.from_file(cfg_path)
    assert cfg.exclude_patterns == ["Old*.cs"]
    assert cfg.source_extensions == DEFAULT_SOURCE_EXTENSIONS
    assert cfg.output_name == DEFAULT_OUTPUT_NAME


def test_update_skips_none():
    config = Config()
    config.update({"count_tokens": None, "output_name": "X.md", "unknown": 1})
    assert config.count_tokens is True
    assert config.output_name == "X.md"
    assert not hasattr(config, "unknown")


def test_invalid_config_file(tmp_path):
    """Test handling of invalid config file raises JSON error."""
    bad_file = tmp_path / "bad.json"
    bad_file.write_text("{invalid}")
    with pytest.raises(json.JSONDecodeError):
        Config.from_file(bad_file)


def test_config_from_missing_file_returns_default(monkeypatch, tmp_path):
    """When no default file exists, returns default config."""
    monkeypatch.setattr(
        "capsule_packer.config.default_config_paths", lambda: [tmp_path / "capsule.json"]
    )
    assert Config.from_file(None) == Config()


def test_config_found_in_working_directory(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "capsule.json").write_text(json.dumps({"output_name": "Here.md"}))
    assert default_config_paths()[0] == tmp_path / "capsule.json"
    assert Config.from_file(None).output_name == "Here.md"
