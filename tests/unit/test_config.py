"""Unit tests for parser configuration and settings."""

import pytest

from vmap_parser.config import VmapParserConfig
from vmap_parser.exceptions import VmapConfigError
from vmap_parser.settings import VmapParserSettings, get_settings


class TestVmapParserConfig:
    """Tests for VmapParserConfig."""

    def test_defaults(self):
        config = VmapParserConfig()
        assert config.encoding == "utf-8"
        assert config.recover_on_error is False
        assert config.huge_tree is False
        assert config.xml_preview_length == 200

    def test_from_dict_round_trip(self):
        config = VmapParserConfig.from_dict({"encoding": "latin-1", "xml_preview_length": 50})
        assert config.to_dict() == {
            "encoding": "latin-1",
            "recover_on_error": False,
            "huge_tree": False,
            "xml_preview_length": 50,
        }

    def test_from_dict_unknown_key(self):
        with pytest.raises(VmapConfigError) as exc_info:
            VmapParserConfig.from_dict({"encoding": "utf-8", "bogus": 1})
        assert "bogus" in str(exc_info.value)

    def test_is_immutable(self):
        config = VmapParserConfig()
        with pytest.raises(AttributeError):
            config.encoding = "ascii"


class TestVmapParserSettings:
    """Tests for VmapParserSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("VMAP_PARSER_LOG_LEVEL", raising=False)
        settings = VmapParserSettings()
        assert settings.log_level == "INFO"
        assert settings.parser == {}

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("VMAP_PARSER_LOG_LEVEL", "DEBUG")
        assert VmapParserSettings().log_level == "DEBUG"

    def test_load_from_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv("VMAP_PARSER_LOG_LEVEL", raising=False)
        path = tmp_path / "vmap.yaml"
        path.write_text("log_level: WARNING\nparser:\n  recover_on_error: true\n", encoding="utf-8")

        settings = VmapParserSettings.load_from_yaml(path)
        assert settings.log_level == "WARNING"
        assert settings.parser == {"recover_on_error": True}

    def test_env_wins_over_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VMAP_PARSER_LOG_LEVEL", "ERROR")
        path = tmp_path / "vmap.yaml"
        path.write_text("log_level: WARNING\n", encoding="utf-8")

        assert VmapParserSettings.load_from_yaml(path).log_level == "ERROR"

    def test_missing_yaml_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("VMAP_PARSER_LOG_LEVEL", raising=False)
        settings = VmapParserSettings.load_from_yaml(tmp_path / "absent.yaml")
        assert settings.log_level == "INFO"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("parser: [unclosed\n", encoding="utf-8")
        with pytest.raises(VmapConfigError):
            VmapParserSettings.load_from_yaml(path)

    def test_yaml_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(VmapConfigError):
            VmapParserSettings.load_from_yaml(path)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
