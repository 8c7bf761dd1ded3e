"""
Tests for markup configuration loading and validation.
"""
import pytest

from notemark.core import paths
from notemark.core.config import DEFAULT_CONFIG, MarkupConfig, load_config
from notemark.core.exceptions import ConfigError, ValidationError


class TestMarkupConfig:
    """Tests for MarkupConfig validation."""

    def test_defaults(self):
        """Defaults match the documented class names."""
        config = MarkupConfig()
        assert config.indent_unit == 2
        assert config.search_class == "search-match"
        assert config.selection_class == "selection-match"
        assert config.selection_case_sensitive is True

    def test_hashable(self):
        """Configs are frozen and usable as cache keys."""
        assert hash(MarkupConfig()) == hash(MarkupConfig())

    @pytest.mark.parametrize("value", [0, -2, "2", True, 1.5])
    def test_invalid_indent_unit(self, value):
        """indent_unit must be a positive integer."""
        with pytest.raises(ConfigError):
            MarkupConfig(indent_unit=value)

    def test_blank_class_rejected(self):
        """Class names cannot be blank."""
        with pytest.raises(ConfigError):
            MarkupConfig(search_class="  ")

    def test_case_flag_must_be_bool(self):
        """selection_case_sensitive must be a boolean."""
        with pytest.raises(ConfigError):
            MarkupConfig(selection_case_sensitive="yes")

    def test_from_dict_unknown_key(self):
        """Unknown keys are reported by name."""
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            MarkupConfig.from_dict({"indent": 2})

    def test_config_error_is_validation_error(self):
        """ConfigError belongs to the validation family."""
        assert issubclass(ConfigError, ValidationError)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_dir):
        """No file, no overrides."""
        assert load_config(tmp_dir / "absent.yaml") is DEFAULT_CONFIG

    def test_default_path_is_in_app_dir(self, tmp_dir, monkeypatch):
        """Without a path, notemark.yaml is read from the per-user app dir."""
        monkeypatch.setattr(paths, "app_dir", lambda: tmp_dir)
        (tmp_dir / "notemark.yaml").write_text("indent_unit: 4\n", encoding="utf-8")
        assert load_config().indent_unit == 4

    def test_empty_file_gives_defaults(self, tmp_dir):
        """An empty YAML document means defaults."""
        path = tmp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) is DEFAULT_CONFIG

    def test_overrides(self, config_file):
        """Values from the file replace the defaults."""
        config = load_config(config_file)
        assert config.indent_unit == 4
        assert config.search_class == "hit"
        assert config.selection_class == "sel"
        assert config.task_class == "task-item"

    def test_invalid_yaml(self, tmp_dir):
        """Unparseable YAML is a ConfigError."""
        path = tmp_dir / "bad.yaml"
        path.write_text("indent_unit: [", encoding="utf-8")
        with pytest.raises(ConfigError, match="Cannot parse"):
            load_config(path)

    def test_not_a_mapping(self, tmp_dir):
        """A YAML list is not a configuration."""
        path = tmp_dir / "list.yaml"
        path.write_text("- indent_unit\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_wrong_type_in_file(self, tmp_dir):
        """Type errors in the file surface as ConfigError."""
        path = tmp_dir / "typed.yaml"
        path.write_text("indent_unit: two\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)
