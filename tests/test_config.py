"""Tests for AppConfig and config persistence."""

import json
from pathlib import Path

import pytest
from pydantic import BaseModel

from macrodeck.exceptions import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from macrodeck.model_manager.persistence import PydanticPersistence
from macrodeck.models import AppConfig, Color


class SampleModel(BaseModel):
    """Simple model for testing."""

    name: str = "test"
    value: int = 42


@pytest.mark.unit
class TestAppConfig:

    def test_defaults(self):
        config = AppConfig()

        assert config.plugin_dir == Path.home() / ".macrodeck" / "plugins"
        assert config.brightness == 100
        assert config.device_index == 0
        assert config.key_count == 6
        assert config.font_path == "DejaVuSans-Bold.ttf"
        assert config.background_color == Color.key_background()
        assert config.text_color == Color.white()
        assert not config.enable_builtin_actions

    @pytest.mark.parametrize(
        "field, value",
        [("brightness", 101), ("brightness", -1), ("key_count", 0), ("dispatch_workers", 0)],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            AppConfig(**{field: value})

    def test_save_and_load(self, temp_dir):
        path = temp_dir / "config.json"
        config = AppConfig(
            plugin_dir=temp_dir / "plugins",
            brightness=40,
            text_color=Color(r=255, g=200, b=0),
            enable_builtin_actions=True,
        )

        config.save(path)
        loaded = AppConfig.load_or_default(path)

        assert loaded == config
        assert json.loads(path.read_text())["plugin_dir"] == str(temp_dir / "plugins")

    def test_missing_file_gives_defaults(self, temp_dir):
        path = temp_dir / "missing.json"

        assert AppConfig.load_or_default(path) == AppConfig()
        assert not path.exists()

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text('{"brightness": 50,}')

        with pytest.raises(ConfigFileInvalidError):
            AppConfig.load_or_default(path)

    def test_invalid_value_names_field(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text('{"brightness": 500}')

        with pytest.raises(ConfigValidationError) as exc_info:
            AppConfig.load_or_default(path)

        assert exc_info.value.field == "brightness"
        assert "between 0 and 100" in exc_info.value.recovery_hint


@pytest.mark.unit
class TestPersistenceSafety:
    """Test safety features of PydanticPersistence."""

    def test_save_creates_backup(self, tmp_path: Path):
        """Test that save_json creates a .bak file before overwriting."""
        config_path = tmp_path / "config.json"

        PydanticPersistence.save_json(SampleModel(name="original", value=1), config_path, backup=False)
        PydanticPersistence.save_json(SampleModel(name="modified", value=2), config_path, backup=True)

        backup_path = config_path.with_suffix(".json.bak")
        assert backup_path.exists()
        assert PydanticPersistence.load_json(backup_path, SampleModel).name == "original"
        assert PydanticPersistence.load_json(config_path, SampleModel).name == "modified"

    def test_save_without_backup(self, tmp_path: Path):
        config_path = tmp_path / "config.json"

        PydanticPersistence.save_json(SampleModel(), config_path, backup=False)
        PydanticPersistence.save_json(SampleModel(value=2), config_path, backup=False)

        assert not config_path.with_suffix(".json.bak").exists()

    def test_atomic_write_cleans_up_temp_file(self, tmp_path: Path):
        config_path = tmp_path / "config.json"

        PydanticPersistence.save_json(SampleModel(name="test", value=123), config_path)

        assert not config_path.with_suffix(".json.tmp").exists()
        assert PydanticPersistence.load_json(config_path, SampleModel).value == 123

    def test_creates_parent_directories(self, tmp_path: Path):
        config_path = tmp_path / "nested" / "deeper" / "config.json"

        PydanticPersistence.save_json(SampleModel(), config_path)

        assert config_path.exists()

    def test_load_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.load_json(tmp_path / "missing.json", SampleModel)

    def test_empty_file_is_invalid(self, tmp_path: Path):
        config_path = tmp_path / "empty.json"
        config_path.write_text("   ")

        with pytest.raises(ConfigFileInvalidError):
            PydanticPersistence.load_json(config_path, SampleModel)

    def test_load_json_or_default_with_factory(self, tmp_path: Path):
        result = PydanticPersistence.load_json_or_default(
            tmp_path / "missing.json",
            SampleModel,
            default_factory=lambda: SampleModel(name="custom", value=999),
        )

        assert result.name == "custom"

    def test_load_json_or_default_corrupted_file_raises(self, tmp_path: Path):
        config_path = tmp_path / "corrupted.json"
        config_path.write_text("{ invalid }", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            PydanticPersistence.load_json_or_default(config_path, SampleModel)

    def test_multiple_validation_errors(self, tmp_path: Path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"name": 1, "value": "x"}))

        with pytest.raises(ConfigValidationError) as exc_info:
            PydanticPersistence.load_json(config_path, SampleModel)

        assert exc_info.value.field == "multiple fields"
