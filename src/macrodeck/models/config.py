"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from macrodeck.model_manager.persistence import PydanticPersistence

from .color import Color

DEFAULT_HOME = Path.home() / ".macrodeck"
DEFAULT_CONFIG_PATH = DEFAULT_HOME / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Plugins
    plugin_dir: Path = Field(
        default_factory=lambda: DEFAULT_HOME / "plugins",
        description="Root directory scanned (recursively) for plugin modules",
    )

    # Device
    device_index: int = Field(
        default=0, ge=0, description="Which attached Stream Deck to open (0 = first)"
    )
    brightness: int = Field(default=100, ge=0, le=100, description="Key display brightness (%)")
    key_count: int = Field(
        default=6, ge=1, description="Number of keys on the virtual deck (hardware reports its own)"
    )

    # Rendering
    font_path: str = Field(
        default="DejaVuSans-Bold.ttf",
        description="Bold TrueType font used for key labels (file name or path)",
    )
    font_size: int = Field(default=14, ge=4, le=72, description="Label font size in pixels")
    background_color: Color = Field(
        default_factory=Color.key_background, description="Key background color"
    )
    text_color: Color = Field(default_factory=Color.white, description="Key label color")

    # Dispatch
    enable_builtin_actions: bool = Field(
        default=False,
        description=(
            "Give built-in message/command actions a real effect on key press. "
            "When disabled they are only displayed, never executed."
        ),
    )
    dispatch_workers: int = Field(
        default=4, ge=1, description="Threads executing key presses off the device thread"
    )

    @field_serializer("plugin_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.macrodeck/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        PydanticPersistence.save_json(self, path)
