"""Errors raised while loading or saving the config file."""

from typing import Any, Optional

from .base import MacroDeckError

# Per-field advice appended to validation hints, matched by substring.
_FIELD_HINTS = {
    "brightness": "Brightness is a percentage between 0 and 100",
    "color": 'Colors look like {"r": 50, "g": 50, "b": 50}, each channel 0-255',
    "device_index": "Run 'macrodeck devices list' to see attached decks",
    "key_count": "The virtual deck needs at least one key",
    "plugin_dir": "Point plugin_dir at a directory of .py plugin modules",
}


class ConfigurationError(MacroDeckError):
    """The config file cannot be loaded or saved."""


class ConfigFileInvalidError(ConfigurationError):
    """The config file is not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_message = "Config file has a trailing comma"
            hint = f"Remove the comma after the last item in {file_path}"
        elif "empty" in lowered:
            user_message = "Config file is empty"
            hint = f"Delete {file_path} to fall back to defaults"
        else:
            user_message = "Config file is not valid JSON"
            hint = f"Fix the JSON syntax in {file_path}, or delete it to fall back to defaults"

        super().__init__(
            user_message=user_message,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=hint,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A config value has the wrong type or is out of range."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        hint = f"Fix '{field}'"
        if file_path:
            hint += f" in {file_path}"
        for name, advice in _FIELD_HINTS.items():
            if name in field:
                hint += f"\n{advice}"
                break

        super().__init__(
            user_message=f"Invalid config value for '{field}': {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint=hint,
        )
        self.field = field
        self.value = value
        self.file_path = file_path
