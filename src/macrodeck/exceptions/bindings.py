"""Key binding exceptions."""

from .base import MacroDeckError


class BindingError(MacroDeckError):
    """A key binding operation was rejected."""
    pass


class KeyIndexOutOfRangeError(BindingError, IndexError):
    """Key index is outside the table's fixed range."""

    def __init__(self, key_index: int, key_count: int):
        """
        Initialize key index error.

        Args:
            key_index: The rejected index
            key_count: Number of keys in the table
        """
        super().__init__(
            user_message=f"Key index {key_index} out of range (0-{key_count - 1})",
            recoverable=True,
        )
        self.key_index = key_index
        self.key_count = key_count


class BindingConfigurationError(BindingError):
    """Binding cannot be configured the requested way."""

    def __init__(self, key_index: int, reason: str):
        super().__init__(
            user_message=f"Cannot configure Key {key_index + 1}: {reason}",
            recoverable=True,
        )
        self.key_index = key_index
