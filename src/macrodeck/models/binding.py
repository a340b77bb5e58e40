"""Key binding model: one slot of the key binding table."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .action import ActionDescriptor


class KeyBinding(BaseModel):
    """
    The action bound to one physical key.

    Bindings are frozen: the table replaces a slot's binding as a whole
    instead of editing it, so a reader never sees a half-written binding.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key_index: int = Field(ge=0, description="Physical key index (0-based)")
    action: ActionDescriptor = Field(
        default_factory=ActionDescriptor.unassigned, description="Bound action"
    )
    configuration_control: Any = Field(
        default=None, description="Cached plugin configuration handle (opaque)"
    )

    @property
    def key_number(self) -> int:
        """1-based key number used in log lines."""
        return self.key_index + 1

    @property
    def label(self) -> str:
        """Text rendered on the key."""
        return self.action.action_name

    @property
    def is_assigned(self) -> bool:
        """Check if an action has been assigned to this key."""
        return self.action.is_assigned

    def snapshot(self) -> "KeyBinding":
        """
        Copy for handing out to readers.

        The descriptor is deep-copied; the configuration handle is shared since
        it is owned by the plugin.
        """
        return KeyBinding(
            key_index=self.key_index,
            action=self.action.model_copy(deep=True),
            configuration_control=self.configuration_control,
        )

    @classmethod
    def empty(cls, key_index: int) -> "KeyBinding":
        """Create an unassigned binding for a key."""
        return cls(key_index=key_index)
