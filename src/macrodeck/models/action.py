"""Action descriptor model describing one bindable behavior."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import ActionType


class ActionDescriptor(BaseModel):
    """
    Describes one bindable action: a built-in message/command or a plugin action.

    Built-in kinds carry their payload in ``message_to_print`` or
    ``command_to_run`` and have no ``action_id``. Plugin kinds are identified
    by ``action_id``, which is the join key to the owning plugin instance.

    Key bindings store copies of descriptors, so changing a descriptor after
    assigning it never affects the key it was assigned to.
    """

    model_config = ConfigDict(validate_assignment=True)

    action_id: str | None = Field(
        default=None, description="Plugin action identifier (None for built-in kinds)"
    )
    action_name: str = Field(default="", description="Caption shown on the key and in the catalog")
    action_type: ActionType = Field(default=ActionType.MESSAGE, description="Action kind")
    message_to_print: str | None = Field(default=None, description="Payload for MESSAGE actions")
    command_to_run: str | None = Field(default=None, description="Payload for COMMAND actions")

    @field_validator("action_id")
    @classmethod
    def empty_id_is_none(cls, v: str | None) -> str | None:
        """Treat blank identifiers as absent."""
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def check_plugin_id(self) -> "ActionDescriptor":
        """Plugin actions must name the plugin they belong to."""
        if self.action_type == ActionType.PLUGIN and not self.action_id:
            raise ValueError("Plugin actions require a non-empty action_id")
        return self

    @property
    def is_plugin(self) -> bool:
        """True if this descriptor is backed by a plugin."""
        return self.action_type == ActionType.PLUGIN

    @property
    def is_assigned(self) -> bool:
        """False only for the default, unassigned descriptor."""
        return bool(
            self.action_id or self.action_name or self.message_to_print or self.command_to_run
        )

    @property
    def payload(self) -> str | None:
        """The one payload field that is meaningful for this action kind."""
        if self.action_type == ActionType.MESSAGE:
            return self.message_to_print
        if self.action_type == ActionType.COMMAND:
            return self.command_to_run
        return None

    @classmethod
    def unassigned(cls) -> "ActionDescriptor":
        """Descriptor held by every key slot before anything is assigned."""
        return cls()

    @classmethod
    def message(cls, name: str, text: str) -> "ActionDescriptor":
        """Create a built-in print-message action."""
        return cls(action_name=name, action_type=ActionType.MESSAGE, message_to_print=text)

    @classmethod
    def command(cls, name: str, command: str) -> "ActionDescriptor":
        """Create a built-in run-command action."""
        return cls(action_name=name, action_type=ActionType.COMMAND, command_to_run=command)

    @classmethod
    def plugin(cls, action_id: str, name: str) -> "ActionDescriptor":
        """Create a plugin-backed action."""
        return cls(action_id=action_id, action_name=name, action_type=ActionType.PLUGIN)
