"""Explicit outcome values for action execution."""

from typing import Any

from pydantic import BaseModel, Field


class ExecutionResult(BaseModel):
    """Outcome of executing one action."""

    success: bool = Field(description="True if the action completed")
    error: str | None = Field(default=None, description="Failure text when success is False")
    action_name: str | None = Field(default=None, description="Name of the executed action")

    @classmethod
    def ok(cls, action_name: str | None = None) -> "ExecutionResult":
        """Successful outcome."""
        return cls(success=True, action_name=action_name)

    @classmethod
    def failed(cls, error: str, action_name: str | None = None) -> "ExecutionResult":
        """Failed outcome."""
        return cls(success=False, error=error, action_name=action_name)

    @classmethod
    def coerce(cls, value: Any, action_name: str | None = None) -> "ExecutionResult":
        """
        Normalise whatever an action returned into an ExecutionResult.

        Accepted return values:
            - None or True: success
            - False: failure without detail
            - (success, error) tuple, success judged by truthiness
            - an ExecutionResult (passed through, name filled in if missing)

        Anything else counts as success; plugins are free to return data.
        """
        if isinstance(value, ExecutionResult):
            if value.action_name is None and action_name is not None:
                return value.model_copy(update={"action_name": action_name})
            return value
        if value is None or value is True:
            return cls.ok(action_name)
        if value is False:
            return cls.failed("action reported failure", action_name)
        if isinstance(value, tuple) and len(value) == 2:
            success, error = value
            if bool(success):
                return cls.ok(action_name)
            return cls.failed(str(error) if error else "action reported failure", action_name)
        return cls.ok(action_name)
