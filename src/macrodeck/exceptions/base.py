"""Root of the macrodeck exception hierarchy."""

from typing import Optional


class MacroDeckError(Exception):
    """
    Base class for errors macrodeck reports to the user.

    Every error carries two renderings: ``user_message`` is what the CLI
    prints, ``technical_message`` is what goes to the log file. ``str(error)``
    gives the user message.

    Attributes:
        user_message: Short, user-facing description
        technical_message: Log-facing description (defaults to user_message)
        recoverable: True when the app can carry on after reporting it
        recovery_hint: What the user can do about it, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message
