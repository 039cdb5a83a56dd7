"""Exception taxonomy for command handling and event bridging."""

from __future__ import annotations


class BotError(Exception):
    """Base exception for all bot-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class PreconditionError(BotError):
    """Raised when a command's voice requirement is not met. Always user-facing."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PRECONDITION_FAILED")


class CollaboratorError(BotError):
    """Raised when the playback collaborator rejects an operation.

    ``reason`` is the collaborator's own explanation and is shown to the user.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(reason, code="COLLABORATOR_REJECTED")
        self.operation = operation
        self.reason = reason


class RegistrationError(BotError):
    """Raised when the command catalog cannot be registered with Discord."""

    def __init__(self, scope: str, message: str | None = None) -> None:
        msg = message or f"Failed to register commands ({scope})"
        super().__init__(msg, code="REGISTRATION_FAILED")
        self.scope = scope


class SendFailure(BotError):
    """Raised when a rendered message cannot be delivered to a channel."""

    def __init__(self, channel_id: int | None, message: str | None = None) -> None:
        msg = message or f"Could not deliver message to channel {channel_id}"
        super().__init__(msg, code="SEND_FAILED")
        self.channel_id = channel_id


class InvalidReplyStateError(BotError):
    """Raised when an interaction acknowledgment would violate the reply-state order."""

    def __init__(self, action: str, current_state: str) -> None:
        msg = f"Cannot {action} an interaction in state '{current_state}'"
        super().__init__(msg, code="INVALID_REPLY_STATE")
        self.action = action
        self.current_state = current_state
