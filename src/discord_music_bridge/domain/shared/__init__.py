"""
Shared Domain Kernel

Contains exceptions, message constants and types shared across the project.
"""

from discord_music_bridge.domain.shared.exceptions import (
    BotError,
    CollaboratorError,
    InvalidReplyStateError,
    PreconditionError,
    RegistrationError,
    SendFailure,
)

__all__ = [
    "BotError",
    "CollaboratorError",
    "InvalidReplyStateError",
    "PreconditionError",
    "RegistrationError",
    "SendFailure",
]
