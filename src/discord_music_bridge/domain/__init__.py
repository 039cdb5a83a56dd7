"""
Domain Layer

Pure data and rules, free of Discord I/O:
- shared/: Exceptions, message catalogues, constrained types, service state
- playback/: Track, queue snapshot, loop mode, lifecycle events
- commands/: The declarative slash-command catalog
"""

from discord_music_bridge.domain.shared.exceptions import BotError

__all__ = [
    "BotError",
]
