"""Slash-command dispatch and playback event bridge for a Discord music bot."""

__version__ = "0.1.0"
