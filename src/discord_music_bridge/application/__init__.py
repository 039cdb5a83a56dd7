"""
Application Layer

Port interfaces the command handlers and event bridge depend on.

Structure:
- interfaces/: Playback collaborator, track source, and lyrics provider ports
"""
