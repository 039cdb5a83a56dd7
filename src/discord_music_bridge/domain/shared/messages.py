"""Centralized message constants for error messages, log templates, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Configuration
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."

    # Catalog
    DUPLICATE_COMMAND = "Duplicate command name in catalog: {name}"
    CLIENT_ID_REQUIRED = "DISCORD_CLIENT_ID is required to register commands"

    # Playback collaborator
    NO_ACTIVE_PLAYER = "No active player in this server"
    NOTHING_PLAYING = "Nothing is playing"
    NO_TRACKS_FOUND = "No tracks found for '{query}'"
    INVALID_POSITION = "Invalid position: {position}"
    INVALID_VOLUME = "Volume must be between {minimum} and {maximum}"
    QUEUE_CURRENT_IN_UPCOMING = "The current track cannot also be in the upcoming queue"

    # Readiness
    ALREADY_READY = "Service is already ready"


class LogTemplates:
    """Log message templates for %-style logging calls."""

    # Application Lifecycle
    BOT_STARTING = "Starting Discord Music Bridge in {environment} mode"
    BOT_COMMAND_SCOPE = "Slash commands will be registered %s"
    LOGGING_CONFIG_FALLBACK = "Could not load %s, falling back to basic console logging"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized successfully"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete (state=%s)"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %.1fs"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"
    BOT_EVENT_ERROR = "Unhandled error in gateway event '%s'"
    SERVICE_READY = "Service state changed to READY"
    SERVICE_NOT_READY = "Commands remain unavailable: service state is %s"

    # Process-level error survival
    UNHANDLED_LOOP_EXCEPTION = "Unhandled exception in event loop: %s"
    UNCAUGHT_EXCEPTION = "Uncaught exception: %s"

    # Command Registration
    REGISTRATION_STARTED = "Registering %d slash commands (%s)"
    REGISTERED_GUILD = "Registered %d commands to guild %s"
    REGISTERED_GLOBAL = "Registered %d commands globally"
    REGISTRATION_FAILED = "Failed to register slash commands: %s"

    # Dispatch
    DISPATCH_NOT_READY = "Rejected '/%s' from user %s: service is initializing"
    DISPATCH_UNKNOWN_COMMAND = "Ignoring unregistered command '/%s'"
    DISPATCH_COMMAND = "Dispatching '/%s' in guild %s from user %s"
    DISPATCH_HANDLER_FAILED = "Handler for '/%s' failed: %s"
    DISPATCH_ERROR_REPLY_FAILED = "Failed to deliver error reply for '/%s': %s"
    GUARD_REJECTED = "Voice guard rejected '/%s' from user %s: %s"

    # Playback collaborator
    PLAYBACK_INITIALIZED = "Playback controller initialized"
    PLAYBACK_SHUTDOWN = "Playback controller shut down (%d players)"
    PLAYER_CREATED = "Created player for guild %s"
    PLAYER_DESTROYED = "Destroyed player for guild %s"
    TRACK_ENQUEUED = "Enqueued '%s' in guild %s (queue length %d)"
    TRACK_STARTED = "Started playing '%s' in guild %s"
    TRACK_SKIPPED = "Skipped '%s' in guild %s"
    QUEUE_SHUFFLED = "Shuffled %d tracks in guild %s"
    QUEUE_MOVED = "Moved track from %d to %d in guild %s"
    QUEUE_REMOVED = "Removed '%s' at %d in guild %s"
    LOOP_MODE_CHANGED = "Loop mode changed to %s in guild %s"
    VOLUME_CHANGED = "Volume changed to %d in guild %s"

    # Event stream
    EVENT_SUBSCRIBED = "Subscribed listener %s to playback events"
    EVENT_UNSUBSCRIBED = "Unsubscribed listener %s from playback events"
    EVENT_LISTENER_FAILED = "Error in playback event listener for %s: %s"

    # Event bridge
    BRIDGE_STARTED = "Playback event bridge started"
    BRIDGE_STOPPED = "Playback event bridge stopped"
    BRIDGE_TRACK_ENDED = "Track ended in guild %s: '%s' (%s)"
    BRIDGE_QUEUE_ENDED = "Queue ended in guild %s"
    BRIDGE_QUEUE_CLEARED = "Queue cleared in guild %s (%d tracks)"
    BRIDGE_DISCONNECTED = "Player disconnected in guild %s"
    BRIDGE_PLAYER_ERROR = "Player error in guild %s: %s"
    BRIDGE_TRACK_ERROR = "Track error in guild %s for '%s': %s"
    BRIDGE_NO_CHANNEL = "No text channel for %s in guild %s; notice not sent"
    BRIDGE_SEND_FAILED = "Failed to send %s notice: %s"

    # Track source / lyrics
    YTDLP_FAILED_SEARCH = "Failed to search for %r"
    YTDLP_SKIPPED_ENTRY = "Skipped unusable search entry: %s"
    YTDLP_PROVIDER_FALLBACK = "Provider %s is resolved through %s"
    LYRICS_REQUEST_FAILED = "Lyrics lookup failed for %r: %s"
    LYRICS_NOT_FOUND = "No lyrics found for %r"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord interactions.
    Keep them concise, friendly, and include appropriate emoji.
    """

    # Readiness / dispatch
    STATE_INITIALIZING = "⏳ The bot is still starting up. Try again in a few seconds."
    ERROR_OCCURRED = "An error occurred: {error}"

    # Voice guard
    STATE_SERVER_ONLY = "This command can only be used in a server."
    STATE_NEED_TO_BE_IN_VOICE = "You need to be in a voice channel first."
    STATE_VERIFY_VOICE_FAILED = "Could not verify your voice state."
    ERROR_BOT_CANNOT_CONNECT = "I don't have permission to connect to or speak in {channel}."

    # Playback
    ACTION_TRACK_QUEUED = "Added to queue"
    ACTION_PAUSED = "⏸️ Paused playback."
    ACTION_RESUMED = "▶️ Resumed playback."
    ACTION_SKIPPED = "⏭️ Skipped: **{track_title}**"
    ACTION_STOPPED = "⏹️ Stopped playback and cleared the queue."
    ACTION_VOLUME_SET = "🔊 Volume set to **{level}%**"
    STATE_NO_ACTIVE_PLAYER = "There is no active player in this server."
    STATE_NOTHING_PLAYING = "Nothing is playing."
    STATE_ALREADY_PAUSED = "Playback is already paused."
    STATE_ALREADY_PLAYING = "Playback is already running."
    ERROR_INVALID_VOLUME = "Volume must be between {minimum} and {maximum}."

    # Queue
    ACTION_SHUFFLED = "🔀 Shuffled **{count}** tracks."
    ACTION_LOOP_MODE_SET = "🔁 Loop mode: **{mode}**"
    ACTION_TRACK_REMOVED = "🗑️ Removed: **{track_title}**"
    ACTION_TRACK_MOVED = "↕️ Moved **{track_title}** from position {from_position} to {to_position}."
    ACTION_RELATED_ADDED = "Added **{count}** related tracks based on **{seed_title}**."
    STATE_QUEUE_EMPTY = "Queue is empty."
    STATE_NOT_ENOUGH_TRACKS_TO_SHUFFLE = "Not enough tracks to shuffle."
    STATE_NO_RELATED_TRACKS = "No related tracks were found for **{seed_title}**."
    ERROR_INVALID_POSITION = "Invalid position: {position}. The queue has {size} tracks."
    ERROR_INVALID_LOOP_MODE = "Invalid loop mode: {mode}. Use 0 (off), 1 (track) or 2 (queue)."
    QUEUE_MORE_SUFFIX = "+{count} more"

    # Library
    STATE_NO_SEARCH_RESULTS = "No results for **{query}**."
    STATE_NO_LYRICS = "No lyrics found for **{query}**."
    STATE_LYRICS_NEED_QUERY = "Nothing is playing. Provide a song name to look up lyrics."
    LYRICS_VIEW_FULL = "[View full lyrics]({url})"

    # Voice lifecycle
    ACTION_JOINED = "✅ Joined **{channel}**."
    ACTION_DISCONNECTED = "👋 Disconnected from the voice channel."
    STATE_NOT_CONNECTED_TO_VOICE = "Not connected to a voice channel."

    # Event bridge notices
    EVENT_TRACK_ADDED = "Added to queue (position #{position})"
    EVENT_TRACK_ERROR = "Could not play **{track_title}**, skipping."

    # Embed Titles
    EMBED_NOW_PLAYING = "🎵 Now Playing"
    EMBED_QUEUE = "📋 Queue"
    EMBED_SEARCH_RESULTS = "🔍 Search results"
    EMBED_LYRICS = "📝 {title}"
    EMBED_ERROR = "❌ Error"
    EMBED_NOTICE = "ℹ️ Notice"
    EMBED_TRACK_ADDED = "✅ Track added"
    EMBED_TRACK_ERROR = "⚠️ Playback error"
    EMBED_RELATED = "📻 Related tracks"


class EmojiConstants:
    """Emoji constants for consistent visual feedback."""

    PROGRESS_FILLED = "▰"
    PROGRESS_EMPTY = "▱"
    PLAY = "▶️"
    PAUSE = "⏸️"
    MUSIC_NOTE = "🎵"
