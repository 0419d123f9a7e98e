"""Centralized message constants for error messages, log templates, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    EMPTY_TRACK_TITLE = "Track title cannot be empty"
    EMPTY_SOURCE_LOCATOR = "Track source locator cannot be empty"

    # Time/Date Validation Errors
    TIMEZONE_REQUIRED = "datetime must be timezone-aware (UTC)"

    # Resolution Errors
    INVALID_SOURCE = "Invalid or unsupported media URL."
    NO_RESULTS = "No results found for your search."
    RESOLUTION_TIMEOUT = "The media lookup timed out after {timeout:g}s."

    # Queue Errors
    OUT_OF_RANGE = "Invalid queue position."
    INSUFFICIENT_ITEMS = "Not enough songs in queue to shuffle."
    EMPTY_QUEUE = "The queue is empty."
    INVALID_RANGE = "{setting} must be between 0 and 100 (got {value})."

    # Playback Errors
    NOT_PLAYING = "No music is currently playing."
    NOT_PAUSED = "Music is not paused."
    NO_ACTIVE_PLAYBACK = "No music is currently playing."
    NO_PLAYER = "No music player found."
    TRANSPORT_FAILURE = "Voice transport failure: {reason}"

    # Unsupported Operations
    SEEK_UNSUPPORTED = "Seek functionality is not available with the current audio setup."
    PREVIOUS_UNSUPPORTED = "Previous song functionality is not available in this version."
    LYRICS_UNSUPPORTED = (
        'Lyrics search for "{title}" is not available in this version. '
        "You can search for lyrics manually on a lyrics website."
    )

    # Access Errors
    USER_BLACKLISTED = "You are blacklisted from using this bot."
    SERVER_BLACKLISTED = "This server is blacklisted from using this bot."

    # Configuration Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    DISCORD_TOKEN_REQUIRED = "DISCORD__TOKEN environment variable is required"
    CONTAINER_NOT_FOUND = "Container not found on bot instance"

    # Audio/Stream Errors
    NO_URL_IN_INFO_DICT = "No URL found in info dict"
    NO_STREAM_URL_FOR_TRACK = "No stream URL found for {title}"
    NOT_CONNECTED = "Not connected to voice in guild {guild_id}"
    GUILD_NOT_FOUND = "Guild {guild_id} is not available"
    CHANNEL_NOT_VOICE = "Channel {channel_id} is not a voice channel"
    CONNECT_TIMED_OUT = "Timed out connecting to channel {channel_id}"
    CONNECT_FORBIDDEN = "Missing permission to join channel {channel_id}"


class LogTemplates:
    """Log message templates.

    Pass values as logger arguments (``logger.info(LogTemplates.X, a, b)``)
    rather than formatting them eagerly.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Blacklist
    BLACKLIST_USER_ADDED = "Blacklisted user %s (%s)"
    BLACKLIST_USER_REMOVED = "Removed user %s from blacklist"
    BLACKLIST_SERVER_ADDED = "Blacklisted server %s (%s)"
    BLACKLIST_SERVER_REMOVED = "Removed server %s from blacklist"
    BLACKLIST_DENIED = "Denied %s command from user %s in guild %s (blacklisted %s)"

    # Idle Reaper
    REAPER_STARTED = "Idle session reaper started"
    REAPER_STOPPED = "Idle session reaper stopped"
    REAPER_ALREADY_RUNNING = "Idle session reaper is already running"
    REAPER_CYCLE_FAILED = "Idle session reaper cycle failed"
    REAPER_EVICTED = "Evicted %s idle sessions"
    REAPER_EVICT_FAILED = "Failed to evict idle session for guild %s"

    # Cache Operations
    CACHE_HIT = "Cache hit for '%s'"
    CACHE_EXPIRED_PRUNED = "Pruned %d expired cache entries"

    # Voice Operations
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_MOVED = "Moved to voice channel %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_NOT_CONNECTED = "Not connected to voice in guild %s"
    VOICE_CONNECTION_LOST = "Voice connection lost in guild %s"
    VOICE_CLEANUP_ERROR = "Error during voice cleanup"
    VOICE_STALE_CLIENT = "Dropping stale voice client in guild %s"
    VOICE_DISCONNECT_FAILED = "Failed to disconnect from voice in guild %s"

    # Playback Operations
    PLAYBACK_STARTED = "Started playing '%s' in guild %s"
    PLAYBACK_STOPPED = "Stopped playback in guild %s"
    PLAYBACK_PAUSED = "Paused playback in guild %s"
    PLAYBACK_RESUMED = "Resumed playback in guild %s"
    PLAYBACK_TRANSPORT_REFUSED = "Voice client refused to %s in guild %s; queue state restored"
    PLAYBACK_SKIPPED = "Skipped '%s' in guild %s"
    PLAYBACK_START_FAILED = "Failed to start '%s' in guild %s: %s"
    PLAYBACK_HALTED = "Playback halted in guild %s after %s failed attempts"
    PLAYBACK_STREAM_ERROR = "Stream error for '%s' in guild %s: %s"
    PLAYBACK_STALE_SIGNAL = "Ignoring stale finish signal for '%s' in guild %s"
    PLAYBACK_CALLBACK_ERROR = "Error in track end callback for guild %s"
    PLAYBACK_VOLUME_CHANGED = "Volume set to %s%% in guild %s"

    # Queue Operations
    QUEUE_EXHAUSTED = "Queue exhausted in guild %s"
    QUEUE_ENQUEUED = "Enqueued track '%s' at position %s in guild %s"
    QUEUE_REMOVED = "Removed track '%s' from queue in guild %s"
    QUEUE_CLEARED = "Cleared %s tracks from queue in guild %s"
    QUEUE_SHUFFLED = "Shuffled queue in guild %s"
    QUEUE_SKIPPED_TO = "Skipped to position %s in guild %s"
    LOOP_TOGGLED = "Loop %s in guild %s"

    # Session Operations
    SESSION_CREATED = "Created session for guild %s"
    SESSION_TORN_DOWN = "Tore down session for guild %s (clear_queue=%s)"
    SESSION_DISCARDED = "Discarded session for guild %s"

    # Resolution
    RESOLVE_STARTED = "Resolving %r (url=%s)"
    RESOLVE_TIMEOUT = "Resolution of %r timed out after %ss"
    YTDLP_FAILED_INFO_TO_TRACK = "Failed to convert info to track"
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info from %s"
    YTDLP_FAILED_SEARCH = "Failed to search for %r"
    YTDLP_NO_STREAM_URL = "No stream URL found for %s"

    # Event Bus
    EVENT_HANDLER_FAILED = "Event handler failed for %s"
    ANNOUNCE_FAILED = "Failed to post announcement in guild %s"

    # Application Lifecycle
    BOT_STARTING = "Starting music queue bot in {environment} mode"
    BOT_QUEUE_CONFIG = "Blacklist database at %s; default volume %s%%; resolve timeout %ss"
    BOT_REAPER_CONFIG = "Idle sessions are evicted after %s minutes, checked every %ss"
    BOT_FFMPEG_MISSING = "ffmpeg not found on PATH; every track will fail to start"
    BOT_SETUP = "Setting up bot..."
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_FAILED = "Failed to sync commands: %s"
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"
    BOT_REAPER_STOP_ERROR = "Error stopping idle session reaper: %s"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error shutting down container: %s"
    ADMIN_COMMAND_FAILED = "Admin command failed"
    EVENT_GUILD_LEFT = "Left guild: %s (%s)"
    EVENT_UNHANDLED_COMMAND_ERROR = "Unhandled command error in '%s'"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord interactions.
    """

    # Play
    PLAY_ADDED_TO_QUEUE = "✅ Added to Queue"
    PLAY_NOW_PLAYING = "🎵 Now Playing"
    PLAY_FAILED = "❌ An error occurred while trying to play the song."

    # Actions
    ACTION_PAUSED = "⏸️ Music paused."
    ACTION_RESUMED = "▶️ Music resumed."
    ACTION_SKIPPED = "⏭️ Skipped the current song."
    ACTION_STOPPED = "⏹️ Music stopped and disconnected from voice channel."
    ACTION_QUEUE_CLEARED = "🗑️ Queue cleared!"
    ACTION_VOLUME_SET = "🔊 Volume set to {level}%"
    ACTION_BASS_BOOST_SET = (
        "🎛️ Bass boost set to {level}% (Note: this is a stored setting only and is not applied to audio)"
    )
    ACTION_LOOP_ENABLED = "🔁 Loop enabled."
    ACTION_LOOP_DISABLED = "🔁 Loop disabled."
    ACTION_SHUFFLED = "🔀 Queue shuffled!"
    ACTION_TRACK_REMOVED = "🗑️ Removed **{track_title}** from the queue."
    ACTION_SKIPPED_TO = "⏭️ Skipped to position {position} in the queue."

    # Announcements
    ANNOUNCE_QUEUE_ENDED = "🎵 Queue ended. No more songs to play."
    ANNOUNCE_TRACK_FAILED = "❌ Error playing **{track_title}**. Skipping to next..."
    ANNOUNCE_PLAYBACK_HALTED = "❌ Playback stopped: {attempts} tracks in a row failed to start."
    ANNOUNCE_CONNECTION_LOST = "⚠️ Lost the voice connection. The queue has been cleared."

    # Errors
    ERROR_PREFIX = "❌ {message}"
    ERROR_MUST_BE_IN_VOICE = "❌ You need to be in a voice channel to use this command!"
    ERROR_SERVER_ONLY = "This command can only be used in a server."
    ERROR_UNEXPECTED = "❌ Something went wrong while running that command."
    ERROR_REQUIRES_OWNER = "❌ This command is restricted to the bot owner."
    ERROR_MISSING_ARGUMENT = "❌ Missing argument: {param_name}"
    ERROR_INVALID_ARGUMENT = "❌ Invalid argument."
    ERROR_COMMAND_FAILED_SEE_LOGS = "❌ Command failed. See logs."

    # Blacklist
    BLACKLIST_USER_ADDED = "✅ Blacklisted user **{name}** (`{id}`)."
    BLACKLIST_USER_EXISTS = "⚠️ User `{id}` is already blacklisted."
    BLACKLIST_USER_REMOVED = "✅ Removed user `{id}` from the blacklist."
    BLACKLIST_USER_NOT_FOUND = "⚠️ User `{id}` is not blacklisted."
    BLACKLIST_SERVER_ADDED = "✅ Blacklisted server **{name}** (`{id}`)."
    BLACKLIST_SERVER_EXISTS = "⚠️ Server `{id}` is already blacklisted."
    BLACKLIST_SERVER_REMOVED = "✅ Removed server `{id}` from the blacklist."
    BLACKLIST_SERVER_NOT_FOUND = "⚠️ Server `{id}` is not blacklisted."
    BLACKLIST_EMPTY = "The {kind} blacklist is empty."

    # Embed Titles
    EMBED_QUEUE = "📜 Music Queue"
    EMBED_QUEUE_NOW_PLAYING = "**🎵 Now Playing:**"
    EMBED_QUEUE_UP_NEXT = "**📜 Up Next:**"
    EMBED_QUEUE_OVERFLOW = "... and {count} more songs"
    EMBED_QUEUE_FOOTER = "Total songs in queue: {count}"
    EMBED_CURRENTLY_PLAYING = "🎵 Currently Playing"
    EMBED_HELP = "🎵 Music Commands Help"
    EMBED_HELP_DESCRIPTION = "Get help with the commands in `music`"
    EMBED_BLACKLISTED_USERS = "🚫 Blacklisted Users"
    EMBED_BLACKLISTED_SERVERS = "🚫 Blacklisted Servers"
    EMBED_BLACKLIST_FOOTER = "Page {page} · {total} total"
    EMBED_BLACKLIST_FOOTER_MORE = "Page {page} · {total} total · more on page {next_page}"

    # Help sections (name, body)
    HELP_SECTIONS: tuple[tuple[str, str], ...] = (
        (
            "🎵 **Play & Control**",
            "`play` - Start the music\n`pause` - Pause the music\n"
            "`resume` - Resume the music\n`stop` - Stop the music",
        ),
        (
            "⏭️ **Navigation**",
            "`skip` - Skip the current song\n`previous` - Play previous song\n"
            "`skipto` - Skip to a new song\n`seek` - Seek the current playing music",
        ),
        (
            "📜 **Queue Management**",
            "`queue` - See the music queue\n`clear` - Delete the music queue\n"
            "`remove` - Remove a song from the queue\n`shuffle` - Shuffle the music",
        ),
        (
            "🔧 **Audio Settings**",
            "`volume` - Set the music volume\n`bassboost` - Set the bassboost level\n"
            "`loop` - Loop the music",
        ),
        (
            "📋 **Information**",
            "`playing` - See which song is playing now\n"
            "`lyrics` - Get the lyrics of the current song",
        ),
    )

    # Field labels
    FIELD_DURATION = "Duration"
    FIELD_POSITION = "Position in queue"
    FIELD_REQUESTED_BY = "Requested by"
    FIELD_VOLUME = "Volume"
    FIELD_LOOP = "Loop"
    FIELD_BASS_BOOST = "Bass boost"
    FIELD_STATE = "State"
