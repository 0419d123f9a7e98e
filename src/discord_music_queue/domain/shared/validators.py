"""Shared validators for Discord-specific values."""

from discord_music_queue.domain.shared.constants import LimitConstants


def validate_discord_snowflake(value: int) -> int:
    """Validate a Discord snowflake ID.

    Discord snowflake IDs are 64-bit unsigned integers identifying users,
    guilds, channels and messages.

    Raises:
        ValueError: If the snowflake ID is not positive or does not fit 64 bits.
    """
    if value <= 0:
        raise ValueError("Discord snowflake ID must be positive")
    if value >= LimitConstants.MAX_DISCORD_SNOWFLAKE:
        raise ValueError("Discord snowflake ID exceeds maximum value (2^64)")
    return value
