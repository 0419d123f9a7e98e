"""Discord integration - bot, cogs and voice adapter."""
