"""Discord cogs loaded as bot extensions."""
