"""SQLite persistence for the user and server blacklists."""
