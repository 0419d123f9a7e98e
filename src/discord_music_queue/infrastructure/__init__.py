"""Infrastructure layer - adapters for Discord, yt-dlp, SQLite and background jobs."""
