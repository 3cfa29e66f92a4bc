"""Release archive inspection."""
