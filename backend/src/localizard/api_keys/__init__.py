"""Project API keys and their rotation."""
