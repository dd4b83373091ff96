"""Access decisions for owner sessions, API keys and public projects."""
