"""Labels: translation keys within a project."""
