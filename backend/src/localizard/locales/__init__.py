"""Per-project locales."""
