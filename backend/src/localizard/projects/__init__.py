"""Projects: tenant-owned namespaces of locales and labels."""
