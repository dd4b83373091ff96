"""Translation values, batch upserts and resolution into published maps."""
