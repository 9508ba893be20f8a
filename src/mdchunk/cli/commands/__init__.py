"""mdchunk CLI commands."""
