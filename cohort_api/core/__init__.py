"""Core - configuration, auth helpers, error taxonomy, logging."""
