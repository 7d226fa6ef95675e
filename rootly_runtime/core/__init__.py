"""Core runtime state, configuration and logging."""
