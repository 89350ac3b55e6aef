"""Core infrastructure: configuration, logging and events."""
