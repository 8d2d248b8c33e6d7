"""Core infrastructure: configuration, logging, metrics and errors."""
