"""Core components: configuration, errors, logging and uploads."""
