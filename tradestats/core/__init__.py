"""Logging, configuration, constants and errors."""
