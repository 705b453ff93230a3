"""Core infrastructure: settings, render configuration, logging and errors."""
