"""Output renderers for engine nodes."""
