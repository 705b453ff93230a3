"""ASGI middleware and logging setup."""
