"""Pydantic request/response schemas for the preview API."""
