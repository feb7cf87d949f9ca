"""Pydantic models exchanged over the registry HTTP API."""
