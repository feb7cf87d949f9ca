"""Credential resolution and per-request identity for the registry API."""
