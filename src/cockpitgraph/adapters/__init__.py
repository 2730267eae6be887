"""Adapters connecting the domain to HTTP APIs and storage."""
