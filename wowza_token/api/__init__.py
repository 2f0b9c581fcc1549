"""HTTP API for the token service."""
