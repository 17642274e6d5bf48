"""HTTP API for the draft service."""
