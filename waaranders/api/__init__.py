"""HTTP API for Waaranders."""
