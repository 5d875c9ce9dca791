"""Persistence layer for Waaranders."""
