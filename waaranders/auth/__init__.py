"""Authentication and role checks for Waaranders."""
