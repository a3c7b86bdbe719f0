"""Authentication concerns of the user domain."""
