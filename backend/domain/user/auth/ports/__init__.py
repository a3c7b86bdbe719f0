"""Authentication ports."""
