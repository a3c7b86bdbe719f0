"""User queries."""
