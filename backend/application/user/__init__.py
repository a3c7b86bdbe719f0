"""User application layer: commands, queries and the auth service."""
