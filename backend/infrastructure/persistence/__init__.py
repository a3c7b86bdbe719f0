"""Persistence helpers shared by the adapters."""
