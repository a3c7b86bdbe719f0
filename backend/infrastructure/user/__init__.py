"""User infrastructure adapters.

Persistence (in-memory and MongoDB units of work) and session tokens.
"""
