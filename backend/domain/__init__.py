"""Domain layer for credential authentication.

Pure business logic, decoupled from persistence and transport.
"""
