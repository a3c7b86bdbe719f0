"""User domain module.

Credential authentication: email and password value objects, the User
aggregate, the events it produces, and the persistence ports the
application layer drives inside one transaction.
"""
