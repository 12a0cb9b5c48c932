"""
Shared plumbing: configuration, logging, errors, validation
predicates, password hashing and the database engine.
"""
