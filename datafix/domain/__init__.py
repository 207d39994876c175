"""
Domain Layer - fixture references, lifecycle events and collaborator interfaces.
"""
