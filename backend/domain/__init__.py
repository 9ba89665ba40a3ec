"""
Domain Layer

This package contains the core business domain logic, separated from
persistence concerns and infrastructure.

Structure:
- value_objects/: Immutable value types without identity
- aggregates/: Aggregate roots that group related state

Nothing in here imports from repositories/; persistence-specific subclasses
of the aggregates are defined on the other side of that boundary.
"""
