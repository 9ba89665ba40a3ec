"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple callers from the aggregates and the
database models.

Structure:
- request/: DTOs for incoming use-case requests
- internal/: DTOs returned by repositories and services
"""
