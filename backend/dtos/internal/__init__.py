"""
Internal DTOs

DTOs passed between repositories and services.
These are not part of the domain model.
"""

from .save_result import SaveResult

__all__ = ["SaveResult"]
