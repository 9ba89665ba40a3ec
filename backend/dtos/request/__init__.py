"""
Request DTOs

DTOs for incoming use-case requests. These decouple callers from the
aggregates and provide a clear contract for what data a use case expects.
"""

from .book_request import NewBookRequest

__all__ = ["NewBookRequest"]
