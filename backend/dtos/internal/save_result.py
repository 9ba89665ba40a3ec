"""
Save Result DTO

Outcome of a repository save.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class SaveResult:
    """
    What a save actually wrote.

    written_fields is empty when the save was a no-op.
    """

    key: str
    written_fields: Tuple[str, ...] = field(default_factory=tuple)
    version: Optional[int] = None

    @property
    def is_noop(self) -> bool:
        return not self.written_fields
