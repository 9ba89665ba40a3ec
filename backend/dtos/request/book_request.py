"""
Book Request DTOs

DTOs for book-related use-case requests.
"""

from pydantic import BaseModel, Field, field_validator


class NewBookRequest(BaseModel):
    """
    Request DTO for registering a new book.

    Provides a clear contract for the data a new aggregate needs.
    """

    key: str = Field(description="Identity of the new book")
    title: str = Field(description="Book title")
    content: str = Field('', description="Initial body text")

    @field_validator("key", "title")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure identity and title are present."""
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "key": "B1",
                "title": "Go",
                "content": "chapter text"
            }
        }
    }
