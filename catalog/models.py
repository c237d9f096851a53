"""
Pydantic models for catalog data.
Implements the Book and User records held by the in-memory stores.
"""

from typing import Dict

from pydantic import BaseModel, Field, field_validator


class Book(BaseModel):
    """
    Book record. The ISBN is the key in the catalog mapping and is not
    repeated in the record itself.
    """
    author: str = Field(..., description="Book author")
    title: str = Field(..., description="Book title")
    reviews: Dict[str, str] = Field(default_factory=dict, description="Reviews keyed by username")

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "author": "Chinua Achebe",
                "title": "Things Fall Apart",
                "reviews": {"alice": "great book"}
            }
        }


class User(BaseModel):
    """Registered user. Passwords are kept as given."""
    username: str = Field(..., min_length=1, description="Unique username")
    password: str = Field(..., description="Plaintext password")

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        """Reject whitespace-only usernames."""
        if not v.strip():
            raise ValueError('username must not be blank')
        return v
