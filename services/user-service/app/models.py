"""
Pydantic models for User Service.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .domain.entities import User


class UserCreate(BaseModel):
    """User save request model. Supplying ``id`` updates that user."""

    id: Optional[int] = Field(None, description="Existing user id; omit to create")
    name: str = Field(..., description="Display name")
    email: Optional[str] = Field(None, description="Contact e-mail address")

    def to_entity(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)


class UserResponse(BaseModel):
    """User response model."""

    id: int
    name: str
    email: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(**user.to_dict())


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str
    timestamp: str
