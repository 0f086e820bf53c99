"""
User Schemas
"""

from pydantic import BaseModel, Field


class RegisterUserRequest(BaseModel):
    """Request to register (or re-register) a user"""

    user_id: str = Field(min_length=1, description="Unique user identifier")
    role: str = Field(description="Free-form role, e.g. creator or backer")


class UserResponse(BaseModel):
    """Registered user"""

    user_id: str
    role: str
