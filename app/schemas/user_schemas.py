# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., validation_alias=AliasChoices("firstName", "first_name"))
    last_name: str = Field(..., validation_alias=AliasChoices("lastName", "last_name"))

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    """Public view of an account. The password digest is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str = Field(
        validation_alias=AliasChoices("first_name", "firstName"), serialization_alias="firstName"
    )
    last_name: str = Field(
        validation_alias=AliasChoices("last_name", "lastName"), serialization_alias="lastName"
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class ProfileResponse(BaseModel):
    user: UserOut
