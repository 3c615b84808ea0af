"""User directory schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class UserRecord(BaseModel):
    """Projected user row returned by the admin preview list."""

    id: int
    full_name: str
    username: str
    email: str | None = None
    role: str

    model_config = ConfigDict(from_attributes=True)


class UserRead(UserRecord):
    phone_number: str | None = None


class UserCreate(BaseModel):
    full_name: RequiredText
    username: RequiredText
    email: str | None = None
    password: str = Field(min_length=1)
    role: str
    phone_number: RequiredText


class UserUpdate(BaseModel):
    full_name: RequiredText
    username: RequiredText
    email: str | None = None
    role: str
    phone_number: RequiredText
