"""User request/response schemas."""

from pydantic import BaseModel


class CreateUserRequest(BaseModel):
    username: str
    password: str
    first_name: str
    last_name: str
    organisation: str


class UpdateUserRequest(BaseModel):
    first_name: str
    last_name: str
    organisation: str


class UserResponse(BaseModel):
    id: int
    username: str
    first_name: str
    last_name: str
    organisation: str
    is_admin: bool
    blocked: bool

    class Config:
        from_attributes = True
