from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    remember_me: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LoginResponse(BaseModel):
    success: bool = True
    username: str


class AuthCheck(BaseModel):
    authenticated: bool
