from pydantic import BaseModel, Field


class RegisterIn(BaseModel):
    username: str = Field(min_length=3, max_length=64)
    email: str = Field(min_length=3)
    password: str = Field(min_length=6, max_length=72)


class LoginIn(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: str
    username: str
    email: str


class TokenOut(BaseModel):
    token: str
    user: UserOut


class MeOut(BaseModel):
    user: UserOut
