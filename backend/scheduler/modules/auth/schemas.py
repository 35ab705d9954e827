from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    password: str = Field(default="", max_length=200)


class SignInResponse(BaseModel):
    token: str
