from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AuthUser(BaseModel):
    id: int
    email: str
    name: str
    avatar: str | None = None
    is_admin: bool = False

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    success: bool = True
    user: AuthUser
    token: str
    token_type: str = "bearer"


class MeResponse(BaseModel):
    user: AuthUser
