from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Sign-up request schema"""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=120)
    mobile_no: str | None = Field(default=None, max_length=20, examples=["09171234567"])


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
