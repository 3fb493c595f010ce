from __future__ import annotations

from pydantic import BaseModel

from services.user.domain.entity import User


class UserData(BaseModel):
    """User profile response model (never includes the password hash)"""

    user_id: str
    email: str
    full_name: str
    mobile_no: str | None
    profile_picture: str | None
    is_oauth_user: bool
    is_admin: bool
    created_at: str


def to_response(user: User) -> dict:
    return UserData(
        user_id=str(user.id),
        email=str(user.email),
        full_name=user.full_name,
        mobile_no=user.mobile_no,
        profile_picture=user.profile_picture,
        is_oauth_user=user.is_oauth_user,
        is_admin=user.is_admin,
        created_at=str(user.created_at),
    ).model_dump()
