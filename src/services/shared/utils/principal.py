from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Caller identity injected by the Lambda authorizer"""

    user_id: str
    email: str
    is_admin: bool = False

    def to_context(self) -> dict:
        """API Gateway authorizer context (flat, primitive values only)"""
        return {
            "user_id": self.user_id,
            "email": self.email,
            "is_admin": "true" if self.is_admin else "false",
        }

    @classmethod
    def from_context(cls, context: dict) -> Principal | None:
        user_id = context.get("user_id")
        if not user_id:
            return None
        is_admin = str(context.get("is_admin", "false")).lower() == "true"
        return cls(
            user_id=str(user_id),
            email=str(context.get("email", "")),
            is_admin=is_admin,
        )

    def can_access(self, owner_id: str) -> bool:
        """Owner or admin"""
        return self.is_admin or self.user_id == owner_id
