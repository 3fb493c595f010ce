from __future__ import annotations

import secrets
from dataclasses import dataclass


@dataclass(frozen=True)
class SessionId:
    """Opaque session id carried in the ``sid`` cookie"""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("SessionId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> SessionId:
        return cls(value=secrets.token_urlsafe(32))
