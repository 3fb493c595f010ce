from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Currency:
    """Currency code (ISO 4217)

    Supported: PHP, USD
    """

    SUPPORTED: ClassVar[frozenset[str]] = frozenset({"PHP", "USD"})

    code: str

    def __post_init__(self) -> None:
        normalized = self.code.upper()
        if normalized not in self.SUPPORTED:
            raise ValueError(
                f"Unsupported currency: {self.code}. "
                f"Supported: {', '.join(sorted(self.SUPPORTED))}"
            )
        object.__setattr__(self, "code", normalized)

    def __str__(self) -> str:
        return self.code

    @classmethod
    def php(cls) -> Currency:
        """Philippine peso"""
        return cls("PHP")

    @classmethod
    def usd(cls) -> Currency:
        """US dollar"""
        return cls("USD")
