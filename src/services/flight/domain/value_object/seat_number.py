from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

SEAT_LETTERS = "ABCDEF"


@dataclass(frozen=True, order=True)
class SeatNumber:
    """Seat number: row (from 1) + letter A-F, e.g. "12C"

    Seats are laid out six abreast, so the n-th seat of a flight
    (0-based) is row ``n // 6 + 1``, letter ``SEAT_LETTERS[n % 6]``.
    """

    row: int
    letter: str

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^(\d{1,3})([A-F])$")

    def __post_init__(self) -> None:
        letter = self.letter.upper()
        if self.row < 1 or letter not in SEAT_LETTERS or len(letter) != 1:
            raise ValueError(f"Invalid seat: {self.row}{self.letter}")
        object.__setattr__(self, "letter", letter)

    def __str__(self) -> str:
        return f"{self.row}{self.letter}"

    @classmethod
    def parse(cls, value: str) -> SeatNumber:
        match = cls.PATTERN.match(value.strip().upper())
        if not match:
            raise ValueError(f"Invalid seat number: {value}")
        return cls(row=int(match.group(1)), letter=match.group(2))

    @classmethod
    def from_index(cls, index: int) -> SeatNumber:
        return cls(row=index // 6 + 1, letter=SEAT_LETTERS[index % 6])

    @property
    def index(self) -> int:
        """0-based position in the cabin"""
        return (self.row - 1) * 6 + SEAT_LETTERS.index(self.letter)

    @property
    def sort_key(self) -> str:
        """Zero-padded key so seats sort in cabin order"""
        return f"{self.row:03d}{self.letter}"
