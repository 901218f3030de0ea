"""Player rack: the tiles a search may place, with scoped take/release."""

from __future__ import annotations

from collections import Counter
from contextlib import contextmanager
from typing import Iterator, NamedTuple

from movefinder.constants import RACK_CAPACITY, WILDCARD
from movefinder.errors import InvalidRackError, RackExhaustedError


class Token(NamedTuple):
    """A tile taken from the rack; hand it back with :meth:`Rack.release`."""

    letter: str
    is_wildcard: bool


class Rack:
    """Multiset of letters plus a count of wildcard tiles.

    Searches take a tile before placing it and release it when the branch
    backtracks, so sibling branches always see the full rack. A rack is not
    shared between threads; give each worker its own :meth:`copy`.
    """

    __slots__ = ("_letters", "_wildcards", "capacity")

    def __init__(
        self,
        letters: Counter[str] | dict[str, int] | None = None,
        wildcards: int = 0,
        capacity: int = RACK_CAPACITY,
    ):
        self._letters: Counter[str] = Counter()
        for letter, count in (letters or {}).items():
            if not (isinstance(letter, str) and len(letter) == 1 and letter.isascii() and letter.isalpha()):
                raise InvalidRackError(f"rack letters must be A-Z, got {letter!r}")
            if count < 0:
                raise InvalidRackError(f"negative count for {letter!r}")
            if count:
                self._letters[letter.upper()] += count
        if wildcards < 0:
            raise InvalidRackError("negative wildcard count")
        self._wildcards = wildcards
        self.capacity = capacity
        if self.total > capacity:
            raise InvalidRackError(f"rack holds {self.total} tiles, capacity is {capacity}")

    @classmethod
    def from_string(
        cls, tray: str, capacity: int = RACK_CAPACITY, wildcard: str = WILDCARD
    ) -> Rack:
        """Parse a tray like ``"AEIRST?"`` where *wildcard* marks one blank."""
        letters: Counter[str] = Counter()
        wildcards = 0
        for ch in tray.strip():
            if ch == wildcard:
                wildcards += 1
            elif ch.isascii() and ch.isalpha():
                letters[ch.upper()] += 1
            else:
                raise InvalidRackError(
                    f"tray character {ch!r} is neither a letter nor the wildcard {wildcard!r}"
                )
        return cls(letters, wildcards, capacity)

    def copy(self) -> Rack:
        return Rack(self._letters, self._wildcards, self.capacity)

    # queries

    def available(self, letter: str) -> int:
        return self._letters[letter]

    @property
    def wildcards(self) -> int:
        return self._wildcards

    @property
    def total(self) -> int:
        return sum(self._letters.values()) + self._wildcards

    def letters(self) -> list[str]:
        """Distinct plain letters still on the rack."""
        return sorted(l for l, n in self._letters.items() if n > 0)

    def can_supply(self, letter: str) -> bool:
        return self._letters[letter] > 0 or self._wildcards > 0

    # scoped acquisition

    def take(self, letter: str) -> Token:
        if self._letters[letter] <= 0:
            raise RackExhaustedError(f"no {letter!r} tile left on the rack")
        self._letters[letter] -= 1
        return Token(letter, False)

    def take_wildcard(self, letter: str) -> Token:
        """Take a wildcard to be played as *letter*."""
        if self._wildcards <= 0:
            raise RackExhaustedError("no wildcard left on the rack")
        self._wildcards -= 1
        return Token(letter, True)

    def release(self, token: Token) -> None:
        if token.is_wildcard:
            self._wildcards += 1
        else:
            self._letters[token.letter] += 1

    @contextmanager
    def holding(self, letter: str, wildcard: bool = False) -> Iterator[Token]:
        """Take a tile for the duration of a ``with`` block."""
        token = self.take_wildcard(letter) if wildcard else self.take(letter)
        try:
            yield token
        finally:
            self.release(token)

    def __str__(self) -> str:
        tiles = "".join(sorted(self._letters.elements()))
        return tiles + WILDCARD * self._wildcards

    def __repr__(self) -> str:
        return f"Rack({str(self)!r}, capacity={self.capacity})"
