"""
Positions and half-open ranges over source text.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Location:
    """A flat offset into the source text."""
    position: int

    def __post_init__(self):
        if self.position < 0:
            raise ValueError(f"Location position must be non-negative, got {self.position}")

    def advance(self, count: int) -> Location:
        return Location(self.position + count)


@dataclass(frozen=True, order=True)
class LocationRange:
    """
    Half-open range ``[start, end)`` over source text.

    Ordering is lexicographic over ``(start, end)``.
    """
    start: Location
    end: Location

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(
                f"Range start {self.start.position} is past its end {self.end.position}"
            )

    @classmethod
    def of(cls, start: int, end: int) -> LocationRange:
        return cls(Location(start), Location(end))

    @classmethod
    def empty(cls, at: Location) -> LocationRange:
        return cls(at, at)

    def __len__(self) -> int:
        return self.end.position - self.start.position

    def text(self, src: str) -> str:
        """Returns the slice of ``src`` covered by this range."""
        return src[self.start.position:self.end.position]

    def join(self, other: LocationRange) -> LocationRange:
        """Smallest range covering both ranges."""
        return LocationRange(min(self.start, other.start), max(self.end, other.end))

    def __repr__(self) -> str:
        return f"{self.start.position}..{self.end.position}"


__all__ = ["Location", "LocationRange"]
