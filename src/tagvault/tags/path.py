"""Hierarchical tag value type.

A tag is an ordered, non-empty sequence of segments (``project/client/acme``).
The slash-joined string form is only used at I/O edges: document markers,
frontmatter values, cache keys and CLI arguments.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

SEPARATOR = "/"

# Segments that would climb out of the notes tree when joined onto a path
_RESERVED = frozenset({".", ".."})


def _clean(parts: Iterable[str]) -> tuple[str, ...]:
    """Split embedded separators, trim whitespace, drop empty segments."""
    segments: list[str] = []
    for part in parts:
        for piece in str(part).split(SEPARATOR):
            piece = piece.strip()
            if piece:
                segments.append(piece)
    return tuple(segments)


@dataclass(frozen=True, order=True)
class TagPath:
    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.segments, str):
            raise TypeError("TagPath takes a sequence of segments; use TagPath.parse() for strings")
        cleaned = _clean(self.segments)
        if not cleaned:
            raise ValueError("A tag needs at least one non-empty segment")
        for segment in cleaned:
            if segment in _RESERVED:
                raise ValueError(f"'{segment}' is not a valid tag segment")
        object.__setattr__(self, "segments", cleaned)

    @classmethod
    def parse(cls, text: str) -> TagPath:
        """Parse a slash-joined tag string.

        Raises:
            ValueError: If *text* has no non-empty segment, or a ``.``/``..`` segment.
        """
        return cls(tuple(text.split(SEPARATOR)))

    @classmethod
    def from_parts(cls, parts: Iterable[str]) -> TagPath:
        return cls(tuple(parts))

    @classmethod
    def maybe(cls, text: str) -> TagPath | None:
        """Like ``parse`` but returns None for blank or invalid input."""
        try:
            return cls.parse(text)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.join(SEPARATOR)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def join(self, separator: str) -> str:
        return separator.join(self.segments)

    def starts_with(self, other: TagPath) -> bool:
        """True if *other* is this tag or one of its ancestors."""
        n = len(other.segments)
        return n <= len(self.segments) and self.segments[:n] == other.segments


def dedupe(tags: Iterable[TagPath]) -> list[TagPath]:
    """Drop repeated tags, keeping first-seen order."""
    seen: set[str] = set()
    out: list[TagPath] = []
    for tag in tags:
        key = str(tag)
        if key not in seen:
            seen.add(key)
            out.append(tag)
    return out
