from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable


@dataclass(frozen=True)
class StopWordSet:
    """
    Normalized stop words (trimmed, lower-cased, non-empty).

    Instances are immutable; ``load`` always builds a new set, so loading a
    second list replaces the first instead of merging into it.
    """

    words: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def load(cls, lines: Iterable[str]) -> "StopWordSet":
        # lines = ["  The", "a", "", "THE"]  ->  {"the", "a"}
        normalized = (line.strip().lower() for line in lines)
        return cls(words=frozenset(w for w in normalized if w))

    def contains(self, word: str) -> bool:
        return word in self.words

    def __contains__(self, word: object) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)
