from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable


@dataclass
class FieldStats:
    """Live counts per species, taken between steps."""

    counts: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_population(cls, population: Iterable) -> "FieldStats":
        counter = Counter(entity.name for entity in population if entity.is_alive())
        return cls(counts=dict(counter))

    def count(self, name: str) -> int:
        return self.counts.get(name, 0)

    def total(self) -> int:
        return sum(self.counts.values())

    def is_viable(self) -> bool:
        # at least two species still alive
        return sum(1 for n in self.counts.values() if n > 0) > 1

    def describe(self) -> str:
        return " ".join(f"{name}: {n}" for name, n in sorted(self.counts.items()))
