"""
Species descriptors.

Every entity carries a SpeciesSpec. The descriptor's `kind` selects the
behaviour (producer growth or consumer hunting/breeding) and its numbers
parameterise it, so a new species is a new descriptor rather than a subclass.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet


class Kind(Enum):
    PRODUCER = "producer"
    CONSUMER = "consumer"


@dataclass(frozen=True)
class SpeciesSpec:
    name: str
    kind: Kind
    max_age: int
    # producers
    growth_rate: int = 0
    growth_probability: float = 0.0
    # consumers
    breeding_age: int = 0
    breeding_probability: float = 0.0
    max_litter_size: int = 1
    food_value: int = 0
    diet: FrozenSet[str] = field(default_factory=frozenset)
    mate_radius: int = 2
    birth_radius: int = 2

    @property
    def is_producer(self) -> bool:
        return self.kind is Kind.PRODUCER

    @property
    def is_consumer(self) -> bool:
        return self.kind is Kind.CONSUMER

    def can_eat(self, other: "SpeciesSpec") -> bool:
        return self.is_consumer and other.name in self.diet


ACACIA = SpeciesSpec(
    name="Acacia",
    kind=Kind.PRODUCER,
    max_age=10,
    growth_rate=1,
    growth_probability=0.05,
    birth_radius=1,
)

GRASS = SpeciesSpec(
    name="Grass",
    kind=Kind.PRODUCER,
    max_age=6,
    growth_rate=2,
    growth_probability=0.1,
    birth_radius=1,
)

RABBIT = SpeciesSpec(
    name="Rabbit",
    kind=Kind.CONSUMER,
    max_age=50,
    breeding_age=3,
    breeding_probability=0.16,
    max_litter_size=3,
    food_value=50,
    diet=frozenset({"Grass"}),
)

GIRAFFE = SpeciesSpec(
    name="Giraffe",
    kind=Kind.CONSUMER,
    max_age=50,
    breeding_age=8,
    breeding_probability=0.09,
    max_litter_size=2,
    food_value=50,
    diet=frozenset({"Acacia"}),
)

BUILTIN_SPECIES: Dict[str, SpeciesSpec] = {
    spec.name: spec for spec in (ACACIA, GRASS, RABBIT, GIRAFFE)
}
