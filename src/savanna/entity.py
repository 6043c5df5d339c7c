"""
Entities living on the field.

A single Entity class covers producers and consumers; the species descriptor
decides which branch of `act` runs. Entities mutate the field directly while
they act, so later entities in the same step see the result immediately.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from savanna.field import Field
from savanna.location import Location
from savanna.randomizer import Randomizer
from savanna.species import SpeciesSpec

logger = logging.getLogger(__name__)


class Entity:
    def __init__(
        self,
        species: SpeciesSpec,
        field: Field,
        location: Location,
        rng: Randomizer,
        random_age: bool = False,
        female: bool = False,
    ):
        self.species = species
        self.field = field
        self.rng = rng
        self.female = female
        self.alive = True
        self.death_cause: Optional[str] = None
        self.location = location
        if random_age:
            self.age = rng.next_int(species.max_age)
            self.food_level = rng.next_int(species.food_value) if species.is_consumer else 0
        else:
            self.age = 0
            self.food_level = species.food_value if species.is_consumer else 0
        field.place(self, location)

    def __repr__(self) -> str:
        state = "alive" if self.alive else f"dead({self.death_cause})"
        return f"{self.species.name}@{self.location} age={self.age} {state}"

    @property
    def name(self) -> str:
        return self.species.name

    def is_alive(self) -> bool:
        return self.alive

    def set_dead(self, cause: str) -> None:
        """Flag the entity dead. The field cell is released when the step is reconciled."""
        if not self.alive:
            return
        self.alive = False
        self.death_cause = cause
        logger.debug("%s died: %s", self, cause)

    def set_location(self, new_location: Location) -> None:
        if self.field.occupant_at(self.location) is self:
            self.field.clear(self.location)
        self.location = new_location
        self.field.place(self, new_location)

    def act(self, newborns: List["Entity"]) -> None:
        if not self.alive:
            return
        if self.species.is_producer:
            self._act_producer(newborns)
        else:
            self._act_consumer(newborns)

    # ------------------------------------------------------------------
    # shared lifecycle
    # ------------------------------------------------------------------
    def increment_age(self) -> None:
        self.age += 1
        if self.age > self.species.max_age:
            self.set_dead("age")

    def increment_hunger(self) -> None:
        self.food_level -= 1
        if self.food_level <= 0:
            self.set_dead("starvation")

    def _spawn(self, births: int, free: List[Location], newborns: List["Entity"]) -> int:
        born = 0
        while born < births and free:
            where = free.pop(0)
            female = self.rng.next_boolean()
            young = Entity(self.species, self.field, where, self.rng, female=female)
            newborns.append(young)
            born += 1
        if born:
            logger.debug("%s produced %d offspring", self, born)
        return born

    # ------------------------------------------------------------------
    # producers
    # ------------------------------------------------------------------
    def _act_producer(self, newborns: List["Entity"]) -> None:
        self.increment_age()
        if self.alive:
            self.grow(newborns)

    def _growth_births(self) -> int:
        total = 0
        for _ in range(self.species.growth_rate):
            if self.rng.next_double() <= self.species.growth_probability:
                total += 1
        return total

    def grow(self, newborns: List["Entity"]) -> int:
        free = self.field.free_neighbors(self.location, self.species.birth_radius)
        births = self._growth_births()
        return self._spawn(births, free, newborns)

    # ------------------------------------------------------------------
    # consumers
    # ------------------------------------------------------------------
    def _act_consumer(self, newborns: List["Entity"]) -> None:
        self.increment_age()
        self.increment_hunger()
        if not self.alive:
            return
        if self.female:
            self.give_birth(newborns)
        new_location = self.find_food()
        if new_location is None:
            new_location = self.field.free_adjacent_location(self.location)
        if new_location is not None:
            self.set_location(new_location)
        else:
            self.set_dead("overcrowding")

    def can_breed(self) -> bool:
        return self.age >= self.species.breeding_age

    def has_mate_nearby(self) -> bool:
        for where in self.field.neighbors(self.location, self.species.mate_radius):
            other = self.field.occupant_at(where)
            if (
                other is not None
                and other.alive
                and other.species.name == self.species.name
                and other.female != self.female
            ):
                return True
        return False

    def breed(self) -> int:
        """Number of births this step; zero when too young, unlucky or alone."""
        births = 0
        if self.can_breed() and self.rng.next_double() <= self.species.breeding_probability:
            births = self.rng.next_int(self.species.max_litter_size) + 1
        if not self.has_mate_nearby():
            return 0
        return births

    def give_birth(self, newborns: List["Entity"]) -> int:
        free = self.field.free_neighbors(self.location, self.species.birth_radius)
        births = self.breed()
        return self._spawn(births, free, newborns)

    def find_food(self) -> Optional[Location]:
        """Eat the first live prey among the adjacent cells and return where it was."""
        for where in self.field.neighbors(self.location, 1):
            prey = self.field.occupant_at(where)
            if prey is not None and prey.alive and self.species.can_eat(prey.species):
                prey.set_dead("eaten")
                self.food_level = self.species.food_value
                return where
        return None
