"""
Step driver for the savanna field.

One step is one pass over a snapshot of the live population. Entities act in
snapshot order and change the field as they go; newborns are collected on the
side and only join the population once the pass is over. The dead are then
dropped from the population and their cells released.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from savanna.config import SimulationConfig
from savanna.entity import Entity
from savanna.field import Field, InvalidPlacement
from savanna.location import Location
from savanna.randomizer import Randomizer
from savanna.species import SpeciesSpec
from savanna.stats import FieldStats

logger = logging.getLogger(__name__)


class Simulator:
    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        rng: Optional[Randomizer] = None,
        populate: bool = True,
    ):
        self.config = (config or SimulationConfig()).validate()
        self.rng = rng if rng is not None else Randomizer(self.config.seed)
        self.field = Field(self.config.depth, self.config.width)
        self._population: List[Entity] = []
        self.step_count = 0
        self._stepping = False
        if populate:
            self.populate()

    @property
    def population(self) -> Tuple[Entity, ...]:
        return tuple(self._population)

    def add(
        self,
        species: SpeciesSpec,
        location: Location,
        female: bool = False,
        random_age: bool = False,
    ) -> Entity:
        """Seed one entity. Raises InvalidPlacement when the location is off the field or taken."""
        occupant = self.field.occupant_at(location)
        if occupant is not None:
            raise InvalidPlacement(f"Location {location} already occupied by {occupant.name}")
        entity = Entity(species, self.field, location, self.rng, random_age=random_age, female=female)
        self._population.append(entity)
        return entity

    def populate(self) -> None:
        probabilities = self.config.creation_probabilities
        for location in self.field.locations():
            for spec in self.config.species:
                if self.rng.next_double() <= probabilities.get(spec.name, 0.0):
                    female = self.rng.next_boolean()
                    self.add(spec, location, female=female, random_age=True)
                    break
        logger.debug("Populated field: %s", self.stats().describe())

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.reset(seed)
        self.step_count = 0
        self._population.clear()
        self.field.clear_all()
        self.populate()

    def step(self) -> Dict[str, int]:
        if self._stepping:
            raise RuntimeError("Simulator.step() is not reentrant")
        self._stepping = True
        try:
            newborns: List[Entity] = []
            for entity in list(self._population):
                if entity.is_alive():
                    entity.act(newborns)
            return self._reconcile(newborns)
        finally:
            self._stepping = False

    def _reconcile(self, newborns: List[Entity]) -> Dict[str, int]:
        survivors = []
        deaths = 0
        for entity in self._population + newborns:
            if entity.is_alive():
                survivors.append(entity)
                continue
            deaths += 1
            if self.field.occupant_at(entity.location) is entity:
                self.field.clear(entity.location)
        births = sum(1 for young in newborns if young.is_alive())
        self._population = survivors
        self.step_count += 1
        return {"births": births, "deaths": deaths}

    def simulate(self, num_steps: int, log_every: int = 10) -> int:
        """Run up to `num_steps` steps, stopping once the field is no longer viable."""
        ran = 0
        for step_idx in range(num_steps):
            if not self.is_viable():
                logger.info("Field no longer viable at step %d", self.step_count)
                break
            events = self.step()
            ran += 1
            if log_every > 0 and (step_idx % log_every == 0 or step_idx == num_steps - 1):
                logger.info(
                    "step=%04d %s births=%d deaths=%d",
                    self.step_count,
                    self.stats().describe(),
                    events["births"],
                    events["deaths"],
                )
        return ran

    def occupant_at(self, location: Location) -> Optional[Entity]:
        return self.field.occupant_at(location)

    def stats(self) -> FieldStats:
        return FieldStats.from_population(self._population)

    def counts(self) -> Dict[str, int]:
        return self.stats().counts

    def is_viable(self) -> bool:
        return self.stats().is_viable()
