"""Discrete-time predator/prey ecosystem on a bounded grid."""
from savanna.config import ConfigError, SimulationConfig, build_config, load_config
from savanna.entity import Entity
from savanna.field import Field, InvalidPlacement
from savanna.location import Location
from savanna.randomizer import Randomizer
from savanna.simulator import Simulator
from savanna.species import ACACIA, GIRAFFE, GRASS, RABBIT, Kind, SpeciesSpec
from savanna.stats import FieldStats

__all__ = [
    "ACACIA",
    "GIRAFFE",
    "GRASS",
    "RABBIT",
    "ConfigError",
    "Entity",
    "Field",
    "FieldStats",
    "InvalidPlacement",
    "Kind",
    "Location",
    "Randomizer",
    "SimulationConfig",
    "Simulator",
    "SpeciesSpec",
    "build_config",
    "load_config",
]
