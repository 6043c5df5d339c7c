"""
Simulation configuration.

Defaults live in SimulationConfig. A JSON file can seed the config and a dict
of overrides is applied on top, mirroring how quick runs are usually tweaked.

JSON layout::

    {
      "depth": 40,
      "width": 60,
      "seed": 7,
      "creation_probabilities": {"Rabbit": 0.08},
      "species": [
        {"name": "Rabbit", "breeding_probability": 0.2},
        {"name": "Zebra", "kind": "consumer", "max_age": 40, "food_value": 20,
         "diet": ["Grass"], "breeding_age": 5, "breeding_probability": 0.1}
      ]
    }

A species entry whose name matches a configured species overrides only the
given fields of that species; any other name adds a new species, which must
at least give its kind and max_age.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, Optional, Tuple
import json

from savanna.species import BUILTIN_SPECIES, Kind, SpeciesSpec


class ConfigError(ValueError):
    """Raised for an invalid or inconsistent simulation configuration."""


DEFAULT_CREATION_PROBABILITIES: Dict[str, float] = {
    "Giraffe": 0.02,
    "Rabbit": 0.08,
    "Acacia": 0.06,
    "Grass": 0.1,
}


@dataclass
class SimulationConfig:
    depth: int = 80
    width: int = 120
    seed: Optional[int] = None
    species: Tuple[SpeciesSpec, ...] = field(
        default_factory=lambda: tuple(
            BUILTIN_SPECIES[name] for name in ("Giraffe", "Rabbit", "Acacia", "Grass")
        )
    )
    creation_probabilities: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_CREATION_PROBABILITIES)
    )

    def species_by_name(self, name: str) -> SpeciesSpec:
        for spec in self.species:
            if spec.name == name:
                return spec
        raise ConfigError(f"Unknown species: {name}")

    def validate(self) -> "SimulationConfig":
        for name in ("depth", "width"):
            if not _is_int(getattr(self, name)):
                raise ConfigError(f"{name} must be an integer, got {getattr(self, name)!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigError(f"seed must be an integer or None, got {self.seed!r}")
        if self.depth <= 0 or self.width <= 0:
            raise ConfigError(f"Field size must be positive, got {self.depth}x{self.width}")
        for spec in self.species:
            if not isinstance(spec, SpeciesSpec):
                raise ConfigError(f"Species must be SpeciesSpec instances, got {spec!r}")
        names = [spec.name for spec in self.species]
        if len(set(names)) != len(names):
            raise ConfigError(f"Duplicate species names: {names}")
        for spec in self.species:
            _validate_species(spec, set(names))
        if not isinstance(self.creation_probabilities, dict):
            raise ConfigError("creation_probabilities must be a mapping")
        for name, probability in self.creation_probabilities.items():
            if name not in names:
                raise ConfigError(f"Creation probability given for unknown species: {name}")
            if not _is_number(probability) or not 0.0 <= probability <= 1.0:
                raise ConfigError(f"Creation probability for {name} outside [0, 1]: {probability!r}")
        return self


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


_INT_FIELDS = (
    "max_age",
    "growth_rate",
    "breeding_age",
    "max_litter_size",
    "food_value",
    "mate_radius",
    "birth_radius",
)
_FLOAT_FIELDS = ("growth_probability", "breeding_probability")


def _validate_species(spec: SpeciesSpec, known: set) -> None:
    if not isinstance(spec.name, str) or not spec.name:
        raise ConfigError(f"Species name must be a non-empty string, got {spec.name!r}")
    if not isinstance(spec.kind, Kind):
        raise ConfigError(f"{spec.name}: kind must be a Kind, got {spec.kind!r}")
    for name in _INT_FIELDS:
        if not _is_int(getattr(spec, name)):
            raise ConfigError(f"{spec.name}: {name} must be an integer, got {getattr(spec, name)!r}")
    for name in _FLOAT_FIELDS:
        if not _is_number(getattr(spec, name)):
            raise ConfigError(f"{spec.name}: {name} must be a number, got {getattr(spec, name)!r}")
    if spec.max_age <= 0:
        raise ConfigError(f"{spec.name}: max_age must be positive")
    if spec.is_producer:
        if spec.growth_rate < 0:
            raise ConfigError(f"{spec.name}: growth_rate must be >= 0")
        if not 0.0 <= spec.growth_probability <= 1.0:
            raise ConfigError(f"{spec.name}: growth_probability outside [0, 1]")
        if spec.birth_radius < 1:
            raise ConfigError(f"{spec.name}: birth_radius must be >= 1")
        return
    if spec.food_value <= 0:
        raise ConfigError(f"{spec.name}: food_value must be positive")
    if spec.max_litter_size <= 0:
        raise ConfigError(f"{spec.name}: max_litter_size must be positive")
    if spec.breeding_age < 0:
        raise ConfigError(f"{spec.name}: breeding_age must be >= 0")
    if not 0.0 <= spec.breeding_probability <= 1.0:
        raise ConfigError(f"{spec.name}: breeding_probability outside [0, 1]")
    if spec.mate_radius < 1 or spec.birth_radius < 1:
        raise ConfigError(f"{spec.name}: mate_radius and birth_radius must be >= 1")
    unknown = set(spec.diet) - known
    if unknown:
        raise ConfigError(f"{spec.name}: diet refers to unknown species {sorted(unknown)}")


_SPECIES_FIELDS = {f.name for f in fields(SpeciesSpec)}


def _species_from_dict(data: Dict[str, object], current: Dict[str, SpeciesSpec]) -> SpeciesSpec:
    if "name" not in data:
        raise ConfigError(f"Species entry without a name: {data}")
    unknown = set(data) - _SPECIES_FIELDS
    if unknown:
        raise ConfigError(f"Unknown species fields for {data['name']}: {sorted(unknown)}")
    values = dict(data)
    if "kind" in values:
        try:
            values["kind"] = Kind(values["kind"])
        except ValueError as exc:
            raise ConfigError(f"Invalid kind for {data['name']}: {values['kind']}") from exc
    if "diet" in values:
        diet = values["diet"]
        if not isinstance(diet, (list, tuple)) or not all(isinstance(item, str) for item in diet):
            raise ConfigError(f"Diet of {data['name']} must be a list of species names")
        values["diet"] = frozenset(diet)
    base = current.get(str(values["name"]))
    if base is not None:
        return replace(base, **values)
    if "kind" not in values or "max_age" not in values:
        raise ConfigError(f"New species {data['name']} needs at least 'kind' and 'max_age'")
    return SpeciesSpec(**values)


def _merge_species(cfg: SimulationConfig, entries) -> Tuple[SpeciesSpec, ...]:
    if not isinstance(entries, (list, tuple)):
        raise ConfigError("'species' must be a list of species entries")
    merged = {spec.name: spec for spec in cfg.species}
    for entry in entries:
        if isinstance(entry, SpeciesSpec):
            spec = entry
        elif isinstance(entry, dict):
            spec = _species_from_dict(entry, merged)
        else:
            raise ConfigError(f"Species entry must be a mapping: {entry!r}")
        merged[spec.name] = spec
    return tuple(merged.values())


def _merge_probabilities(cfg: SimulationConfig, value) -> Dict[str, float]:
    if not isinstance(value, dict):
        raise ConfigError("'creation_probabilities' must be a mapping")
    merged = dict(cfg.creation_probabilities)
    for key, prob in value.items():
        if not _is_number(prob):
            raise ConfigError(f"Creation probability for {key} must be a number, got {prob!r}")
        merged[key] = float(prob)
    return merged


def _apply(cfg: SimulationConfig, values: Dict[str, object]) -> SimulationConfig:
    """Set top-level fields; species and creation probabilities merge by name."""
    for key, value in values.items():
        if key == "species":
            value = _merge_species(cfg, value)
        elif key == "creation_probabilities":
            value = _merge_probabilities(cfg, value)
        setattr(cfg, key, value)
    return cfg


def load_config(path: str | Path) -> SimulationConfig:
    with open(Path(path), "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must hold a JSON object")
    names = {field_info.name for field_info in fields(SimulationConfig)}
    cfg = _apply(SimulationConfig(), {key: value for key, value in data.items() if key in names})
    return cfg.validate()


def build_config(
    overrides: Optional[Dict[str, object]] = None, path: Optional[str | Path] = None
) -> SimulationConfig:
    cfg = load_config(path) if path is not None else SimulationConfig()
    if overrides:
        unknown = [key for key in overrides if not hasattr(cfg, key)]
        if unknown:
            raise ConfigError(f"Unknown SimulationConfig field: {unknown[0]}")
        _apply(cfg, overrides)
    return cfg.validate()
