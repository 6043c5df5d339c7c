import json
from dataclasses import replace

import pytest

from savanna.config import ConfigError, SimulationConfig, build_config, load_config
from savanna.species import ACACIA, RABBIT, Kind


def _write(tmp_path, data):
    path = tmp_path / "savanna.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults_are_valid():
    cfg = SimulationConfig().validate()
    assert (cfg.depth, cfg.width) == (80, 120)
    assert [spec.name for spec in cfg.species] == ["Giraffe", "Rabbit", "Acacia", "Grass"]
    assert cfg.creation_probabilities["Rabbit"] == pytest.approx(0.08)


def test_load_config_overrides_fields_and_species(tmp_path):
    path = _write(
        tmp_path,
        {
            "depth": 12,
            "width": 9,
            "seed": 3,
            "creation_probabilities": {"Rabbit": 0.2},
            "species": [{"name": "Rabbit", "breeding_probability": 0.3}],
        },
    )

    cfg = load_config(path)

    assert (cfg.depth, cfg.width, cfg.seed) == (12, 9, 3)
    rabbit = cfg.species_by_name("Rabbit")
    assert rabbit.breeding_probability == pytest.approx(0.3)
    assert rabbit.max_litter_size == RABBIT.max_litter_size
    assert cfg.creation_probabilities["Rabbit"] == pytest.approx(0.2)
    assert cfg.creation_probabilities["Acacia"] == pytest.approx(0.06)


def test_load_config_adds_new_species(tmp_path):
    path = _write(
        tmp_path,
        {
            "species": [
                {
                    "name": "Zebra",
                    "kind": "consumer",
                    "max_age": 40,
                    "food_value": 20,
                    "diet": ["Grass"],
                    "breeding_age": 5,
                    "breeding_probability": 0.1,
                }
            ],
            "creation_probabilities": {"Zebra": 0.01},
        },
    )

    cfg = load_config(path)

    zebra = cfg.species_by_name("Zebra")
    assert zebra.kind is Kind.CONSUMER
    assert zebra.diet == frozenset({"Grass"})
    assert len(cfg.species) == 5


@pytest.mark.parametrize(
    "entry",
    [
        {"name": "Rabbit", "wings": 2},
        {"name": "Zebra", "kind": "consumer"},
        {"name": "Zebra", "kind": "mineral", "max_age": 3},
        {"kind": "producer", "max_age": 3},
    ],
)
def test_load_config_rejects_bad_species_entries(tmp_path, entry):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, {"species": [entry]}))


def test_build_config_rejects_unknown_override():
    with pytest.raises(ConfigError):
        build_config({"height": 10})


def test_build_config_applies_overrides_on_file(tmp_path):
    path = _write(tmp_path, {"depth": 30, "seed": 1})
    cfg = build_config({"seed": 9}, path=path)
    assert cfg.depth == 30
    assert cfg.seed == 9


@pytest.mark.parametrize(
    "overrides",
    [
        {"depth": 0},
        {"creation_probabilities": {"Rabbit": 1.5}},
        {"creation_probabilities": {"Unicorn": 0.1}},
        {"species": (replace(RABBIT, diet=frozenset({"Carrot"})),)},
        {"species": (replace(ACACIA, growth_probability=-0.1),)},
    ],
)
def test_validate_rejects_inconsistent_config(overrides):
    with pytest.raises(ConfigError):
        build_config(overrides)


def test_species_by_name_unknown():
    with pytest.raises(ConfigError):
        SimulationConfig().species_by_name("Unicorn")


@pytest.mark.parametrize(
    "data",
    [
        {"species": [{"name": "Rabbit", "max_age": "50"}]},
        {"species": [{"name": "Rabbit", "breeding_probability": True}]},
        {"species": [{"name": "Rabbit", "diet": "Grass"}]},
        {"species": {"name": "Rabbit"}},
        {"species": ["Rabbit"]},
        {"creation_probabilities": {"Rabbit": "lots"}},
        {"creation_probabilities": [0.1]},
        {"depth": "40"},
        {"seed": 1.5},
    ],
)
def test_load_config_rejects_mistyped_values(tmp_path, data):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, data))


@pytest.mark.parametrize("data", [[{"depth": 10}], "savanna", 3])
def test_load_config_rejects_non_object_file(tmp_path, data):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, data))


def test_load_config_rejects_malformed_json(tmp_path):
    path = tmp_path / "savanna.json"
    path.write_text('{"depth": 10,', encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_build_config_merges_species_overrides_by_name():
    cfg = build_config({"species": [{"name": "Rabbit", "max_age": 5}]})

    assert cfg.species_by_name("Rabbit").max_age == 5
    assert cfg.species_by_name("Rabbit").food_value == RABBIT.food_value
    assert [spec.name for spec in cfg.species] == ["Giraffe", "Rabbit", "Acacia", "Grass"]


def test_build_config_accepts_species_descriptors():
    acacia = replace(ACACIA, growth_rate=2)
    cfg = build_config({"species": (acacia,)})

    assert cfg.species_by_name("Acacia") is acacia
    assert len(cfg.species) == 4


def test_build_config_merges_creation_probabilities():
    cfg = build_config({"creation_probabilities": {"Rabbit": 0.2}})

    assert cfg.creation_probabilities["Rabbit"] == pytest.approx(0.2)
    assert cfg.creation_probabilities["Acacia"] == pytest.approx(0.06)
    assert set(cfg.creation_probabilities) == {"Giraffe", "Rabbit", "Acacia", "Grass"}


def test_build_config_rejects_mistyped_override():
    with pytest.raises(ConfigError):
        build_config({"species": [{"name": "Rabbit", "max_age": "5"}]})
