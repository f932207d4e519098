"""Tests for abmcore.scenario."""

import pytest

from abmcore import Graph, Scenario, World


def test_scenario():
    """Scenarios behave like mappings with attribute access."""
    scenario = Scenario(rng=42, density=0.8, vision=3)
    assert scenario.density == 0.8
    assert scenario["vision"] == 3
    assert len(scenario) == 3
    assert set(scenario) == {"rng", "density", "vision"}

    scenario.density = 0.5
    scenario["vision"] = 2
    assert scenario.to_dict() == {
        "rng": 42,
        "density": 0.5,
        "vision": 2,
        "scenario_id": scenario.scenario_id,
    }

    del scenario.vision
    del scenario["density"]
    assert len(scenario) == 1

    with pytest.raises(AttributeError):
        _ = scenario.vision
    with pytest.raises(AttributeError):
        del scenario.vision


def test_scenario_defaults():
    """rng is always present."""
    scenario = Scenario()
    assert scenario.rng is None
    assert scenario.world is None
    assert repr(scenario) == "Scenario(rng=None)"


def test_reserved_names():
    """Bookkeeping attributes cannot be used as parameters."""
    with pytest.raises(ValueError):
        Scenario(world=1)

    scenario = Scenario()
    with pytest.raises(ValueError):
        scenario.scenario_id = 10
    with pytest.raises(ValueError):
        scenario["world"] = None


def test_scenario_ids():
    """Each scenario class numbers its instances."""
    first = Scenario()
    second = Scenario()
    assert second.scenario_id == first.scenario_id + 1


def test_replace():
    """replace derives an unbound variant."""
    scenario = Scenario(rng=1, n=10)
    World(Graph(), scenario=scenario)

    variant = scenario.replace(n=20)
    assert variant.n == 20
    assert variant.rng == 1
    assert variant.world is None
    assert scenario.n == 10
    assert variant.scenario_id != scenario.scenario_id


def test_scenario_locked_while_running():
    """A running world freezes its scenario."""
    scenario = Scenario(rng=1, n=10)
    world = World(Graph(), scenario=scenario)
    assert scenario.locked

    with pytest.raises(ValueError):
        scenario.n = 20
    with pytest.raises(ValueError):
        del scenario["n"]

    world.running = False
    scenario.n = 20
    assert scenario.n == 20
