"""Shared fixtures for contactnet tests."""

import pytest

from contactnet import config as config_module
from contactnet.cli.commands import config_cmd
from contactnet.population import Population
from contactnet.population.network import Network

_ENV_VARS = (
    "CONTACTNET_POPULATION_SIZE",
    "CONTACTNET_DEGREE_DISTRIBUTION",
    "CONTACTNET_MEAN_DEGREE",
    "CONTACTNET_SEED",
    "CONTACTNET_OUTPUT_DIR",
)


class ScriptedUniform:
    """Uniform source that replays a fixed list of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self.values):
            raise AssertionError(f"Unexpected draw #{self.calls + 1}")
        value = self.values[self.calls]
        self.calls += 1
        return value


class EdgeListNetwork(Network):
    """Network that connects a fixed list of 0-based index pairs."""

    def __init__(self, population, pairs=(), fail_after=None):
        super().__init__(population)
        self.pairs = list(pairs)
        self.fail_after = fail_after
        self.build_calls = 0

    def build(self):
        self.build_calls += 1
        for k, (i, j) in enumerate(self.pairs):
            if self.fail_after is not None and k == self.fail_after:
                raise RuntimeError("build failed")
            self.connect(i, j)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.config/contactnet and env vars."""
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_module.reset_config()
    yield config_file
    config_module.reset_config()


@pytest.fixture
def population():
    """A population of ten agents with empty state."""
    return Population(10)


@pytest.fixture
def scripted_uniform():
    """Factory for uniform sources with predetermined draws."""
    return ScriptedUniform


@pytest.fixture
def make_edge_network():
    """Factory for networks built from explicit edge lists."""

    def _make(population, pairs=(), fail_after=None, attach=True):
        network = EdgeListNetwork(population, pairs, fail_after=fail_after)
        if attach:
            population.add(network)
        return network

    return _make
