"""Tests for the contactnet CLI."""

import json

from typer.testing import CliRunner

from contactnet import __version__
from contactnet.cli import app
from contactnet.core.models import NetworkSnapshot

runner = CliRunner()


def _json(result):
    return json.loads(result.output)


class TestApp:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"contactnet {__version__}" in result.output

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("network", "inspect", "config"):
            assert command in result.output


class TestNetworkCommand:
    """Tests for `contactnet network`."""

    def test_builds_and_prints_metrics(self):
        result = runner.invoke(
            app, ["network", "-n", "60", "-d", "poisson", "--mean", "3", "--seed", "1"]
        )

        assert result.exit_code == 0, result.output
        assert "Built poisson network" in result.output
        assert "Network Metrics" in result.output
        assert "Unrealized stubs" in result.output

    def test_json_output(self):
        result = runner.invoke(
            app, ["--json", "network", "-n", "60", "--mean", "3", "--seed", "1"]
        )

        assert result.exit_code == 0, result.output
        data = _json(result)
        assert data["status"] == "success"
        assert data["seed"] == 1
        assert data["degree_distribution"] == {"type": "poisson", "mean": 3.0}
        assert data["metrics"]["node_count"] == 60

    def test_same_seed_same_network(self):
        args = ["--json", "network", "-n", "200", "--mean", "4", "--seed", "42"]
        first = _json(runner.invoke(app, args))
        second = _json(runner.invoke(app, args))

        assert first["metrics"] == second["metrics"]

    def test_defaults_come_from_config(self, monkeypatch):
        monkeypatch.setenv("CONTACTNET_POPULATION_SIZE", "25")
        monkeypatch.setenv("CONTACTNET_DEGREE_DISTRIBUTION", "fixed")
        monkeypatch.setenv("CONTACTNET_MEAN_DEGREE", "2")
        monkeypatch.setenv("CONTACTNET_SEED", "8")

        data = _json(runner.invoke(app, ["--json", "network"]))

        assert data["seed"] == 8
        assert data["degree_distribution"] == {"type": "fixed", "degree": 2}
        assert data["metrics"]["node_count"] == 25
        assert data["metrics"]["requested_avg_degree"] == 2.0

    def test_uniform_distribution(self):
        result = runner.invoke(
            app,
            ["--json", "network", "-n", "40", "-d", "uniform", "--min", "1", "--max", "3"],
        )

        assert result.exit_code == 0, result.output
        data = _json(result)
        assert data["degree_distribution"]["type"] == "uniform"

    def test_validate_flag(self):
        result = runner.invoke(app, ["network", "-n", "80", "--seed", "3", "--validate"])

        assert result.exit_code == 0, result.output
        assert "Network invariants hold" in result.output

    def test_validate_flag_json(self):
        result = runner.invoke(
            app, ["--json", "network", "-n", "80", "--seed", "3", "-v"]
        )
        assert _json(result)["valid"] is True

    def test_missing_distribution_options(self):
        result = runner.invoke(app, ["network", "-n", "10", "-d", "uniform"])

        assert result.exit_code == 1
        assert "Invalid degree distribution" in result.output

    def test_unknown_distribution(self):
        result = runner.invoke(app, ["--json", "network", "-d", "zipf"])

        assert result.exit_code == 1
        data = _json(result)
        assert data["status"] == "error"
        assert "Unknown degree distribution" in data["errors"][0]["message"]

    def test_degree_config_file(self, tmp_path):
        path = tmp_path / "degrees.yaml"
        path.write_text("type: categorical\noptions: [2]\nweights: [1.0]\n")

        result = runner.invoke(
            app, ["--json", "network", "-n", "30", "-c", str(path), "--seed", "5"]
        )

        assert result.exit_code == 0, result.output
        data = _json(result)
        assert data["degree_distribution"]["type"] == "categorical"
        assert data["metrics"]["requested_avg_degree"] == 2.0

    def test_degree_config_missing(self, tmp_path):
        result = runner.invoke(
            app, ["network", "-c", str(tmp_path / "missing.yaml")]
        )

        assert result.exit_code == 3
        assert "Degree config not found" in result.output

    def test_degree_config_invalid(self, tmp_path):
        path = tmp_path / "degrees.yaml"
        path.write_text("type: uniform\nmin: 5\nmax: 1\n")

        result = runner.invoke(app, ["network", "-c", str(path)])

        assert result.exit_code == 1
        assert "Invalid degree distribution" in result.output

    def test_write_output(self, tmp_path):
        path = tmp_path / "net.json"

        result = runner.invoke(
            app, ["network", "-n", "50", "--seed", "9", "-o", str(path)]
        )

        assert result.exit_code == 0, result.output
        snapshot = NetworkSnapshot.load_json(path)
        assert snapshot.node_count == 50
        assert snapshot.meta.seed == 9
        assert snapshot.meta.network_type == "ConfigurationModel"
        assert len(snapshot.requested_degrees) == 50

    def test_bare_output_name_uses_output_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CONTACTNET_OUTPUT_DIR", str(tmp_path / "nets"))

        result = runner.invoke(
            app, ["--json", "network", "-n", "20", "--seed", "2", "-o", "net.json"]
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "nets" / "net.json").exists()
        assert _json(result)["output"] == str(tmp_path / "nets" / "net.json")


class TestInspectCommand:
    """Tests for `contactnet inspect`."""

    def _write_network(self, path):
        result = runner.invoke(
            app, ["network", "-n", "40", "--seed", "4", "-o", str(path)]
        )
        assert result.exit_code == 0, result.output

    def test_inspect_saved_network(self, tmp_path):
        path = tmp_path / "net.json"
        self._write_network(path)

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 0, result.output
        assert "Loaded ConfigurationModel" in result.output
        assert "Network Metrics" in result.output

    def test_inspect_json(self, tmp_path):
        path = tmp_path / "net.json"
        self._write_network(path)

        data = _json(runner.invoke(app, ["--json", "inspect", str(path)]))

        assert data["valid"] is True
        assert data["seed"] == 4
        assert data["metrics"]["node_count"] == 40

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["inspect", str(tmp_path / "nope.json")])
        assert result.exit_code == 3

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "net.json"
        path.write_text("{broken")

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 1
        assert "Could not read network" in result.output

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "net.json"
        path.write_bytes(b"\xff\xfe\x00garbage")

        result = runner.invoke(app, ["--json", "inspect", str(path)])

        assert result.exit_code == 1
        data = _json(result)
        assert data["status"] == "error"
        assert "Could not read network" in data["errors"][0]["message"]

    def test_invalid_edges_reported(self, tmp_path):
        path = tmp_path / "net.json"
        path.write_text(
            json.dumps(
                {
                    "meta": {"network_type": "Handmade"},
                    "node_count": 3,
                    "edges": [{"source": 1, "target": 1}],
                }
            )
        )

        result = runner.invoke(app, ["--json", "inspect", str(path)])

        assert result.exit_code == 1
        data = _json(result)
        assert data["valid"] is False
        assert data["warnings"][0]["message"] == "agent 1 lists itself as a neighbor"

    def test_skip_validation(self, tmp_path):
        path = tmp_path / "net.json"
        path.write_text(
            json.dumps(
                {
                    "meta": {"network_type": "Handmade"},
                    "node_count": 3,
                    "edges": [{"source": 1, "target": 1}],
                }
            )
        )

        result = runner.invoke(app, ["inspect", str(path), "--no-validate"])

        assert result.exit_code == 0, result.output


class TestConfigCommand:
    """Tests for `contactnet config`."""

    def test_show(self):
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "population_size" in result.output
        assert "not created yet" in result.output

    def test_set_and_show(self, isolated_config):
        result = runner.invoke(app, ["config", "set", "network.population_size", "321"])

        assert result.exit_code == 0, result.output
        assert "Set network.population_size = 321" in result.output
        assert json.loads(isolated_config.read_text())["network"]["population_size"] == 321

        result = runner.invoke(app, ["config", "show"])
        assert "321" in result.output

    def test_set_seed_none(self, isolated_config):
        runner.invoke(app, ["config", "set", "network.seed", "5"])
        result = runner.invoke(app, ["config", "set", "network.seed", "random"])

        assert result.exit_code == 0
        assert json.loads(isolated_config.read_text())["network"]["seed"] is None

    def test_set_unknown_key(self):
        result = runner.invoke(app, ["config", "set", "network.colour", "blue"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_set_invalid_integer(self):
        result = runner.invoke(app, ["config", "set", "network.population_size", "lots"])
        assert result.exit_code == 1
        assert "Invalid integer" in result.output

    def test_set_invalid_distribution(self):
        result = runner.invoke(
            app, ["config", "set", "network.degree_distribution", "categorical"]
        )
        assert result.exit_code == 1

    def test_set_uniform_default_rejected(self, isolated_config):
        """uniform needs --min/--max, so it cannot be the configured default."""
        result = runner.invoke(
            app, ["config", "set", "network.degree_distribution", "uniform"]
        )

        assert result.exit_code == 1
        assert "Cannot use uniform" in result.output
        assert not isolated_config.exists()

        result = runner.invoke(app, ["network", "-n", "10", "--seed", "1"])
        assert result.exit_code == 0, result.output
        assert "Built poisson network" in result.output

    def test_set_unknown_distribution(self):
        result = runner.invoke(app, ["config", "set", "network.degree_distribution", "zipf"])
        assert result.exit_code == 1
        assert "Unknown distribution" in result.output

    def test_set_used_by_network(self):
        runner.invoke(app, ["config", "set", "network.population_size", "33"])

        data = _json(runner.invoke(app, ["--json", "network", "--seed", "1"]))

        assert data["metrics"]["node_count"] == 33

    def test_reset(self, isolated_config):
        runner.invoke(app, ["config", "set", "network.mean_degree", "7"])
        assert isolated_config.exists()

        result = runner.invoke(app, ["config", "reset"])

        assert result.exit_code == 0
        assert not isolated_config.exists()

    def test_unknown_action(self):
        result = runner.invoke(app, ["config", "explode"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output
