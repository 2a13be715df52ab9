"""Tests for YAML configuration loading."""

import pytest

from pathrank.config import AppConfig, ConnectionConfig, RunConfig, load_config
from pathrank.errors import ConfigError
from pathrank.graph.materializer import EdgeFormula


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("PATHRANK_NEO4J_URI", "PATHRANK_NEO4J_USER", "PATHRANK_NEO4J_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, text: str):
    path = tmp_path / "properties.yaml"
    path.write_text(text)
    return path


def test_load_connection_section(tmp_path):
    path = _write(
        tmp_path,
        """
database:
  connection:
    uri: bolt://db:7687
    user: admin
    password: secret
""",
    )

    config = load_config(path)

    assert config.connection == ConnectionConfig(
        uri="bolt://db:7687", user="admin", password="secret"
    )
    assert config.run == RunConfig()


def test_load_run_section(tmp_path):
    path = _write(
        tmp_path,
        """
run:
  labels: [Teacher, Pupil]
  vertices_per_label: 4
  path_samples: 6
  max_depth: 5
  edge_formula: Balanced
  seed: 12
""",
    )

    run = load_config(path).run

    assert run.labels == ("Teacher", "Pupil")
    assert run.vertices_per_label == 4
    assert run.path_samples == 6
    assert run.max_depth == 5
    assert run.edge_formula is EdgeFormula.BALANCED
    assert run.seed == 12


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = _write(tmp_path, "database:\n  connection:\n    password: from-file\n")
    monkeypatch.setenv("PATHRANK_NEO4J_PASSWORD", "from-env")

    assert load_config(path).connection.password == "from-env"


def test_missing_file_required(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_missing_file_optional_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.yaml", required=False) == AppConfig()


def test_invalid_yaml(tmp_path):
    path = _write(tmp_path, "database: [unclosed\n")

    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize(
    "run_yaml",
    [
        "labels: [OnlyOne]",
        "edge_formula: quadratic",
        "path_samples: -3",
        "colour: blue",
        "seed: abc",
    ],
)
def test_malformed_run_section(tmp_path, run_yaml):
    path = _write(tmp_path, f"run:\n  {run_yaml}\n")

    with pytest.raises(ConfigError):
        load_config(path)


def test_connection_values_must_be_strings(tmp_path):
    path = _write(tmp_path, "database:\n  connection:\n    password: 1234\n")

    with pytest.raises(ConfigError):
        load_config(path)
