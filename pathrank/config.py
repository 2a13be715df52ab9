"""Connection and run configuration.

Read from a YAML file shaped like::

    database:
      connection:
        uri: bolt://localhost:7687
        user: neo4j
        password: secret
    run:
      labels: [Professor, Student]
      vertices_per_label: 10

Connection values can be overridden with PATHRANK_NEO4J_URI,
PATHRANK_NEO4J_USER and PATHRANK_NEO4J_PASSWORD.
"""

from dataclasses import dataclass, field, fields
import os
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .graph.materializer import DEFAULT_EDGE_MULTIPLIER, EdgeFormula
from .graph.schema import DEFAULT_LABELS, DEFAULT_RELATION
from .ranking.ranker import DEFAULT_MAX_DEPTH

DEFAULT_CONFIG_PATH = Path("sensitive/properties.yaml")

_ENV_OVERRIDES = {
    "uri": "PATHRANK_NEO4J_URI",
    "user": "PATHRANK_NEO4J_USER",
    "password": "PATHRANK_NEO4J_PASSWORD",
}


@dataclass(frozen=True)
class ConnectionConfig:
    uri: str = "bolt://localhost:7687"
    user: str = "neo4j"
    password: str = "neo4j"
    database: str | None = None


@dataclass(frozen=True)
class RunConfig:
    """Parameters of one seed-and-rank run."""

    labels: tuple[str, str] = DEFAULT_LABELS
    vertices_per_label: int = 10
    path_samples: int = 20
    relation: str = DEFAULT_RELATION
    max_depth: int = DEFAULT_MAX_DEPTH
    edge_formula: EdgeFormula = EdgeFormula.LEGACY
    edge_multiplier: int = DEFAULT_EDGE_MULTIPLIER
    seed: int | None = None


@dataclass(frozen=True)
class AppConfig:
    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    run: RunConfig = field(default_factory=RunConfig)


def _section(data: dict, *keys: str) -> dict:
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            raise ConfigError(f"Expected a mapping at '{'.'.join(keys)}'")
        current = current.get(key) or {}
    if not isinstance(current, dict):
        raise ConfigError(f"Expected a mapping at '{'.'.join(keys)}'")
    return current


def _known(cls, raw: dict) -> dict:
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - names)
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} keys: {', '.join(unknown)}")
    return dict(raw)


def parse_connection(raw: dict) -> ConnectionConfig:
    values = _known(ConnectionConfig, raw)
    for key, env_name in _ENV_OVERRIDES.items():
        env_value = os.getenv(env_name)
        if env_value:
            values[key] = env_value
    for key, value in values.items():
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"database.connection.{key} must be a string")
    return ConnectionConfig(**values)


def parse_run(raw: dict) -> RunConfig:
    values = _known(RunConfig, raw)

    if "labels" in values:
        labels = values["labels"]
        if (
            not isinstance(labels, (list, tuple))
            or len(labels) != 2
            or not all(isinstance(label, str) and label for label in labels)
        ):
            raise ConfigError("run.labels must be a list of two label names")
        values["labels"] = tuple(labels)

    if "edge_formula" in values:
        try:
            values["edge_formula"] = EdgeFormula(str(values["edge_formula"]).lower())
        except ValueError as exc:
            raise ConfigError(f"Unknown run.edge_formula: {values['edge_formula']}") from exc

    for key in ("vertices_per_label", "path_samples", "max_depth", "edge_multiplier"):
        if key in values and (not isinstance(values[key], int) or values[key] < 0):
            raise ConfigError(f"run.{key} must be a non-negative integer")

    if values.get("seed") is not None and not isinstance(values["seed"], int):
        raise ConfigError("run.seed must be an integer")

    return RunConfig(**values)


def load_config(path: str | Path = DEFAULT_CONFIG_PATH, required: bool = True) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: YAML file location
        required: When False a missing file yields the defaults

    Raises:
        ConfigError: file missing (when required), unparsable or malformed
    """
    config_path = Path(path)
    if not config_path.exists():
        if required:
            raise ConfigError(f"Config file not found: {config_path}")
        return AppConfig(connection=parse_connection({}))

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {config_path} must be a mapping")

    return AppConfig(
        connection=parse_connection(_section(data, "database", "connection")),
        run=parse_run(_section(data, "run")),
    )
