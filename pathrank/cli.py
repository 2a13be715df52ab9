"""CLI for pathrank."""

import json
import logging
from pathlib import Path
import random

import click

from .config import DEFAULT_CONFIG_PATH, AppConfig, ConnectionConfig, load_config
from .errors import PathRankError
from .graph.materializer import EdgeFormula
from .graph.memory_store import MemoryGraphStore
from .graph.neo4j_storage import Neo4jStorage
from .graph.store import GraphStore
from .pipeline import seed_and_rank, wipe
from .ranking.renderer import render_report, results_as_dicts

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def connection_options(func):
    """Shared --config/--backend/--uri/--user/--password options."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(path_type=Path),
            default=str(DEFAULT_CONFIG_PATH),
            show_default=True,
            help="YAML config file",
        ),
        click.option(
            "--backend",
            type=click.Choice(["neo4j", "memory"]),
            default="neo4j",
            show_default=True,
            help="Graph store to use",
        ),
        click.option("--uri", default=None, help="Neo4j URI (overrides config)"),
        click.option("--user", default=None, help="Neo4j username (overrides config)"),
        click.option(
            "--password", default=None, help="Neo4j password (overrides config)"
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load(config_path: Path) -> AppConfig:
    try:
        return load_config(config_path, required=False)
    except PathRankError as exc:
        raise SystemExit(f"Error: {exc}") from exc


def _open_store(
    backend: str,
    connection: ConnectionConfig,
    uri: str | None,
    user: str | None,
    password: str | None,
) -> GraphStore:
    if backend == "memory":
        return MemoryGraphStore()
    return Neo4jStorage(
        uri=uri or connection.uri,
        user=user or connection.user,
        password=password or connection.password,
        database=connection.database,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """pathrank - seed a graph and rank random vertex pairs by path length."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT
    )


@cli.command()
@connection_options
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option("--vertices", type=int, default=None, help="Vertices per label")
@click.option("--samples", type=int, default=None, help="Number of path samples")
@click.option("--max-depth", type=int, default=None, help="Maximum path hops")
@click.option(
    "--edge-formula",
    type=click.Choice([f.value for f in EdgeFormula]),
    default=None,
    help="How the edge count is derived from label sizes",
)
@click.option(
    "--keep-existing", is_flag=True, help="Do not wipe the graph before seeding"
)
@click.option(
    "--show-unresolved", is_flag=True, help="List path requests without a path"
)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def run(
    config_path: Path,
    backend: str,
    uri: str | None,
    user: str | None,
    password: str | None,
    seed: int | None,
    vertices: int | None,
    samples: int | None,
    max_depth: int | None,
    edge_formula: str | None,
    keep_existing: bool,
    show_unresolved: bool,
    as_json: bool,
):
    """Wipe, seed both labels, connect them and rank random paths."""
    config = _load(config_path)
    run_config = config.run
    label_a, label_b = run_config.labels
    rng_seed = seed if seed is not None else run_config.seed

    store = _open_store(backend, config.connection, uri, user, password)
    try:
        if not keep_existing:
            wipe(store)
        results = seed_and_rank(
            store,
            label_a,
            label_b,
            vertices if vertices is not None else run_config.vertices_per_label,
            samples if samples is not None else run_config.path_samples,
            run_config.relation,
            max_depth if max_depth is not None else run_config.max_depth,
            rng=random.Random(rng_seed),
            edge_formula=(
                EdgeFormula(edge_formula) if edge_formula else run_config.edge_formula
            ),
            edge_multiplier=run_config.edge_multiplier,
            include_unresolved=show_unresolved,
        )
    except (PathRankError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    finally:
        store.close()

    if as_json:
        click.echo(json.dumps(results_as_dicts(results), indent=2))
        return

    if not results:
        click.echo("No paths found.")
        return
    click.echo(render_report(results))


@cli.command("wipe")
@connection_options
def wipe_command(
    config_path: Path,
    backend: str,
    uri: str | None,
    user: str | None,
    password: str | None,
):
    """Delete every vertex and edge."""
    config = _load(config_path)
    store = _open_store(backend, config.connection, uri, user, password)
    try:
        wipe(store)
    except PathRankError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    finally:
        store.close()
    click.echo("Graph wiped.")


@cli.command()
@connection_options
def stats(
    config_path: Path,
    backend: str,
    uri: str | None,
    user: str | None,
    password: str | None,
):
    """Show vertex and relationship counts."""
    config = _load(config_path)
    store = _open_store(backend, config.connection, uri, user, password)
    try:
        result = store.stats()
    except PathRankError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    finally:
        store.close()

    click.echo(f"Nodes:         {result['nodes']}")
    click.echo(f"Relationships: {result['relationships']}")
    for label, count in sorted(result["by_label"].items()):
        click.echo(f"  {label}: {count}")


if __name__ == "__main__":
    cli()
