"""Seed-and-rank pipeline: vertices, random edges, random paths, ranking."""

import logging
import random

from .graph.catalog import NameCatalog
from .graph.materializer import DEFAULT_EDGE_MULTIPLIER, EdgeFormula, EdgeMaterializer
from .graph.schema import DEFAULT_RELATION, vertex_name
from .graph.store import GraphStore
from .ranking.ranker import DEFAULT_MAX_DEPTH, ShortestPathRanker
from .ranking.types import RankedResult
from .sampling.sampler import PairSampler
from .sampling.scrambler import PathScrambler

log = logging.getLogger(__name__)


def seed_vertices(store: GraphStore, label: str, amount: int) -> list[str]:
    """Ensure ``amount`` vertices named ``{label}_{i}`` exist.

    Existing vertices with those names are reused, so seeding twice does not
    duplicate them.
    """
    names = [vertex_name(label, i) for i in range(amount)]
    store.create_vertices(label, names)
    return names


def seed_and_rank(
    store: GraphStore,
    label_a: str,
    label_b: str,
    vertex_count_each: int,
    path_sample_count: int,
    relation: str = DEFAULT_RELATION,
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    rng: random.Random | None = None,
    edge_formula: EdgeFormula = EdgeFormula.LEGACY,
    edge_multiplier: int = DEFAULT_EDGE_MULTIPLIER,
    include_unresolved: bool = False,
) -> list[RankedResult]:
    """Seed two labels, connect them randomly and rank random paths.

    Args:
        store: Graph store to write into and query
        label_a: Label of edge sources
        label_b: Label of edge targets
        vertex_count_each: Vertices created per label
        path_sample_count: Number of random path requests to rank
        relation: Relationship type of created edges
        max_depth: Maximum hops for shortest paths
        rng: Random source; a fresh unseeded one when omitted
        edge_formula: How the edge count is derived from label sizes
        edge_multiplier: Factor applied by the edge formula
        include_unresolved: Keep path requests without a path in the result

    Returns:
        Ranked results, longest path first
    """
    sampler = PairSampler(rng)
    catalog = NameCatalog(store)

    seed_vertices(store, label_a, vertex_count_each)
    seed_vertices(store, label_b, vertex_count_each)

    materializer = EdgeMaterializer(
        store,
        sampler,
        relation=relation,
        multiplier=edge_multiplier,
        formula=edge_formula,
        catalog=catalog,
    )
    materializer.materialize_edges(label_a, label_b)

    requests = PathScrambler(catalog, sampler).scramble_paths(
        label_a, label_b, path_sample_count
    )
    results = ShortestPathRanker(store).rank_by_length(
        requests, relation, max_depth, include_unresolved=include_unresolved
    )
    log.info(f"Ranked {len(results)} of {len(requests)} sampled paths")
    return results


def wipe(store: GraphStore) -> None:
    """Delete every vertex and edge."""
    store.wipe()
    log.info("Graph wiped")
