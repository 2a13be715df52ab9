"""Shortest-path measurement and longest-first ranking."""

import logging
from typing import Iterable

from ..errors import StoreQueryError
from ..graph.schema import DEFAULT_RELATION, PathRequest
from ..graph.store import GraphStore
from .types import PathMeasurement, RankedResult

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10


def sort_measurements(measurements: list[PathMeasurement]) -> list[PathMeasurement]:
    """Longest first; equal lengths keep input order, unresolved last."""
    found = [m for m in measurements if m.found]
    missing = [m for m in measurements if not m.found]
    return sorted(found, key=lambda m: -m.length) + missing


class ShortestPathRanker:
    """Ranks path requests by their bounded shortest-path length."""

    def __init__(self, store: GraphStore):
        self.store = store

    def measure_one(
        self, request: PathRequest, relation: str, max_depth: int
    ) -> PathMeasurement:
        try:
            length = self.store.shortest_path_length(
                request.source, request.target, relation, max_depth
            )
        except StoreQueryError as exc:
            log.debug(f"No path for {request}: {exc}")
            length = None
        return PathMeasurement(request=request, length=length)

    def measure(
        self,
        requests: Iterable[PathRequest],
        relation: str = DEFAULT_RELATION,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> list[PathMeasurement]:
        """Measure every request in input order; failed lookups count as not found."""
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        return [self.measure_one(request, relation, max_depth) for request in requests]

    def rank_by_length(
        self,
        requests: Iterable[PathRequest],
        relation: str = DEFAULT_RELATION,
        max_depth: int = DEFAULT_MAX_DEPTH,
        include_unresolved: bool = False,
    ) -> list[RankedResult]:
        """Rank requests longest path first.

        Args:
            requests: Path requests in sampling order
            relation: Relationship type paths may use
            max_depth: Maximum number of hops
            include_unresolved: Keep requests without a path at the end

        Returns:
            Results with 1-based ranks; unresolved requests are dropped
            unless ``include_unresolved`` is set
        """
        measurements = self.measure(requests, relation, max_depth)
        dropped = sum(1 for m in measurements if not m.found)
        if dropped:
            log.info(f"{dropped} of {len(measurements)} requests have no path")

        ordered = sort_measurements(measurements)
        if not include_unresolved:
            ordered = [m for m in ordered if m.found]

        return [
            RankedResult(rank=rank, request=m.request, length=m.length)
            for rank, m in enumerate(ordered, 1)
        ]
