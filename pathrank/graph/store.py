"""Capability the sampling and ranking code needs from a graph store."""

from typing import Any, Protocol, Sequence

from .schema import EdgeSpec, NodeDescriptor


class GraphStore(Protocol):
    def names_of(self, label: str) -> list[str]: ...

    def create_vertices(self, label: str, names: Sequence[str]) -> int: ...

    def create_edges(self, relation: str, edges: Sequence[EdgeSpec]) -> int: ...

    def shortest_path_length(
        self,
        source: NodeDescriptor,
        target: NodeDescriptor,
        relation: str,
        max_depth: int,
    ) -> int | None: ...

    def wipe(self) -> None: ...

    def stats(self) -> dict[str, Any]: ...

    def close(self) -> None: ...
