"""In-memory graph store backed by NetworkX.

Mirrors Neo4jStorage behavior closely enough to run the whole pipeline
offline: batches are validated before anything is applied, and shortest
paths ignore edge direction.
"""

import logging
from typing import Any, Sequence

import networkx as nx

from ..errors import StoreQueryError, StoreWriteError
from .schema import NAME_KEY, EdgeSpec, NodeDescriptor, sanitize_label

log = logging.getLogger(__name__)


class MemoryGraphStore:
    """GraphStore implementation over a NetworkX multigraph."""

    def __init__(self):
        self.graph = nx.MultiDiGraph()
        self._next_id = 0
        self._relation_graphs: dict[str, nx.Graph] = {}

    def close(self) -> None:
        return None

    def _find(self, label: str, key: str, value: str) -> list[int]:
        label = sanitize_label(label)
        return [
            node
            for node, data in self.graph.nodes(data=True)
            if data["label"] == label and data["props"].get(key) == value
        ]

    def _resolve_one(self, descriptor: NodeDescriptor) -> int:
        matches = self._find(descriptor.label, descriptor.key, descriptor.value)
        if len(matches) != 1:
            raise StoreQueryError(
                f"Expected one vertex for {descriptor}, found {len(matches)}"
            )
        return matches[0]

    def names_of(self, label: str) -> list[str]:
        label = sanitize_label(label)
        names = {
            data["props"][NAME_KEY]
            for _, data in self.graph.nodes(data=True)
            if data["label"] == label and data["props"].get(NAME_KEY) is not None
        }
        return sorted(names)

    def create_vertices(self, label: str, names: Sequence[str]) -> int:
        """Create vertices for names not yet present under the label."""
        existing = set(self.names_of(label))
        label = sanitize_label(label)
        created = 0
        for name in dict.fromkeys(names):
            if name in existing:
                continue
            self.graph.add_node(self._next_id, label=label, props={NAME_KEY: name})
            self._next_id += 1
            created += 1
        log.info(f"Created {created} {label} vertices")
        return created

    def create_edges(self, relation: str, edges: Sequence[EdgeSpec]) -> int:
        """Create directed edges; nothing is written if any endpoint is missing."""
        relation = sanitize_label(relation)
        planned: list[tuple[int, int]] = []
        for edge in edges:
            sources = self._find(edge.source_label, NAME_KEY, edge.source_name)
            targets = self._find(edge.target_label, NAME_KEY, edge.target_name)
            if not sources or not targets:
                raise StoreWriteError(
                    f"Statement had no effect, rolling back batch: {edge}"
                )
            planned.extend((s, t) for s in sources for t in targets)

        for source, target in planned:
            self.graph.add_edge(source, target, relation=relation)
        self._relation_graphs.pop(relation, None)
        log.info(f"Created {len(planned)} {relation} edges")
        return len(planned)

    def shortest_path_length(
        self,
        source: NodeDescriptor,
        target: NodeDescriptor,
        relation: str,
        max_depth: int,
    ) -> int | None:
        start = self._resolve_one(source)
        end = self._resolve_one(target)
        if start == end:
            raise StoreQueryError(f"Path endpoints resolve to the same vertex: {source}")

        undirected = self._relation_graph(sanitize_label(relation))
        if start not in undirected or end not in undirected:
            return None

        lengths = nx.single_source_shortest_path_length(
            undirected, start, cutoff=max_depth
        )
        return lengths.get(end)

    def _relation_graph(self, relation: str) -> nx.Graph:
        # Undirected graph of one relation, rebuilt only after edge writes.
        undirected = self._relation_graphs.get(relation)
        if undirected is None:
            undirected = nx.Graph()
            undirected.add_edges_from(
                (u, v)
                for u, v, rel in self.graph.edges(data="relation")
                if rel == relation
            )
            self._relation_graphs[relation] = undirected
        return undirected

    def wipe(self) -> None:
        self.graph.clear()
        self._relation_graphs.clear()

    def stats(self) -> dict[str, Any]:
        label_counts: dict[str, int] = {}
        for _, data in self.graph.nodes(data=True):
            label_counts[data["label"]] = label_counts.get(data["label"], 0) + 1
        return {
            "nodes": self.graph.number_of_nodes(),
            "relationships": self.graph.number_of_edges(),
            "by_label": label_counts,
        }

    def edge_list(self, relation: str | None = None) -> list[tuple[str, str, str]]:
        """(source name, relation, target name) for every edge, for inspection."""
        wanted = sanitize_label(relation) if relation else None
        nodes = self.graph.nodes
        return [
            (nodes[u]["props"].get(NAME_KEY), rel, nodes[v]["props"].get(NAME_KEY))
            for u, v, rel in self.graph.edges(data="relation")
            if wanted is None or rel == wanted
        ]
