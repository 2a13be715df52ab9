"""Cypher statements issued by Neo4jStorage.

Labels and relationship types cannot be query parameters, so they are
sanitized and interpolated. Everything else is passed as a parameter.
"""

from dataclasses import dataclass, field
from typing import Any

from .schema import EdgeSpec, NodeDescriptor, sanitize_label

WIPE_QUERY = "MATCH (n) DETACH DELETE n"
NODE_COUNT_QUERY = "MATCH (n) RETURN count(n) AS count"
RELATIONSHIP_COUNT_QUERY = "MATCH ()-[r]->() RETURN count(r) AS count"
LABELS_QUERY = "CALL db.labels() YIELD label RETURN label"


@dataclass(frozen=True)
class Statement:
    """One parameterized Cypher statement of a write batch."""

    text: str
    params: dict[str, Any] = field(default_factory=dict)
    required_column: str | None = None


def names_of_label(label: str) -> str:
    return (
        f"MATCH (n:{sanitize_label(label)}) "
        "WHERE n.name IS NOT NULL "
        "RETURN DISTINCT n.name AS name "
        "ORDER BY name"
    )


def count_of_label(label: str) -> str:
    return f"MATCH (n:{sanitize_label(label)}) RETURN count(n) AS count"


def create_vertex(label: str, name: str) -> Statement:
    return Statement(
        text=f"MERGE (n:{sanitize_label(label)} {{name: $name}})",
        params={"name": name},
    )


def create_edge(relation: str, edge: EdgeSpec) -> Statement:
    """Create one edge, returning how many were created.

    Zero means an endpoint did not resolve; the caller aborts the batch.
    """
    return Statement(
        text=(
            f"MATCH (one:{sanitize_label(edge.source_label)} {{name: $first}}) "
            f"MATCH (two:{sanitize_label(edge.target_label)} {{name: $second}}) "
            f"CREATE (one)-[r:{sanitize_label(relation)}]->(two) "
            "RETURN count(r) AS created"
        ),
        params={"first": edge.source_name, "second": edge.target_name},
        required_column="created",
    )


def shortest_path(
    source: NodeDescriptor,
    target: NodeDescriptor,
    relation: str,
    max_depth: int,
) -> tuple[str, dict[str, Any]]:
    """Shortest undirected path of ``relation`` edges, at most ``max_depth`` hops."""
    text = (
        f"MATCH (one:{sanitize_label(source.label)} "
        f"{{{sanitize_label(source.key)}: $source_value}}) "
        f"MATCH (two:{sanitize_label(target.label)} "
        f"{{{sanitize_label(target.key)}: $target_value}}) "
        f"MATCH p = shortestPath((one)-[:{sanitize_label(relation)}*..{int(max_depth)}]-(two)) "
        "RETURN length(p) AS length"
    )
    return text, {"source_value": source.value, "target_value": target.value}


def count_matches(descriptor: NodeDescriptor) -> tuple[str, dict[str, Any]]:
    text = (
        f"MATCH (n:{sanitize_label(descriptor.label)} "
        f"{{{sanitize_label(descriptor.key)}: $value}}) "
        "RETURN count(n) AS count"
    )
    return text, {"value": descriptor.value}
