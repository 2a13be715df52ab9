"""Neo4j graph storage for seeding vertices, creating edges and measuring paths.

Reads go through ``execute_query``; writes are batched into a single managed
write transaction through ``execute_write_batch`` so a batch either commits
as a whole or not at all.
"""

import logging
from typing import Any, Sequence

from neo4j import GraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from ..errors import StoreQueryError, StoreWriteError
from . import cypher
from .cypher import Statement
from .schema import EdgeSpec, NodeDescriptor

log = logging.getLogger(__name__)


class Neo4jStorage:
    """Neo4j database wrapper implementing the GraphStore capability."""

    def __init__(
        self,
        uri: str = "bolt://localhost:7687",
        user: str = "neo4j",
        password: str = "neo4j",
        database: str | None = None,
    ):
        self.driver = GraphDatabase.driver(uri, auth=(user, password))
        self.database = database

    def close(self):
        self.driver.close()

    def _session(self):
        if self.database:
            return self.driver.session(database=self.database)
        return self.driver.session()

    # =========================================================================
    # PRIMITIVES
    # =========================================================================

    def execute_query(self, text: str, **params: Any) -> list[dict[str, Any]]:
        """Run a read query and return its rows keyed by column name."""
        try:
            with self._session() as session:
                result = session.run(text, params)
                return [record.data() for record in result]
        except (Neo4jError, DriverError) as exc:
            raise StoreQueryError(f"Query failed: {exc}") from exc

    def execute_write_batch(self, statements: Sequence[Statement]) -> list[dict]:
        """Run all statements in one write transaction.

        A statement with ``required_column`` must return a positive value in
        that column, otherwise the transaction is rolled back.

        Returns:
            The first row of each statement (empty dict when it returned none)
        """
        if not statements:
            return []

        def _batch_tx(tx) -> list[dict]:
            rows = []
            for statement in statements:
                result = tx.run(statement.text, statement.params)
                record = result.single()
                row = record.data() if record else {}
                if statement.required_column and not row.get(statement.required_column):
                    raise StoreWriteError(
                        f"Statement had no effect, rolling back batch: {statement.params}"
                    )
                rows.append(row)
            return rows

        try:
            with self._session() as session:
                return session.execute_write(_batch_tx)
        except (Neo4jError, DriverError) as exc:
            raise StoreWriteError(f"Write batch failed: {exc}") from exc

    # =========================================================================
    # GRAPH STORE OPERATIONS
    # =========================================================================

    def names_of(self, label: str) -> list[str]:
        rows = self.execute_query(cypher.names_of_label(label))
        try:
            return [row["name"] for row in rows]
        except KeyError as exc:
            raise StoreQueryError(f"Missing column in result: {exc}") from exc

    def count_of(self, label: str) -> int:
        rows = self.execute_query(cypher.count_of_label(label))
        return int(rows[0]["count"]) if rows else 0

    def create_vertices(self, label: str, names: Sequence[str]) -> int:
        """Ensure one vertex per name under ``label`` in a single batch.

        Names that already exist are matched, not duplicated.
        """
        statements = [
            cypher.create_vertex(label, name) for name in dict.fromkeys(names)
        ]
        self.execute_write_batch(statements)
        log.info(f"Merged {len(statements)} {label} vertices")
        return len(statements)

    def create_edges(self, relation: str, edges: Sequence[EdgeSpec]) -> int:
        """Create directed edges in a single batch.

        Raises:
            StoreWriteError: an endpoint did not resolve or the commit failed
        """
        statements = [cypher.create_edge(relation, edge) for edge in edges]
        rows = self.execute_write_batch(statements)
        created = sum(int(row.get("created", 0)) for row in rows)
        log.info(f"Created {created} {relation} edges")
        return created

    def shortest_path_length(
        self,
        source: NodeDescriptor,
        target: NodeDescriptor,
        relation: str,
        max_depth: int,
    ) -> int | None:
        """Length of a shortest path between two vertices.

        Returns:
            Hop count, or None when no path exists within ``max_depth``

        Raises:
            StoreQueryError: a descriptor does not match exactly one vertex
        """
        for descriptor in (source, target):
            text, params = cypher.count_matches(descriptor)
            rows = self.execute_query(text, **params)
            matches = int(rows[0]["count"]) if rows else 0
            if matches != 1:
                raise StoreQueryError(
                    f"Expected one vertex for {descriptor}, found {matches}"
                )

        text, params = cypher.shortest_path(source, target, relation, max_depth)
        rows = self.execute_query(text, **params)
        if not rows:
            return None
        return int(rows[0]["length"])

    def wipe(self) -> None:
        """Delete every vertex and relationship."""
        try:
            with self._session() as session:
                session.run(cypher.WIPE_QUERY).consume()
        except (Neo4jError, DriverError) as exc:
            raise StoreWriteError(f"Wipe failed: {exc}") from exc

    def stats(self) -> dict[str, Any]:
        """Get database statistics."""
        node_count = self.execute_query(cypher.NODE_COUNT_QUERY)[0]["count"]
        rel_count = self.execute_query(cypher.RELATIONSHIP_COUNT_QUERY)[0]["count"]

        label_counts = {}
        for row in self.execute_query(cypher.LABELS_QUERY):
            label = row["label"]
            label_counts[label] = self.count_of(label)

        return {
            "nodes": node_count,
            "relationships": rel_count,
            "by_label": label_counts,
        }
