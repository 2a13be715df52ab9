"""Neo4j settings for integration tests.

Tests wipe the database they run against, so they only ever connect to a
dedicated instance (TEST_NEO4J_URI, default port 17687).
"""

from __future__ import annotations

import os

import pytest

from pathrank.graph.neo4j_storage import Neo4jStorage

MAIN_INSTANCE_URI = "bolt://localhost:7687"


def get_test_neo4j_config() -> tuple[str, str, str]:
    uri = os.getenv("TEST_NEO4J_URI", "bolt://localhost:17687")
    user = os.getenv("TEST_NEO4J_USER", "neo4j")
    password = os.getenv("TEST_NEO4J_PASSWORD", "pathrank")
    return uri, user, password


def open_test_storage() -> Neo4jStorage:
    """Connect to the test instance, skipping the test when it is unreachable."""
    uri, user, password = get_test_neo4j_config()
    if uri.strip() == MAIN_INSTANCE_URI:
        pytest.fail(
            f"Refusing to run integration tests against {MAIN_INSTANCE_URI}. "
            "Use TEST_NEO4J_URI=bolt://localhost:17687"
        )

    storage = Neo4jStorage(uri=uri, user=user, password=password)
    try:
        storage.stats()
    except Exception as e:
        storage.close()
        pytest.skip(f"Neo4j not available: {e}")
    return storage
