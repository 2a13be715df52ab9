"""Tests for schema types and Cypher statement building."""

import pytest

from pathrank.graph import cypher
from pathrank.graph.schema import (
    EdgeSpec,
    NodeDescriptor,
    Pair,
    PathRequest,
    sanitize_label,
    vertex_name,
)


class TestSanitizeLabel:
    def test_keeps_plain_labels(self):
        assert sanitize_label("Professor") == "Professor"

    def test_replaces_unsafe_characters(self):
        assert sanitize_label("Pro}fessor) DETACH") == "Pro_fessor__DETACH"

    def test_prefixes_non_alpha_start(self):
        assert sanitize_label("1st") == "N_1st"

    def test_empty_label(self):
        assert sanitize_label("") == "Unknown"


def test_vertex_name():
    assert vertex_name("Student", 3) == "Student_3"


def test_path_request_rejects_self_path():
    node = NodeDescriptor("Professor", "Professor_0")

    with pytest.raises(ValueError):
        PathRequest(source=node, target=node)


def test_path_request_allows_same_name_under_other_label():
    request = PathRequest(
        source=NodeDescriptor("Professor", "x"),
        target=NodeDescriptor("Student", "x"),
    )

    assert request.source != request.target


def test_pair_equality_is_positional():
    assert Pair("a", "b") == Pair("a", "b")
    assert Pair("a", "b") != Pair("b", "a")
    assert len({Pair("a", "b"), Pair("a", "b"), Pair("b", "a")}) == 2


def test_create_edge_statement_passes_names_as_parameters():
    statement = cypher.create_edge(
        "RELATES", EdgeSpec("Professor", 'P"0', "Student", "S0")
    )

    assert statement.params == {"first": 'P"0', "second": "S0"}
    assert 'P"0' not in statement.text
    assert "CREATE (one)-[r:RELATES]->(two)" in statement.text
    assert statement.required_column == "created"


def test_shortest_path_query_is_bounded_and_undirected():
    text, params = cypher.shortest_path(
        NodeDescriptor("Professor", "Professor_0"),
        NodeDescriptor("Student", "Student_0"),
        "RELATES",
        10,
    )

    assert "shortestPath((one)-[:RELATES*..10]-(two))" in text
    assert "{name: $source_value}" in text
    assert params == {"source_value": "Professor_0", "target_value": "Student_0"}


def test_create_vertex_statement_merges_on_name():
    statement = cypher.create_vertex("Professor", "Professor_0")

    assert statement.text.startswith("MERGE (n:Professor {name: $name})")
    assert statement.params == {"name": "Professor_0"}
