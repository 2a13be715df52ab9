"""Graph schema definitions for the seeded graph.

Vertices are identified by a label plus a ``name`` property. Edges all carry
one relationship type.
"""

from dataclasses import dataclass
import re
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_RELATION = "RELATES"
NAME_KEY = "name"
DEFAULT_LABELS = ("Professor", "Student")

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_label(label: str) -> str:
    """Sanitize a label or relationship type for Cypher interpolation."""
    sanitized = _UNSAFE_CHARS.sub("_", label)
    if sanitized and not sanitized[0].isalpha():
        sanitized = "N_" + sanitized
    return sanitized or "Unknown"


def vertex_name(label: str, index: int) -> str:
    """Name given to the ``index``-th seeded vertex of ``label``."""
    return f"{label}_{index}"


@dataclass(frozen=True)
class NodeDescriptor:
    """Identifies one vertex by label and a unique property."""

    label: str
    value: str
    key: str = NAME_KEY


@dataclass(frozen=True)
class PathRequest:
    """A pair of vertices whose shortest path should be measured."""

    source: NodeDescriptor
    target: NodeDescriptor

    def __post_init__(self):
        if self.source == self.target:
            raise ValueError(f"Path request from a vertex to itself: {self.source}")


@dataclass(frozen=True)
class Pair(Generic[T]):
    """Order-sensitive pair used as a dedup key."""

    first: T
    second: T


@dataclass(frozen=True)
class EdgeSpec:
    """Instruction to create one directed edge between named vertices."""

    source_label: str
    source_name: str
    target_label: str
    target_name: str
