"""Typed results of path measurement and ranking."""

from dataclasses import dataclass

from ..graph.schema import PathRequest


@dataclass(frozen=True)
class PathMeasurement:
    request: PathRequest
    length: int | None

    @property
    def found(self) -> bool:
        return self.length is not None


@dataclass(frozen=True)
class RankedResult:
    rank: int
    request: PathRequest
    length: int | None

    @property
    def source_value(self) -> str:
        return self.request.source.value

    @property
    def target_value(self) -> str:
        return self.request.target.value
