"""Text and dict rendering of ranked paths."""

from typing import Any

from .types import RankedResult


def format_result(result: RankedResult) -> str:
    length = "n/a" if result.length is None else str(result.length)
    return (
        f"{result.rank}. Path from '{result.source_value}' "
        f"to '{result.target_value}' length = {length}"
    )


def render_report(results: list[RankedResult]) -> str:
    return "\n".join(format_result(result) for result in results)


def results_as_dicts(results: list[RankedResult]) -> list[dict[str, Any]]:
    """JSON-serializable form of ranked results."""
    return [
        {
            "rank": result.rank,
            "from": {
                "label": result.request.source.label,
                "key": result.request.source.key,
                "value": result.source_value,
            },
            "to": {
                "label": result.request.target.label,
                "key": result.request.target.key,
                "value": result.target_value,
            },
            "length": result.length,
        }
        for result in results
    ]
