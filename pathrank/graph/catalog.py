"""Lookup of vertex names per label."""

from concurrent.futures import ThreadPoolExecutor
import logging
from typing import Sequence

from .store import GraphStore

log = logging.getLogger(__name__)


class NameCatalog:
    """Fetches the distinct vertex names of a label from the store."""

    def __init__(self, store: GraphStore):
        self.store = store

    def names_of(self, label: str) -> list[str]:
        """Distinct names of ``label`` vertices; empty when there are none.

        Raises:
            StoreQueryError: the store could not run the lookup
        """
        names = self.store.names_of(label)
        log.debug(f"Fetched {len(names)} names for {label}")
        return names

    def names_of_many(self, labels: Sequence[str]) -> list[list[str]]:
        """Fetch several name pools concurrently, in the order of ``labels``."""
        if len(labels) <= 1:
            return [self.names_of(label) for label in labels]

        with ThreadPoolExecutor(max_workers=len(labels)) as pool:
            futures = [pool.submit(self.names_of, label) for label in labels]
            return [future.result() for future in futures]

    def count_of(self, label: str) -> int:
        return len(self.names_of(label))
