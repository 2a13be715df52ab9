"""Random path requests across two vertex labels."""

import logging

from ..graph.catalog import NameCatalog
from ..graph.schema import NAME_KEY, NodeDescriptor, PathRequest
from .sampler import POOL_A, PairSampler, SampleMode

log = logging.getLogger(__name__)


class PathScrambler:
    """Builds path requests whose endpoints come from either label."""

    def __init__(self, catalog: NameCatalog, sampler: PairSampler):
        self.catalog = catalog
        self.sampler = sampler

    def scramble_paths(self, label_a: str, label_b: str, count: int) -> list[PathRequest]:
        """Sample ``count`` distinct path requests in acceptance order.

        Each endpoint is drawn from ``label_a`` or ``label_b`` by coin flip
        and carries the label of the pool it came from.

        Raises:
            InvalidSampleRequest: fewer than ``count`` distinct pairs exist
            StoreQueryError: a name pool could not be fetched
        """
        names_a, names_b = self.catalog.names_of_many([label_a, label_b])
        draws = self.sampler.sample(names_a, names_b, count, SampleMode.MIXED)

        def _label(pool: int) -> str:
            return label_a if pool == POOL_A else label_b

        requests = [
            PathRequest(
                source=NodeDescriptor(
                    label=_label(draw.first_pool), value=draw.pair.first, key=NAME_KEY
                ),
                target=NodeDescriptor(
                    label=_label(draw.second_pool), value=draw.pair.second, key=NAME_KEY
                ),
            )
            for draw in draws
        ]
        log.debug(f"Scrambled {len(requests)} path requests")
        return requests
