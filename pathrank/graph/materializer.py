"""Random edge creation between two vertex labels."""

from enum import Enum
import logging

from ..errors import InvalidSampleRequest
from ..sampling.sampler import PairSampler, SampleMode
from .catalog import NameCatalog
from .schema import DEFAULT_RELATION, EdgeSpec, Pair
from .store import GraphStore

log = logging.getLogger(__name__)

DEFAULT_EDGE_MULTIPLIER = 2


class EdgeFormula(Enum):
    """How the number of edges to create is derived from the label sizes."""

    LEGACY = "legacy"  # multiplier * (|A| + |A|), first label counted twice
    BALANCED = "balanced"  # multiplier * (|A| + |B|)


def target_edge_count(
    count_a: int,
    count_b: int,
    multiplier: int = DEFAULT_EDGE_MULTIPLIER,
    formula: EdgeFormula = EdgeFormula.LEGACY,
) -> int:
    if formula is EdgeFormula.LEGACY:
        return multiplier * (count_a + count_a)
    return multiplier * (count_a + count_b)


class EdgeMaterializer:
    """Creates distinct random edges from one label's vertices to another's."""

    def __init__(
        self,
        store: GraphStore,
        sampler: PairSampler,
        relation: str = DEFAULT_RELATION,
        multiplier: int = DEFAULT_EDGE_MULTIPLIER,
        formula: EdgeFormula = EdgeFormula.LEGACY,
        catalog: NameCatalog | None = None,
    ):
        self.store = store
        self.catalog = catalog if catalog is not None else NameCatalog(store)
        self.sampler = sampler
        self.relation = relation
        self.multiplier = multiplier
        self.formula = formula

    def target_edge_count(self, count_a: int, count_b: int) -> int:
        return target_edge_count(count_a, count_b, self.multiplier, self.formula)

    def materialize_edges(
        self, label_a: str, label_b: str, count: int | None = None
    ) -> list[Pair[str]]:
        """Create random ``label_a -> label_b`` edges in one atomic batch.

        Args:
            label_a: Label of edge sources
            label_b: Label of edge targets
            count: Number of edges; derived from the label sizes when omitted

        Returns:
            The (source name, target name) pairs that were connected

        Raises:
            InvalidSampleRequest: more edges requested than distinct pairs exist
            StoreWriteError: the batch was rejected, nothing was created
        """
        names_a, names_b = self.catalog.names_of_many([label_a, label_b])
        if count is None:
            count = self.target_edge_count(len(names_a), len(names_b))

        try:
            draws = self.sampler.sample(names_a, names_b, count, SampleMode.CROSS)
        except InvalidSampleRequest:
            log.error(
                f"Cannot create {count} edges between {len(names_a)} {label_a} "
                f"and {len(names_b)} {label_b} vertices"
            )
            raise

        pairs = [draw.pair for draw in draws]
        edges = [
            EdgeSpec(
                source_label=label_a,
                source_name=pair.first,
                target_label=label_b,
                target_name=pair.second,
            )
            for pair in pairs
        ]
        self.store.create_edges(self.relation, edges)
        log.info(f"Connected {len(pairs)} {label_a} -> {label_b} pairs")
        return pairs
