"""Random sampling of distinct name pairs from one or two pools.

Pairs are drawn without replacement. A pair is never made of a name with
itself and never repeats within one call. When the space of candidate
draws is small enough it is enumerated and sampled directly, so a request
larger than the number of eligible pairs fails immediately instead of
looping. Larger spaces use rejection sampling with an attempt cap.
"""

from dataclasses import dataclass
from enum import Enum
import logging
import random
from typing import Sequence

from ..errors import InvalidSampleRequest
from ..graph.schema import Pair

log = logging.getLogger(__name__)

POOL_A = 0
POOL_B = 1

DEFAULT_ENUMERATION_LIMIT = 250_000
DEFAULT_ATTEMPTS_PER_PAIR = 1_000


class SampleMode(Enum):
    """Which pool each slot of a pair is drawn from."""

    CROSS = "cross"  # first from pool A, second from pool B
    MIXED = "mixed"  # each slot picks a pool by coin flip


@dataclass(frozen=True)
class Draw:
    """An accepted pair plus the pool each of its names came from."""

    pair: Pair[str]
    first_pool: int
    second_pool: int


class PairSampler:
    """Draws distinct (first, second) name pairs with an injected RNG."""

    def __init__(
        self,
        rng: random.Random | None = None,
        enumeration_limit: int = DEFAULT_ENUMERATION_LIMIT,
        attempts_per_pair: int = DEFAULT_ATTEMPTS_PER_PAIR,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.enumeration_limit = enumeration_limit
        self.attempts_per_pair = attempts_per_pair

    @staticmethod
    def draft_space(
        pool_a: Sequence[str], pool_b: Sequence[str], mode: SampleMode
    ) -> int:
        """Number of possible raw draws before any rejection."""
        if mode is SampleMode.CROSS:
            return len(pool_a) * len(pool_b)
        return (len(pool_a) + len(pool_b)) ** 2

    @staticmethod
    def _checks_indices(
        pool_a: Sequence[str], pool_b: Sequence[str], mode: SampleMode
    ) -> bool:
        # Equal indices are rejected whenever both slots may index the same pool.
        return mode is SampleMode.MIXED or pool_a is pool_b or pool_a == pool_b

    def sample(
        self,
        pool_a: Sequence[str],
        pool_b: Sequence[str],
        count: int,
        mode: SampleMode = SampleMode.CROSS,
    ) -> list[Draw]:
        """Draw ``count`` distinct pairs in acceptance order.

        Args:
            pool_a: Names of the first pool
            pool_b: Names of the second pool
            count: Number of pairs wanted
            mode: CROSS or MIXED slot assignment

        Raises:
            InvalidSampleRequest: fewer than ``count`` eligible pairs exist
        """
        if count < 0:
            raise InvalidSampleRequest(count, 0)
        if count == 0:
            return []

        space = self.draft_space(pool_a, pool_b, mode)
        if count > space:
            raise InvalidSampleRequest(count, space)

        if space <= self.enumeration_limit:
            return self._sample_enumerated(pool_a, pool_b, count, mode)
        return self._sample_rejection(pool_a, pool_b, count, mode)

    def feasible_count(
        self,
        pool_a: Sequence[str],
        pool_b: Sequence[str],
        mode: SampleMode = SampleMode.CROSS,
    ) -> int:
        """Number of distinct eligible pairs. Enumerates the whole draft space."""
        return len(self._eligible_pairs(pool_a, pool_b, mode))

    def _slots(
        self, pool_a: Sequence[str], pool_b: Sequence[str], mode: SampleMode
    ) -> tuple[list[tuple[int, int, str]], list[tuple[int, int, str]]]:
        tagged_a = [(POOL_A, i, name) for i, name in enumerate(pool_a)]
        tagged_b = [(POOL_B, i, name) for i, name in enumerate(pool_b)]
        if mode is SampleMode.CROSS:
            return tagged_a, tagged_b
        both = tagged_a + tagged_b
        return both, both

    def _eligible_pairs(
        self, pool_a: Sequence[str], pool_b: Sequence[str], mode: SampleMode
    ) -> dict[Pair[str], list[Draw]]:
        check_indices = self._checks_indices(pool_a, pool_b, mode)
        firsts, seconds = self._slots(pool_a, pool_b, mode)

        eligible: dict[Pair[str], list[Draw]] = {}
        for first_pool, i, first in firsts:
            for second_pool, j, second in seconds:
                if check_indices and i == j:
                    continue
                if first == second:
                    continue
                pair = Pair(first, second)
                eligible.setdefault(pair, []).append(
                    Draw(pair=pair, first_pool=first_pool, second_pool=second_pool)
                )
        return eligible

    def _sample_enumerated(
        self,
        pool_a: Sequence[str],
        pool_b: Sequence[str],
        count: int,
        mode: SampleMode,
    ) -> list[Draw]:
        eligible = self._eligible_pairs(pool_a, pool_b, mode)
        if count > len(eligible):
            raise InvalidSampleRequest(count, len(eligible))

        chosen = self.rng.sample(list(eligible), count)
        return [self.rng.choice(eligible[pair]) for pair in chosen]

    def _draft(
        self,
        pools: tuple[Sequence[str], Sequence[str]],
        mode: SampleMode,
        check_indices: bool,
    ) -> Draw | None:
        if mode is SampleMode.CROSS:
            first_pool, second_pool = POOL_A, POOL_B
        else:
            first_pool = POOL_A if self.rng.random() < 0.5 else POOL_B
            second_pool = POOL_A if self.rng.random() < 0.5 else POOL_B

        if not pools[first_pool] or not pools[second_pool]:
            return None

        i = self.rng.randrange(len(pools[first_pool]))
        j = self.rng.randrange(len(pools[second_pool]))
        if check_indices and i == j:
            return None

        first = pools[first_pool][i]
        second = pools[second_pool][j]
        if first == second:
            return None

        pair = Pair(first, second)
        return Draw(pair=pair, first_pool=first_pool, second_pool=second_pool)

    def _sample_rejection(
        self,
        pool_a: Sequence[str],
        pool_b: Sequence[str],
        count: int,
        mode: SampleMode,
    ) -> list[Draw]:
        check_indices = self._checks_indices(pool_a, pool_b, mode)
        max_attempts = count * self.attempts_per_pair
        accepted: dict[Pair[str], Draw] = {}

        attempts = 0
        while len(accepted) < count:
            if attempts >= max_attempts:
                log.warning(
                    f"Gave up after {attempts} draws with {len(accepted)}/{count} pairs"
                )
                raise InvalidSampleRequest(count)
            attempts += 1

            draw = self._draft((pool_a, pool_b), mode, check_indices)
            if draw is None or draw.pair in accepted:
                continue
            accepted[draw.pair] = draw

        return list(accepted.values())
