"""Tests for PairSampler."""

import random

import pytest

from pathrank.errors import InvalidSampleRequest
from pathrank.graph.schema import Pair
from pathrank.sampling.sampler import POOL_A, POOL_B, PairSampler, SampleMode

POOL_A_NAMES = [f"A{i}" for i in range(1, 6)]
POOL_B_NAMES = [f"B{i}" for i in range(1, 6)]


def _sampler(seed: int = 7, **kwargs) -> PairSampler:
    return PairSampler(random.Random(seed), **kwargs)


def _assert_valid(draws, count):
    pairs = [draw.pair for draw in draws]
    assert len(pairs) == count
    assert len(set(pairs)) == count
    assert all(pair.first != pair.second for pair in pairs)


class TestCrossMode:
    def test_returns_exact_count_of_unique_pairs(self):
        draws = _sampler().sample(POOL_A_NAMES, POOL_B_NAMES, 20, SampleMode.CROSS)

        _assert_valid(draws, 20)
        assert all(d.pair.first in POOL_A_NAMES for d in draws)
        assert all(d.pair.second in POOL_B_NAMES for d in draws)
        assert all((d.first_pool, d.second_pool) == (POOL_A, POOL_B) for d in draws)

    def test_whole_domain_can_be_drawn(self):
        draws = _sampler().sample(POOL_A_NAMES, POOL_B_NAMES, 25, SampleMode.CROSS)

        _assert_valid(draws, 25)

    def test_more_than_available_raises(self):
        with pytest.raises(InvalidSampleRequest) as exc_info:
            _sampler().sample(POOL_A_NAMES, POOL_B_NAMES, 30, SampleMode.CROSS)

        assert exc_info.value.requested == 30
        assert exc_info.value.available == 25

    def test_same_pool_excludes_diagonal(self):
        sampler = _sampler()

        assert sampler.feasible_count(POOL_A_NAMES, POOL_A_NAMES) == 20
        _assert_valid(sampler.sample(POOL_A_NAMES, POOL_A_NAMES, 20), 20)
        with pytest.raises(InvalidSampleRequest):
            sampler.sample(POOL_A_NAMES, POOL_A_NAMES, 21)

    def test_overlapping_pools_never_pair_a_name_with_itself(self):
        pool_a = ["x", "y", "z"]
        pool_b = ["z", "w"]
        sampler = _sampler()

        assert sampler.feasible_count(pool_a, pool_b) == 5
        draws = sampler.sample(pool_a, pool_b, 5)
        assert Pair("z", "z") not in {d.pair for d in draws}

    def test_empty_pool_only_allows_zero(self):
        sampler = _sampler()

        assert sampler.sample(POOL_A_NAMES, [], 0) == []
        with pytest.raises(InvalidSampleRequest):
            sampler.sample(POOL_A_NAMES, [], 1)


class TestMixedMode:
    def test_feasible_count_excludes_equal_indices(self):
        # 4 pool combinations, each 5 x 5 minus the 5 equal-index draws
        assert _sampler().feasible_count(POOL_A_NAMES, POOL_B_NAMES, SampleMode.MIXED) == 80

    def test_draws_carry_their_pool(self):
        draws = _sampler().sample(POOL_A_NAMES, POOL_B_NAMES, 40, SampleMode.MIXED)

        _assert_valid(draws, 40)
        pools = (POOL_A_NAMES, POOL_B_NAMES)
        for draw in draws:
            assert draw.pair.first in pools[draw.first_pool]
            assert draw.pair.second in pools[draw.second_pool]
            assert pools[draw.first_pool].index(draw.pair.first) != pools[
                draw.second_pool
            ].index(draw.pair.second)

    def test_more_than_available_raises(self):
        with pytest.raises(InvalidSampleRequest):
            _sampler().sample(POOL_A_NAMES, POOL_B_NAMES, 81, SampleMode.MIXED)

    def test_one_empty_pool(self):
        draws = _sampler().sample(["x", "y", "z"], [], 6, SampleMode.MIXED)

        _assert_valid(draws, 6)
        assert all(d.first_pool == d.second_pool == POOL_A for d in draws)


class TestRejectionSampling:
    """Large draft spaces skip enumeration; forced here with enumeration_limit=0."""

    def test_returns_unique_pairs(self):
        sampler = _sampler(enumeration_limit=0)

        _assert_valid(sampler.sample(POOL_A_NAMES, POOL_B_NAMES, 20), 20)
        _assert_valid(
            sampler.sample(POOL_A_NAMES, POOL_B_NAMES, 30, SampleMode.MIXED), 30
        )

    def test_gives_up_instead_of_looping(self):
        sampler = _sampler(enumeration_limit=0, attempts_per_pair=50)

        with pytest.raises(InvalidSampleRequest):
            sampler.sample(POOL_A_NAMES, POOL_A_NAMES, 21)

    def test_rejects_counts_above_draft_space(self):
        sampler = _sampler(enumeration_limit=0)

        with pytest.raises(InvalidSampleRequest):
            sampler.sample(POOL_A_NAMES, POOL_B_NAMES, 26)


def test_zero_count_returns_nothing():
    assert _sampler().sample(POOL_A_NAMES, POOL_B_NAMES, 0) == []


def test_negative_count_raises():
    with pytest.raises(InvalidSampleRequest):
        _sampler().sample(POOL_A_NAMES, POOL_B_NAMES, -1)


def test_same_seed_gives_same_draws():
    first = _sampler(seed=3).sample(POOL_A_NAMES, POOL_B_NAMES, 10, SampleMode.MIXED)
    second = _sampler(seed=3).sample(POOL_A_NAMES, POOL_B_NAMES, 10, SampleMode.MIXED)

    assert first == second
