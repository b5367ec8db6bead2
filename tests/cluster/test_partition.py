"""Tests for Partition, build_deck and deck validation."""

import pytest

from parabond.cluster.partition import Partition, build_deck, deck_checksum, validate_deck
from parabond.core.errors import CorruptDeck, InvalidPartition


class TestPartition:
    def test_range(self):
        p = Partition(n=3, begin=5)
        assert p.end == 8
        assert 5 in p and 7 in p
        assert 8 not in p and 4 not in p

    def test_negative_n_rejected(self):
        with pytest.raises(InvalidPartition):
            Partition(n=-1)

    def test_begin_must_be_positive(self):
        with pytest.raises(InvalidPartition):
            Partition(n=3, begin=0)

    def test_immutable(self):
        p = Partition(n=3)
        with pytest.raises(AttributeError):
            p.n = 4


class TestBuildDeck:
    def test_seed_zero_is_ascending(self):
        assert build_deck(Partition(n=3, begin=1, seed=0)) == [1, 2, 3]

    @pytest.mark.parametrize("n, begin", [(0, 1), (1, 1), (10, 1), (25, 100)])
    def test_seed_zero_for_any_range(self, n, begin):
        assert build_deck(Partition(n=n, begin=begin)) == list(range(begin, begin + n))

    def test_empty_partition(self):
        assert build_deck(Partition(n=0)) == []

    @pytest.mark.parametrize("seed", [1, 7, 42, -3])
    def test_seeded_deck_deterministic(self, seed):
        p = Partition(n=50, begin=10, seed=seed)
        assert build_deck(p) == build_deck(Partition(n=50, begin=10, seed=seed))

    @pytest.mark.parametrize("seed", [0, 1, 42])
    def test_deck_is_permutation_of_range(self, seed):
        p = Partition(n=40, begin=3, seed=seed)
        deck = build_deck(p)
        assert len(deck) == 40
        assert len(set(deck)) == 40
        assert all(portf_id in p and portf_id > 0 for portf_id in deck)

    def test_seed_shuffles(self):
        deck = build_deck(Partition(n=50, seed=42))
        assert deck != list(range(1, 51))
        assert sorted(deck) == list(range(1, 51))

    def test_different_seeds_differ(self):
        assert build_deck(Partition(n=50, seed=1)) != build_deck(Partition(n=50, seed=2))


class TestValidateDeck:
    def test_valid(self):
        p = Partition(n=4, seed=9)
        validate_deck(build_deck(p), p)

    def test_wrong_length(self):
        with pytest.raises(CorruptDeck):
            validate_deck([1, 2], Partition(n=3))

    def test_out_of_range(self):
        with pytest.raises(CorruptDeck):
            validate_deck([1, 2, 4], Partition(n=3))

    def test_non_positive(self):
        with pytest.raises(CorruptDeck):
            validate_deck([0, 1, 2], Partition(n=3))

    def test_duplicates(self):
        with pytest.raises(CorruptDeck):
            validate_deck([1, 1, 2], Partition(n=3))


class TestDeckChecksum:
    def test_order_independent(self):
        assert deck_checksum([3, 1, 2]) == deck_checksum([1, 2, 3])

    def test_matches_shuffled_deck(self):
        assert deck_checksum(build_deck(Partition(n=20, seed=5))) == deck_checksum(list(range(1, 21)))

    def test_distinguishes_sets(self):
        assert deck_checksum([1, 2, 3]) != deck_checksum([1, 2, 4])
