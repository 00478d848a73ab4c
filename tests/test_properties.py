# tests/test_properties.py
"""
Randomised checks of IntensityMap against a brute-force reference model.

Operations use integer boundaries in [0, 100) so the reference window in
conftest covers every boundary plus some slack on both sides.
"""

import random

import pytest

from intensity_segments import IntensityMap

SEEDS = range(25)


def _random_op(rng):
    start = rng.randrange(0, 99)
    end = rng.randrange(start + 1, 100)
    amount = rng.choice([-3, -2, -1, 0, 1, 2, 3])
    method = rng.choice(["accumulate", "accumulate", "assign"])
    return method, start, end, amount


def _random_map(rng, steps=15):
    imap = IntensityMap()
    for _ in range(steps):
        method, start, end, amount = _random_op(rng)
        getattr(imap, method)(start, end, amount)
    return imap


def _assert_canonical(pairs):
    positions = [p for p, _ in pairs]
    assert positions == sorted(set(positions))
    previous = 0
    for _, value in pairs:
        assert value != previous
        previous = value


class TestAgainstReference:

    @pytest.mark.parametrize("seed", SEEDS)
    def test_random_sequences(self, seed, reference):
        rng = random.Random(seed)
        imap = IntensityMap()
        for _ in range(40):
            method, start, end, amount = _random_op(rng)
            getattr(imap, method)(start, end, amount)
            getattr(reference, method)(start, end, amount)

            assert imap.serialize() == reference.pairs()
            for x in (start - 1, start, end - 1, end, rng.randrange(-10, 110)):
                assert imap.value_at(x) == reference.value_at(x)


class TestCanonicalForm:

    @pytest.mark.parametrize("seed", SEEDS)
    def test_no_duplicates_or_repeats(self, seed):
        rng = random.Random(seed)
        imap = IntensityMap()
        for _ in range(40):
            method, start, end, amount = _random_op(rng)
            getattr(imap, method)(start, end, amount)
            _assert_canonical(imap.serialize())

    @pytest.mark.parametrize("seed", SEEDS)
    def test_first_value_nonzero_and_last_value_zero(self, seed):
        imap = _random_map(random.Random(seed))
        pairs = imap.serialize()
        if pairs:
            assert pairs[0][1] != 0
            assert pairs[-1][1] == 0


class TestAlgebraicLaws:

    @pytest.mark.parametrize("seed", SEEDS)
    def test_zero_amount_noop(self, seed):
        rng = random.Random(seed)
        imap = _random_map(rng)
        before = imap.serialize()
        start = rng.randrange(0, 99)
        imap.accumulate(start, rng.randrange(start + 1, 100), 0)
        assert imap.serialize() == before

    @pytest.mark.parametrize("seed", SEEDS)
    def test_additivity(self, seed):
        rng = random.Random(seed)
        base = _random_map(rng)
        start = rng.randrange(0, 99)
        end = rng.randrange(start + 1, 100)
        m1, m2 = rng.randint(-5, 5), rng.randint(-5, 5)

        twice = base.copy()
        twice.accumulate(start, end, m1)
        twice.accumulate(start, end, m2)
        once = base.copy()
        once.accumulate(start, end, m1 + m2)

        assert twice == once
        for x in range(-5, 105):
            assert twice.value_at(x) == once.value_at(x)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_assignment_overwrite(self, seed):
        rng = random.Random(seed)
        imap = _random_map(rng)
        before = imap.copy()
        start = rng.randrange(0, 99)
        end = rng.randrange(start + 1, 100)
        value = rng.randint(-5, 5)

        imap.assign(start, end, value)

        for x in range(-5, 105):
            if start <= x < end:
                assert imap.value_at(x) == value
            else:
                assert imap.value_at(x) == before.value_at(x)

    @pytest.mark.parametrize("start, end, amount", [(0, 1, 1), (10, 30, -4), (-50, 50, 7)])
    def test_boundary_exclusivity(self, imap, start, end, amount):
        imap.accumulate(start, end, amount)
        assert imap.value_at(start) == amount
        assert imap.value_at(end) == 0
        assert imap.value_at(start - 1) == 0

    @pytest.mark.parametrize("seed", SEEDS)
    def test_from_pairs_round_trip(self, seed):
        imap = _random_map(random.Random(seed))
        assert IntensityMap.from_pairs(imap.serialize()) == imap
