"""
Write-count behaviour: cycle sort writes each misplaced element exactly once
and never touches an element already in its final position.
"""

from __future__ import annotations

import random

import pytest

from cyclesort import cycle_sort, cycle_sort_by


class CountingList(list):
    """A list that counts item assignments."""

    def __init__(self, *args):
        super().__init__(*args)
        self.sets = 0

    def __setitem__(self, index, value):
        self.sets += 1
        super().__setitem__(index, value)


def test_example_write_bound() -> None:
    a = [5, 1, 4, 2, 8]
    writes = cycle_sort(a)
    assert a == [1, 2, 4, 5, 8]
    assert writes <= 4
    # 4 and 8 are already in place
    assert writes == 3


@pytest.mark.parametrize("n", [0, 1, 2, 10, 50])
def test_presorted_input_writes_nothing(n: int) -> None:
    a = CountingList(range(n))
    assert cycle_sort(a) == 0
    assert a.sets == 0
    assert list(a) == list(range(n))


def test_empty_and_singleton_are_noops() -> None:
    empty: list = []
    single = [42]
    assert cycle_sort(empty) == 0
    assert cycle_sort(single) == 0
    assert empty == [] and single == [42]
    assert cycle_sort_by(empty, lambda x, y: 0) == 0


def test_all_equal_writes_nothing() -> None:
    a = CountingList([7] * 30)
    assert cycle_sort(a) == 0
    assert a.sets == 0


def test_swap_pair_takes_two_writes() -> None:
    assert cycle_sort([2, 1]) == 2


def test_returned_writes_match_item_assignments() -> None:
    rng = random.Random(2024)
    for _ in range(50):
        values = [rng.randint(0, 20) for _ in range(rng.randint(0, 40))]
        a = CountingList(values)
        writes = cycle_sort(a)
        assert writes == a.sets
        assert list(a) == sorted(values)


def test_shuffled_permutation_writes_equal_misplaced() -> None:
    rng = random.Random(7)
    for length in range(1, 26):
        a = list(range(length))
        for _ in range(10):
            rng.shuffle(a)
            expect = sum(1 for i, v in enumerate(a) if i != v)
            writes = cycle_sort(a)
            assert a == list(range(length))
            assert writes == expect


def test_writes_bounded_by_unplaced_elements() -> None:
    rng = random.Random(99)
    for _ in range(100):
        a = [rng.randint(0, 5) for _ in range(rng.randint(0, 30))]
        n = len(a)
        in_place = sum(1 for x, y in zip(a, sorted(a)) if x == y)
        assert cycle_sort(a) <= n - in_place
