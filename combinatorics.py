#!/usr/bin/env python

"""
combinatorics.py: Subset generation used by the Steiner system search.

This module provides the two pure generators the search is built on: all
fixed-size subsequences of an ordered sequence, and all sorted supersets of a
subset obtained by drawing extra elements from a pool.

Usage:
    generate_combinations([1, 2, 3, 4], 2)
    build_superset_candidates([2, 5], [1, 3, 4, 6], 3)
"""

from bisect import insort


def generate_combinations(sequence, size):
    """
    Return every subsequence of the given size, keeping the input's order.

    Args:
        sequence (Sequence): Ordered elements to choose from
        size (int): Number of elements in each result

    Returns:
        list: List of lists, C(len(sequence), size) of them. [[]] when size
        is 0, [] when size exceeds len(sequence).
    """
    if size <= 0:
        return [[]]

    combos = []
    for i in range(len(sequence)):
        for rest in generate_combinations(sequence[i + 1:], size - 1):
            combos.append([sequence[i]] + rest)
    return combos


def _insert_sorted(subset, element):
    extended = list(subset)
    insort(extended, element)
    return extended


def build_superset_candidates(subset, pool, target_size):
    """
    Expand a sorted subset to every sorted superset of target_size.

    The extra elements are taken from pool in increasing position order, so
    each choice of elements appears once.

    Args:
        subset (list): Sorted starting subset
        pool (list): Elements available for expansion, disjoint from subset
        target_size (int): Size of the supersets to produce

    Returns:
        list: C(len(pool), target_size - len(subset)) sorted supersets
    """
    subset = list(subset)
    pool = list(pool)

    def expand(current, start, remaining):
        if remaining == 0:
            return [current]
        supersets = []
        # leave enough pool elements for the slots still to fill
        for i in range(start, len(pool) - remaining + 1):
            supersets.extend(expand(_insert_sorted(current, pool[i]), i + 1, remaining - 1))
        return supersets

    needed = target_size - len(subset)
    if needed < 0:
        return []
    return expand(subset, 0, needed)


if __name__ == "__main__":
    print(f"2-subsets of 1..4: {generate_combinations([1, 2, 3, 4], 2)}")
    print(f"3-supersets of [2, 5]: {build_superset_candidates([2, 5], [1, 3, 4, 6], 3)}")
