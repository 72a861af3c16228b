#!/usr/bin/env python

"""
design_check.py: Validation helpers for Steiner systems S(t,k,n).

Provides the necessary divisibility conditions for a Steiner system to exist,
the expected number of blocks, and an incidence-matrix check that a candidate
design covers every t-subset of {1..n} exactly once.

Dependencies:
    - numpy: incidence matrix and coverage counts
    - combinatorics: t-subset enumeration
"""

from math import comb

import numpy as np

from combinatorics import generate_combinations


def expected_block_count(t, k, n):
    """
    Number of blocks in any S(t,k,n), C(n,t) / C(k,t).

    Raises:
        ValueError: If C(k,t) does not divide C(n,t)
    """
    total, per_block = comb(n, t), comb(k, t)
    if total % per_block:
        raise ValueError(f"C({n},{t})={total} is not divisible by C({k},{t})={per_block}")
    return total // per_block


def is_admissible(t, k, n):
    """
    Check the divisibility conditions every S(t,k,n) must satisfy.

    For each 0 <= i < t, the blocks through a fixed i-subset form an
    S(t-i, k-i, n-i), so C(k-i, t-i) must divide C(n-i, t-i).

    Returns:
        bool: False if some condition fails (no design can exist)
    """
    if not 0 < t < k < n:
        return False
    return all(comb(n - i, t - i) % comb(k - i, t - i) == 0 for i in range(t))


def coverage_counts(design, t, n):
    """
    Count how many blocks of a design contain each t-subset of {1..n}.

    Args:
        design (list): List of blocks (sequences of ints in 1..n)
        t (int): Size of the covered subsets
        n (int): Size of the universe

    Returns:
        np.ndarray: One count per t-subset, in generate_combinations order
    """
    targets = [tuple(c) for c in generate_combinations(list(range(1, n + 1)), t)]
    index = {target: col for col, target in enumerate(targets)}

    incidence = np.zeros((len(design), len(targets)), dtype=np.int64)
    for row, block in enumerate(design):
        for sub in generate_combinations(sorted(block), t):
            incidence[row, index[tuple(sub)]] = 1

    return incidence.sum(axis=0)


def is_steiner_system(design, t, k, n):
    """
    Check that a design is an S(t,k,n).

    Every block must be a strictly increasing k-subset of {1..n}, and every
    t-subset of {1..n} must lie in exactly one block.
    """
    for block in design:
        block = list(block)
        if len(block) != k or block != sorted(set(block)):
            return False
        if block[0] < 1 or block[-1] > n:
            return False

    return bool(np.all(coverage_counts(design, t, n) == 1))


if __name__ == "__main__":
    fano = [[1, 2, 4], [2, 3, 5], [3, 4, 6], [4, 5, 7], [1, 5, 6], [2, 6, 7], [1, 3, 7]]
    print(f"S(2,3,7) admissible: {is_admissible(2, 3, 7)}, blocks: {expected_block_count(2, 3, 7)}")
    print(f"Fano plane is S(2,3,7): {is_steiner_system(fano, 2, 3, 7)}")
