"""
Tests for design_check.py

Verifies:
- Block counts and admissibility conditions
- Coverage counting and Steiner system recognition
"""

import numpy as np
import pytest

from design_check import (
    expected_block_count, is_admissible, coverage_counts, is_steiner_system
)

FANO = [[1, 2, 4], [1, 3, 7], [1, 5, 6], [2, 3, 5], [2, 6, 7], [3, 4, 6], [4, 5, 7]]


class TestBlockCount:

    def test_known_counts(self):
        assert expected_block_count(2, 3, 7) == 7
        assert expected_block_count(2, 3, 9) == 12
        assert expected_block_count(3, 4, 8) == 14
        assert expected_block_count(1, 2, 4) == 2

    def test_not_divisible_raises(self):
        with pytest.raises(ValueError, match="not divisible"):
            expected_block_count(1, 2, 3)


class TestAdmissibility:

    @pytest.mark.parametrize("t,k,n", [(2, 3, 7), (2, 3, 9), (2, 3, 13), (3, 4, 8), (1, 3, 6), (2, 4, 13)])
    def test_admissible(self, t, k, n):
        assert is_admissible(t, k, n)

    @pytest.mark.parametrize("t,k,n", [(1, 2, 3), (2, 3, 6), (2, 3, 8), (2, 3, 4), (3, 2, 5), (2, 3, 3)])
    def test_not_admissible(self, t, k, n):
        assert not is_admissible(t, k, n)

    def test_block_count_alone_is_not_enough(self):
        """C(6,2)/C(3,2) = 5 is integral but points lie on 5/2 blocks."""
        assert expected_block_count(2, 3, 6) == 5
        assert not is_admissible(2, 3, 6)


class TestCoverage:

    def test_fano_counts(self):
        counts = coverage_counts(FANO, 2, 7)
        assert counts.shape == (21,)
        assert np.all(counts == 1)

    def test_gaps_and_overlaps_counted(self):
        counts = coverage_counts([[1, 2, 3], [1, 2, 4]], 2, 4)
        # pairs in order (1,2) (1,3) (1,4) (2,3) (2,4) (3,4)
        assert counts.tolist() == [2, 1, 1, 1, 1, 0]

    def test_fano_is_steiner_system(self):
        assert is_steiner_system(FANO, 2, 3, 7)

    def test_missing_block(self):
        assert not is_steiner_system(FANO[:-1], 2, 3, 7)

    def test_repeated_block(self):
        assert not is_steiner_system(FANO + [FANO[0]], 2, 3, 7)

    def test_wrong_block_size(self):
        assert not is_steiner_system([[1, 2, 3, 4]], 1, 2, 4)

    def test_unsorted_block(self):
        assert not is_steiner_system([[2, 1], [3, 4]], 1, 2, 4)

    def test_out_of_range_element(self):
        assert not is_steiner_system([[1, 2], [3, 5]], 1, 2, 4)

    def test_matching(self):
        assert is_steiner_system([[1, 4], [2, 3]], 1, 2, 4)
