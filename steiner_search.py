#!/usr/bin/env python

"""
steiner_search.py: Exhaustive search for Steiner systems S(t,k,n).

A Steiner system S(t,k,n) is a collection of k-subsets (blocks) of {1..n} such
that every t-subset is contained in exactly one block. SteinerSearcher walks
the space of partial exact covers depth-first and yields each complete design
as it is found.

The searcher keeps four pieces of state for its whole lifetime:
    - the frontier, a stack of partial designs waiting to be expanded
    - a memo of block -> t-subsets covered by that block
    - dead ends, block sets known to have no completion
    - explored, block sets already popped and expanded

Usage:
    for design in SteinerSearcher(2, 3, 7):
        print(design)

Dependencies:
    - combinatorics: subset and superset generation
    - progress_observer: rate limiting of progress lines
"""

from bisect import insort
from collections import namedtuple

from combinatorics import generate_combinations, build_superset_candidates
from progress_observer import Observer


class InvalidParameters(ValueError):
    """Raised when a search is requested for parameters outside t < k < n."""


# blocks: sorted tuple of blocks; uncovered: tuple of t-subsets; covered: frozenset of t-subsets
PartialDesign = namedtuple('PartialDesign', ['blocks', 'uncovered', 'covered'])


class SteinerSearcher:
    """
    Iterator over all Steiner systems S(t,k,n), found by depth-first search.

    Each call to next() runs the search until the next complete design is
    popped from the frontier, or raises StopIteration once the frontier is
    empty. The iterator cannot be restarted; a new searcher starts over.

    Attributes:
        t (int): Size of the subsets to be covered
        k (int): Block size
        n (int): Size of the universe {1..n}
        fringe (list): Stack of PartialDesign states, last in first out
        set_permutations (dict): Memo of block -> tuple of covered t-subsets
        dead_ends (set): Block sets with no valid extension
        explored (set): Block sets already expanded
        pops (int): Number of states popped, duplicates included
        expansions (int): Number of states actually expanded
    """

    def __init__(self, t, k, n, observer=None, report_interval=1.0, verbose=False, logfile=None):
        if not t < k < n:
            raise InvalidParameters(f"t, k, n must follow t < k < n (got t={t}, k={k}, n={n})")

        self.t = t
        self.k = k
        self.n = n
        self.universe = list(range(1, n + 1))

        all_targets = tuple(tuple(c) for c in generate_combinations(self.universe, t))
        self.fringe = [PartialDesign(blocks=(), uncovered=all_targets, covered=frozenset())]

        self.set_permutations = {}
        self.dead_ends = set()
        self.explored = set()

        self.observer = observer if observer is not None else Observer(report_interval)
        self.verbose = verbose
        self.logfile = logfile
        self.pops = 0
        self.expansions = 0

    def block_coverage(self, block):
        """Return the t-subsets covered by a block, computing them once per block."""
        block = tuple(block)
        coverage = self.set_permutations.get(block)
        if coverage is None:
            coverage = tuple(tuple(c) for c in generate_combinations(block, self.t))
            self.set_permutations[block] = coverage
        return coverage

    def stats(self):
        """
        Snapshot of the search state sizes.

        Returns:
            dict: Keys fringe, dead_ends, explored, memo, pops and expansions
        """
        return {
            'fringe': len(self.fringe),
            'dead_ends': len(self.dead_ends),
            'explored': len(self.explored),
            'memo': len(self.set_permutations),
            'pops': self.pops,
            'expansions': self.expansions,
        }

    def _extend(self, state):
        """
        Build every child of a partial design that keeps the cover exact.

        Children already known as dead ends or explored are dropped, and
        children reached through several uncovered t-subsets are kept once.

        Returns:
            list: Child states sorted by block set
        """
        children = {}
        for target in state.uncovered:
            pool = [x for x in self.universe if x not in target]
            for candidate in build_superset_candidates(list(target), pool, self.k):
                block = tuple(candidate)
                coverage = self.block_coverage(block)
                if any(sub in state.covered for sub in coverage):
                    continue

                blocks = list(state.blocks)
                insort(blocks, block)
                blocks = tuple(blocks)
                if blocks in children or blocks in self.dead_ends or blocks in self.explored:
                    continue

                newly_covered = set(coverage)
                children[blocks] = PartialDesign(
                    blocks=blocks,
                    uncovered=tuple(sub for sub in state.uncovered if sub not in newly_covered),
                    covered=state.covered | newly_covered,
                )

        return [children[sig] for sig in sorted(children)]

    def _report(self, new_fringe):
        line = (f"i: {self.pops}, fringe: {len(self.fringe)}, dead ends: {len(self.dead_ends)}, "
                f"explored: {len(self.explored)}, new fringe: {new_fringe}")
        if self.verbose:
            print(line)
        if self.logfile:
            with open(self.logfile, 'a') as f:
                f.write(f'{line}\n')

    def __iter__(self):
        return self

    def __next__(self):
        while self.fringe:
            state = self.fringe.pop()
            self.pops += 1

            # same block set pushed by two different parents
            if state.blocks in self.explored:
                continue
            self.explored.add(state.blocks)
            self.expansions += 1

            if not state.uncovered:
                return [list(block) for block in state.blocks]

            children = self._extend(state)

            if self.observer.tick():
                self._report(len(children))

            if children:
                # largest block set is popped first
                self.fringe.extend(children)
            else:
                self.dead_ends.add(state.blocks)

        raise StopIteration


def new_search(t, k, n, **kwargs):
    """
    Create a SteinerSearcher for S(t,k,n).

    Raises:
        InvalidParameters: Unless t < k < n
    """
    return SteinerSearcher(t, k, n, **kwargs)


if __name__ == "__main__":
    for design in SteinerSearcher(1, 2, 4, verbose=True):
        print(design)
