#!/usr/bin/env python

"""
Covering Design Retrieval Module

This module provides functionality to query and retrieve covering designs from
the La Jolla Covering Repository (LJCR). Covering designs are combinatorial objects
where a set of k-element subsets (blocks) cover all t-element subsets of a v-element set.
When the best known covering has exactly C(v,t)/C(k,t) blocks and covers every
t-subset once, it is a Steiner system and can be used to cross-check a search.

The module caches query results to avoid redundant network requests.

Usage:
    blocks = query_ljcr(v, k, t)
    design = known_steiner_system(v, k, t)
    where:
        v: Size of the ground set
        k: Size of each block
        t: Size of subsets to be covered
"""

from bs4 import BeautifulSoup as bs
import requests
from functools import lru_cache

from design_check import expected_block_count, is_admissible, is_steiner_system

LJCR_URL = 'https://ljcr.dmgordon.org/cover/get_cover.php'


@lru_cache(maxsize=128)
def _fetch_cover(v, k, t):
    url = f'{LJCR_URL}?v={v}&k={k}&t={t}'
    response = requests.get(url, timeout=30)
    response.raise_for_status()
    return response.text


def parse_cover(html):
    """
    Parse the blocks of a covering out of an LJCR result page.

    Args:
        html (str): Page returned by get_cover.php

    Returns:
        list: List of blocks, [] if the page holds no design
    """
    soup = bs(html, 'html.parser')
    pre_tag = soup.find('pre')

    if not pre_tag:
        return []

    blocks = []
    for line in pre_tag.text.strip().split('\n'):
        if line.strip():
            try:
                block = [int(num) for num in line.split()]
            except ValueError:
                # Skip lines that don't contain valid integers
                continue
            if block:
                blocks.append(block)

    return blocks


def query_ljcr(v, k, t):
    """
    Query covering designs from ljcr.dmgordon.org and parse the result.

    Args:
        v (int): Number of elements in the set
        k (int): Size of each block
        t (int): Coverage parameter

    Returns:
        list: List of blocks representing the covering design
    """
    return parse_cover(_fetch_cover(v, k, t))


def known_steiner_system(v, k, t):
    """
    Return the LJCR covering for (v,k,t) if it is a Steiner system S(t,k,v).

    Returns:
        list or None: Sorted blocks of the design, or None when the parameters
        are inadmissible or the best known covering is not exact
    """
    if not is_admissible(t, k, v):
        return None

    blocks = query_ljcr(v, k, t)
    if len(blocks) != expected_block_count(t, k, v):
        return None

    design = sorted(sorted(block) for block in blocks)
    if not is_steiner_system(design, t, k, v):
        return None
    return design


if __name__ == "__main__":
    print(f"Covering design (7,3,2): {query_ljcr(7, 3, 2)}")
    print(f"Steiner system S(2,3,9): {known_steiner_system(9, 3, 2)}")
