"""
Brute-force bond scanning over small sets of atoms.

Atoms are referred to by integer indices into a shared (N, 3) positions
array and a matching sequence of element symbols. Every detected pair is
handed to `add_bond(i, j)`; nothing is returned.
"""

import numpy as np
from scipy.spatial.distance import cdist


def scan_pairs(indices, positions, symbols, cutoffs, add_bond):
    """
    Test every unordered pair within one set of atoms.

    Evaluates the N * (N - 1) / 2 pairs i < j in input order, with no
    self pairs, and calls `add_bond` for each bonded pair.

    Args:
        indices (array-like[int]): Atom indices to scan.
        positions (numpy.ndarray): (N, 3) coordinates of all atoms.
        symbols (Sequence[str]): Element symbols of all atoms.
        cutoffs (CutoffTable): Pairwise bonding test for this run.
        add_bond (Callable[[int, int], Any]): Bond sink.

    Returns:
        int: Number of bonds found.
    """
    indices = np.asarray(indices, dtype=int)
    n = len(indices)
    if n < 2:
        return 0
    points = positions[indices]
    distances = cdist(points, points)
    order = indices.tolist()
    found = 0
    for a in range(n - 1):
        i = order[a]
        for b in range(a + 1, n):
            j = order[b]
            if cutoffs.are_bonded(symbols[i], symbols[j], distances[a, b]):
                add_bond(i, j)
                found += 1
    return found


def scan_cross_pairs(
    left_indices, right_indices, positions, symbols, cutoffs, add_bond
):
    """
    Test every pair made of one atom from each of two disjoint sets.

    Pairs internal to either set are never evaluated, so this is used to
    join two sets that have already been scanned on their own.

    Args:
        left_indices (array-like[int]): Atom indices of the first set.
        right_indices (array-like[int]): Atom indices of the second set.
        positions (numpy.ndarray): (N, 3) coordinates of all atoms.
        symbols (Sequence[str]): Element symbols of all atoms.
        cutoffs (CutoffTable): Pairwise bonding test for this run.
        add_bond (Callable[[int, int], Any]): Bond sink.

    Returns:
        int: Number of bonds found.
    """
    left_indices = np.asarray(left_indices, dtype=int)
    right_indices = np.asarray(right_indices, dtype=int)
    if len(left_indices) == 0 or len(right_indices) == 0:
        return 0
    distances = cdist(positions[left_indices], positions[right_indices])
    found = 0
    for a, i in enumerate(left_indices.tolist()):
        for b, j in enumerate(right_indices.tolist()):
            if cutoffs.are_bonded(symbols[i], symbols[j], distances[a, b]):
                add_bond(i, j)
                found += 1
    return found
