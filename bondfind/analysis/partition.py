"""
Spatial partitioning for bond detection in large structures.

Bonds only join atoms that are close in space, so the atom set is split
along alternating x, y and z planes until partitions are small enough to
scan pairwise. Bonds crossing a splitting plane are recovered by scanning
the two thin slabs of atoms within `margin` of the plane against each
other once both halves are done.
"""

import logging

import numpy as np

from bondfind.analysis.scanner import scan_cross_pairs, scan_pairs

logger = logging.getLogger(__name__)


class SpatialPartitioner:
    """
    Divide-and-conquer bond search over atom indices.

    Partitions are index arrays into the shared positions array; atom
    data is never copied. `margin` must be at least the largest cutoff
    of any element pair present, otherwise bonds across a splitting
    plane can be missed.

    Args:
        positions (numpy.ndarray): (N, 3) atomic coordinates.
        symbols (Sequence[str]): Element symbol of each atom.
        cutoffs (CutoffTable): Pairwise bonding test for this run.
        margin (float): Stitching buffer width in Angstrom.
        min_atoms (int): Partitions smaller than this are scanned
            pairwise. Callers pass at least 2; a lower floor still
            terminates through the empty-side fallback of `_split`.
        add_bond (Callable[[int, int], Any]): Bond sink.
    """

    def __init__(self, positions, symbols, cutoffs, margin, min_atoms, add_bond):
        self.positions = np.asarray(positions, dtype=float).reshape(-1, 3)
        self.symbols = symbols
        self.cutoffs = cutoffs
        self.margin = margin
        self.min_atoms = min_atoms
        self.add_bond = add_bond
        self.num_splits = 0
        self.num_leaves = 0
        self.num_bonds = 0

    def run(self, indices=None, axis=0):
        """
        Find all bonds among `indices` (default: every atom).

        Partitions are processed depth-first from an explicit stack, left
        half before right half, and a split is stitched only after both
        of its halves, including their own stitches, are complete.

        Returns:
            int: Number of bonds found.
        """
        if indices is None:
            indices = np.arange(len(self.positions))
        stack = [(np.asarray(indices, dtype=int), axis % 3, None)]
        while stack:
            indices, axis, seam = stack.pop()
            if seam is not None:
                self._stitch(indices, seam, axis)
                continue
            halves = self._split(indices, axis)
            if halves is None:
                self._scan(indices)
                continue
            left, right, center = halves
            next_axis = (axis + 1) % 3
            stack.append(((left, right), axis, center))
            stack.append((right, next_axis, None))
            stack.append((left, next_axis, None))
        logger.debug(
            f"Partitioned {len(self.positions)} atoms with {self.num_splits} "
            f"splits and {self.num_leaves} leaves; found {self.num_bonds} bonds."
        )
        return self.num_bonds

    def _split(self, indices, axis):
        """
        Split a partition at the mean coordinate along `axis`.

        Returns None when the partition should be scanned directly: it is
        below the size floor, or the split would leave one side empty
        (e.g. all atoms share the coordinate along this axis).
        """
        if len(indices) < self.min_atoms:
            return None
        coordinates = self.positions[indices, axis]
        center = coordinates.mean()
        below = coordinates < center
        left = indices[below]
        right = indices[~below]
        if len(left) == 0 or len(right) == 0:
            return None
        self.num_splits += 1
        return left, right, center

    def _scan(self, indices):
        self.num_leaves += 1
        self.num_bonds += scan_pairs(
            indices, self.positions, self.symbols, self.cutoffs, self.add_bond
        )

    def _stitch(self, halves, center, axis):
        """Join two halves by scanning the slabs on either side of the plane."""
        left, right = halves
        left_edge = left[self.positions[left, axis] > center - self.margin]
        right_edge = right[self.positions[right, axis] < center + self.margin]
        self.num_bonds += scan_cross_pairs(
            left_edge,
            right_edge,
            self.positions,
            self.symbols,
            self.cutoffs,
            self.add_bond,
        )
