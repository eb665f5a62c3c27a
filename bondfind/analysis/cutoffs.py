"""
Bond cutoff distances and the pairwise bonding test.

A `CutoffTable` memoizes the cutoff distance of every element pair met
during one bond search. Keys are order-independent, so "C"/"H" and
"H"/"C" share a single entry and always give the same answer.
"""

import logging

from bondfind.io.molecules import (
    DEFAULT_TOLERANCE,
    get_bond_cutoff,
    get_covalent_radius,
)
from bondfind.utils.periodictable import COVALENT_RADII, DEFAULT_RADIUS

logger = logging.getLogger(__name__)


def pair_key(symbol1, symbol2):
    """Canonical, order-independent key for an element pair."""
    if symbol2 < symbol1:
        return symbol2, symbol1
    return symbol1, symbol2


class CutoffTable:
    """
    Lazily filled table of bond cutoffs for one bond search.

    Cutoffs are (R_A + R_B) * tolerance. Each pair is computed on first
    use and the stored value is reused verbatim afterwards.

    Args:
        tolerance (float): Multiplicative slack factor.
        radii (dict, optional): Per-element radius overrides.
        default_radius (float): Radius for elements missing from both
            the overrides and the built-in table.
    """

    def __init__(
        self,
        tolerance=DEFAULT_TOLERANCE,
        radii=None,
        default_radius=DEFAULT_RADIUS,
    ):
        self.tolerance = tolerance
        self.radii = radii
        self.default_radius = default_radius
        self._cutoffs = {}
        self._unknown = set()

    def __len__(self):
        return len(self._cutoffs)

    def __contains__(self, pair):
        return pair_key(*pair) in self._cutoffs

    def _note_unknown(self, symbol):
        if symbol in COVALENT_RADII or (self.radii and symbol in self.radii):
            return
        if symbol not in self._unknown:
            self._unknown.add(symbol)
            logger.debug(
                f"No covalent radius for {symbol!r}, "
                f"using default radius {self.default_radius}."
            )

    def radius(self, symbol):
        """Covalent radius of a symbol, with the default as fallback."""
        self._note_unknown(symbol)
        return get_covalent_radius(symbol, self.radii, self.default_radius)

    def cutoff(self, symbol1, symbol2):
        """
        Cutoff distance for an element pair, computed once per table.

        Args:
            symbol1 (str): First element symbol.
            symbol2 (str): Second element symbol.

        Returns:
            float: Cutoff distance in Angstrom.
        """
        key = pair_key(symbol1, symbol2)
        try:
            return self._cutoffs[key]
        except KeyError:
            pass
        for symbol in key:
            self._note_unknown(symbol)
        value = get_bond_cutoff(
            *key,
            tolerance=self.tolerance,
            radii=self.radii,
            default_radius=self.default_radius,
        )
        self._cutoffs[key] = value
        return value

    def are_bonded(self, symbol1, symbol2, distance):
        """
        Decide whether two atoms at `distance` are bonded.

        There is no lower bound: coincident atoms count as bonded.

        Returns:
            bool: True if the distance is strictly below the cutoff.
        """
        return distance < self.cutoff(symbol1, symbol2)

    def max_radius(self, symbols):
        """Largest covalent radius among the given symbols."""
        return max((self.radius(symbol) for symbol in symbols), default=0.0)


def estimate_margin(
    symbols,
    tolerance=DEFAULT_TOLERANCE,
    radii=None,
    default_radius=DEFAULT_RADIUS,
):
    """
    Estimate a merge margin that never loses a cross-partition bond.

    The margin is 2 * max_radius * tolerance, where max_radius is the
    largest radius among the elements present. This bounds the cutoff
    of every possible pair, at the cost of being larger than necessary
    when the largest element never bonds to itself.

    Args:
        symbols (Iterable[str]): Element symbols present (duplicates
            are fine).
        tolerance (float): Multiplicative slack factor.
        radii (dict, optional): Per-element radius overrides.
        default_radius (float): Radius for unknown elements.

    Returns:
        float: Margin in Angstrom; 0.0 for an empty molecule.
    """
    table = CutoffTable(
        tolerance=tolerance, radii=radii, default_radius=default_radius
    )
    return 2 * table.max_radius(set(symbols)) * tolerance
