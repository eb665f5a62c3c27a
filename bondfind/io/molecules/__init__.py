"""
Data for molecules
"""

from bondfind.utils.periodictable import DEFAULT_RADIUS, PeriodicTable

# Default multiplicative tolerance applied to the sum of covalent radii
DEFAULT_TOLERANCE = 1.1

pt = PeriodicTable()


def get_covalent_radius(element, radii=None, default_radius=DEFAULT_RADIUS):
    """
    Returns the covalent radius of an element in Angstrom.

    The symbol is matched exactly against the table; unknown symbols
    fall back to `default_radius` instead of raising.

    Args:
        element (str): Atomic symbol (e.g., "C", "O", "H").
        radii (dict, optional): Per-element overrides consulted before
            the built-in table.
        default_radius (float): Radius used for unknown symbols.

    Returns:
        float: Covalent radius in Angstrom.
    """
    if radii is not None and element in radii:
        return radii[element]
    return pt.covalent_radius(element, default=default_radius)


def get_bond_cutoff(
    element1,
    element2,
    tolerance=DEFAULT_TOLERANCE,
    radii=None,
    default_radius=DEFAULT_RADIUS,
):
    """
    Calculates bond cutoff distance based on covalent radii and tolerance.

        R_cutoff = (R_A + R_B) * tolerance

    where R_A and R_B are the covalent radii of atoms A and B. For
    example, with the default tolerance of 1.1:
        C-C: (0.77 + 0.77) * 1.1 = 1.694 Angstrom
        C-H: (0.77 + 0.32) * 1.1 = 1.199 Angstrom

    Two atoms are considered bonded when their distance is strictly
    below the cutoff. The result is symmetric in its two elements.

    Args:
        element1 (str): Atomic symbol of first element.
        element2 (str): Atomic symbol of second element.
        tolerance (float): Multiplicative slack factor (default: 1.1).
        radii (dict, optional): Per-element radius overrides.
        default_radius (float): Radius used for unknown symbols.

    Returns:
        float: Bond cutoff distance in Angstrom.
    """
    r1 = get_covalent_radius(element1, radii, default_radius)
    r2 = get_covalent_radius(element2, radii, default_radius)
    return (r1 + r2) * tolerance
