"""
Periodic table utilities for covalent bonding radii.

Provides the covalent radius table used to infer bonds from 3D
coordinates, the fallback radius applied to elements missing from the
table, and a small interface for checking and ordering element
symbols against ASE's list of chemical symbols.
"""

from types import MappingProxyType

from ase.data import chemical_symbols as elements

# Default radius in Angstrom for elements absent from the table
DEFAULT_RADIUS = 1.5

# Covalent radii in Angstrom, from
# http://environmentalchemistry.com/yogi/periodic/covalentradius.html
COVALENT_RADII = MappingProxyType(
    {
        "Ag": 1.34, "Al": 1.18, "Ar": 0.98, "As": 1.20, "At": 1.45,
        "Au": 1.34, "B": 0.82, "Ba": 1.98, "Be": 0.90, "Bi": 1.46,
        "Br": 1.14, "C": 0.77, "Ca": 1.74, "Cd": 1.48, "Ce": 1.65,
        "Cl": 0.99, "Co": 1.16, "Cr": 1.18, "Cs": 2.35, "Cu": 1.17,
        "Dy": 1.59, "Er": 1.57, "Eu": 1.85, "F": 0.72, "Fe": 1.17,
        "Ga": 1.26, "Gd": 1.61, "Ge": 1.22, "H": 0.32, "He": 0.93,
        "Hf": 1.44, "Hg": 1.49, "Ho": 1.58, "I": 1.33, "In": 1.44,
        "Ir": 1.27, "K": 2.03, "Kr": 1.12, "La": 1.69, "Li": 1.23,
        "Lu": 1.56, "Mg": 1.36, "Mn": 1.17, "Mo": 1.30, "N": 0.75,
        "Na": 1.54, "Nb": 1.34, "Nd": 1.64, "Ne": 0.71, "Ni": 1.15,
        "O": 0.73, "Os": 1.26, "P": 1.06, "Pb": 1.47, "Pd": 1.28,
        "Pm": 1.63, "Po": 1.46, "Pr": 1.65, "Pt": 1.30, "Rb": 2.16,
        "Re": 1.28, "Rh": 1.25, "Ru": 1.25, "S": 1.02, "Sb": 1.40,
        "Sc": 1.44, "Se": 1.16, "Si": 1.11, "Sm": 1.62, "Sn": 1.41,
        "Sr": 1.91, "Ta": 1.34, "Tb": 1.59, "Tc": 1.27, "Te": 1.36,
        "Th": 1.65, "Ti": 1.32, "Tl": 1.48, "Tm": 1.56, "U": 1.42,
        "V": 1.22, "W": 1.30, "Xe": 1.31, "Y": 1.62, "Yb": 1.74,
        "Zn": 1.25, "Zr": 1.45,
    }  # fmt: skip
)


class PeriodicTable:
    """
    Periodic table interface for element symbols and covalent radii.

    Symbols are case-sensitive lookup keys; "fe" is not iron.
    """

    PERIODIC_TABLE = [str(element) for element in elements]

    def is_element(self, symbol):
        """
        Check whether a symbol names a real chemical element.

        The dummy symbol "X" used by ASE for atomic number 0 is not
        counted as an element.
        """
        return symbol in self.PERIODIC_TABLE[1:]

    def to_atomic_number(self, symbol):
        """
        Convert element symbol to atomic number.

        Args:
            symbol (str): Element symbol (e.g., 'H', 'He', 'Li').

        Returns:
            int: Atomic number of the element.
        """
        return self.PERIODIC_TABLE.index(symbol)

    def sorted_periodic_table_list(self, list_of_elements):
        """
        Sort elements by atomic number order.

        Symbols that are not real elements sort after all known ones,
        alphabetically among themselves.

        Args:
            list_of_elements (list[str]): Element symbols to sort.

        Returns:
            list[str]: Element symbols sorted by atomic number.
        """
        return sorted(
            list_of_elements,
            key=lambda x: (
                (self.to_atomic_number(x), "")
                if self.is_element(x)
                else (len(self.PERIODIC_TABLE), x)
            ),
        )

    def covalent_radius(self, symbol, default=DEFAULT_RADIUS):
        """
        Get the covalent radius of an element.

        Args:
            symbol (str): Element symbol, matched exactly.
            default (float): Radius returned for symbols absent from
                the table.

        Returns:
            float: Covalent radius in Angstrom.
        """
        return COVALENT_RADII.get(symbol, default)
