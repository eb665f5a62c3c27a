import logging
from collections import Counter

import networkx as nx
import numpy as np
from ase import Atoms
from ase.io import read as ase_read

from bondfind.utils.periodictable import PeriodicTable
from bondfind.utils.utils import string2index_1based

p = PeriodicTable()

logger = logging.getLogger(__name__)


class Atom:
    """An atom of a Molecule: element symbol, position and attached bonds."""

    def __init__(self, molecule, index, symbol, position):
        self.molecule = molecule
        self.index = index
        self.symbol = symbol
        self.position = position
        self.bonds = []

    def __repr__(self):
        return f"{self.__class__.__name__}({self.symbol}{self.index + 1})"

    @property
    def num_bonds(self):
        return len(self.bonds)

    @property
    def neighbors(self):
        """Atoms bonded to this one, in bond insertion order."""
        return [bond.other(self) for bond in self.bonds]

    def distance(self, other):
        return float(np.linalg.norm(self.position - other.position))


class Bond:
    """
    An unordered connectivity edge between two atoms.

    Bonds found from coordinates carry no order information; `order`
    is always 1.
    """

    order = 1

    def __init__(self, atom1, atom2):
        self.atoms = (atom1, atom2)

    def __repr__(self):
        a1, a2 = self.atoms
        return f"{self.__class__.__name__}({a1!r}, {a2!r})"

    @property
    def indices(self):
        """Sorted 0-based atom indices of the bond."""
        i, j = (atom.index for atom in self.atoms)
        return (i, j) if i < j else (j, i)

    @property
    def length(self):
        return self.atoms[0].distance(self.atoms[1])

    def other(self, atom):
        """Return the atom at the opposite end of the bond."""
        a1, a2 = self.atoms
        if atom is a1:
            return a2
        if atom is a2:
            return a1
        raise ValueError(f"{atom!r} is not part of {self!r}.")


class Molecule:
    """Class to represent a molecular structure and its connectivity.

    Parameters:

    symbols: a list of element symbols, used verbatim as lookup keys.
    positions: array-like of atomic positions in Angstrom.
        The shape should be (n, 3) where n is the number of atoms.
    info: dict
        A dictionary containing additional information about the molecule.

    Bonds are not read from any file; call `find_bonds` to infer them
    from the coordinates.
    """

    def __init__(self, symbols=None, positions=None, info=None):
        if symbols is None or positions is None:
            raise ValueError(
                "Molecule must have symbols and positions defined."
            )
        symbols = [str(symbol) for symbol in symbols]
        positions = np.array(positions, dtype=float)
        if len(symbols) == 0:
            positions = positions.reshape(0, 3)

        # Validate symbols-positions consistency
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(
                f"Positions should have shape (n, 3), got {positions.shape}."
            )
        if len(symbols) != len(positions):
            logger.debug(f"Number of symbols: {len(symbols)}")
            logger.debug(f"Number of positions: {len(positions)}")
            raise ValueError(
                "The number of symbols and positions should be the same!"
            )

        self.info = info if info is not None else {}
        self.atoms = [
            Atom(self, i, symbol, positions[i])
            for i, symbol in enumerate(symbols)
        ]
        self.bonds = []

    def __len__(self):
        """
        Return the number of atoms in the molecule.
        """
        return len(self.atoms)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}<{self.chemical_formula}, "
            f"{len(self.bonds)} bonds>"
        )

    @property
    def num_atoms(self):
        return len(self.atoms)

    @property
    def chemical_symbols(self):
        return [atom.symbol for atom in self.atoms]

    @property
    def positions(self):
        return np.array([atom.position for atom in self.atoms]).reshape(-1, 3)

    @property
    def elements(self):
        """Distinct element symbols present, in periodic table order."""
        return p.sorted_periodic_table_list(set(self.chemical_symbols))

    @property
    def chemical_formula(self):
        """Hill formula of the molecule, e.g. 'CH4' or 'ClH'."""
        counts = Counter(self.chemical_symbols)
        order = sorted(counts)
        if "C" in counts:
            first = [s for s in ("C", "H") if s in counts]
            order = first + [s for s in order if s not in first]
        return "".join(
            f"{s}{counts[s] if counts[s] > 1 else ''}" for s in order
        )

    @property
    def bonded_pairs(self):
        """Set of sorted 0-based index pairs of all bonds."""
        return {bond.indices for bond in self.bonds}

    def add_bond(self, atom1, atom2):
        """
        Append a bond between two atoms of this molecule.

        Returns:
            Bond: The new bond, also attached to both atoms.
        """
        if atom1 is atom2:
            raise ValueError(f"Cannot bond {atom1!r} to itself.")
        for atom in (atom1, atom2):
            if atom.molecule is not self:
                raise ValueError(f"{atom!r} does not belong to {self!r}.")
        bond = Bond(atom1, atom2)
        self.bonds.append(bond)
        atom1.bonds.append(bond)
        atom2.bonds.append(bond)
        return bond

    def clear_bonds(self):
        self.bonds = []
        for atom in self.atoms:
            atom.bonds = []

    def find_bonds(self, **kwargs):
        """
        Infer bonds from the coordinates; see `bondfind.find_bonds`.

        Returns:
            Molecule: self, to allow chaining.
        """
        from bondfind.analysis.findbonds import find_bonds

        find_bonds(self, **kwargs)
        return self

    def get_distance(self, idx1, idx2):
        """Distance between two atoms given 1-based indices."""
        return self.atoms[idx1 - 1].distance(self.atoms[idx2 - 1])

    def to_graph(self) -> nx.Graph:
        """
        Convert the molecule and its current bonds to a networkx graph.

        Nodes are 0-based atom indices with an `element` attribute; edges
        carry `distance` and `bond_order`.

        Returns:
            nx.Graph: A networkx graph object representing the molecule.
        """
        G = nx.Graph()
        for atom in self.atoms:
            G.add_node(atom.index, element=atom.symbol)
        for bond in self.bonds:
            i, j = bond.indices
            G.add_edge(i, j, distance=bond.length, bond_order=bond.order)
        return G

    def to_ase(self):
        """
        Convert molecule object to ASE Atoms object.
        """
        return Atoms(symbols=self.chemical_symbols, positions=self.positions)

    @classmethod
    def from_ase_atoms(cls, atoms):
        """
        Creates a Molecule instance from an ASE Atoms object.
        """
        return cls(
            symbols=atoms.get_chemical_symbols(),
            positions=atoms.get_positions(),
            info=dict(atoms.info),
        )

    @classmethod
    def from_filepath(cls, filepath, index="-1", return_list=False, **kwargs):
        """
        Read structures from any coordinate file format ASE supports.

        Args:
            filepath (str): Path to the file.
            index (str): 1-based index or slice string, e.g. "1", "-1"
                or "1:5". Defaults to the last structure.
            return_list (bool): Always return a list of molecules.
            **kwargs: Passed on to `ase.io.read`.

        Returns:
            Molecule | list[Molecule]
        """
        index = string2index_1based(index)
        ase_atoms = ase_read(filepath, index=index, **kwargs)
        logger.debug(f"Read ASE atoms: {ase_atoms} at index {index}")

        if isinstance(ase_atoms, list):
            logger.debug(f"Read {len(ase_atoms)} ASE atoms.")
            return [cls.from_ase_atoms(atoms) for atoms in ase_atoms]
        molecule = cls.from_ase_atoms(ase_atoms)
        return [molecule] if return_list else molecule
