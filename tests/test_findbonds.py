import math

import numpy as np
import pytest

from bondfind import find_bonds
from bondfind.analysis import findbonds
from bondfind.io.molecules.structure import Molecule
from bondfind.settings.bonds import BondFindSettings, InvalidSettingsError


class SimpleAtom:
    def __init__(self, symbol, position):
        self.symbol = symbol
        self.position = position


class SimpleMolecule:
    """Minimal collaborator without an `elements` attribute."""

    def __init__(self, symbols, positions):
        self.atoms = [SimpleAtom(s, p) for s, p in zip(symbols, positions)]
        self.bonds = []

    def add_bond(self, atom1, atom2):
        self.bonds.append((atom1, atom2))


class TestFindBonds:
    """Tests for the bond detection entry point."""

    def test_methane(self, methane):
        find_bonds(methane)
        assert methane.bonded_pairs == {(0, 1), (0, 2), (0, 3), (0, 4)}
        assert methane.atoms[0].num_bonds == 4
        assert all(atom.num_bonds == 1 for atom in methane.atoms[1:])

    def test_benzene(self, benzene):
        find_bonds(benzene)
        assert len(benzene.bonds) == 12
        assert all(bond.order == 1 for bond in benzene.bonds)

    def test_returns_none(self, methane):
        assert find_bonds(methane) is None

    def test_two_carbons(self):
        close = Molecule(symbols=["C", "C"], positions=[[0, 0, 0], [1.5, 0, 0]])
        far = Molecule(symbols=["C", "C"], positions=[[0, 0, 0], [1.8, 0, 0]])
        find_bonds(close)
        find_bonds(far)
        assert len(close.bonds) == 1
        assert len(far.bonds) == 0

    def test_unknown_element(self):
        molecule = Molecule(
            symbols=["H", "Xx"], positions=[[0, 0, 0], [0, 0, 2.0]]
        )
        find_bonds(molecule)
        assert len(molecule.bonds) == 1

    def test_empty_and_single_atom_molecules(self):
        empty = Molecule(symbols=[], positions=[])
        single = Molecule(symbols=["Fe"], positions=[[0, 0, 0]])
        find_bonds(empty)
        find_bonds(single)
        assert empty.bonds == []
        assert single.bonds == []

    def test_small_molecule_skips_partitioning(self, methane, monkeypatch):
        splits = []
        real_split = findbonds.SpatialPartitioner._split

        def spy(self, indices, axis):
            halves = real_split(self, indices, axis)
            splits.append(halves is not None)
            return halves

        monkeypatch.setattr(findbonds.SpatialPartitioner, "_split", spy)
        find_bonds(methane)
        assert splits == [False]
        assert len(methane.bonds) == 4

    def test_coincident_atoms_with_min_atoms_one(self):
        n = 12
        molecule = Molecule(symbols=["C"] * n, positions=np.ones((n, 3)))
        find_bonds(molecule, min_atoms=1)
        assert len(molecule.bonds) == math.comb(n, 2)

    def test_partition_floor_passed_to_partitioner(self, cloud, monkeypatch):
        floors = []
        real_partitioner = findbonds.SpatialPartitioner

        def spy(**kwargs):
            floors.append(kwargs["min_atoms"])
            return real_partitioner(**kwargs)

        monkeypatch.setattr(findbonds, "SpatialPartitioner", spy)
        find_bonds(cloud, min_atoms=1)
        find_bonds(Molecule(symbols=["C"] * 3, positions=np.eye(3)))
        assert floors == [2, 20]

    def test_matches_brute_force(self, cloud, reference_pairs):
        find_bonds(cloud, min_atoms=6)
        assert len(cloud.bonds) == len(cloud.bonded_pairs)
        assert cloud.bonded_pairs == reference_pairs(cloud)

    def test_brute_force_option(self, cloud, reference_pairs, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("partitioner should not be used")

        monkeypatch.setattr(findbonds, "SpatialPartitioner", fail)
        find_bonds(cloud, brute_force=True)
        assert cloud.bonded_pairs == reference_pairs(cloud)

    def test_monotonic_in_tolerance(self, make_cloud):
        previous = set()
        for tolerance in (0.8, 0.9, 1.0, 1.1, 1.2, 1.4):
            molecule = make_cloud(250, box=10.0, seed=7)
            find_bonds(molecule, tolerance=tolerance, min_atoms=5)
            assert previous <= molecule.bonded_pairs
            previous = molecule.bonded_pairs

    def test_tolerance_kwarg(self, cloud, reference_pairs):
        find_bonds(cloud, tolerance=1.3)
        assert cloud.bonded_pairs == reference_pairs(cloud, tolerance=1.3)

    def test_settings_object(self, alkane_chain):
        settings = BondFindSettings(tolerance=1.1, min_atoms=4)
        find_bonds(alkane_chain, settings=settings)
        assert len(alkane_chain.bonds) == 59

    def test_kwargs_override_settings(self, alkane_chain):
        settings = BondFindSettings(tolerance=0.5)
        find_bonds(alkane_chain, settings=settings, tolerance=1.1)
        assert len(alkane_chain.bonds) == 59
        assert settings.tolerance == 0.5

    def test_radius_overrides(self):
        molecule = Molecule(
            symbols=["Fe", "Fe"], positions=[[0, 0, 0], [0, 0, 2.5]]
        )
        find_bonds(molecule)
        assert len(molecule.bonds) == 1
        molecule.clear_bonds()
        find_bonds(molecule, radii={"Fe": 1.0})
        assert len(molecule.bonds) == 0

    def test_duck_typed_molecule(self):
        molecule = SimpleMolecule(
            ["O", "H", "H"],
            [(0.0, 0.0, 0.0), (0.96, 0.0, 0.0), (-0.24, 0.93, 0.0)],
        )
        find_bonds(molecule)
        assert len(molecule.bonds) == 2
        assert all(a.symbol == "O" for a, _ in molecule.bonds)

    @pytest.mark.parametrize(
        "options",
        [
            {"tolerance": 0},
            {"tolerance": -1.1},
            {"tolerance": float("nan")},
            {"min_atoms": 0},
            {"min_atoms": 2.5},
            {"margin": -0.1},
            {"margin": float("inf")},
            {"default_radius": 0.0},
            {"radii": {"C": -0.77}},
            {"radii": ["C"]},
            {"radii": 5},
            {"unknown_option": 1},
        ],
    )
    def test_invalid_settings_fail_before_bonding(self, methane, options):
        with pytest.raises(InvalidSettingsError):
            find_bonds(methane, **options)
        assert methane.bonds == []

    def test_explicit_margin(self, cloud, reference_pairs):
        find_bonds(cloud, margin=6.0, min_atoms=4)
        assert cloud.bonded_pairs == reference_pairs(cloud)

    def test_margin_logged(self, methane, caplog):
        with caplog.at_level("DEBUG", logger="bondfind.analysis.findbonds"):
            find_bonds(methane)
        assert any("margin = 1.6940" in r.getMessage() for r in caplog.records)
