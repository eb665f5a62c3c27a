import os

import numpy as np
import pytest

from bondfind.io.molecules.structure import Molecule


def random_cloud(num_atoms, box, seed, symbols=("C", "H", "N", "O")):
    """Atoms scattered uniformly in a cube, with a reproducible seed."""
    rng = np.random.default_rng(seed)
    positions = rng.uniform(0.0, box, size=(num_atoms, 3))
    chosen = rng.choice(list(symbols), size=num_atoms)
    return Molecule(symbols=list(chosen), positions=positions)


def brute_force_pairs(molecule, tolerance=1.1):
    """Reference bond set from a plain double loop over all pairs."""
    from bondfind.io.molecules import get_bond_cutoff

    pairs = set()
    atoms = molecule.atoms
    for i in range(len(atoms)):
        for j in range(i + 1, len(atoms)):
            cutoff = get_bond_cutoff(
                atoms[i].symbol, atoms[j].symbol, tolerance
            )
            if atoms[i].distance(atoms[j]) < cutoff:
                pairs.add((i, j))
    return pairs


############ Molecule Fixtures ##################
@pytest.fixture()
def methane():
    return Molecule(
        symbols=["C", "H", "H", "H", "H"],
        positions=np.array(
            [
                [0.0, 0.0, 0.0],
                [0.629, 0.629, 0.629],
                [-0.629, -0.629, 0.629],
                [-0.629, 0.629, -0.629],
                [0.629, -0.629, -0.629],
            ]
        ),
    )


@pytest.fixture()
def benzene():
    angles = np.arange(6) * np.pi / 3
    carbons = np.column_stack(
        [1.39 * np.cos(angles), 1.39 * np.sin(angles), np.zeros(6)]
    )
    hydrogens = np.column_stack(
        [2.47 * np.cos(angles), 2.47 * np.sin(angles), np.zeros(6)]
    )
    return Molecule(
        symbols=["C"] * 6 + ["H"] * 6,
        positions=np.vstack([carbons, hydrogens]),
    )


@pytest.fixture()
def alkane_chain():
    """A zig-zag chain of 60 carbons, long enough to be partitioned."""
    positions = [
        [1.27 * i, 0.0 if i % 2 == 0 else 0.85, 0.0] for i in range(60)
    ]
    return Molecule(symbols=["C"] * 60, positions=positions)


@pytest.fixture()
def cloud():
    return random_cloud(400, box=12.0, seed=20240611)


@pytest.fixture()
def make_cloud():
    return random_cloud


############ File Fixtures ##################
@pytest.fixture()
def methane_xyz_file(tmpdir, methane):
    filepath = os.path.join(tmpdir, "methane.xyz")
    with open(filepath, "w") as f:
        f.write("5\n\n")
        for atom in methane.atoms:
            x, y, z = atom.position
            f.write(f"{atom.symbol} {x:.6f} {y:.6f} {z:.6f}\n")
    return filepath


@pytest.fixture()
def trajectory_xyz_file(tmpdir):
    """Two frames: an H2 molecule, then the same atoms pulled apart."""
    filepath = os.path.join(tmpdir, "h2_traj.xyz")
    with open(filepath, "w") as f:
        f.write("2\n\nH 0.0 0.0 0.0\nH 0.0 0.0 0.60\n")
        f.write("2\n\nH 0.0 0.0 0.0\nH 0.0 0.0 3.00\n")
    return filepath


@pytest.fixture()
def settings_yaml_file(tmpdir):
    filepath = os.path.join(tmpdir, "bonds.yaml")
    with open(filepath, "w") as f:
        f.write("tolerance: 1.3\nmin_atoms: 8\nradii:\n  Fe: 1.24\n")
    return filepath


@pytest.fixture()
def reference_pairs():
    return brute_force_pairs
