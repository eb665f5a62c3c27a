"""
Detect bonds in a molecule from its atomic 3D coordinates.

    from bondfind import find_bonds

    find_bonds(molecule)
    find_bonds(molecule, tolerance=1.2, min_atoms=50)

Bonds are inferred with simple covalent radius cutoffs: two atoms are
bonded when their distance is below (R_A + R_B) * tolerance. Large
structures are split spatially so that only nearby atoms are compared.
All bonds found are plain connectivity edges; bond orders are not
assigned.
"""

import logging

import numpy as np

from bondfind.analysis.cutoffs import CutoffTable, estimate_margin
from bondfind.analysis.partition import SpatialPartitioner
from bondfind.analysis.scanner import scan_pairs
from bondfind.settings.bonds import BondFindSettings

logger = logging.getLogger(__name__)


def find_bonds(molecule, settings=None, **kwargs):
    """
    Detect bonds from coordinates and add them to `molecule`.

    The molecule only needs an `atoms` sequence whose items have
    `symbol` and `position`, and an `add_bond(atom1, atom2)` method. An
    `elements` attribute, if present, is used for margin estimation.

    Args:
        molecule: Molecule to add bonds to.
        settings (BondFindSettings, optional): Options for this run.
        **kwargs: Individual options (tolerance, margin, min_atoms,
            default_radius, radii, brute_force) applied on top of
            `settings`.

    Raises:
        InvalidSettingsError: If any option is out of range. Raised
            before the molecule is touched.
    """
    if settings is None:
        settings = BondFindSettings.default()
    if kwargs:
        settings = settings.merge(kwargs)
    settings.validate()

    atoms = list(molecule.atoms)
    if len(atoms) < 2:
        logger.debug(f"Nothing to bond in a structure of {len(atoms)} atoms.")
        return

    symbols = [atom.symbol for atom in atoms]
    positions = np.array([atom.position for atom in atoms], dtype=float)
    cutoffs = CutoffTable(
        tolerance=settings.tolerance,
        radii=settings.radii,
        default_radius=settings.default_radius,
    )

    def add_bond(i, j):
        molecule.add_bond(atoms[i], atoms[j])

    if settings.brute_force:
        logger.debug(f"Scanning all pairs of {len(atoms)} atoms.")
        num_bonds = scan_pairs(
            np.arange(len(atoms)), positions, symbols, cutoffs, add_bond
        )
        logger.debug(f"Found {num_bonds} bonds.")
        return

    margin = settings.margin
    if margin is None:
        margin = estimate_margin(
            getattr(molecule, "elements", symbols),
            tolerance=settings.tolerance,
            radii=settings.radii,
            default_radius=settings.default_radius,
        )
    logger.debug(f"Finding bonds with {settings}, margin = {margin:.4f}")

    partitioner = SpatialPartitioner(
        positions=positions,
        symbols=symbols,
        cutoffs=cutoffs,
        margin=margin,
        min_atoms=settings.partition_floor,
        add_bond=add_bond,
    )
    partitioner.run()
