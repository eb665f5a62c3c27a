import functools
import logging

import click
import networkx as nx
from ase.io.formats import UnknownFileTypeError

from bondfind.io.molecules.structure import Molecule
from bondfind.settings.bonds import BondFindSettings, InvalidSettingsError

logger = logging.getLogger(__name__)


def click_bond_options(f):
    """Common click options for bond detection settings.

    Options left unset fall back to the settings file, then to the
    built-in defaults.
    """

    @click.option(
        "-t",
        "--tolerance",
        type=float,
        default=None,
        help="Multiplicative tolerance on the sum of covalent radii. "
        "Default to 1.1.",
    )
    @click.option(
        "-m",
        "--margin",
        type=float,
        default=None,
        help="Stitching margin in Angstrom. Estimated from the elements "
        "present if not given.",
    )
    @click.option(
        "-n",
        "--min-atoms",
        type=int,
        default=None,
        help="Partition size below which all pairs are scanned. "
        "Default to 20.",
    )
    @click.option(
        "--brute-force/--partition",
        default=None,
        help="Scan all atom pairs instead of partitioning space.",
    )
    @click.option(
        "-s",
        "--settings",
        "settings_file",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="YAML file with bond detection settings.",
    )
    @functools.wraps(f)
    def wrapper_common_options(*args, **kwargs):
        return f(*args, **kwargs)

    return wrapper_common_options


def get_settings(settings_file=None, **options):
    """Combine file settings with options given on the command line."""
    if settings_file is not None:
        settings = BondFindSettings.from_yaml(settings_file)
    else:
        settings = BondFindSettings.default()
    return settings.merge(options).validate()


def format_bond(bond):
    a1, a2 = sorted(bond.atoms, key=lambda atom: atom.index)
    return (
        f"{a1.index + 1:6d} {a2.index + 1:6d}  {a1.symbol:<3s}"
        f"{a2.symbol:<3s}{bond.length:10.4f}"
    )


@click.command("find")
@click.argument("filename", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-i",
    "--index",
    type=str,
    default="-1",
    help="1-based index or slice of the structures to read. "
    "Default to the last structure.",
)
@click_bond_options
@click.option(
    "-g",
    "--graph",
    is_flag=True,
    default=False,
    help="Also report the connected fragments of each structure.",
)
def find(
    filename,
    index,
    tolerance,
    margin,
    min_atoms,
    brute_force,
    settings_file,
    graph,
):
    """Find the bonds of the structures in FILENAME.

    Bonds are printed as 1-based atom indices, element symbols and bond
    length in Angstrom.
    """
    try:
        settings = get_settings(
            settings_file,
            tolerance=tolerance,
            margin=margin,
            min_atoms=min_atoms,
            brute_force=brute_force,
        )
    except InvalidSettingsError as e:
        raise click.BadParameter(str(e)) from e

    try:
        molecules = Molecule.from_filepath(
            filename, index=index, return_list=True
        )
    except (ValueError, UnknownFileTypeError) as e:
        raise click.ClickException(f"Could not read {filename}: {e}") from e
    logger.debug(f"Read {len(molecules)} structure(s) from {filename}")

    for n, molecule in enumerate(molecules, start=1):
        molecule.find_bonds(settings=settings)
        if len(molecules) > 1:
            click.echo(f"# structure {n}: {molecule.chemical_formula}")
        for bond in sorted(molecule.bonds, key=lambda b: b.indices):
            click.echo(format_bond(bond))
        click.echo(f"{len(molecule.bonds)} bonds")
        if graph:
            fragments = list(nx.connected_components(molecule.to_graph()))
            click.echo(f"{len(fragments)} fragments")
            for fragment in sorted(fragments, key=min):
                atoms = " ".join(str(i + 1) for i in sorted(fragment))
                click.echo(f"  {atoms}")
