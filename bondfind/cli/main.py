"""CLI interface for the bondfind project."""

import click

from bondfind import __version__
from bondfind.cli.find import find
from bondfind.cli.logger import logger_options


@click.group()
@logger_options
@click.version_option(version=__version__, prog_name="bondfind")
@click.pass_context
def entry_point(ctx, debug, stream, folder, logfile, errfile):
    """Detect covalent bonds from atomic 3D coordinates."""
    from bondfind.utils.logger import create_logger

    ctx.ensure_object(dict)
    create_logger(
        debug=debug,
        folder=folder,
        logfile=logfile,
        errfile=errfile,
        stream=stream,
    )


entry_point.add_command(find)


def main():  # pragma: no cover
    """
    The main function executes on commands:
    `python -m bondfind.cli.main` and `$ bondfind`.
    """
    entry_point(obj={})


if __name__ == "__main__":
    main()
