import functools

import click


def logger_options(f):
    """Logging options passed on to `create_logger`.

    Debug records include the stitching margin and partition counts of
    every bond search.
    """

    @click.option(
        "-d",
        "--debug/--no-debug",
        default=False,
        help="Turn on debug logging.",
    )
    @click.option(
        "--stream/--no-stream",
        default=True,
        help="Turn on logging to stdout.",
    )
    @click.option(
        "--folder",
        type=click.Path(exists=True, file_okay=False),
        default=".",
        help="Folder for the log files. Default to the current folder.",
    )
    @click.option(
        "--logfile",
        type=str,
        default=None,
        help="Also write log records at the chosen level to this file.",
    )
    @click.option(
        "--errfile",
        type=str,
        default=None,
        help="Also write warnings and errors to this file.",
    )
    @functools.wraps(f)
    def wrapper_logger_options(*args, **kwargs):
        return f(*args, **kwargs)

    return wrapper_logger_options
