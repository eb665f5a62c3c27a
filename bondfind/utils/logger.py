"""
Logging setup for bondfind command line runs.

Library modules only create named loggers; handlers are attached here,
once, by the command line entry point or by scripts that want console
or file output.
"""

import logging
import os
import re
import sys

_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2},\d{3} - ")


class LogOnceFilter(logging.Filter):
    """
    Drop log records whose message has already been emitted.

    Repeated messages, such as the same default-radius fallback for a
    long trajectory of frames, are only shown the first time.
    """

    def __init__(self):
        super().__init__()
        self.logged_messages = set()

    def filter(self, record):
        message = self.remove_timestamp(record.getMessage())
        if message in self.logged_messages:
            return False
        self.logged_messages.add(message)
        return True

    @staticmethod
    def remove_timestamp(message):
        """Strip a leading 'YYYY-MM-DD hh:mm:ss,mmm - ' timestamp."""
        return _TIMESTAMP.sub("", message)


def create_logger(
    debug=True,
    folder=".",
    logfile=None,
    errfile=None,
    stream=True,
    disable=None,
):
    """
    Configure the root logger.

    Errors always go to stderr. With `stream=True` every record at the
    chosen level is also written to stdout.

    Args:
        debug (bool, optional): Log at DEBUG instead of INFO level.
            Defaults to True.
        folder (str, optional): Directory for log files. Defaults to ".".
        logfile (str, optional): File for records at the chosen level.
        errfile (str, optional): File for warnings and errors.
        stream (bool, optional): Also log to stdout. Defaults to True.
        disable (list[str], optional): Logger names to silence.

    Returns:
        logging.Logger: The configured root logger.
    """
    for module in disable or []:
        logging.getLogger(module).disabled = True

    logger = logging.getLogger()

    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    logger.handlers = []
    formatter = logging.Formatter(
        "{asctime} - {levelname:6s} - [{name}] {message}",
        style="{",
    )

    # Stream errors always
    err_stream_handler = logging.StreamHandler(stream=sys.stderr)
    err_stream_handler.setLevel(logging.ERROR)
    err_stream_handler.setFormatter(formatter)
    err_stream_handler.addFilter(LogOnceFilter())
    logger.addHandler(err_stream_handler)

    if stream:
        stream_handler = logging.StreamHandler(stream=sys.stdout)
        stream_handler.setFormatter(formatter)
        stream_handler.addFilter(LogOnceFilter())
        logger.addHandler(stream_handler)

    if logfile:
        infofile_handler = logging.FileHandler(
            filename=os.path.join(folder, logfile)
        )
        infofile_handler.setLevel(level)
        infofile_handler.setFormatter(formatter)
        infofile_handler.addFilter(LogOnceFilter())
        logger.addHandler(infofile_handler)

    if errfile:
        errfile_handler = logging.FileHandler(
            filename=os.path.join(folder, errfile)
        )
        errfile_handler.setLevel(logging.WARNING)
        errfile_handler.setFormatter(formatter)
        errfile_handler.addFilter(LogOnceFilter())
        logger.addHandler(errfile_handler)

    return logger
