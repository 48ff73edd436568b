"""Logging setup for deploy progress output.

Progress lines (``Uploading: <key>``, ``Removing: <key>``, ...) go to
stderr through the ``sitesync`` logger. On a terminal the level tag and
the action verb are coloured with *colorama*; when stderr is redirected
(CI logs, files) the output stays plain.

Usage::

    from sitesync.utils.logger import get_logger

    log = get_logger(__name__)
    log.info("Uploaded: %s", key)
"""
import logging
import sys

from colorama import Fore, Style

__all__ = ["get_logger", "setup_logging", "DeployFormatter"]

_LEVEL_COLOURS = {
    logging.DEBUG: Fore.WHITE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

# Leading verb of a progress line -> colour
_ACTION_COLOURS = {
    "Skipping:": Style.DIM,
    "Uploading:": Fore.CYAN,
    "Uploaded:": Fore.GREEN,
    "Would upload:": Fore.GREEN + Style.DIM,
    "Removing:": Fore.YELLOW,
    "Would remove:": Fore.YELLOW + Style.DIM,
    "Done.": Fore.GREEN + Style.BRIGHT,
}

# boto3 and friends log every request at DEBUG
_NOISY_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")

_ROOT_LOGGER_NAME = "sitesync"
_configured = False


class DeployFormatter(logging.Formatter):
    """Prefixes ``[LEVEL]`` and, when *colour* is on, colours the action verb."""

    def __init__(self, fmt="%(message)s", colour=True):
        super().__init__(fmt)
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if not self.colour:
            return f"[{record.levelname}] {msg}"

        for verb, colour in _ACTION_COLOURS.items():
            if msg.startswith(verb):
                msg = f"{colour}{verb}{Style.RESET_ALL}{msg[len(verb):]}"
                break

        level_colour = _LEVEL_COLOURS.get(record.levelno, "")
        return f"{level_colour}[{record.levelname}]{Style.RESET_ALL} {msg}"


def setup_logging(verbose: bool = False, quiet: bool = False, stream=None) -> None:
    """Configure the *sitesync* logger; called once from ``cli.main()``.

    Args:
        verbose: ``DEBUG`` level, and botocore request logging is let through
        quiet: ``WARNING`` level (overrides *verbose*)
        stream: Output stream, ``sys.stderr`` by default
    """
    global _configured  # noqa: PLW0603

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)

    stream = sys.stderr if stream is None else stream
    colour = bool(getattr(stream, "isatty", None) and stream.isatty())

    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(DeployFormatter(colour=colour))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(level)

    third_party_level = logging.DEBUG if verbose and not quiet else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the *sitesync* namespace, configuring defaults if needed."""
    if not _configured:
        setup_logging()

    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
