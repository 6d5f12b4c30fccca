import contextlib
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler
import typer

LOGGER_NAME = "acpublisher"


def is_ci_environment():
    return (
        os.getenv('CI') is not None or
        os.getenv('GITHUB_ACTIONS') is not None or
        not sys.stderr.isatty()
    )


def get_console(stderr: bool = False) -> Console:
    """Detect environment and create console."""
    is_automated = is_ci_environment()

    if is_automated:
        # CI/automated environment - no colors, no interactive elements
        return Console(force_terminal=False, no_color=True, stderr=stderr)
    else:
        # Interactive terminal - full Rich capabilities
        return Console(stderr=stderr)


def echo_help(ctx: typer.Context) -> None:
    """Print the help of the current command on stderr.

    With rich installed typer renders help on its own console, which writes
    to whatever ``sys.stdout`` is at print time, and returns an empty string.
    """
    with contextlib.redirect_stdout(sys.stderr):
        help_text = ctx.get_help()
    if help_text:
        typer.echo(help_text, err=True)


def is_bare_invocation(ctx: typer.Context) -> bool:
    """True when no parameter of the command was given on the command line."""
    for name in ctx.params:
        source = ctx.get_parameter_source(name)
        if source is None or source.name != "DEFAULT":
            return False
    return True


def configure_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Create the publisher logger.

    INFO by default, DEBUG with either flag. The wire trace goes to the
    ``acpublisher.wire`` child logger and is only emitted with ``verbose``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=get_console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose or debug else logging.INFO)
    logger.propagate = False

    wire_logger = logger.getChild("wire")
    wire_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    return logger
