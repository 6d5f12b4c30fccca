"""
CLI module for acpublisher.

Provides command-line interface components following clean architecture principles.
"""
import sys

from acpublisher.cli.app import app as _app


# Export app function for pyproject.toml entry point
def app(args=None):
    """Entry point function for pyproject.toml scripts.

    Typer reports usage errors (unknown command, unparseable options) on
    stderr itself; every failing invocation exits with status 1.
    """
    try:
        _app(args=args, prog_name="acpublisher")
    except SystemExit as e:
        if e.code not in (None, 0):
            sys.exit(1)


__all__ = ['app']
