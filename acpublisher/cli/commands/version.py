"""
Version command implementation.
"""
import typer

from acpublisher import __version__


def version_command():
    """Print the acpublisher version."""
    typer.echo(f"acpublisher {__version__}")
