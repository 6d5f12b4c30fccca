"""
Main CLI application for acpublisher.

Defines the Typer application structure and command routing,
following clean architecture principles with thin CLI layer.
"""
import typer

from acpublisher import __version__
from acpublisher.cli.commands.upload_apk import upload_apk_command
from acpublisher.cli.commands.version import version_command
from acpublisher.rich_utils.ui_helpers import echo_help


# Initialize Typer app
app = typer.Typer(help=f"acpublisher {__version__} - publish Android packages to App Center", add_completion=False)

# Register commands
app.command("uploadApk", help="Upload Apk to AppCenter")(upload_apk_command)
app.command("version", help="Show the acpublisher version")(version_command)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """acpublisher - publish Android packages to App Center.

    Run 'acpublisher uploadApk --token ... --owner ... --app ... --apk ...'
    to create, distribute and symbolicate a release.
    """
    if ctx.invoked_subcommand is None:
        # Usage goes to stderr and counts as a failed invocation
        echo_help(ctx)
        raise typer.Exit(code=1)
