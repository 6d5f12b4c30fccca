"""
uploadApk command implementation.

Thin wrapper around PublishService that handles CLI argument parsing
and delegates business logic to the service layer.
"""
import sys
from typing import List, Optional

import typer

from acpublisher.core.uploader import PublishService
from acpublisher.rich_utils.ui_helpers import configure_logging, echo_help, is_bare_invocation
from acpublisher.upload.models import DEFAULT_RELEASE_NOTES, UploadApkOptions

APP_URL_HINT = "https://appcenter.ms/users/{owner}/apps/{app} or https://appcenter.ms/orgs/{owner}/apps/{app}"


def upload_apk_command(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", "-token", help="Required. Api token for AppCenter"),
    owner: Optional[str] = typer.Option(
        None, "--owner", "-owner",
        help=f"Required. Name of the application owner organization or user. This can be found from the web url: {APP_URL_HINT}"
    ),
    app: Optional[str] = typer.Option(
        None, "--app", "-app",
        help=f"Required. Application name. This can be found from the web url: {APP_URL_HINT}"
    ),
    apk: Optional[str] = typer.Option(None, "--apk", "-apk", help="Required. Path to apk file to upload"),
    mapping: Optional[str] = typer.Option(None, "--mapping", "-mapping", help="Optional. Path to ProGuard mapping file to upload"),
    releasenotes: str = typer.Option(DEFAULT_RELEASE_NOTES, "--releasenotes", "-releasenotes", help="Optional. Release notes"),
    releasenotesfile: Optional[str] = typer.Option(
        None, "--releasenotesfile", "-releasenotesfile", help="Optional. Path to file containing release notes"
    ),
    group: Optional[List[str]] = typer.Option(
        None, "--group", "-group",
        help="Optional. Id of the group where to distribute this release. Multiple groups can be set with multiple group arguments"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-verbose", help="Optional. Enable verbose logging"),
    debug: bool = typer.Option(False, "--debug", "-debug", help="Optional. Enable debug logging"),
):
    """Upload Apk to AppCenter."""

    # Bare "uploadApk" shows the command help, like an unknown command does
    if is_bare_invocation(ctx):
        echo_help(ctx)
        raise typer.Exit(code=1)

    options = UploadApkOptions(
        token=token,
        owner=owner,
        app=app,
        apk=apk,
        mapping=mapping,
        release_notes=releasenotes,
        release_notes_file=releasenotesfile,
        groups=list(group or []),
        verbose=verbose,
        debug=debug
    )
    logger = configure_logging(verbose=options.verbose, debug=options.debug)

    # Delegate to service layer
    publish_service = PublishService(logger=logger)
    exit_code = publish_service.execute_upload_apk(options)

    # Exit with appropriate code
    if exit_code != 0:
        sys.exit(exit_code)
