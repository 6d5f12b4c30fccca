"""
Publish service for acpublisher.

Turns validated command options into an open set of local files and runs
the release workflow, with single responsibility for the exit code.
"""
import logging
from contextlib import ExitStack
from typing import Optional

from rich.console import Console

from acpublisher.rich_utils.ui_helpers import get_console
from acpublisher.utils.exceptions import ValidationError
from acpublisher.upload.file_validator import InputValidator
from acpublisher.upload.models import (
    AppSlug,
    PublisherConfig,
    ReleaseRequest,
    UploadApkOptions
)
from acpublisher.upload.upload_orchestrator import ReleaseOrchestrator


class PublishService:
    """Service for publishing an apk to App Center."""

    def __init__(self, logger: Optional[logging.Logger] = None, console: Optional[Console] = None):
        self.logger = logger or logging.getLogger("acpublisher")
        self.console = console or get_console()
        self.validator = InputValidator()

    def build_config(self, options: UploadApkOptions) -> PublisherConfig:
        return PublisherConfig(api_token=options.token)

    def execute_upload_apk(self, options: UploadApkOptions) -> int:
        """Execute the release workflow and return exit code."""
        validation = self.validator.validate_options(options)
        if not validation.is_valid:
            self.logger.error(validation.error_message)
            return 1

        app_slug = AppSlug(owner=options.owner, app=options.app)

        # Files stay open until the workflow is done
        with ExitStack() as stack:
            try:
                package_file = stack.enter_context(self.validator.open_binary(options.apk, "apk"))
                release_notes = self.validator.resolve_release_notes(options)
                mapping_file = None
                if options.mapping:
                    mapping_file = stack.enter_context(self.validator.open_binary(options.mapping, "mapping"))
            except ValidationError as e:
                self.logger.error(e.message)
                return 1

            request = ReleaseRequest(
                app_slug=app_slug,
                package_file=package_file,
                release_notes=release_notes,
                groups=list(options.groups),
                mapping_file=mapping_file
            )

            orchestrator = ReleaseOrchestrator(self.build_config(options), self.logger, self.console)
            result = orchestrator.execute_release_workflow(request)

        return 0 if result.success else 1
