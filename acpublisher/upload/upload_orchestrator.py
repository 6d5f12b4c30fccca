"""
Release Orchestrator for App Center

Coordinates the complete release workflow: create the release upload,
transfer the package, commit it, update the release notes, publish to the
distribution groups and, when a mapping file is given, run the symbol upload.
Every step depends on the previous one and the first failure ends the run.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .models import (
    PublisherConfig,
    ReleaseRequest,
    ReleaseResult,
    UploadStatus,
    WorkflowStage
)
from .api_client import AppCenterAPIClient
from .transfer import BinaryTransfer
from ..utils.exceptions import PublisherError, TransferError


class ReleaseOrchestrator:
    """Coordinates the release workflow, one step at a time"""

    def __init__(self, config: PublisherConfig, logger: Optional[logging.Logger] = None,
                 console: Optional[Console] = None):
        self.config = config
        self.logger = logger or logging.getLogger("acpublisher")
        self.console = console or Console()

    def execute_release_workflow(self, request: ReleaseRequest) -> ReleaseResult:
        """Run every step of the workflow, stopping at the first failure"""
        result = ReleaseResult(success=False)
        phase = "Release"

        try:
            with AppCenterAPIClient(self.config, self.logger) as client, \
                    BinaryTransfer(self.config, self.logger) as transfer:

                self.logger.info("Creating new release...")
                self._create_release(client, transfer, request, result)
                self.logger.info(f"Release {result.release_id} OK")

                if request.groups:
                    phase = "Publishing"
                    self.logger.info(f"Publishing release {result.release_id} to group(s)...")
                    self._publish_to_groups(client, request, result)
                    self.logger.info("Publish OK")
                else:
                    self.logger.debug("No groups defined, skipping publish")

                if request.mapping_file is not None:
                    phase = "Uploading"
                    self.logger.info("Uploading mapping file...")
                    self._upload_mapping(client, transfer, request, result)
                    self.logger.info("Mapping upload OK")
                else:
                    self.logger.debug("No mapping file defined, skipping mapping file upload")

        except PublisherError as e:
            self.logger.error(f"{phase} FAILED\n{e}")
            result.error = str(e)
            return result

        result.success = True
        self._display_success_message(result)
        return result

    def _create_release(self, client: AppCenterAPIClient, transfer: BinaryTransfer,
                        request: ReleaseRequest, result: ReleaseResult):
        """Begin upload, transfer package, commit, update notes"""
        session = client.begin_release_upload(request.app_slug)
        result.stage = WorkflowStage.RELEASE_BEGUN

        transfer.upload_release(session.upload_url, request.package_file)
        result.stage = WorkflowStage.BYTES_TRANSFERRED

        release = client.commit_release(request.app_slug, session.upload_id)
        result.release_id = release.release_id
        result.release_url = release.release_url
        result.stage = WorkflowStage.RELEASE_COMMITTED

        client.update_release(request.app_slug, release.release_id, request.release_notes)
        result.stage = WorkflowStage.RELEASE_NOTES_UPDATED

    def _publish_to_groups(self, client: AppCenterAPIClient, request: ReleaseRequest, result: ReleaseResult):
        """Groups are published sequentially, in the order given"""
        for group in request.groups:
            client.publish_release(request.app_slug, result.release_id, "groups", group)
            result.published_groups.append(group)
        result.stage = WorkflowStage.GROUPS_PUBLISHED

    def _upload_mapping(self, client: AppCenterAPIClient, transfer: BinaryTransfer,
                        request: ReleaseRequest, result: ReleaseResult):
        """Symbol upload session; aborted if the blob transfer fails"""
        release = client.get_release(request.app_slug, result.release_id)

        session = client.begin_symbol_upload(
            request.app_slug,
            release.short_version,
            release.version,
            os.path.basename(request.mapping_file.name)
        )
        result.symbol_upload_id = session.symbol_upload_id
        result.stage = WorkflowStage.SYMBOLS_BEGUN

        try:
            transfer.upload_symbols(session.upload_url, request.mapping_file)
        except TransferError:
            self._abort_symbol_upload(client, request, session.symbol_upload_id)
            result.stage = WorkflowStage.SYMBOLS_ABORTED
            raise
        result.stage = WorkflowStage.SYMBOL_BYTES_TRANSFERRED

        client.commit_symbols(request.app_slug, session.symbol_upload_id, UploadStatus.COMMITTED)
        result.stage = WorkflowStage.SYMBOLS_COMMITTED

    def _abort_symbol_upload(self, client: AppCenterAPIClient, request: ReleaseRequest, symbol_upload_id: str):
        """Best effort; the transfer error is what gets reported"""
        try:
            client.commit_symbols(request.app_slug, symbol_upload_id, UploadStatus.ABORTED)
        except PublisherError as e:
            self.logger.debug(f"Aborting symbol upload {symbol_upload_id} failed: {e}")

    def _display_success_message(self, result: ReleaseResult):
        """Display release summary to user"""
        message_text = Text()
        message_text.append("Release ", style="bold green")
        message_text.append(str(result.release_id), style="bold green")
        message_text.append(" published\n", style="bold green")
        if result.published_groups:
            message_text.append(f"Groups: {', '.join(result.published_groups)}\n", style="green")
        if result.symbol_upload_id:
            message_text.append(f"Mapping upload: {result.symbol_upload_id}\n", style="green")
        if result.release_url:
            message_text.append("Release: ", style="blue")
            message_text.append(result.release_url, style="bold blue underline")

        panel = Panel(
            message_text,
            title="acpublisher",
            border_style="green",
            padding=(1, 2)
        )

        self.console.print(panel)
