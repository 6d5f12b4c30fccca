"""
Binary transfer to pre-signed upload locations.

The package goes to the release upload URL as a multipart form; the mapping
file goes to the symbol upload URL as a single block blob.
"""

import logging
import os
from typing import BinaryIO, Callable, Optional

import requests
from azure.core.exceptions import AzureError
from azure.storage.blob import BlobClient, BlobType

from ..utils.api_error_handler import handle_transport_errors
from .models import PublisherConfig
from ..utils.exceptions import TransferError


# App Center expects the package in this form field for every platform
PACKAGE_FORM_FIELD = "ipa"


class BinaryTransfer:
    """Uploads local file bytes to URLs handed out by the service"""

    def __init__(self, config: PublisherConfig, logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None,
                 blob_client_factory: Optional[Callable[[str], BlobClient]] = None):
        self.config = config
        self.logger = logger or logging.getLogger("acpublisher")
        # No credential headers: the upload URLs are pre-authorized
        self.session = session or requests.Session()
        self.blob_client_factory = blob_client_factory or BlobClient.from_blob_url

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.close()

    @handle_transport_errors(TransferError, "upload release package")
    def upload_release(self, upload_url: str, package_file: BinaryIO) -> None:
        """Multipart POST of the package to the release upload URL.

        The response status is not inspected; reaching the server is treated
        as completion and the subsequent commit is what confirms the upload.
        """
        file_name = os.path.basename(package_file.name)
        self.logger.debug(f"Upload release {file_name}")

        response = self.session.post(
            upload_url,
            files={PACKAGE_FORM_FIELD: (file_name, package_file)},
            timeout=self.config.request_timeout
        )
        try:
            # drain the body so read failures surface here
            _ = response.content
        finally:
            response.close()

    def upload_symbols(self, upload_url: str, mapping_file: BinaryIO) -> None:
        """Upload the mapping file as one committed block blob."""
        self.logger.debug("Upload symbols")
        try:
            blob_client = self.blob_client_factory(upload_url)
            with blob_client:
                blob_client.upload_blob(
                    mapping_file,
                    blob_type=BlobType.BLOCKBLOB,
                    overwrite=True
                )
        except (AzureError, ValueError, OSError) as e:
            raise TransferError(
                f"Failed to upload symbols: {e}",
                original_exception=e
            ) from e
