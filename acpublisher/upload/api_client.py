"""
App Center API Client for the Release Workflow

Handles all JSON exchanges with the distribution service: beginning and
committing release uploads, updating and publishing releases, and the symbol
upload session used for ProGuard mapping files.
"""

import json
import logging
from typing import Any, Optional

import requests

from ..utils.api_error_handler import handle_transport_errors
from .models import (
    AppSlug,
    PublisherConfig,
    ReleaseDestinationRequest,
    ReleaseDestinationResponse,
    ReleaseDetailsResponse,
    ReleaseUpdateRequest,
    ReleaseUpdateResponse,
    ReleaseUploadBeginRequest,
    ReleaseUploadBeginResponse,
    ReleaseUploadEndRequest,
    ReleaseUploadEndResponse,
    SymbolType,
    SymbolUpload,
    SymbolUploadBeginRequest,
    SymbolUploadBeginResponse,
    SymbolUploadEndRequest,
    UploadStatus,
    to_payload
)
from ..utils.exceptions import (
    DecodeError,
    TransportError,
    UnexpectedStatusError
)


_HTTP_VERSIONS = {10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


class AppCenterAPIClient:
    """Handles all API interactions with the App Center service"""

    def __init__(self, config: PublisherConfig, logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None):
        self.config = config
        self.logger = logger or logging.getLogger("acpublisher")
        self.wire_logger = self.logger.getChild("wire")
        self.session = session or requests.Session()
        self.session.headers.update(config.get_headers())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.close()

    @handle_transport_errors(TransportError, "reach App Center", context_arg="endpoint")
    def exchange(self, method: str, endpoint: str, expected_status: int, body: Any = None) -> Any:
        """Send one JSON request and return the decoded response body.

        ``body`` is a request record; absent optional fields are not sent.
        The response is traced before its status is checked.
        """
        url = self.config.endpoint_url(endpoint)

        data = None
        if body is not None:
            data = json.dumps(to_payload(body)).encode("utf-8")

        prepared = self.session.prepare_request(
            requests.Request(method, url, data=data)
        )
        self._trace_request(prepared, data)

        response = self.session.send(prepared, timeout=self.config.request_timeout)
        try:
            response_text = response.text
        finally:
            response.close()
        self._trace_response(response, response_text)

        if response.status_code != expected_status:
            raise UnexpectedStatusError(
                response.status_code,
                endpoint=endpoint,
                expected_status=expected_status
            )

        try:
            return json.loads(response_text)
        except ValueError as e:
            raise DecodeError(
                f"Invalid JSON in response from {endpoint}: {e}",
                endpoint=endpoint,
                original_exception=e
            )

    def begin_release_upload(self, app_slug: AppSlug) -> ReleaseUploadBeginResponse:
        """POST /apps/{app_slug}/release_uploads"""
        self.logger.debug("Begin release upload")
        data = self.exchange(
            "POST",
            f"apps/{app_slug}/release_uploads",
            201,
            ReleaseUploadBeginRequest()
        )
        return ReleaseUploadBeginResponse.from_payload(data)

    def commit_release(self, app_slug: AppSlug, upload_id: str) -> ReleaseUploadEndResponse:
        """PATCH /apps/{app_slug}/release_uploads/{upload_id}"""
        self.logger.debug(f"Commit release {upload_id}")
        data = self.exchange(
            "PATCH",
            f"apps/{app_slug}/release_uploads/{upload_id}",
            200,
            ReleaseUploadEndRequest(status=UploadStatus.COMMITTED)
        )
        return ReleaseUploadEndResponse.from_payload(data)

    def update_release(self, app_slug: AppSlug, release_id: str, release_notes: str) -> ReleaseUpdateResponse:
        """PUT /apps/{app_slug}/releases/{release_id}"""
        self.logger.debug(f"Update release {release_id}")
        data = self.exchange(
            "PUT",
            f"apps/{app_slug}/releases/{release_id}",
            200,
            ReleaseUpdateRequest(release_notes=release_notes)
        )
        return ReleaseUpdateResponse.from_payload(data)

    def publish_release(self, app_slug: AppSlug, release_id: str, destination_type: str,
                        destination_id: str) -> ReleaseDestinationResponse:
        """POST /apps/{app_slug}/releases/{release_id}/{destination_type}"""
        self.logger.debug(f"Publishing to {destination_type} {destination_id}")
        data = self.exchange(
            "POST",
            f"apps/{app_slug}/releases/{release_id}/{destination_type}",
            201,
            ReleaseDestinationRequest(id=destination_id)
        )
        return ReleaseDestinationResponse.from_payload(data)

    def get_release(self, app_slug: AppSlug, release_id: str) -> ReleaseDetailsResponse:
        """GET /apps/{app_slug}/releases/{release_id}"""
        self.logger.debug(f"Get release {release_id}")
        data = self.exchange("GET", f"apps/{app_slug}/releases/{release_id}", 200)
        return ReleaseDetailsResponse.from_payload(data)

    def begin_symbol_upload(self, app_slug: AppSlug, version: str, build: str,
                            file_name: str) -> SymbolUploadBeginResponse:
        """POST /apps/{app_slug}/symbol_uploads"""
        self.logger.debug("Begin symbol upload")
        request = SymbolUploadBeginRequest(
            symbol_type=SymbolType.ANDROID,
            file_name=file_name,
            version=version,
            build=build
        )
        data = self.exchange("POST", f"apps/{app_slug}/symbol_uploads", 200, request)
        return SymbolUploadBeginResponse.from_payload(data)

    def commit_symbols(self, app_slug: AppSlug, symbol_upload_id: str, status: UploadStatus) -> SymbolUpload:
        """PATCH /apps/{app_slug}/symbol_uploads/{symbol_upload_id}"""
        self.logger.debug(f"Commit symbols {symbol_upload_id}")
        data = self.exchange(
            "PATCH",
            f"apps/{app_slug}/symbol_uploads/{symbol_upload_id}",
            200,
            SymbolUploadEndRequest(status=status)
        )
        return SymbolUpload.from_payload(data)

    def _trace_request(self, prepared: requests.PreparedRequest, data: Optional[bytes]):
        self.wire_logger.debug(f"--> {prepared.method} {prepared.path_url} HTTP/1.1")
        self._trace_headers(prepared.headers)
        if data is not None:
            self.wire_logger.debug(data.decode("utf-8"))
        self.wire_logger.debug(f"--> END {prepared.method}")

    def _trace_response(self, response: requests.Response, body: str):
        version = getattr(response.raw, "version", None)
        protocol = _HTTP_VERSIONS.get(version, "HTTP/1.1")
        self.wire_logger.debug(f"<-- {protocol} {response.status_code} {response.reason or ''}".rstrip())
        self._trace_headers(response.headers)
        if body:
            self.wire_logger.debug(body)
        self.wire_logger.debug("<-- END")

    def _trace_headers(self, headers):
        for name, value in headers.items():
            self.wire_logger.debug(f"{name}: {value}")
