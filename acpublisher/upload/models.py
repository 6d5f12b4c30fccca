"""
Data Models for the App Center Release Workflow

Dataclass-based request/response records exchanged with the distribution
service, the upload status enumerations and the workflow state.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from ..utils.exceptions import DecodeError


DEFAULT_BASE_URL = "https://api.appcenter.ms"
DEFAULT_API_VERSION = "v0.1"
DEFAULT_RELEASE_NOTES = "Uploaded with acpublisher"

T = TypeVar("T")


class UploadStatus(Enum):
    """Terminal disposition the client sends to close an upload session"""
    COMMITTED = "committed"
    ABORTED = "aborted"


class SymbolUploadStatus(Enum):
    """Server-reported lifecycle of a symbol upload"""
    CREATED = "created"
    COMMITTED = "committed"
    ABORTED = "aborted"
    PROCESSING = "processing"
    INDEXED = "indexed"
    FAILED = "failed"


class SymbolType(Enum):
    APPLE = "Apple"
    JAVASCRIPT = "JavaScript"
    BREAKPAD = "Breakpad"
    ANDROID = "AndroidProguard"
    UWP = "UWP"


class WorkflowStage(Enum):
    """Release workflow states, in the order they are reached"""
    IDLE = "idle"
    RELEASE_BEGUN = "release_begun"
    BYTES_TRANSFERRED = "bytes_transferred"
    RELEASE_COMMITTED = "release_committed"
    RELEASE_NOTES_UPDATED = "release_notes_updated"
    GROUPS_PUBLISHED = "groups_published"
    SYMBOLS_BEGUN = "symbols_begun"
    SYMBOL_BYTES_TRANSFERRED = "symbol_bytes_transferred"
    SYMBOLS_COMMITTED = "symbols_committed"
    SYMBOLS_ABORTED = "symbols_aborted"


def to_payload(record: Any) -> Any:
    """Convert a request record to JSON-ready data, dropping absent fields.

    ``None`` means "absent" and is never sent; empty strings and ``False``
    are sent as-is.
    """
    if isinstance(record, Enum):
        return record.value
    if dataclasses.is_dataclass(record):
        payload = {}
        for f in dataclasses.fields(record):
            value = getattr(record, f.name)
            if value is None:
                continue
            payload[f.name] = to_payload(value)
        return payload
    if isinstance(record, list):
        return [to_payload(item) for item in record]
    return record


def _require_object(data: Any, shape: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected JSON object for {shape}, got {type(data).__name__}")
    return data


def _field(data: Dict[str, Any], name: str, kind: Type[T], shape: str, required: bool = False) -> Optional[T]:
    if name not in data or data[name] is None:
        if required:
            raise DecodeError(f"Missing field '{name}' in {shape}")
        return None
    value = data[name]
    # bool is a subclass of int, reject it where a number is expected
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(f"Field '{name}' in {shape} has unexpected type {type(value).__name__}")
    return value


def _identifier(data: Dict[str, Any], name: str, shape: str) -> str:
    """Identifiers arrive either as strings or as numbers; keep them as strings"""
    value = data.get(name)
    if isinstance(value, bool) or not isinstance(value, (str, int)) or value == "":
        raise DecodeError(f"Missing or invalid identifier '{name}' in {shape}")
    return str(value)


@dataclass(frozen=True)
class AppSlug:
    """``owner/app`` path identifier of the target application"""
    owner: str
    app: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.app}"


@dataclass
class PublisherConfig:
    """Connection settings for the distribution service"""
    api_token: str
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    request_timeout: Optional[float] = None

    def get_headers(self) -> Dict[str, str]:
        """Get authentication headers for API requests"""
        return {
            "X-API-Token": self.api_token,
            "Content-Type": "application/json"
        }

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{self.api_version}/{endpoint.lstrip('/')}"


@dataclass
class UploadApkOptions:
    """Options of the ``uploadApk`` command, populated once by the CLI"""
    token: Optional[str] = None
    owner: Optional[str] = None
    app: Optional[str] = None
    apk: Optional[str] = None
    mapping: Optional[str] = None
    release_notes: str = DEFAULT_RELEASE_NOTES
    release_notes_file: Optional[str] = None
    groups: List[str] = field(default_factory=list)
    verbose: bool = False
    debug: bool = False


# Requests

@dataclass
class ReleaseUploadBeginRequest:
    release_id: Optional[int] = None
    build_version: Optional[str] = None
    build_number: Optional[str] = None


@dataclass
class ReleaseUploadEndRequest:
    status: UploadStatus


@dataclass
class Destination:
    id: Optional[str] = None
    name: Optional[str] = None


@dataclass
class BuildInfo:
    branch_name: Optional[str] = None
    commit_hash: Optional[str] = None
    commit_message: Optional[str] = None


@dataclass
class ReleaseMetadata:
    dsa_signature: Optional[str] = None


@dataclass
class ReleaseUpdateRequest:
    release_notes: Optional[str] = None
    mandatory_update: Optional[bool] = None
    destinations: Optional[List[Destination]] = None
    build: Optional[BuildInfo] = None
    notify_testers: Optional[bool] = None
    metadata: Optional[ReleaseMetadata] = None


@dataclass
class ReleaseDestinationRequest:
    id: str
    mandatory_update: Optional[bool] = None
    notify_testers: Optional[bool] = None


@dataclass
class SymbolUploadBeginRequest:
    symbol_type: SymbolType
    client_callback: Optional[str] = None
    file_name: Optional[str] = None
    build: Optional[str] = None
    version: Optional[str] = None


@dataclass
class SymbolUploadEndRequest:
    status: UploadStatus


# Responses

@dataclass
class ReleaseUploadBeginResponse:
    upload_id: str
    upload_url: str
    asset_id: Optional[str] = None
    asset_domain: Optional[str] = None
    asset_token: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "ReleaseUploadBeginResponse":
        shape = "release upload begin response"
        data = _require_object(data, shape)
        return cls(
            upload_id=_identifier(data, "upload_id", shape),
            upload_url=_field(data, "upload_url", str, shape, required=True),
            asset_id=_field(data, "asset_id", str, shape),
            asset_domain=_field(data, "asset_domain", str, shape),
            asset_token=_field(data, "asset_token", str, shape)
        )


@dataclass
class ReleaseUploadEndResponse:
    release_id: str
    release_url: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "ReleaseUploadEndResponse":
        shape = "release upload end response"
        data = _require_object(data, shape)
        return cls(
            release_id=_identifier(data, "release_id", shape),
            release_url=_field(data, "release_url", str, shape)
        )


@dataclass
class ReleaseUpdateResponse:
    enabled: Optional[bool] = None
    mandatory_update: Optional[bool] = None
    release_notes: Optional[str] = None
    provisioning_status_url: Optional[str] = None
    destinations: Optional[List[Destination]] = None

    @classmethod
    def from_payload(cls, data: Any) -> "ReleaseUpdateResponse":
        shape = "release update response"
        data = _require_object(data, shape)
        destinations = _field(data, "destinations", list, shape)
        if destinations is not None:
            destinations = [
                Destination(
                    id=_field(_require_object(item, shape), "id", str, shape),
                    name=_field(item, "name", str, shape)
                )
                for item in destinations
            ]
        return cls(
            enabled=_field(data, "enabled", bool, shape),
            mandatory_update=_field(data, "mandatory_update", bool, shape),
            release_notes=_field(data, "release_notes", str, shape),
            provisioning_status_url=_field(data, "provisioning_status_url", str, shape),
            destinations=destinations
        )


@dataclass
class ReleaseDestinationResponse:
    id: str
    mandatory_update: bool = False
    provisioning_status_url: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "ReleaseDestinationResponse":
        shape = "release destination response"
        data = _require_object(data, shape)
        return cls(
            id=_identifier(data, "id", shape),
            mandatory_update=bool(_field(data, "mandatory_update", bool, shape)),
            provisioning_status_url=_field(data, "provisioning_status_url", str, shape)
        )


@dataclass
class ReleaseDetailsResponse:
    id: int
    version: str
    short_version: str
    app_name: Optional[str] = None
    app_display_name: Optional[str] = None
    uploaded_at: Optional[str] = None
    app_icon_url: Optional[str] = None
    enabled: Optional[bool] = None

    @classmethod
    def from_payload(cls, data: Any) -> "ReleaseDetailsResponse":
        shape = "release details response"
        data = _require_object(data, shape)
        return cls(
            id=_field(data, "id", int, shape, required=True),
            version=_field(data, "version", str, shape, required=True),
            short_version=_field(data, "short_version", str, shape, required=True),
            app_name=_field(data, "app_name", str, shape),
            app_display_name=_field(data, "app_display_name", str, shape),
            uploaded_at=_field(data, "uploaded_at", str, shape),
            app_icon_url=_field(data, "app_icon_url", str, shape),
            enabled=_field(data, "enabled", bool, shape)
        )


@dataclass
class SymbolUploadBeginResponse:
    symbol_upload_id: str
    upload_url: str
    expiration_date: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "SymbolUploadBeginResponse":
        shape = "symbol upload begin response"
        data = _require_object(data, shape)
        return cls(
            symbol_upload_id=_identifier(data, "symbol_upload_id", shape),
            upload_url=_field(data, "upload_url", str, shape, required=True),
            expiration_date=_field(data, "expiration_date", str, shape)
        )


@dataclass
class SymbolUploadUser:
    email: Optional[str] = None
    display_name: Optional[str] = None


@dataclass
class SymbolUpload:
    symbol_upload_id: str
    status: SymbolUploadStatus
    app_id: Optional[str] = None
    symbol_type: Optional[SymbolType] = None
    user: Optional[SymbolUploadUser] = None

    @classmethod
    def from_payload(cls, data: Any) -> "SymbolUpload":
        shape = "symbol upload"
        data = _require_object(data, shape)
        try:
            status = SymbolUploadStatus(_field(data, "status", str, shape, required=True))
            symbol_type = _field(data, "symbol_type", str, shape)
            symbol_type = SymbolType(symbol_type) if symbol_type is not None else None
        except ValueError as e:
            raise DecodeError(f"Unknown enumeration value in {shape}: {e}", original_exception=e)
        user = _field(data, "user", dict, shape)
        if user is not None:
            user = SymbolUploadUser(
                email=_field(user, "email", str, shape),
                display_name=_field(user, "display_name", str, shape)
            )
        return cls(
            symbol_upload_id=_identifier(data, "symbol_upload_id", shape),
            status=status,
            app_id=_field(data, "app_id", str, shape),
            symbol_type=symbol_type,
            user=user
        )


# Workflow input/output

@dataclass
class ReleaseRequest:
    """Everything the release workflow consumes; files are already open"""
    app_slug: AppSlug
    package_file: Any
    release_notes: str
    groups: List[str] = field(default_factory=list)
    mapping_file: Optional[Any] = None


@dataclass
class ReleaseResult:
    """Overall release workflow result"""
    success: bool
    stage: WorkflowStage = WorkflowStage.IDLE
    release_id: Optional[str] = None
    release_url: Optional[str] = None
    published_groups: List[str] = field(default_factory=list)
    symbol_upload_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ValidationResult:
    """Input validation result"""
    is_valid: bool
    error_message: Optional[str] = None
    field_name: Optional[str] = None
