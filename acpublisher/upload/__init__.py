"""
App Center Release Upload Module

This module publishes an Android package to App Center through a sequential
workflow against the distribution service:

Release: begin upload, transfer package, commit, update release notes
Publish: distribute the release to each requested group
Symbols: optional ProGuard mapping upload, committed or aborted
"""

from .api_client import AppCenterAPIClient
from .transfer import BinaryTransfer
from .file_validator import InputValidator
from .upload_orchestrator import ReleaseOrchestrator
from ..utils.exceptions import (
    PublisherError,
    ValidationError,
    TransportError,
    UnexpectedStatusError,
    DecodeError,
    TransferError
)

__all__ = [
    'AppCenterAPIClient',
    'BinaryTransfer',
    'InputValidator',
    'ReleaseOrchestrator',
    'PublisherError',
    'ValidationError',
    'TransportError',
    'UnexpectedStatusError',
    'DecodeError',
    'TransferError'
]
