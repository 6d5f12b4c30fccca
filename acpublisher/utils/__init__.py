"""
Utility modules for acpublisher.

Shared helpers used by the API client and the binary transfer, including the
translation of ``requests`` failures into publisher exceptions.
"""

from acpublisher.utils.api_error_handler import handle_transport_errors

__all__ = [
    "handle_transport_errors",
]
