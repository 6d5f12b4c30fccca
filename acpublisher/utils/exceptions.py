"""
Exceptions raised by the release workflow.

Every failure the publisher reports derives from PublisherError; the
network-facing ones keep the endpoint and the original exception.
"""


class PublisherError(Exception):
    """Base publisher error."""

    def __init__(self, message, **kwargs):
        super().__init__(message)
        self.message = message
        self.endpoint = kwargs.get('endpoint')
        self.original_exception = kwargs.get('original_exception')


class ValidationError(PublisherError):
    """Missing required input or unreadable local file."""
    pass


class TransportError(PublisherError):
    """Connection could not be established or response could not be read."""
    pass


class UnexpectedStatusError(PublisherError):
    """Server answered with a status other than the expected one."""

    def __init__(self, status_code, **kwargs):
        super().__init__(f"Unexpected response from server: {status_code}", **kwargs)
        self.status_code = status_code
        self.expected_status = kwargs.get('expected_status')


class DecodeError(PublisherError):
    """Response body is not well-formed or does not match the expected shape."""
    pass


class TransferError(PublisherError):
    """Binary transfer to a pre-signed upload location failed."""
    pass
