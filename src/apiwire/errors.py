"""Exception types raised by apiwire."""

from __future__ import annotations

from typing import Optional


class ApiwireError(Exception):
    """Base class for recoverable apiwire failures."""


class MissingBaseURLError(RuntimeError):
    """
    The environment has no usable base URL.

    A configuration bug rather than a request failure: not an ApiwireError,
    so ``except ApiwireError`` does not catch it.
    """

    def __init__(self, base_url: Optional[str] = None) -> None:
        self.base_url = base_url
        super().__init__(f"Missing or invalid base URL: {base_url!r}")


# Transport


class TransportError(ApiwireError):
    """The request could not be completed by the transport."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidResponseTypeError(TransportError):
    """The response could not be classified as an HTTP response."""


class MissingRequestUrlError(TransportError):
    """The request has no resolvable URL."""

    def __init__(self) -> None:
        super().__init__("Request has no URL")


class NoRouteMatchError(TransportError):
    """No canned route matched the request."""

    def __init__(self, method: str, url: Optional[str]) -> None:
        super().__init__(f"No canned route matches {method} {url}")
        self.method = method
        self.url = url


class AmbiguousRouteMatchError(TransportError):
    """More than one canned route matched when a unique match was required."""

    def __init__(self, count: int) -> None:
        super().__init__(f"Ambiguous route match: {count} routes matched")
        self.count = count


class PatternNotMatchedError(TransportError):
    """A pattern-gated transport refused a request that did not match."""

    def __init__(self, method: str, url: Optional[str]) -> None:
        super().__init__(f"Request {method} {url} does not match the transport pattern")
        self.method = method
        self.url = url


# Response handling


class InvalidStatusCodeError(ApiwireError):
    """The server responded outside the accepted [200, 300) range."""

    def __init__(self, status_code: Optional[int]) -> None:
        super().__init__(f"Invalid status code: {status_code}")
        self.status_code = status_code


class DecodingError(ApiwireError):
    """The response body did not parse into the requested shape."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


# Credential storage


class CredentialStoreError(ApiwireError):
    """Base class for credential store failures."""


class CredentialEncodingError(CredentialStoreError):
    """The secret could not be encoded for storage."""


class CredentialDecodingError(CredentialStoreError):
    """The stored secret could not be decoded back into text."""


class CredentialBackendError(CredentialStoreError):
    """The underlying secure storage reported a failure."""

    def __init__(self, status: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Credential backend reported status {status}")
        self.status = status
