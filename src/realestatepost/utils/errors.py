"""Error handling utilities."""

from typing import Optional


class RealEstatePostError(Exception):
    """Base exception for the realestatepost client."""
    pass


class InvalidURLError(RealEstatePostError):
    """Base URL and path do not form a usable absolute URL."""

    def __init__(self, url: str, reason: Optional[str] = None):
        self.url = url
        self.reason = reason
        message = f"Invalid URL: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class EndpointNotFoundError(RealEstatePostError):
    """Server answered 404 for the requested route."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Endpoint not found: {url}")


class ServerError(RealEstatePostError):
    """Server answered with a non-2xx status other than 404."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class DecodingError(RealEstatePostError):
    """Response body does not match the expected schema."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to decode response: {detail}")


class NetworkUnavailableError(RealEstatePostError):
    """Transport-level failure (DNS, refused connection, timeout, TLS)."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Network unavailable: {detail}")
