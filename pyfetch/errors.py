"""
The MIT License (MIT)

Copyright (c) 2026-present mrsnifo

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NON-INFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .http import Response

__all__ = (
    "PyFetchException",
    "RequestError",
    "InvalidURL",
    "UnsupportedScheme",
    "RequestTimeout",
    "TooManyRedirects",
    "ResponseParseError",
    "ValidationError",
)


class PyFetchException(Exception):
    """Base exception for all PyFetch errors."""


class RequestError(PyFetchException):
    """
    Raised when a request could not be completed.

    Parameters
    ----------
    message: str
        Human readable description of the failure.
    url: Optional[str]
        The URL of the attempt that failed.
    response: Optional[Response]
        The response descriptor, only present for validation failures.
    """

    def __init__(self, message: str, *, url: Optional[str] = None, response: Optional[Response] = None) -> None:
        self.url: Optional[str] = url
        self.response: Optional[Response] = response
        super().__init__(message)


class InvalidURL(RequestError):
    """Raised when a URL is not an absolute URI."""
    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url!r}", url=url)


class UnsupportedScheme(RequestError):
    """Raised before any I/O when the URL scheme has no transport."""
    def __init__(self, scheme: str, url: Optional[str] = None) -> None:
        self.scheme: str = scheme
        super().__init__(f'Protocol "{scheme}:" not supported.', url=url)


class RequestTimeout(RequestError):
    """Raised when the configured timeout elapses before the attempt finishes."""
    def __init__(self, timeout: float, url: Optional[str] = None) -> None:
        self.timeout: float = timeout
        super().__init__(f"Request timed out after {timeout}ms", url=url)


class TooManyRedirects(RequestError):
    """Raised when the redirect budget is exceeded."""
    def __init__(self, follow: int, url: Optional[str] = None) -> None:
        self.follow: int = follow
        super().__init__("Too many redirects", url=url)


class ResponseParseError(RequestError):
    """Raised when a response body cannot be decoded in the requested format."""


class ValidationError(RequestError):
    """
    Raised when a response was received but its status was rejected.

    The full response descriptor is available on :attr:`response`.
    """
    def __init__(self, response: Response) -> None:
        super().__init__(
            f"Request failed with status code {response.status_code}",
            url=str(response.url),
            response=response,
        )

    @property
    def status_code(self) -> Optional[int]:
        """The rejected status code."""
        return self.response.status_code  # type: ignore[union-attr]
