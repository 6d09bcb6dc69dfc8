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

from typing import Optional, Any, AsyncIterator, ClassVar, Dict, Tuple, Type
from .errors import ResponseParseError, UnsupportedScheme
from contextlib import asynccontextmanager
from multidict import CIMultiDictProxy
from .proxy import Target
from yarl import URL
import aiohttp
import logging
import json

_logger = logging.getLogger(__name__)

__all__ = (
    'Response',
    'Transport',
    'PlainTransport',
    'SecureTransport',
    'select_transport',
    'collect',
    'decode',
)


class Response:
    """
    Buffered response of a completed request.

    Attributes
    ----------
    status: Optional[str]
        Reason phrase of the status line.
    status_code: Optional[int]
        Numeric status code.
    headers: CIMultiDictProxy
        Response headers.
    data: Any
        Decoded body: ``str``, ``bytes`` or a JSON value depending on the format.
    raw: aiohttp.ClientResponse
        The underlying, already released, aiohttp response.
    """

    __slots__ = ('status', 'status_code', 'headers', 'data', 'raw')

    def __init__(
            self,
            status: Optional[str],
            status_code: Optional[int],
            headers: CIMultiDictProxy,
            data: Any,
            raw: aiohttp.ClientResponse
    ) -> None:
        self.status: Optional[str] = status
        self.status_code: Optional[int] = status_code
        self.headers: CIMultiDictProxy = headers
        self.data: Any = data
        self.raw: aiohttp.ClientResponse = raw

    @property
    def url(self) -> URL:
        """URL of the attempt that produced this response."""
        return self.raw.url

    def __repr__(self) -> str:
        return f'<Response [{self.status_code} {self.status}] url={self.url}>'


class Transport:
    """
    Issues a single attempt over an aiohttp session.

    Subclasses describe how a resolved :class:`Target` maps onto aiohttp
    request arguments for their scheme.

    Parameters
    ----------
    session: aiohttp.ClientSession
        Session owned by the current call.
    """

    scheme: ClassVar[str]

    SKIP_AUTO_HEADERS: ClassVar[Tuple[str, ...]] = ('Content-Type', 'Accept-Encoding')

    __slots__ = ('session',)

    def __init__(self, session: aiohttp.ClientSession) -> None:
        self.session: aiohttp.ClientSession = session

    def _prepare(self, target: Target) -> Dict[str, Any]:
        raise NotImplementedError

    @asynccontextmanager
    async def issue(
            self,
            method: str,
            target: Target,
            body: Optional[bytes] = None,
            timeout: Optional[float] = None
    ) -> AsyncIterator[aiohttp.ClientResponse]:
        """
        Send the request and yield the response with its body still unread.

        Parameters
        ----------
        method: str
            HTTP method.
        target: Target
            Resolved target of the attempt.
        body: Optional[bytes]
            Encoded payload, written before the request is finalized.
        timeout: Optional[float]
            Attempt timeout in milliseconds.

        Yields
        ------
        aiohttp.ClientResponse
            The response, released when the context exits.
        """
        kwargs = self._prepare(target)
        if timeout is not None:
            kwargs['timeout'] = aiohttp.ClientTimeout(total=timeout / 1000)

        headers = kwargs.pop('headers')
        skip_auto_headers = tuple(name for name in self.SKIP_AUTO_HEADERS if name not in headers)

        async with self.session.request(
            method,
            target.url,
            headers=headers,
            data=body,
            allow_redirects=False,
            skip_auto_headers=skip_auto_headers,
            **kwargs
        ) as response:
            _logger.debug("%s %s returned %s", method, target.url, response.status)
            yield response


class PlainTransport(Transport):
    """Transport for ``http`` URLs. Proxy headers travel with the request itself."""

    scheme = 'http'

    __slots__ = ()

    def _prepare(self, target: Target) -> Dict[str, Any]:
        headers = target.headers.copy()
        headers.extend(target.proxy_headers)
        return {'headers': headers, 'proxy': target.proxy}


class SecureTransport(Transport):
    """Transport for ``https`` URLs. Proxy headers only reach the CONNECT tunnel."""

    scheme = 'https'

    __slots__ = ()

    def _prepare(self, target: Target) -> Dict[str, Any]:
        return {
            'headers': target.headers.copy(),
            'proxy': target.proxy,
            'proxy_headers': target.proxy_headers.copy() if target.proxy_headers else None,
            'ssl': True,
        }


_TRANSPORTS: Dict[str, Type[Transport]] = {
    PlainTransport.scheme: PlainTransport,
    SecureTransport.scheme: SecureTransport,
}


def select_transport(scheme: str) -> Type[Transport]:
    """
    Pick the transport for a URL scheme.

    Raises
    ------
    UnsupportedScheme
        If no transport handles ``scheme``.
    """
    try:
        return _TRANSPORTS[scheme]
    except KeyError:
        raise UnsupportedScheme(scheme) from None


def decode(buffer: bytes, format: str, url: Optional[str] = None) -> Any:
    """
    Decode a buffered body.

    Parameters
    ----------
    buffer: bytes
        The complete response body.
    format: str
        ``'binary'`` returns the bytes, ``'json'`` parses UTF-8 JSON and
        anything else returns UTF-8 text.
    url: Optional[str]
        URL reported on parse errors.

    Raises
    ------
    ResponseParseError
        If the body is not valid JSON.
    """
    if format == 'binary':
        return buffer

    if format == 'json':
        try:
            return json.loads(buffer.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as exc:
            raise ResponseParseError(f'Could not decode JSON response: {exc}', url=url) from exc

    return buffer.decode('utf-8', errors='replace')


async def collect(response: aiohttp.ClientResponse, format: str = 'text') -> Response:
    """
    Buffer the whole body of ``response`` and build a :class:`Response`.

    Parameters
    ----------
    response: aiohttp.ClientResponse
        Response with an unread body.
    format: str
        Decoding format, see :func:`decode`.

    Returns
    -------
    Response
        The response descriptor.
    """
    buffer = bytearray()
    async for chunk in response.content.iter_any():
        buffer.extend(chunk)

    data = decode(bytes(buffer), format, url=str(response.url))
    return Response(
        status=response.reason,
        status_code=response.status,
        headers=response.headers,
        data=data,
        raw=response,
    )
