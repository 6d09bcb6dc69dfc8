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

from .errors import InvalidURL, UnsupportedScheme
from typing import Optional, Tuple
from multidict import CIMultiDict
from yarl import URL
import aiohttp
import logging

_logger = logging.getLogger(__name__)

__all__ = ('Target', 'parse_url', 'resolve_target', 'SCHEMES')

SCHEMES: Tuple[str, ...] = ('http', 'https')


class Target:
    """
    Resolved outbound target of a single attempt.

    Attributes
    ----------
    url: URL
        The real URL the request line targets.
    headers: CIMultiDict
        Request headers including the injected ``Host`` when proxied.
    proxy: Optional[URL]
        Proxy to connect to, stripped of credentials.
    proxy_headers: CIMultiDict
        Headers meant for the proxy only, such as ``Proxy-Authorization``.
    """

    __slots__ = ('url', 'headers', 'proxy', 'proxy_headers')

    def __init__(
            self,
            url: URL,
            headers: CIMultiDict,
            proxy: Optional[URL] = None,
            proxy_headers: Optional[CIMultiDict] = None
    ) -> None:
        self.url: URL = url
        self.headers: CIMultiDict = headers
        self.proxy: Optional[URL] = proxy
        self.proxy_headers: CIMultiDict = proxy_headers if proxy_headers is not None else CIMultiDict()

    @property
    def scheme(self) -> str:
        return self.url.scheme

    @property
    def host(self) -> str:
        """Host the outbound connection is made to."""
        return (self.proxy or self.url).host or ''

    @property
    def port(self) -> Optional[int]:
        """Port the outbound connection is made to."""
        return (self.proxy or self.url).port

    def __repr__(self) -> str:
        return f'<Target url={self.url} proxy={self.proxy}>'


def parse_url(url: str) -> URL:
    """
    Parse an absolute URL.

    Parameters
    ----------
    url: str
        The URL to parse.

    Returns
    -------
    URL
        The parsed URL.

    Raises
    ------
    InvalidURL
        If the URL is not absolute or cannot be parsed.
    """
    try:
        parsed = URL(url)
    except (TypeError, ValueError) as exc:
        raise InvalidURL(url) from exc

    if not parsed.is_absolute() or not parsed.scheme:
        raise InvalidURL(url)
    return parsed


def _host_header(url: URL) -> str:
    host = url.host or ''
    if ':' in host:
        host = f'[{host}]'
    return f'{host}:{url.port}'


def resolve_target(url: str, headers: CIMultiDict, proxy: Optional[str] = None) -> Target:
    """
    Compute the outbound target for an attempt.

    When a proxy is configured the connection goes to the proxy while the
    request line still targets ``url``. The real target is announced through
    the ``Host`` header and embedded proxy credentials are moved into a
    ``Proxy-Authorization`` header.

    Parameters
    ----------
    url: str
        Absolute target URL.
    headers: CIMultiDict
        Request headers, copied and never mutated.
    proxy: Optional[str]
        Proxy URL, may carry credentials.

    Returns
    -------
    Target
        The resolved target.

    Raises
    ------
    InvalidURL
        If the target or proxy URL is not absolute.
    UnsupportedScheme
        If the target scheme is neither ``http`` nor ``https``.
    """
    target_url = parse_url(url)
    if target_url.scheme not in SCHEMES:
        raise UnsupportedScheme(target_url.scheme, url=url)

    headers = CIMultiDict(headers)
    if not proxy:
        return Target(target_url, headers)

    proxy_url = parse_url(proxy)
    if proxy_url.scheme not in SCHEMES:
        raise UnsupportedScheme(proxy_url.scheme, url=proxy)

    headers['Host'] = _host_header(target_url)

    proxy_headers: CIMultiDict = CIMultiDict()
    if proxy_url.user is not None:
        proxy_headers['Proxy-Authorization'] = aiohttp.encode_basic_auth(proxy_url.user, proxy_url.password or '')
        proxy_url = proxy_url.with_user(None)

    _logger.debug("Routing %s through proxy %s", target_url, proxy_url)
    return Target(target_url, headers, proxy_url, proxy_headers)
