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

from typing import Optional, Any, Callable, Mapping, Union, List, FrozenSet, Dict
from multidict import CIMultiDict
import aiohttp

__all__ = ('RequestOptions', 'METHODS', 'FORMATS')

HeaderValue = Union[str, int, List[Union[str, int]]]
Validator = Callable[[int], bool]

METHODS: FrozenSet[str] = frozenset({
    'GET',
    'HEAD',
    'POST',
    'PUT',
    'DELETE',
    'CONNECT',
    'OPTIONS',
    'TRACE',
    'PATCH',
})

FORMATS: Dict[str, str] = {
    'text': 'text',
    'string': 'text',
    'binary': 'binary',
    'buffer': 'binary',
    'json': 'json',
}


def _normalize_headers(headers: Optional[Mapping[str, HeaderValue]]) -> CIMultiDict:
    normalized: CIMultiDict = CIMultiDict()
    if headers is None:
        return normalized

    for key, value in headers.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                normalized.add(key, str(item))
        else:
            normalized.add(key, str(value))
    return normalized


class RequestOptions:
    """
    Options for a single request.

    The record is treated as immutable by the pipeline; redirects derive a new
    record through :meth:`replace`.

    Parameters
    ----------
    url: str
        Absolute URL to request.
    method: str, default='GET'
        HTTP method, case-insensitive.
    headers: Optional[Mapping[str, HeaderValue]]
        Request headers. List values are sent as repeated headers.
    proxy: Optional[str]
        HTTP proxy URL, may embed ``user:password`` credentials.
    validate: Optional[Callable[[int], bool]]
        Status predicate. Defaults to accepting ``200 <= status < 300``.
    timeout: Optional[float]
        Per attempt timeout in milliseconds.
    follow: Optional[int]
        Redirect budget. ``None`` disables redirect following.
    format: str, default='text'
        Body decoding, one of ``'text'``, ``'binary'`` or ``'json'``.
    agent: Optional[aiohttp.BaseConnector]
        Caller owned connector, passed through untouched.
    body: Any
        Request body. ``str`` and ``bytes`` are sent as-is, anything else is serialized.

    Raises
    ------
    TypeError
        If ``url`` is not a string or ``follow`` is not an integer.
    ValueError
        If ``method`` is unknown or ``timeout``/``follow`` is negative.
    """

    __slots__ = ('url', 'method', 'headers', 'proxy', 'validate', 'timeout', 'follow', 'format', 'agent', 'body')

    def __init__(
            self,
            url: str,
            *,
            method: str = 'GET',
            headers: Optional[Mapping[str, HeaderValue]] = None,
            proxy: Optional[str] = None,
            validate: Optional[Validator] = None,
            timeout: Optional[float] = None,
            follow: Optional[int] = None,
            format: str = 'text',
            agent: Optional[aiohttp.BaseConnector] = None,
            body: Any = None
    ) -> None:
        if not isinstance(url, str):
            raise TypeError(f'url must be a str, got {type(url).__name__}')

        method = method.upper()
        if method not in METHODS:
            raise ValueError(f'Unsupported HTTP method: {method}')

        if timeout is not None and timeout < 0:
            raise ValueError('timeout must be non-negative')

        if follow is not None:
            if isinstance(follow, bool) or not isinstance(follow, int):
                raise TypeError('follow must be an int')
            if follow < 0:
                raise ValueError('follow must be non-negative')

        self.url: str = url
        self.method: str = method
        self.headers: CIMultiDict = _normalize_headers(headers)
        self.proxy: Optional[str] = proxy
        self.validate: Optional[Validator] = validate
        self.timeout: Optional[float] = timeout
        self.follow: Optional[int] = follow
        self.format: str = FORMATS.get(format, 'text')
        self.agent: Optional[aiohttp.BaseConnector] = agent
        self.body: Any = body

    def to_dict(self) -> Dict[str, Any]:
        """Return the options as keyword arguments accepted by the constructor."""
        return {name: getattr(self, name) for name in self.__slots__}

    def replace(self, **changes: Any) -> RequestOptions:
        """
        Create a copy of these options with some fields changed.

        Parameters
        ----------
        **changes: Any
            Fields to override.

        Returns
        -------
        RequestOptions
            A new options record.
        """
        options = self.to_dict()
        options.update(changes)
        return RequestOptions(**options)

    def __repr__(self) -> str:
        return f'<RequestOptions method={self.method} url={self.url!r} follow={self.follow}>'
