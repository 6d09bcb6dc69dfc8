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

from typing import Any, Dict, FrozenSet, ClassVar
from .pipeline import request
from .http import Response
import logging

_logger = logging.getLogger(__name__)

__all__ = ('Client',)


class Client:
    """
    Request helper holding default options.

    Defaults are read again on every call, so callers may adjust them
    between requests without building a new client.

    Parameters
    ----------
    **defaults: Any
        Default :class:`~pyfetch.options.RequestOptions` fields, for example
        ``headers``, ``timeout``, ``follow``, ``proxy``, ``format``,
        ``validate`` or ``agent``.

    Attributes
    ----------
    defaults: Dict[str, Any]
        The mutable default options.

    Raises
    ------
    TypeError
        If ``url``, ``method`` or ``body`` is given as a default.
    """

    PER_CALL_OPTIONS: ClassVar[FrozenSet[str]] = frozenset({'url', 'method', 'body'})

    __slots__ = ('defaults',)

    def __init__(self, **defaults: Any) -> None:
        invalid = self.PER_CALL_OPTIONS.intersection(defaults)
        if invalid:
            raise TypeError(f"Options cannot be used as defaults: {', '.join(sorted(invalid))}")
        self.defaults: Dict[str, Any] = defaults

    async def request(self, url: str, method: str = 'GET', **options: Any) -> Response:
        """
        Send a request with the defaults applied.

        Parameters
        ----------
        url: str
            Absolute URL to request.
        method: str, default='GET'
            HTTP method.
        **options: Any
            Per call options, overriding the defaults key by key.

        Returns
        -------
        Response
            The buffered response.
        """
        merged = {**self.defaults, **options}
        _logger.debug("Client request %s %s", method, url)
        return await request(url=url, method=method, **merged)

    async def get(self, url: str, **options: Any) -> Response:
        return await self.request(url, 'GET', **options)

    async def head(self, url: str, **options: Any) -> Response:
        return await self.request(url, 'HEAD', **options)

    async def options(self, url: str, **options: Any) -> Response:
        return await self.request(url, 'OPTIONS', **options)

    async def delete(self, url: str, **options: Any) -> Response:
        return await self.request(url, 'DELETE', **options)

    async def post(self, url: str, body: Any = None, **options: Any) -> Response:
        return await self.request(url, 'POST', body=body, **options)

    async def put(self, url: str, body: Any = None, **options: Any) -> Response:
        return await self.request(url, 'PUT', body=body, **options)

    async def patch(self, url: str, body: Any = None, **options: Any) -> Response:
        return await self.request(url, 'PATCH', body=body, **options)

    def __repr__(self) -> str:
        return f'<Client defaults={sorted(self.defaults)}>'
