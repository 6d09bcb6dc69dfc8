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

from .policy import is_redirect, next_redirect, validate
from .http import Response, collect, select_transport
from typing import Optional, Any, AsyncIterator
from contextlib import asynccontextmanager
from .options import RequestOptions
from .errors import RequestTimeout
from .proxy import resolve_target
from .body import encode_body
import asyncio
import aiohttp
import logging

_logger = logging.getLogger(__name__)

__all__ = ('AttemptContext', 'request')


class AttemptContext:
    """
    State shared by every attempt of one top-level call.

    Parameters
    ----------
    session: aiohttp.ClientSession
        Session used by all attempts of the call.
    future: asyncio.Future
        Terminal future settled exactly once for the whole redirect chain.

    Attributes
    ----------
    redirects: int
        Number of redirects followed so far.
    """

    __slots__ = ('session', 'future', 'redirects')

    def __init__(self, session: aiohttp.ClientSession, future: asyncio.Future) -> None:
        self.session: aiohttp.ClientSession = session
        self.future: asyncio.Future = future
        self.redirects: int = 0

    @property
    def done(self) -> bool:
        return self.future.done()

    def resolve(self, response: Response) -> None:
        if not self.future.done():
            self.future.set_result(response)

    def reject(self, error: BaseException) -> None:
        if not self.future.done():
            self.future.set_exception(error)


@asynccontextmanager
async def _open_session(agent: Optional[aiohttp.BaseConnector]) -> AsyncIterator[aiohttp.ClientSession]:
    session = aiohttp.ClientSession(
        connector=agent,
        connector_owner=agent is None,
        timeout=aiohttp.ClientTimeout(),
    )
    try:
        yield session
    finally:
        await session.close()


async def _attempt(options: RequestOptions, context: AttemptContext) -> Optional[RequestOptions]:
    """Run one attempt. Returns the options of the next attempt when redirected."""
    target = resolve_target(options.url, options.headers, options.proxy)
    transport = select_transport(target.scheme)(context.session)
    body, target.headers = encode_body(options.body, target.headers)

    try:
        async with transport.issue(options.method, target, body, options.timeout) as response:
            if is_redirect(options, response.status):
                context.redirects += 1
                _logger.debug(
                    "Following redirect %s/%s from %s",
                    context.redirects,
                    options.follow,
                    target.url
                )
                return next_redirect(options, response.status, target.url, response.headers, context.redirects)

            result = await collect(response, options.format)
    except asyncio.TimeoutError as exc:
        if options.timeout is None:
            raise
        raise RequestTimeout(options.timeout, url=options.url) from exc

    context.resolve(validate(options, result))
    return None


async def _handle_request(options: RequestOptions, context: AttemptContext) -> None:
    """Drive attempts until the context settles."""
    next_options: Optional[RequestOptions] = options
    try:
        while next_options is not None and not context.done:
            next_options = await _attempt(next_options, context)
    except Exception as exc:
        context.reject(exc)


async def request(options: Optional[RequestOptions] = None, /, **kwargs: Any) -> Response:
    """
    Perform an HTTP request.

    Parameters
    ----------
    options: Optional[RequestOptions]
        Request options. When omitted they are built from ``kwargs``;
        when given, ``kwargs`` override individual fields.
    **kwargs: Any
        Fields of :class:`RequestOptions`.

    Returns
    -------
    Response
        The buffered and decoded response.

    Raises
    ------
    InvalidURL
        If a URL is not absolute.
    UnsupportedScheme
        If a URL scheme is not ``http`` or ``https``.
    RequestTimeout
        If the configured timeout elapsed.
    TooManyRedirects
        If the redirect budget was exceeded.
    ResponseParseError
        If a JSON response could not be decoded.
    ValidationError
        If the status was rejected; the response is attached.
    aiohttp.ClientError
        On transport failures, unchanged.
    """
    if options is None:
        options = RequestOptions(**kwargs)
    elif kwargs:
        options = options.replace(**kwargs)

    loop = asyncio.get_running_loop()
    async with _open_session(options.agent) as session:
        context = AttemptContext(session, loop.create_future())
        await _handle_request(options, context)
        return await context.future
