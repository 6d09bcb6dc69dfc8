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

from typing import Optional, FrozenSet, Mapping
from .errors import TooManyRedirects, ValidationError
from .options import RequestOptions
from .http import Response
from yarl import URL

__all__ = ('REDIRECT_CODES', 'default_validator', 'is_redirect', 'next_redirect', 'validate')

REDIRECT_CODES: FrozenSet[int] = frozenset({301, 302, 303, 307, 308})


def default_validator(status_code: int) -> bool:
    """Accept any 2xx status."""
    return 200 <= status_code < 300


def is_redirect(options: RequestOptions, status_code: Optional[int]) -> bool:
    """Whether a response should be followed instead of validated."""
    return options.follow is not None and status_code in REDIRECT_CODES


def _location(current: URL, headers: Mapping[str, str]) -> str:
    location = headers.get('Location') or ''
    if not location:
        return ''
    return str(current.join(URL(location)))


def next_redirect(
        options: RequestOptions,
        status_code: int,
        current: URL,
        headers: Mapping[str, str],
        redirects: int
) -> RequestOptions:
    """
    Derive the options of the next attempt after a redirect response.

    Parameters
    ----------
    options: RequestOptions
        Options of the redirecting attempt.
    status_code: int
        The redirect status.
    current: URL
        URL of the redirecting attempt, used to resolve relative locations.
    headers: Mapping[str, str]
        Response headers.
    redirects: int
        Redirects taken so far, including this one.

    Returns
    -------
    RequestOptions
        Options targeting the ``Location`` header. A missing location yields
        an empty URL which fails to resolve on the next attempt.

    Raises
    ------
    TooManyRedirects
        If ``redirects`` exceeds the configured budget.
    ValueError
        If ``options`` carries no follow budget.
    """
    if options.follow is None:
        raise ValueError('Redirects are only followed when a follow budget is set')
    if redirects > options.follow:
        raise TooManyRedirects(options.follow, url=str(current))

    method = 'GET' if status_code == 303 else options.method
    return options.replace(url=_location(current, headers), method=method)


def validate(options: RequestOptions, response: Response) -> Response:
    """
    Apply the status validator.

    Raises
    ------
    ValidationError
        If the validator rejects the status code.
    """
    validator = options.validate or default_validator
    if response.status_code is None or not validator(response.status_code):
        raise ValidationError(response)
    return response
