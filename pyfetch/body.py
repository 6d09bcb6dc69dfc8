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

from typing import Optional, Any, Tuple
from urllib.parse import urlencode
from multidict import CIMultiDict
import json

__all__ = ('encode_body', 'JSON_CONTENT_TYPE', 'FORM_CONTENT_TYPE')

JSON_CONTENT_TYPE = 'application/json'
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def _media_type(content_type: str) -> str:
    return content_type.split(';', 1)[0].strip().lower()


def encode_body(body: Any, headers: CIMultiDict) -> Tuple[Optional[bytes], CIMultiDict]:
    """
    Serialize a request body.

    ``str`` and ``bytes`` bodies are sent unchanged. Any other value is
    structured: ``Content-Type`` defaults to JSON and the value is JSON
    encoded. With a form content type the value is URL-encoded first and
    the resulting string is then JSON encoded as well.

    Parameters
    ----------
    body: Any
        The body to encode. ``None`` means no body.
    headers: CIMultiDict
        Current request headers, copied and never mutated.

    Returns
    -------
    Tuple[Optional[bytes], CIMultiDict]
        The encoded payload and the headers to send with it.
    """
    headers = CIMultiDict(headers)
    if body is None:
        return None, headers

    if isinstance(body, str):
        return body.encode('utf-8'), headers

    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body), headers

    headers.setdefault('Content-Type', JSON_CONTENT_TYPE)

    if _media_type(headers['Content-Type']) == FORM_CONTENT_TYPE:
        body = urlencode(body, doseq=True)

    payload = _dumps(body).encode('utf-8')
    headers['Content-Length'] = str(len(payload))
    return payload, headers
