"""
ghmock Common Utilities

Helpers for building raw response bodies.
"""

import json
from typing import Any


def must_marshal(obj: Any) -> bytes:
    """
    Serialize an object to JSON bytes.

    Unlike a lenient parser, this raises on anything that is not JSON
    serializable: a mock definition that cannot be encoded is a broken test.

    Args:
        obj: Object to serialize

    Returns:
        UTF-8 encoded JSON document

    Example:
        body = must_marshal({'login': 'octocat'})
    """
    return json.dumps(obj).encode('utf-8')


def to_body(obj: Any) -> bytes:
    """
    Coerce a canned response into raw body bytes.

    bytes are used as-is, str is UTF-8 encoded and anything else is
    marshalled to JSON.
    """
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj)
    if isinstance(obj, str):
        return obj.encode('utf-8')
    return must_marshal(obj)
