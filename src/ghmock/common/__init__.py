"""
ghmock Common Utilities

Shared helpers used across ghmock modules.
"""

from .utils import must_marshal, to_body
from .url_utils import split_host, rewrite_url

__all__ = [
    'must_marshal',
    'to_body',
    'split_host',
    'rewrite_url'
]
