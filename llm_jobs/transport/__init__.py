"""Transport module - authenticated HTTP and body decoding."""

from .client import ResponsesTransport
from .encoding import decode_body
from .exceptions import TransportError, TransportTimeoutError, ContentDecodingError


__all__ = [
    "ResponsesTransport",
    "decode_body",
    "TransportError",
    "TransportTimeoutError",
    "ContentDecodingError",
]
