"""Response body decompression by Content-Encoding."""

import gzip
import zlib

import brotli
import structlog

from .exceptions import ContentDecodingError

logger = structlog.get_logger("transport")

IDENTITY_ENCODINGS = frozenset({"", "identity", "none"})
SUPPORTED_ENCODINGS = IDENTITY_ENCODINGS | {"gzip", "x-gzip", "deflate", "br"}


def _inflate(raw: bytes) -> bytes:
    # HTTP "deflate" should be zlib-wrapped but some servers send raw DEFLATE
    try:
        return zlib.decompress(raw)
    except zlib.error:
        return zlib.decompress(raw, -zlib.MAX_WBITS)


def _decode_one(raw: bytes, encoding: str, url: str, operation: str) -> bytes:
    if encoding in IDENTITY_ENCODINGS:
        return raw

    try:
        if encoding in ("gzip", "x-gzip"):
            return gzip.decompress(raw)
        if encoding == "deflate":
            return _inflate(raw)
        if encoding == "br":
            return brotli.decompress(raw)
    except (OSError, EOFError, zlib.error, brotli.error) as e:
        raise ContentDecodingError(
            url=url, encoding=encoding, reason=str(e), operation=operation
        ) from e

    # Unknown coding: pass through. This silently corrupts output if the
    # vendor ever starts using a coding we don't know about.
    logger.warning("unsupported_content_encoding", encoding=encoding, url=url)
    return raw


def decode_body(
    raw: bytes,
    content_encoding: str | None,
    url: str,
    operation: str = "decode_body",
) -> bytes:
    """Decode a raw response body according to its Content-Encoding header.

    Codings listed in the header were applied in order, so they are undone
    in reverse.

    Args:
        raw: Body bytes exactly as received on the wire.
        content_encoding: Value of the Content-Encoding header, if any.
        url: Request URL, for diagnostics.
        operation: Operation name reported on decoding errors.

    Returns:
        The decoded body.

    Raises:
        ContentDecodingError: If a supported coding fails to decompress.
    """
    codings = [
        part.strip().lower()
        for part in (content_encoding or "").split(",")
        if part.strip()
    ]
    logger.debug("decode_body", content_encoding=content_encoding or "", url=url, raw_bytes=len(raw))

    body = raw
    for coding in reversed(codings):
        body = _decode_one(body, coding, url, operation)

    logger.debug("decoded_body", content_encoding=content_encoding or "", url=url, body_bytes=len(body))
    return body
