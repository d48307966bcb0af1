from enum import StrEnum
from functools import lru_cache


class MimeType(StrEnum):
    """
    Closed set of media types known to the asset cache.

    The member value is the canonical media type string.
    """

    CSS = 'text/css'
    HTML = 'text/html'
    JS = 'application/javascript'
    SVG = 'image/svg+xml'
    TEXT = 'text/plain'
    WEBP = 'image/webp'
    WOFF2 = 'font/woff2'
    PNG = 'image/png'
    JPEG = 'image/jpeg'
    GIF = 'image/gif'


_EXTENSION_MAP: dict[str, MimeType] = {
    'css': MimeType.CSS,
    'html': MimeType.HTML,
    'js': MimeType.JS,
    'svg': MimeType.SVG,
    'txt': MimeType.TEXT,
    'webp': MimeType.WEBP,
    'woff2': MimeType.WOFF2,
    'png': MimeType.PNG,
    'jpg': MimeType.JPEG,
    'jpeg': MimeType.JPEG,
    'gif': MimeType.GIF,
}

_HEADER_MAP: dict[str, MimeType] = {
    **{mime.value: mime for mime in MimeType},
    'text/javascript': MimeType.JS,
}

PRECOMPRESSED_TYPES = frozenset((MimeType.CSS, MimeType.JS))
"""Types stored Brotli-compressed in the asset cache."""

CACHEABLE_TYPES = frozenset((
    MimeType.CSS,
    MimeType.JS,
    MimeType.SVG,
    MimeType.WEBP,
    MimeType.WOFF2,
))
"""Types served with a long-lived Cache-Control header by default."""


def classify_by_extension(ext: str) -> MimeType:
    """
    Classify a file extension, with or without the leading dot.

    >>> classify_by_extension('.woff2')
    <MimeType.WOFF2: 'font/woff2'>
    >>> classify_by_extension('wasm')
    <MimeType.TEXT: 'text/plain'>
    """
    return _EXTENSION_MAP.get(ext.lstrip('.').lower(), MimeType.TEXT)


@lru_cache(maxsize=128)
def classify_by_header(value: str) -> MimeType:
    """
    Classify a Content-Type header value, ignoring any parameters.

    >>> classify_by_header('text/html; charset=utf-8')
    <MimeType.HTML: 'text/html'>
    """
    return _HEADER_MAP.get(value.partition(';')[0].strip().lower(), MimeType.TEXT)
