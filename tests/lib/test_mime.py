import pytest

from website.lib.mime import (
    CACHEABLE_TYPES,
    PRECOMPRESSED_TYPES,
    MimeType,
    classify_by_extension,
    classify_by_header,
)


@pytest.mark.parametrize(
    ('ext', 'expected'),
    [
        ('css', MimeType.CSS),
        ('html', MimeType.HTML),
        ('js', MimeType.JS),
        ('svg', MimeType.SVG),
        ('txt', MimeType.TEXT),
        ('webp', MimeType.WEBP),
        ('woff2', MimeType.WOFF2),
        ('png', MimeType.PNG),
        ('jpg', MimeType.JPEG),
        ('jpeg', MimeType.JPEG),
        ('gif', MimeType.GIF),
        ('.css', MimeType.CSS),
        ('JS', MimeType.JS),
    ],
)
def test_classify_by_extension(ext, expected):
    assert classify_by_extension(ext) == expected


@pytest.mark.parametrize('ext', ['', 'wasm', 'map', 'woff', 'json', 'css.map'])
def test_classify_by_extension_fallback(ext):
    assert classify_by_extension(ext) == MimeType.TEXT


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('text/css', MimeType.CSS),
        ('text/html; charset=utf-8', MimeType.HTML),
        ('TEXT/HTML', MimeType.HTML),
        ('application/javascript', MimeType.JS),
        ('text/javascript; charset=utf-8', MimeType.JS),
        ('image/svg+xml', MimeType.SVG),
        ('font/woff2', MimeType.WOFF2),
        (' image/webp ;q=1', MimeType.WEBP),
        ('application/json', MimeType.TEXT),
        ('', MimeType.TEXT),
    ],
)
def test_classify_by_header(value, expected):
    assert classify_by_header(value) == expected


@pytest.mark.parametrize('mime', list(MimeType))
def test_header_agrees_with_value(mime: MimeType):
    assert classify_by_header(mime.value) == mime
    assert classify_by_header(f'{mime.value}; charset=utf-8') == mime


def test_default_type_sets():
    assert PRECOMPRESSED_TYPES == {MimeType.CSS, MimeType.JS}
    assert CACHEABLE_TYPES == {
        MimeType.CSS,
        MimeType.JS,
        MimeType.SVG,
        MimeType.WEBP,
        MimeType.WOFF2,
    }
