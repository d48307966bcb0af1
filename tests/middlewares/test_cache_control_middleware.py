from datetime import timedelta

import pytest
from starlette.datastructures import Headers
from starlette.types import Message, Receive, Scope, Send

from website.lib.mime import MimeType
from website.middlewares.cache_control_middleware import CacheControlMiddleware


def _make_app(content_type: str | None, cache_control: str | None = None):
    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        headers: list[tuple[bytes, bytes]] = []
        if content_type is not None:
            headers.append((b'content-type', content_type.encode()))
        if cache_control is not None:
            headers.append((b'cache-control', cache_control.encode()))
        await send({'type': 'http.response.start', 'status': 200, 'headers': headers})
        await send({'type': 'http.response.body', 'body': b'body'})

    return app


async def _call(middleware: CacheControlMiddleware) -> Headers:
    messages: list[Message] = []

    async def receive() -> Message:
        return {'type': 'http.request', 'body': b''}

    async def send(message: Message) -> None:
        messages.append(message)

    scope: Scope = {'type': 'http', 'method': 'GET', 'path': '/', 'headers': []}
    await middleware(scope, receive, send)
    assert messages[1]['body'] == b'body'
    return Headers(raw=messages[0]['headers'])


@pytest.mark.parametrize(
    ('content_type', 'expected'),
    [
        ('text/html', 'no-cache'),
        ('text/html; charset=utf-8', 'no-cache'),
        ('text/css', 'public, max-age=31536000'),
        ('application/javascript', 'public, max-age=31536000'),
        ('image/svg+xml', 'public, max-age=31536000'),
        ('image/webp', 'public, max-age=31536000'),
        ('font/woff2', 'public, max-age=31536000'),
        ('application/json', None),
        ('text/plain; charset=utf-8', None),
        ('image/png', None),
        (None, None),
    ],
)
async def test_cache_control_default(content_type, expected):
    headers = await _call(CacheControlMiddleware(_make_app(content_type)))
    assert headers.get('Cache-Control') == expected


async def test_cache_control_html_overrides_existing():
    app = _make_app('text/html; charset=utf-8', cache_control='public, max-age=60')
    headers = await _call(CacheControlMiddleware(app))
    assert headers.getlist('Cache-Control') == ['no-cache']


async def test_cache_control_untouched_type_keeps_existing():
    app = _make_app('application/json', cache_control='private')
    headers = await _call(CacheControlMiddleware(app))
    assert headers['Cache-Control'] == 'private'


async def test_cache_control_custom_configuration():
    middleware = CacheControlMiddleware(
        _make_app('image/png'),
        cacheable_types=(MimeType.PNG,),
        max_age=timedelta(hours=1),
    )
    headers = await _call(middleware)
    assert headers['Cache-Control'] == 'public, max-age=3600'

    middleware = CacheControlMiddleware(
        _make_app('text/css'),
        cacheable_types=(MimeType.PNG,),
    )
    headers = await _call(middleware)
    assert 'Cache-Control' not in headers


async def test_cache_control_skips_non_http():
    called = False

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        nonlocal called
        called = True

    async def receive() -> Message:
        return {'type': 'lifespan.startup'}

    async def send(message: Message) -> None:
        raise AssertionError('unexpected message')

    await CacheControlMiddleware(app)({'type': 'lifespan'}, receive, send)
    assert called
