from collections.abc import Collection
from datetime import timedelta

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from website.config import ASSET_CACHE_MAX_AGE, ASSET_CACHEABLE_TYPES
from website.lib.mime import MimeType, classify_by_header

NO_CACHE_HEADER = 'no-cache'


class CacheControlMiddleware:
    """
    Set the Cache-Control header from the response Content-Type.

    HTML is always revalidated, cacheable static types are cached for max_age,
    and everything else is left untouched.
    """

    __slots__ = ('app', 'cacheable_types', 'header')

    def __init__(
        self,
        app: ASGIApp,
        *,
        cacheable_types: Collection[MimeType] = ASSET_CACHEABLE_TYPES,
        max_age: timedelta = ASSET_CACHE_MAX_AGE,
    ) -> None:
        self.app = app
        self.cacheable_types = frozenset(cacheable_types)
        self.header = f'public, max-age={int(max_age.total_seconds())}'

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope['type'] != 'http':
            return await self.app(scope, receive, send)

        async def wrapper(message: Message) -> None:
            if message['type'] == 'http.response.start':
                headers = MutableHeaders(raw=message['headers'])
                content_type = headers.get('Content-Type')

                if content_type is not None:
                    mime = classify_by_header(content_type)
                    if mime == MimeType.HTML:
                        headers['Cache-Control'] = NO_CACHE_HEADER
                    elif mime in self.cacheable_types:
                        headers['Cache-Control'] = self.header

            return await send(message)

        return await self.app(scope, receive, wrapper)
