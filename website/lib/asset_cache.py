import logging
import os
import re
from asyncio import get_running_loop
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import NamedTuple

import brotli
import cython
from blake3 import blake3

from website.config import ASSET_BROTLI_QUALITY
from website.lib.asset_scan import AssetScan
from website.lib.mime import PRECOMPRESSED_TYPES, MimeType, classify_by_extension

ASSETS_URL_PREFIX = 'assets/'

# bun emits 8 lowercase alphanumerics, longer digests are accepted too
_DASH_HASH_RE = re.compile(r'^(?P<name>.+)-(?=[a-z]*\d)[a-z0-9]{8,64}$')


class StaticAsset(NamedTuple):
    """
    One file from the build output, kept in memory for the process lifetime.

    CSS and JS contents are stored Brotli-compressed, everything else as-is.
    """

    path: str
    """Public URL path, suitable for embedding in rendered HTML."""
    contents: bytes
    content_type: MimeType
    hash: bytes
    """blake3 digest of the original (uncompressed) bytes."""

    @property
    def etag(self) -> str:
        return f'"{self.hash[:16].hex()}"'


def cache_key(filename: str) -> str:
    """
    Derive the logical asset name from a (possibly content-hashed) filename.

    >>> cache_key('index.a1b2c3d4.js')
    'index.js'
    >>> cache_key('fonts/inter-7f3e9a1b.woff2')
    'inter.woff2'
    >>> cache_key('index.css')
    'index.css'
    """
    name = filename.rpartition('/')[2]
    basename, dot, ext = name.partition('.')
    if not dot:
        return name

    ext = ext.rpartition('.')[2]
    # strip every trailing hash fragment so the key is a fixed point
    while (match := _DASH_HASH_RE.match(basename)) is not None:
        basename = match['name']

    return f'{basename}.{ext}'


@cython.cfunc
def _compress(data: bytes, path: str) -> bytes:
    try:
        return brotli.compress(data, quality=ASSET_BROTLI_QUALITY)
    except brotli.error:
        logging.exception('Failed to compress asset %r, storing empty contents', path)
        return b''


class AssetCache:
    """
    Immutable mapping of cache keys to static assets.

    Built once at startup and only read afterwards, so lookups are safe
    from any number of concurrent requests without locking.
    """

    __slots__ = ('_assets',)

    def __init__(self, assets: Mapping[str, StaticAsset] | None = None) -> None:
        self._assets: Mapping[str, StaticAsset] = MappingProxyType(dict(assets or {}))

    @classmethod
    def build(cls, directory: str | os.PathLike[str]) -> 'AssetCache':
        """
        Load every file of the build output directory into memory.

        A missing or unreadable directory results in an empty cache.
        """
        assets: dict[str, StaticAsset] = {}
        scan = AssetScan(directory)

        for file in scan:
            content_type = classify_by_extension(file.extension)
            path = ASSETS_URL_PREFIX + file.relative_path
            contents = (
                _compress(file.data, path)  #
                if content_type in PRECOMPRESSED_TYPES
                else file.data
            )

            key = cache_key(file.name)
            existing = assets.get(key)
            if existing is not None:
                logging.warning(
                    'Asset %r conflicts with %r on key %r, ignoring it',
                    path,
                    existing.path,
                    key,
                )
                continue

            assets[key] = StaticAsset(
                path=path,
                contents=contents,
                content_type=content_type,
                hash=blake3(file.data).digest(),
            )

        logging.info(
            'Loaded %d assets from %r (%d skipped)',
            len(assets),
            str(directory),
            len(scan.skipped),
        )
        for key, asset in assets.items():
            logging.debug('Asset %r -> %r', key, asset.path)

        return cls(assets)

    def get(self, key: str) -> StaticAsset | None:
        return self._assets.get(key)

    def get_from_request_path(self, path: str) -> StaticAsset | None:
        """Resolve a request path such as "/assets/index.css" to its asset."""
        return self._assets.get(cache_key(path))

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, key: object) -> bool:
        return key in self._assets

    def __iter__(self) -> Iterator[str]:
        return iter(self._assets)


async def build_asset_cache(directory: str | os.PathLike[str]) -> AssetCache:
    """Build the asset cache without blocking the event loop."""
    return await get_running_loop().run_in_executor(None, AssetCache.build, directory)
