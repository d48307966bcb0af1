import logging
import os
from typing import NamedTuple

from jinja2 import Environment
from psycopg_pool import AsyncConnectionPool
from pydantic import SecretStr

from website.lib.asset_cache import AssetCache, build_asset_cache
from website.lib.render_jinja import create_jinja_env
from website.middlewares.request_context_middleware import get_request


class BaseTemplateData(NamedTuple):
    """Public paths of the assets referenced by the base layout."""

    styles: str | None
    htmx: str | None

    @classmethod
    def from_assets(cls, assets: AssetCache) -> 'BaseTemplateData':
        return cls(
            styles=_base_asset_path(assets, 'index.css'),
            htmx=_base_asset_path(assets, 'index.js'),
        )


def _base_asset_path(assets: AssetCache, key: str) -> str | None:
    asset = assets.get(key)
    if asset is None:
        logging.warning('Base layout asset %r is missing, pages will render without it', key)
        return None
    return f'/{asset.path}'


class AppContext:
    """
    Process-lifetime resources shared read-only by every request.

    Created once during application startup, see `AppContext.create`.
    """

    __slots__ = ('assets', 'base', 'encryption_key', 'jinja', 'pool')

    def __init__(
        self,
        *,
        assets: AssetCache,
        base: BaseTemplateData,
        jinja: Environment,
        encryption_key: SecretStr,
        pool: AsyncConnectionPool | None = None,
    ) -> None:
        self.assets = assets
        self.base = base
        self.jinja = jinja
        self.encryption_key = encryption_key
        self.pool = pool

    @classmethod
    async def create(
        cls,
        build_dir: str | os.PathLike[str],
        templates_dir: str | os.PathLike[str],
        *,
        encryption_key: SecretStr,
        pool: AsyncConnectionPool | None = None,
    ) -> 'AppContext':
        assets = await build_asset_cache(build_dir)
        return cls(
            assets=assets,
            base=BaseTemplateData.from_assets(assets),
            jinja=create_jinja_env(templates_dir, assets),
            encryption_key=encryption_key,
            pool=pool,
        )


def app_context() -> AppContext:
    """Get the application context of the current request."""
    return get_request().app.state.context
