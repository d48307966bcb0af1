import logging
import os
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from website.config import ENV, VERSION
from website.exceptions import raise_for
from website.lib.asset_cache import ASSETS_URL_PREFIX, AssetCache


def create_jinja_env(directory: str | os.PathLike[str], assets: AssetCache) -> Environment:
    """
    Create the template environment for the given directory.

    Raises FileNotFoundError if the directory does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f'Template directory {str(directory)!r} does not exist')

    def asset_path(key: str) -> str:
        """
        Resolve a logical asset name to its public, cache-busted path.

        >>> asset_path('index.js')
        '/assets/index.a1b2c3d4.js'
        """
        asset = assets.get(key)
        if asset is None:
            logging.warning('Asset %r is not in the cache', key)
            return f'/{ASSETS_URL_PREFIX}{key}'
        return f'/{asset.path}'

    env = Environment(
        loader=FileSystemLoader(directory),
        autoescape=True,
        cache_size=1024,
        auto_reload=ENV == 'dev',
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    env.globals.update(
        ENV=ENV,
        VERSION=VERSION,
        asset_path=asset_path,
    )
    logging.info('Loaded %d templates from %r', len(env.list_templates()), str(directory))
    return env


def render_jinja(env: Environment, template_name: str, template_data: dict[str, Any] | None = None, /) -> str:
    """Render the given Jinja2 template."""
    try:
        template = env.get_template(template_name)
    except TemplateNotFound:
        raise_for.template_not_found(template_name)

    try:
        return template.render(template_data or {})
    except Exception:
        logging.exception('Failed to render template %r', template_name)
        raise_for.template_render(template_name)
