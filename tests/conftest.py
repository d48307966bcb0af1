import os
from collections.abc import Collection
from pathlib import Path

os.environ['ENV'] = 'test'
os.environ['BUILD_DIR'] = 'tests/data/build'
os.environ['TEMPLATES_DIR'] = 'website/templates'
os.environ.pop('POSTGRES_URL', None)
os.environ.pop('DATABASE_URL', None)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from website.lib.asset_cache import AssetCache  # noqa: E402
from website.main import main  # noqa: E402

BUILD_DIR = Path('tests/data/build')


def pytest_collection_modifyitems(config: pytest.Config, items: Collection[pytest.Item]):
    # run all tests in the session in the same event loop
    # https://pytest-asyncio.readthedocs.io/en/latest/how-to-guides/run_session_tests_in_same_loop.html
    session_scope_marker = pytest.mark.asyncio(loop_scope='session')
    for item in items:
        if pytest_asyncio.is_async_test(item):
            item.add_marker(session_scope_marker, append=False)


@pytest_asyncio.fixture(scope='session')
async def transport():
    async with main.router.lifespan_context(main):
        yield ASGITransport(main)  # pyright: ignore[reportArgumentType]


@pytest.fixture
def client(transport: ASGITransport) -> AsyncClient:
    # identity by default, compression is exercised in test_compression.py
    return AsyncClient(
        base_url='http://127.0.0.1:3000',
        transport=transport,
        headers={'Accept-Encoding': 'identity'},
    )


@pytest.fixture(scope='session')
def build_cache() -> AssetCache:
    return AssetCache.build(BUILD_DIR)
