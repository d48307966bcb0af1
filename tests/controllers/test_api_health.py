from httpx import AsyncClient
from starlette import status


async def test_health(client: AsyncClient):
    r = await client.get('/api/health')
    assert r.status_code == status.HTTP_200_OK
    assert r.text == 'OK'
    assert r.headers['Content-Type'].startswith('text/html')


async def test_api_not_found(client: AsyncClient):
    r = await client.get('/api/missing')
    assert r.status_code == status.HTTP_404_NOT_FOUND
