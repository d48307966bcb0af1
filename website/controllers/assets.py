from fastapi import APIRouter, Response
from starlette import status

from website.lib.app_context import app_context
from website.lib.mime import PRECOMPRESSED_TYPES

router = APIRouter(prefix='/assets')


@router.api_route('/{path:path}', methods=['GET', 'HEAD'])
async def get_asset(path: str):
    """
    Serve a static asset from the in-memory cache.

    Content-hashed and logical file names resolve to the same asset.
    """
    asset = app_context().assets.get_from_request_path(path)
    if asset is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    # set explicitly, the generic default would be an octet-stream
    headers = {
        'Content-Type': asset.content_type.value,
        'ETag': asset.etag,
    }
    if asset.content_type in PRECOMPRESSED_TYPES:
        headers['Content-Encoding'] = 'br'

    return Response(asset.contents, headers=headers)
