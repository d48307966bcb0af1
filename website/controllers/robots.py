from fastapi import APIRouter, Response
from starlette import status
from starlette.responses import PlainTextResponse

from website.exceptions import raise_for
from website.lib.app_context import app_context

router = APIRouter()


@router.get('/robots.txt')
async def robots():
    asset = app_context().assets.get('robots.txt')
    if asset is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    try:
        text = asset.contents.decode()
    except UnicodeDecodeError:
        raise_for.asset_not_text('robots.txt')

    return PlainTextResponse(text)
