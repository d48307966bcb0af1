from fastapi import APIRouter
from starlette.responses import HTMLResponse

router = APIRouter(prefix='/api')

_RESPONSE = HTMLResponse('OK')


@router.get('/health')
async def health():
    return _RESPONSE
