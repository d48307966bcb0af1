from fastapi import APIRouter

from website.lib.render_response import render_response

router = APIRouter()


@router.api_route('/', methods=['GET', 'HEAD'])
async def index():
    return render_response('index.html')


@router.api_route('/about', methods=['GET', 'HEAD'])
async def about():
    return render_response('about.html')
