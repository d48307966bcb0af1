from typing import Any

from starlette.responses import HTMLResponse

from website.lib.app_context import app_context
from website.lib.render_jinja import render_jinja
from website.middlewares.request_context_middleware import get_request, is_boosted


def render_response(
    template_name: str,
    template_data: dict[str, Any] | None = None,
    *,
    status: int = 200,
) -> HTMLResponse:
    """
    Render the given Jinja2 template, returning an HTMLResponse.

    Boosted requests receive the page without the base layout.
    """
    context = app_context()
    data: dict[str, Any] = {'request': get_request()}

    if not is_boosted():
        data['base'] = context.base

    if template_data is not None:
        data.update(template_data)

    return HTMLResponse(render_jinja(context.jinja, template_name, data), status_code=status)
