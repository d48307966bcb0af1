from typing import NoReturn

from starlette import status

from website.exceptions.api_error import APIError


class TemplateExceptionsMixin:
    def template_not_found(self, template_name: str) -> NoReturn:
        raise APIError(
            status.HTTP_404_NOT_FOUND,
            detail=f'template "{template_name}" does not exist',
        )

    def template_render(self, template_name: str) -> NoReturn:
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f'failed to render template "{template_name}"',
        )
