from typing import NoReturn

from starlette import status

from website.exceptions.api_error import APIError


class AssetExceptionsMixin:
    def asset_not_text(self, key: str) -> NoReturn:
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f'asset "{key}" is not valid UTF-8 text',
        )
