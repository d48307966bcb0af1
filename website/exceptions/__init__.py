from website.exceptions.asset_mixin import AssetExceptionsMixin
from website.exceptions.template_mixin import TemplateExceptionsMixin


class Exceptions(
    AssetExceptionsMixin,
    TemplateExceptionsMixin,
): ...


raise_for = Exceptions()
