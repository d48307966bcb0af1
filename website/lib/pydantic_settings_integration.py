import logging
from collections.abc import Callable
from sys import modules
from typing import Any, get_type_hints

from pydantic import create_model
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, SettingsConfigDict

DOTENV_CONFIG = SettingsConfigDict(
    env_file='.env',
    env_file_encoding='utf-8',
    extra='ignore',
)


def _is_setting_name(name: str) -> bool:
    return name[:1] != '_' and name.isupper()


def pydantic_settings_integration(
    caller_name: str,
    caller_globals: dict[str, Any],
    /,
    config: SettingsConfigDict = DOTENV_CONFIG,
    name_filter: Callable[[str], bool] = _is_setting_name,
) -> BaseSettings | None:
    """
    Load the calling module's UPPER_CASE globals from the environment and .env file.

    Every matching global becomes a field of a dynamically created settings
    model, using its annotation (or the type of its default) for validation.
    The validated values are written back into the module namespace.
    Invalid values raise pydantic.ValidationError.
    """
    settings = {k: v for k, v in caller_globals.items() if name_filter(k)}
    if not settings:
        logging.warning('No settings found in %s', caller_name)
        return None

    hints = get_type_hints(modules[caller_name], caller_globals)
    fields: dict[str, tuple[Any, Any]] = {
        name: (
            hints.get(name, Any if isinstance(default, FieldInfo) else type(default)),
            default,
        )
        for name, default in settings.items()
    }

    settings_base = type(
        f'{caller_name}_BaseSettings',
        (BaseSettings,),
        {'model_config': config},
    )
    instance = create_model(
        f'{caller_name}_Settings',
        __base__=settings_base,
        **fields,  # type: ignore
    )()

    for name in settings:
        caller_globals[name] = getattr(instance, name)
    return instance
