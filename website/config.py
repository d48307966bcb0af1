import logging
from datetime import timedelta
from logging.config import dictConfig
from os import chdir
from pathlib import Path
from typing import Literal

from githead import githead
from pydantic import AliasChoices, Field, SecretStr

from website.lib.mime import CACHEABLE_TYPES, MimeType
from website.lib.pydantic_settings_integration import pydantic_settings_integration

# Change working directory to the project root
chdir(Path(__file__).parent.parent)

# -------------------- System Configuration --------------------

# Core settings
ENV: Literal['dev', 'test', 'prod'] = 'prod'
LOG_LEVEL: Literal['DEBUG', 'INFO', 'WARNING'] | None = None

# Server binding
HOST = '127.0.0.1'
PORT: int = Field(3000, gt=0, lt=1 << 16)

# Database connection (the pool is opened only when configured)
POSTGRES_URL: str | None = Field(
    None, validation_alias=AliasChoices('POSTGRES_URL', 'DATABASE_URL')
)

# Storage paths
BUILD_DIR: Path = Path('build')
TEMPLATES_DIR: Path = Path('website/templates')

# -------------------- HTTP Settings --------------------

# Static assets
ASSET_BROTLI_QUALITY: int = Field(11, ge=0, le=11)
ASSET_CACHE_MAX_AGE = timedelta(days=365)
ASSET_CACHEABLE_TYPES: frozenset[MimeType] = CACHEABLE_TYPES

# Compression settings
COMPRESS_HTTP_MIN_SIZE = 512
COMPRESS_HTTP_ZSTD_LEVEL = 3
COMPRESS_HTTP_BROTLI_QUALITY = 4
COMPRESS_HTTP_GZIP_LEVEL = 4

# Security settings
CORS_ORIGIN = 'http://127.0.0.1:3000'
CORS_MAX_AGE = timedelta(days=1)
ENCRYPTION_KEY: SecretStr = SecretStr('')

# Monitoring
SENTRY_DSN = ''

pydantic_settings_integration(__name__, globals())

# -------------------- Constant or derived configuration --------------------

try:
    VERSION = 'git#' + githead()[:7]
except FileNotFoundError:
    VERSION = 'dev'  # pyright: ignore [reportConstantRedefinition]

NAME = 'website'

ENCRYPTION_KEY_MIN_LENGTH = 64
_INSECURE_ENCRYPTION_KEY = SecretStr(
    'dLvewSBvt0VNAJX4p7HLvBAfIeltnMCeOBHgzh7FBrDeysTm4FTkAVvEH4ydFdNezrGY65dy99lWSCTrb27IIA=='
)

if LOG_LEVEL is None:
    LOG_LEVEL = 'INFO' if ENV == 'prod' else 'DEBUG'  # pyright: ignore[reportConstantRedefinition]

# -------------------- Logging configuration --------------------

dictConfig({
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            '()': 'uvicorn.logging.DefaultFormatter',
            'fmt': '%(levelprefix)s | %(asctime)s | %(name)s %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'default': {
            'formatter': 'default',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        'root': {'handlers': ['default'], 'level': LOG_LEVEL},
        **{
            # reduce logging verbosity of some modules
            module: {'handlers': [], 'level': 'INFO'}
            for module in (
                'httpx',
                'httpcore',
                'psycopg',
                'psycopg.pool',
            )
        },
    },
})

if len(ENCRYPTION_KEY.get_secret_value()) < ENCRYPTION_KEY_MIN_LENGTH:
    logging.warning(
        'ENCRYPTION_KEY is not set or shorter than %d characters, using the built-in key. '
        'This is NOT SAFE FOR PRODUCTION, generate one with: openssl rand -base64 64',
        ENCRYPTION_KEY_MIN_LENGTH,
    )
    ENCRYPTION_KEY = _INSECURE_ENCRYPTION_KEY  # pyright: ignore[reportConstantRedefinition]
