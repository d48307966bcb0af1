import logging
from sys import modules

import sentry_sdk

from website.config import ENV, SENTRY_DSN, VERSION

if SENTRY_DSN and 'pytest' not in modules:
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        release=VERSION,
        environment=ENV,
        keep_alive=True,
    )
    logging.debug('Initialized Sentry SDK')
