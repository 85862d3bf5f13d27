"""
Process-wide log setup for the lead desk.

One stderr handler on the root logger. Module loggers are named by area
(``services.store``, ``routes.leads``, ``pipeline.crm``) and inherit it.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message and any traceback."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


# HTTP client and dev-server chatter, capped at WARNING
_NOISY_LOGGERS = [
    'urllib3',
    'requests',
    'werkzeug',
]


def configure_logging(app=None):
    """
    Install the stderr handler on the root logger, replacing any previous one.

    Level and format come from the app's LOG_LEVEL / LOG_FORMAT config when an
    app is passed, otherwise from the same-named environment variables. An
    unknown level name means INFO; any format other than "json" is plain text.
    """
    level_name = os.getenv('LOG_LEVEL', 'INFO')
    log_format = os.getenv('LOG_FORMAT', 'text')
    if app is not None:
        level_name = app.config.get('LOG_LEVEL') or level_name
        log_format = app.config.get('LOG_FORMAT') or log_format

    level = getattr(logging, str(level_name).upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # re-init from a second app must not stack handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if str(log_format).lower() == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s %(name)s — %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))

    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
