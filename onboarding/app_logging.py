"""JSON log output for hosts embedding the onboarding form."""
import logging
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from onboarding import config

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def setup_logger(level: Optional[int] = None) -> logging.Logger:
    """Attach a JSON formatter to the root logger and set its level."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(
        LOG_FORMAT,
        rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
    ))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(config.LOGLEVEL if level is None else level)
    return root
