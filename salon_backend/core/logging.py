import logging

from salon_backend.core import config

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

_handler: logging.Handler | None = None


def configure_logging(level: str | None = None) -> logging.Handler:
    global _handler

    root = logging.getLogger()
    root.setLevel(level or config.LOG_LEVEL)

    if _handler is not None and _handler in root.handlers:
        return _handler

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
    return _handler
